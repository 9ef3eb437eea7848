"""Engine services: fare aggregation, conflict detection, lifecycle, cloning
and the operation orchestrator. Submodules are imported directly."""
