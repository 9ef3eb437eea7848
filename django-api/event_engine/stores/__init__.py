"""Storage collaborators for the event engine."""
