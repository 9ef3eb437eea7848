from event_engine.handlers.views import (
    EventDetailView,
    EventFareView,
    EventOperationView,
    MissionDetailView,
    MissionListView,
    ResourceAssignmentView,
    ResourceReleaseView,
)

__all__ = [
    "EventDetailView",
    "EventFareView",
    "EventOperationView",
    "MissionDetailView",
    "MissionListView",
    "ResourceAssignmentView",
    "ResourceReleaseView",
]
