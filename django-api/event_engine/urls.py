from django.urls import path

from event_engine.handlers import (
    EventDetailView,
    EventFareView,
    EventOperationView,
    MissionDetailView,
    MissionListView,
    ResourceAssignmentView,
    ResourceReleaseView,
)

urlpatterns = [
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path("events/<str:event_id>/fare", EventFareView.as_view(), name="event-fare"),
    path("events/<str:event_id>/missions", MissionListView.as_view(), name="mission-list"),
    path(
        "events/<str:event_id>/missions/<str:mission_id>",
        MissionDetailView.as_view(),
        name="mission-detail",
    ),
    path(
        "event-operations/<str:event_id>",
        EventOperationView.as_view(),
        name="event-operations",
    ),
    path(
        "resource-assignments",
        ResourceAssignmentView.as_view(),
        name="resource-assignments",
    ),
    path(
        "resource-assignments/<str:assignment_id>/release",
        ResourceReleaseView.as_view(),
        name="resource-release",
    ),
]
