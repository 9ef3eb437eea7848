from event_engine.domain.models import (
    AssignmentStatus,
    Event,
    EventStatus,
    InvitationStatus,
    Mission,
    MissionStatus,
    Participant,
    ParticipantRole,
    PricingType,
    ResourceAssignment,
    Ride,
    RideStatus,
)
from event_engine.domain.value_objects import (
    AssignmentId,
    EventId,
    MissionId,
    Money,
    ParticipantId,
    ResourceKind,
    ResourceRef,
    RideId,
    TimeWindow,
)

__all__ = [
    "Event",
    "Mission",
    "Ride",
    "ResourceAssignment",
    "Participant",
    "EventStatus",
    "MissionStatus",
    "RideStatus",
    "AssignmentStatus",
    "InvitationStatus",
    "ParticipantRole",
    "PricingType",
    "EventId",
    "MissionId",
    "RideId",
    "AssignmentId",
    "ParticipantId",
    "Money",
    "TimeWindow",
    "ResourceKind",
    "ResourceRef",
]
