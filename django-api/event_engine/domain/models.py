"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in event_engine/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from event_engine.domain.value_objects import (
    AssignmentId,
    EventId,
    MissionId,
    Money,
    ParticipantId,
    ResourceRef,
    RideId,
    TimeWindow,
)


class EventStatus(Enum):
    PLANNED = "PLANNED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self in (EventStatus.COMPLETED, EventStatus.CANCELLED)


class MissionStatus(Enum):
    PLANNED = "PLANNED"
    ASSIGNED = "ASSIGNED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class RideStatus(Enum):
    SCHEDULED = "SCHEDULED"
    ASSIGNED = "ASSIGNED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class AssignmentStatus(Enum):
    ASSIGNED = "ASSIGNED"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"


class InvitationStatus(Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    DECLINED = "DECLINED"


class ParticipantRole(Enum):
    TEAM_MEMBER = "TEAM_MEMBER"
    CHAUFFEUR = "CHAUFFEUR"
    PARTNER = "PARTNER"
    CLIENT = "CLIENT"
    PASSENGER = "PASSENGER"


class PricingType(Enum):
    MISSION_BASED = "MISSION_BASED"
    FIXED_PRICE = "FIXED_PRICE"


@dataclass(frozen=True)
class Ride:
    """Domain representation of a Ride.

    A ride may point at a mission but is not owned by it.
    """

    id: RideId
    mission_id: MissionId | None
    passenger_id: str
    chauffeur_id: str | None
    pickup_address: str
    dropoff_address: str
    pickup_time: datetime
    dropoff_time: datetime | None = None
    status: RideStatus = RideStatus.SCHEDULED
    fare: Money | None = None
    notes: str = ""


@dataclass(frozen=True)
class Mission:
    """Domain representation of a Mission.

    ``rides`` is the loaded view of rides currently linked to the mission.
    """

    id: MissionId
    event_id: EventId
    title: str
    window: TimeWindow
    status: MissionStatus = MissionStatus.PLANNED
    description: str = ""
    location: str = ""
    fare: Money | None = None
    notes: str = ""
    rides: tuple[Ride, ...] = ()


@dataclass(frozen=True)
class ResourceAssignment:
    """Binding of one resource to an event (or one of its missions) for a window."""

    id: AssignmentId
    event_id: EventId
    resource: ResourceRef
    window: TimeWindow
    mission_id: MissionId | None = None
    status: AssignmentStatus = AssignmentStatus.ASSIGNED
    notes: str = ""

    @property
    def is_active(self) -> bool:
        return self.status is not AssignmentStatus.CANCELLED


@dataclass(frozen=True)
class Participant:
    """Domain representation of an event participant."""

    id: ParticipantId
    event_id: EventId
    user_id: str
    role: ParticipantRole
    status: InvitationStatus = InvitationStatus.PENDING


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event with its loaded subtree."""

    id: EventId
    title: str
    client_id: str
    window: TimeWindow
    status: EventStatus = EventStatus.PLANNED
    pricing_type: PricingType = PricingType.MISSION_BASED
    fixed_price: Money | None = None
    total_fare: Money | None = None
    description: str = ""
    location: str = ""
    notes: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    missions: tuple[Mission, ...] = ()
    resource_assignments: tuple[ResourceAssignment, ...] = ()
    participants: tuple[Participant, ...] = ()

    @property
    def mission_ids(self) -> tuple[MissionId, ...]:
        return tuple(mission.id for mission in self.missions)

    @property
    def rides(self) -> tuple[Ride, ...]:
        return tuple(ride for mission in self.missions for ride in mission.rides)

    def get_mission(self, mission_id: MissionId) -> Mission | None:
        for mission in self.missions:
            if mission.id == mission_id:
                return mission
        return None
