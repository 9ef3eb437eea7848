"""Builders for domain objects used across the test suite."""

from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

from event_engine.domain import (
    AssignmentId,
    AssignmentStatus,
    Event,
    EventId,
    EventStatus,
    InvitationStatus,
    Mission,
    MissionId,
    MissionStatus,
    Money,
    Participant,
    ParticipantId,
    ParticipantRole,
    PricingType,
    ResourceAssignment,
    ResourceKind,
    ResourceRef,
    Ride,
    RideId,
    RideStatus,
    TimeWindow,
)


def at(hour: int, minute: int = 0, *, day: int = 1) -> datetime:
    return datetime(2025, 6, day, hour, minute, tzinfo=timezone.utc)


def window(start: datetime, end: datetime) -> TimeWindow:
    return TimeWindow(start=start, end=end)


def money(amount: str | None) -> Money | None:
    return Money(Decimal(amount)) if amount is not None else None


def vehicle() -> ResourceRef:
    return ResourceRef(kind=ResourceKind.VEHICLE, resource_id=uuid4())


def make_event(
    *,
    title: str = "Film Festival Gala",
    status: EventStatus = EventStatus.PLANNED,
    pricing_type: PricingType = PricingType.MISSION_BASED,
    fixed_price: str | None = None,
    total_fare: str | None = None,
    span: TimeWindow | None = None,
) -> Event:
    return Event(
        id=EventId.generate(),
        title=title,
        client_id="client-42",
        window=span or window(at(8), at(20)),
        status=status,
        pricing_type=pricing_type,
        fixed_price=money(fixed_price),
        total_fare=money(total_fare),
        location="Palais des Festivals",
        notes="VIP arrivals",
    )


def make_mission(
    event: Event,
    *,
    title: str = "Airport transfers",
    fare: str | None = None,
    status: MissionStatus = MissionStatus.PLANNED,
    span: TimeWindow | None = None,
) -> Mission:
    return Mission(
        id=MissionId.generate(),
        event_id=event.id,
        title=title,
        window=span or window(at(9), at(12)),
        status=status,
        location="Nice Airport",
        fare=money(fare),
    )


def make_ride(
    mission: Mission | None,
    *,
    status: RideStatus = RideStatus.SCHEDULED,
) -> Ride:
    return Ride(
        id=RideId.generate(),
        mission_id=mission.id if mission else None,
        passenger_id="passenger-1",
        chauffeur_id="chauffeur-7",
        pickup_address="Terminal 2",
        dropoff_address="Hotel Martinez",
        pickup_time=at(10),
        status=status,
    )


def make_assignment(
    event: Event,
    resource: ResourceRef,
    span: TimeWindow,
    *,
    status: AssignmentStatus = AssignmentStatus.ASSIGNED,
    mission: Mission | None = None,
) -> ResourceAssignment:
    return ResourceAssignment(
        id=AssignmentId.generate(),
        event_id=event.id,
        mission_id=mission.id if mission else None,
        resource=resource,
        window=span,
        status=status,
    )


def make_participant(
    event: Event,
    *,
    user_id: str = "user-1",
    role: ParticipantRole = ParticipantRole.CHAUFFEUR,
    status: InvitationStatus = InvitationStatus.ACCEPTED,
) -> Participant:
    return Participant(
        id=ParticipantId.generate(),
        event_id=event.id,
        user_id=user_id,
        role=role,
        status=status,
    )


def with_children(event: Event, *, missions=(), assignments=(), participants=()) -> Event:
    return replace(
        event,
        missions=tuple(missions),
        resource_assignments=tuple(assignments),
        participants=tuple(participants),
    )


def seed(store, event: Event) -> Event:
    """Store ``event`` with its rides and the resources its bookings use."""
    for assignment in event.resource_assignments:
        store.add_resource(assignment.resource)
    store.add_event(event)
    for mission in event.missions:
        for ride in mission.rides:
            store.add_ride(ride)
    return store.get_event(event.id)
