"""Deep copy of an event subtree into a fresh, reset event."""

from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime, timedelta

from event_engine.domain.models import (
    AssignmentStatus,
    Event,
    EventStatus,
    InvitationStatus,
    MissionStatus,
    PricingType,
    ResourceAssignment,
)
from event_engine.domain.value_objects import (
    AssignmentId,
    EventId,
    MissionId,
    Money,
    ParticipantId,
)
from event_engine.services.conflict_detector import Conflict, find_conflicts

DEFAULT_TITLE_SUFFIX = " (Clone)"


def build_clone(
    source: Event,
    *,
    title_suffix: str = DEFAULT_TITLE_SUFFIX,
    starts_at: datetime | None = None,
) -> Event:
    """Return an unsaved copy of ``source`` with new ids and reset statuses.

    Missions are copied without rides or fares. When ``starts_at`` is given
    the whole copy is moved so the event starts then, keeping every
    relative offset.
    """
    delta = timedelta(0) if starts_at is None else starts_at - source.window.start
    event_id = EventId.generate()

    mission_ids: dict[MissionId, MissionId] = {}
    missions = []
    for mission in source.missions:
        new_id = MissionId.generate()
        mission_ids[mission.id] = new_id
        missions.append(
            replace(
                mission,
                id=new_id,
                event_id=event_id,
                window=mission.window.shifted(delta),
                status=MissionStatus.PLANNED,
                fare=None,
                rides=(),
            )
        )

    participants = tuple(
        replace(
            participant,
            id=ParticipantId.generate(),
            event_id=event_id,
            status=InvitationStatus.PENDING,
        )
        for participant in source.participants
    )

    assignments = tuple(
        replace(
            assignment,
            id=AssignmentId.generate(),
            event_id=event_id,
            mission_id=mission_ids.get(assignment.mission_id) if assignment.mission_id else None,
            window=assignment.window.shifted(delta),
            status=AssignmentStatus.ASSIGNED,
        )
        for assignment in source.resource_assignments
    )

    if source.pricing_type is PricingType.MISSION_BASED:
        total_fare = Money.zero()
    else:
        total_fare = None

    return replace(
        source,
        id=event_id,
        title=f"{source.title}{title_suffix}",
        window=source.window.shifted(delta),
        status=EventStatus.PLANNED,
        total_fare=total_fare,
        created_at=None,
        updated_at=None,
        missions=tuple(missions),
        resource_assignments=assignments,
        participants=participants,
    )


def find_clone_conflicts(
    clone: Event,
    booked: Iterable[ResourceAssignment],
) -> list[Conflict]:
    """Check each cloned assignment against stored bookings and its siblings.

    ``booked`` holds the stored assignments for every resource the clone
    uses. All conflicts are returned, not only the first.
    """
    booked = list(booked)
    accepted: list[ResourceAssignment] = []
    conflicts: list[Conflict] = []
    for assignment in clone.resource_assignments:
        conflicts.extend(find_conflicts(assignment, [*booked, *accepted]))
        accepted.append(assignment)
    return conflicts
