"""Event lifecycle state machine.

Plans are computed from a loaded event subtree and handed to the store,
which applies each plan as one batched write inside the caller's
transaction. Nothing here performs I/O.
"""

from dataclasses import dataclass, replace

from event_engine.domain.errors import InvalidTransitionError
from event_engine.domain.models import (
    AssignmentStatus,
    Event,
    EventStatus,
    MissionStatus,
    RideStatus,
)
from event_engine.domain.value_objects import AssignmentId, EventId, MissionId


@dataclass(frozen=True)
class StatusCascade:
    """Status changes that a cancel or complete applies to a subtree.

    Rides are selected by ``mission_ids`` at write time, so rides linked
    to those missions after the subtree was loaded are included too.
    """

    event_id: EventId
    event_status: EventStatus
    mission_status: MissionStatus
    ride_status: RideStatus
    mission_ids: tuple[MissionId, ...]
    assignment_updates: tuple[tuple[AssignmentId, AssignmentStatus], ...]

    def apply_to(self, event: Event) -> Event:
        """Return ``event`` as it looks once the cascade is written."""
        new_assignments = dict(self.assignment_updates)
        missions = tuple(
            replace(
                mission,
                status=self.mission_status,
                rides=tuple(replace(ride, status=self.ride_status) for ride in mission.rides),
            )
            if mission.id in self.mission_ids
            else mission
            for mission in event.missions
        )
        assignments = tuple(
            replace(assignment, status=new_assignments[assignment.id])
            if assignment.id in new_assignments
            else assignment
            for assignment in event.resource_assignments
        )
        return replace(
            event,
            status=self.event_status,
            missions=missions,
            resource_assignments=assignments,
        )


@dataclass(frozen=True)
class EventDeletion:
    """Ordered delete of an event.

    The store detaches rides from ``mission_ids`` first, then deletes the
    missions, then assignments and participants, then the event row.
    """

    event_id: EventId
    mission_ids: tuple[MissionId, ...]


_CASCADE_TARGETS = {
    EventStatus.CANCELLED: (MissionStatus.CANCELLED, RideStatus.CANCELLED),
    EventStatus.COMPLETED: (MissionStatus.COMPLETED, RideStatus.COMPLETED),
}


def _settle_assignment(status: AssignmentStatus, event_status: EventStatus) -> AssignmentStatus:
    if event_status is EventStatus.CANCELLED:
        return AssignmentStatus.CANCELLED
    if status in (AssignmentStatus.ASSIGNED, AssignmentStatus.CONFIRMED):
        return AssignmentStatus.COMPLETED
    return status


def ensure_transition_allowed(current: EventStatus, requested: EventStatus) -> None:
    """Check an event status change.

    Re-entering the same terminal state is allowed so that a repeated
    cancel or complete re-applies its cascade instead of failing.

    Raises:
        InvalidTransitionError: If the event is terminal in another state,
            or ``requested`` is not a terminal state.
    """
    if requested not in _CASCADE_TARGETS:
        raise InvalidTransitionError(current.value, requested.value)
    if current.is_terminal and current is not requested:
        raise InvalidTransitionError(current.value, requested.value)


def plan_transition(event: Event, requested: EventStatus) -> StatusCascade:
    ensure_transition_allowed(event.status, requested)
    mission_status, ride_status = _CASCADE_TARGETS[requested]

    updates = []
    for assignment in event.resource_assignments:
        settled = _settle_assignment(assignment.status, requested)
        if settled is not assignment.status:
            updates.append((assignment.id, settled))

    return StatusCascade(
        event_id=event.id,
        event_status=requested,
        mission_status=mission_status,
        ride_status=ride_status,
        mission_ids=event.mission_ids,
        assignment_updates=tuple(updates),
    )


def plan_cancel(event: Event) -> StatusCascade:
    return plan_transition(event, EventStatus.CANCELLED)


def plan_complete(event: Event) -> StatusCascade:
    return plan_transition(event, EventStatus.COMPLETED)


def plan_delete(event: Event) -> EventDeletion:
    return EventDeletion(event_id=event.id, mission_ids=event.mission_ids)


def ensure_accepts_children(event: Event) -> None:
    """Reject new missions or bookings under a closed event."""
    if event.status.is_terminal:
        raise InvalidTransitionError(event.status.value, "new child")


def ensure_child_status_allowed(event: Event, status: MissionStatus) -> None:
    """A child of a closed event may only carry the event's own terminal status."""
    if not event.status.is_terminal:
        return
    if status.value != event.status.value:
        raise InvalidTransitionError(event.status.value, status.value)
