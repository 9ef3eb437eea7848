"""Event operation orchestrator - entry point for the engine.

Services:
- Depend only on interfaces (stores)
- Validate input before any transaction is opened
- Run each operation as one all-or-nothing transaction
- Return domain models or raise domain errors
"""

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any
from uuid import UUID

from event_engine.domain.errors import (
    AssignmentNotFoundError,
    EventNotFoundError,
    InvalidIdError,
    ResourceConflictError,
    ResourceNotFoundError,
    UnknownOperationError,
    ValidationError,
)
from event_engine.domain.models import AssignmentStatus, Event, ResourceAssignment
from event_engine.domain.value_objects import (
    AssignmentId,
    EventId,
    MissionId,
    Money,
    ResourceKind,
    ResourceRef,
    TimeWindow,
)
from event_engine.services import lifecycle
from event_engine.services.clone_engine import (
    DEFAULT_TITLE_SUFFIX,
    build_clone,
    find_clone_conflicts,
)
from event_engine.services.conflict_detector import try_assign
from event_engine.services.fare_aggregator import FareAggregator
from event_engine.services.transactions import parse_id, require_window, run_atomic
from event_engine.stores.interfaces import EventStore

logger = logging.getLogger(__name__)

OPERATIONS = ("clone", "cancel", "complete", "delete")


@dataclass
class OperationResult:
    """Result object for event operations."""

    operation: str
    event: Event | None
    message: str
    extra: dict[str, Any] = field(default_factory=dict)


class EventOperationService:
    """Dispatches clone, cancel, complete and delete, and books resources."""

    def __init__(
        self,
        store: EventStore,
        *,
        max_attempts: int = 3,
        retry_backoff: float = 0.05,
        clone_title_suffix: str = DEFAULT_TITLE_SUFFIX,
        fare_aggregator: FareAggregator | None = None,
    ) -> None:
        self._store = store
        self._max_attempts = max_attempts
        self._retry_backoff = retry_backoff
        self._clone_title_suffix = clone_title_suffix
        self._fares = fare_aggregator or FareAggregator()

    def _atomic(self, label, work):
        return run_atomic(
            self._store,
            work,
            label=label,
            max_attempts=self._max_attempts,
            retry_backoff=self._retry_backoff,
        )

    def _load_event(self, event_id: EventId, *, for_update: bool = True) -> Event:
        event = self._store.get_event(event_id, for_update=for_update)
        if event is None:
            raise EventNotFoundError(str(event_id))
        return event

    def get_event_subtree(self, event_id: str) -> Event:
        """Return an event with missions, rides, assignments and participants.

        Raises:
            InvalidIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        eid = parse_id(EventId, event_id, "event_id")
        return self._atomic("get_event", lambda: self._load_event(eid, for_update=False))

    def apply_operation(
        self,
        event_id: str,
        operation: str,
        *,
        starts_at: datetime | None = None,
    ) -> OperationResult:
        """Run one named operation against an event.

        ``clone`` returns the new event, ``cancel`` and ``complete`` return
        the updated event and ``delete`` returns no event. ``starts_at`` is
        only used by ``clone``.

        Raises:
            UnknownOperationError: If ``operation`` is not supported.
            InvalidIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
            InvalidTransitionError: If the event is closed in another state.
            ResourceConflictError: If a cloned booking would double-book.
            TransactionFailureError: If the transaction cannot commit.
        """
        if operation not in OPERATIONS:
            raise UnknownOperationError(operation)
        eid = parse_id(EventId, event_id, "event_id")

        handlers = {
            "clone": lambda: self._clone(eid, starts_at),
            "cancel": lambda: self._transition(eid, lifecycle.plan_cancel, "cancel"),
            "complete": lambda: self._transition(eid, lifecycle.plan_complete, "complete"),
            "delete": lambda: self._delete(eid),
        }
        result = self._atomic(f"{operation} event {eid}", handlers[operation])
        logger.info("Event %s: %s", eid, result.message)
        return result

    def _transition(self, event_id: EventId, plan, operation: str) -> OperationResult:
        event = self._load_event(event_id)
        cascade = plan(event)
        self._store.apply_status_cascade(cascade)
        updated = cascade.apply_to(event)
        message = {
            "cancel": "Event cancelled successfully",
            "complete": "Event marked as completed",
        }[operation]
        return OperationResult(
            operation=operation,
            event=updated,
            message=message,
            extra={"missions": len(cascade.mission_ids), "rides": len(updated.rides)},
        )

    def _delete(self, event_id: EventId) -> OperationResult:
        event = self._load_event(event_id)
        detached = self._store.delete_event_tree(lifecycle.plan_delete(event))
        return OperationResult(
            operation="delete",
            event=None,
            message="Event deleted successfully",
            extra={"detached_rides": detached},
        )

    def _clone(self, event_id: EventId, starts_at: datetime | None) -> OperationResult:
        source = self._load_event(event_id)
        clone = build_clone(
            source,
            title_suffix=self._clone_title_suffix,
            starts_at=starts_at,
        )

        resources = sorted(
            {assignment.resource for assignment in clone.resource_assignments},
            key=str,
        )
        for resource in resources:
            if not self._store.lock_resource(resource):
                raise ResourceNotFoundError(str(resource))
        booked = self._store.list_assignments_for_resources(resources)
        conflicts = find_clone_conflicts(clone, booked)
        if conflicts:
            logger.warning(
                "Clone of event %s blocked by %d booking conflict(s)", event_id, len(conflicts)
            )
            raise ResourceConflictError(conflicts)

        created = self._store.create_event_tree(clone)
        return OperationResult(
            operation="clone",
            event=created,
            message="Event cloned successfully",
            extra={"source_event_id": str(event_id)},
        )

    def assign_resource(
        self,
        owner_id: str,
        resource_kind: str,
        resource_id: str,
        window: TimeWindow | None = None,
        notes: str = "",
    ) -> ResourceAssignment:
        """Book a vehicle, venue or team for an event or one of its missions.

        ``owner_id`` is an event id or a mission id. Without ``window`` the
        booking covers the owner's own window.

        Raises:
            ValidationError: For a bad id, unknown kind or empty window.
            EventNotFoundError: If no event or mission has ``owner_id``.
            ResourceNotFoundError: If the resource does not exist.
            InvalidTransitionError: If the owning event is closed.
            ResourceConflictError: If the booking overlaps an active one.
        """
        owner_uuid = parse_id(EventId, owner_id, "owner_id").value
        try:
            kind = ResourceKind.parse(resource_kind)
        except ValueError as exc:
            raise ValidationError(str(exc), field="resource_kind") from None
        try:
            kind_and_id = ResourceRef(kind=kind, resource_id=UUID(str(resource_id)))
        except ValueError:
            raise InvalidIdError("resource_id") from None
        require_window(window)

        def work() -> ResourceAssignment:
            event = self._store.get_event(EventId(owner_uuid), for_update=True)
            mission = None
            if event is None:
                mission = self._store.get_mission(MissionId(owner_uuid))
                if mission is None:
                    raise EventNotFoundError(str(owner_uuid))
                event = self._load_event(mission.event_id)
            lifecycle.ensure_accepts_children(event)

            if not self._store.lock_resource(kind_and_id):
                raise ResourceNotFoundError(str(kind_and_id))
            candidate = ResourceAssignment(
                id=AssignmentId.generate(),
                event_id=event.id,
                mission_id=mission.id if mission else None,
                resource=kind_and_id,
                window=window or (mission.window if mission else event.window),
                status=AssignmentStatus.ASSIGNED,
                notes=notes or "",
            )
            require_window(candidate.window)
            existing = self._store.list_assignments_for_resources([kind_and_id])
            return self._store.add_assignment(try_assign(candidate, existing))

        assignment = self._atomic(f"assign {kind_and_id}", work)
        logger.info(
            "Assigned %s to event %s for %s - %s",
            kind_and_id,
            assignment.event_id,
            assignment.window.start.isoformat(),
            assignment.window.end.isoformat(),
        )
        return assignment

    def release_resource(self, assignment_id: str) -> ResourceAssignment:
        """Cancel a booking so the resource is free again.

        Raises:
            InvalidIdError: If the assignment_id is not a valid UUID.
            AssignmentNotFoundError: If the assignment does not exist.
        """
        aid = parse_id(AssignmentId, assignment_id, "assignment_id")

        def work() -> ResourceAssignment:
            assignment = self._store.get_assignment(aid)
            if assignment is None:
                raise AssignmentNotFoundError(str(aid))
            self._load_event(assignment.event_id)
            self._store.set_assignment_status(aid, AssignmentStatus.CANCELLED)
            return replace(assignment, status=AssignmentStatus.CANCELLED)

        return self._atomic(f"release assignment {aid}", work)

    def recompute_fare(self, event_id: str) -> Money | None:
        """Recompute and store a mission-based event's total fare.

        Returns None, and writes nothing, for fixed-price events.

        Raises:
            InvalidIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        eid = parse_id(EventId, event_id, "event_id")

        def work() -> Money | None:
            event = self._load_event(eid)
            total = self._fares.recompute(event)
            if total is not None and total != event.total_fare:
                self._store.set_total_fare(eid, total)
            return total

        return self._atomic(f"recompute fare {eid}", work)
