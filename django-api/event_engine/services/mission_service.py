"""Mission create, update and delete under an event.

Each change keeps the event's mission-based total fare in step.
"""

import logging
from dataclasses import dataclass, replace

from event_engine.domain.errors import (
    EventNotFoundError,
    MissionNotFoundError,
    ValidationError,
)
from event_engine.domain.models import Event, Mission, MissionStatus
from event_engine.domain.value_objects import EventId, MissionId, Money, TimeWindow
from event_engine.services import lifecycle
from event_engine.services.fare_aggregator import FareAggregator
from event_engine.services.transactions import parse_id, require_window, run_atomic
from event_engine.stores.interfaces import EventStore

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset(
    {"title", "description", "window", "status", "location", "fare", "notes"}
)


@dataclass(frozen=True)
class MissionDraft:
    """Input for a new mission."""

    title: str
    window: TimeWindow
    description: str = ""
    location: str = ""
    fare: Money | None = None
    notes: str = ""
    status: MissionStatus = MissionStatus.PLANNED


class MissionService:
    def __init__(
        self,
        store: EventStore,
        *,
        max_attempts: int = 3,
        retry_backoff: float = 0.05,
        fare_aggregator: FareAggregator | None = None,
    ) -> None:
        self._store = store
        self._max_attempts = max_attempts
        self._retry_backoff = retry_backoff
        self._fares = fare_aggregator or FareAggregator()

    def _atomic(self, label, work):
        return run_atomic(
            self._store,
            work,
            label=label,
            max_attempts=self._max_attempts,
            retry_backoff=self._retry_backoff,
        )

    def _load_event(self, event_id: EventId) -> Event:
        event = self._store.get_event(event_id, for_update=True)
        if event is None:
            raise EventNotFoundError(str(event_id))
        return event

    def _refresh_fare(self, event_id: EventId) -> None:
        event = self._load_event(event_id)
        if self._fares.needs_update(event):
            total = self._fares.recompute(event)
            self._store.set_total_fare(event_id, total)
            logger.info("Event %s total fare is now %s", event_id, total)

    def create_mission(self, event_id: str, draft: MissionDraft) -> Mission:
        """Create a mission under an open event.

        Raises:
            InvalidIdError: If the event_id is not a valid UUID.
            ValidationError: If the title is blank or the window is empty.
            EventNotFoundError: If the event does not exist.
            InvalidTransitionError: If the event is cancelled or completed.
        """
        eid = parse_id(EventId, event_id, "event_id")
        if not draft.title or not draft.title.strip():
            raise ValidationError("Missing required fields", field="title")
        require_window(draft.window)

        def work() -> Mission:
            event = self._load_event(eid)
            lifecycle.ensure_accepts_children(event)
            mission = self._store.add_mission(
                Mission(
                    id=MissionId.generate(),
                    event_id=eid,
                    title=draft.title,
                    window=draft.window,
                    status=draft.status,
                    description=draft.description,
                    location=draft.location,
                    fare=draft.fare,
                    notes=draft.notes,
                )
            )
            self._refresh_fare(eid)
            return mission

        return self._atomic(f"create mission for event {eid}", work)

    def update_mission(self, event_id: str, mission_id: str, /, **changes) -> Mission:
        """Edit a mission's own fields.

        A status change on a closed event must match the event's status.

        Raises:
            ValidationError: If a field is unknown or a value is invalid.
            MissionNotFoundError: If the mission is not under this event.
        """
        eid = parse_id(EventId, event_id, "event_id")
        mid = parse_id(MissionId, mission_id, "mission_id")
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown field(s): {', '.join(sorted(unknown))}")
        if "title" in changes and not (changes["title"] or "").strip():
            raise ValidationError("Title cannot be blank", field="title")
        if "window" in changes:
            if changes["window"] is None:
                raise ValidationError("Window is required", field="window")
            require_window(changes["window"])

        def work() -> Mission:
            event = self._load_event(eid)
            current = event.get_mission(mid)
            if current is None:
                raise MissionNotFoundError(str(mid))
            if "status" in changes:
                lifecycle.ensure_child_status_allowed(event, changes["status"])

            saved = self._store.save_mission(replace(current, **changes))
            if "fare" in changes and saved.fare != current.fare:
                self._refresh_fare(eid)
            return saved

        return self._atomic(f"update mission {mid}", work)

    def delete_mission(self, event_id: str, mission_id: str) -> int:
        """Delete a mission, keeping its rides as standalone rides.

        Returns the number of rides detached.
        """
        eid = parse_id(EventId, event_id, "event_id")
        mid = parse_id(MissionId, mission_id, "mission_id")

        def work() -> int:
            event = self._load_event(eid)
            if event.get_mission(mid) is None:
                raise MissionNotFoundError(str(mid))
            detached = self._store.delete_mission(mid)
            self._refresh_fare(eid)
            return detached

        return self._atomic(f"delete mission {mid}", work)
