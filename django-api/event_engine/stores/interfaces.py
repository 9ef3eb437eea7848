"""Store interfaces (repository pattern).

Stores must be swappable and return domain models. Every service call runs
its reads and writes inside one ``atomic()`` block; a store raises
TransactionFailureError when that block cannot commit.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from contextlib import AbstractContextManager

from event_engine.domain import (
    AssignmentId,
    AssignmentStatus,
    Event,
    EventId,
    Mission,
    MissionId,
    Money,
    ResourceAssignment,
    ResourceRef,
)
from event_engine.services.lifecycle import EventDeletion, StatusCascade


class EventStore(ABC):
    """Interface for event subtree persistence operations."""

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Open a transaction. Everything inside commits or nothing does."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId, *, for_update: bool = False) -> Event | None:
        """Return an event with missions, their rides, assignments and participants.

        With ``for_update`` the event row stays locked until the transaction ends.
        """
        ...

    @abstractmethod
    def get_mission(self, mission_id: MissionId) -> Mission | None:
        """Return a mission (with its rides), or None if not found."""
        ...

    @abstractmethod
    def get_assignment(self, assignment_id: AssignmentId) -> ResourceAssignment | None:
        ...

    @abstractmethod
    def lock_resource(self, resource: ResourceRef) -> bool:
        """Lock a vehicle, venue or team until the transaction ends.

        Returns False if the resource does not exist.
        """
        ...

    @abstractmethod
    def list_assignments_for_resources(
        self, resources: Iterable[ResourceRef]
    ) -> list[ResourceAssignment]:
        """Return all stored assignments for the given resources, any owner."""
        ...

    @abstractmethod
    def create_event_tree(self, event: Event) -> Event:
        """Insert an event with its missions, participants and assignments."""
        ...

    @abstractmethod
    def apply_status_cascade(self, cascade: StatusCascade) -> None:
        """Write event, mission, ride and assignment statuses in one batch."""
        ...

    @abstractmethod
    def delete_event_tree(self, deletion: EventDeletion) -> int:
        """Detach rides, then delete missions, bindings and the event.

        Returns the number of rides detached.
        """
        ...

    @abstractmethod
    def set_total_fare(self, event_id: EventId, total_fare: Money) -> None:
        ...

    @abstractmethod
    def add_assignment(self, assignment: ResourceAssignment) -> ResourceAssignment:
        ...

    @abstractmethod
    def set_assignment_status(
        self, assignment_id: AssignmentId, status: AssignmentStatus
    ) -> None:
        ...

    @abstractmethod
    def add_mission(self, mission: Mission) -> Mission:
        ...

    @abstractmethod
    def save_mission(self, mission: Mission) -> Mission:
        """Update a mission's own fields; its rides are left as they are."""
        ...

    @abstractmethod
    def delete_mission(self, mission_id: MissionId) -> int:
        """Detach the mission's rides, then delete it with its bookings.

        Returns the number of rides detached.
        """
        ...
