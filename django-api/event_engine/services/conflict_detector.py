"""Resource double-booking detection.

Vehicles, venues and teams are checked the same way: two assignments
conflict when they name the same resource, neither is cancelled, and their
half-open windows overlap.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from event_engine.domain.errors import ResourceConflictError
from event_engine.domain.models import ResourceAssignment
from event_engine.domain.value_objects import AssignmentId, ResourceRef, TimeWindow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Conflict:
    """An existing assignment that overlaps the candidate."""

    conflicting_assignment_id: AssignmentId
    resource: ResourceRef
    overlap: TimeWindow

    def as_report(self) -> dict[str, str]:
        return {
            "conflictingAssignmentId": str(self.conflicting_assignment_id),
            "resourceId": str(self.resource.resource_id),
            "overlapStart": self.overlap.start.isoformat(),
            "overlapEnd": self.overlap.end.isoformat(),
        }


def find_conflicts(
    candidate: ResourceAssignment,
    existing: Iterable[ResourceAssignment],
) -> list[Conflict]:
    """Return every active assignment in ``existing`` that overlaps ``candidate``."""
    if not candidate.is_active:
        return []

    conflicts = []
    for other in existing:
        if other.id == candidate.id:
            continue
        if other.resource != candidate.resource or not other.is_active:
            continue
        overlap = candidate.window.intersection(other.window)
        if overlap is not None:
            conflicts.append(
                Conflict(
                    conflicting_assignment_id=other.id,
                    resource=other.resource,
                    overlap=overlap,
                )
            )
    return conflicts


def try_assign(
    candidate: ResourceAssignment,
    existing: Iterable[ResourceAssignment],
) -> ResourceAssignment:
    """Return ``candidate`` if it is free to persist.

    Must be called inside the same transaction that read ``existing``.

    Raises:
        ResourceConflictError: If the candidate overlaps any active assignment.
    """
    conflicts = find_conflicts(candidate, existing)
    if conflicts:
        logger.warning(
            "Rejected assignment of %s: %d conflicting booking(s)",
            candidate.resource,
            len(conflicts),
        )
        raise ResourceConflictError(conflicts)
    return candidate
