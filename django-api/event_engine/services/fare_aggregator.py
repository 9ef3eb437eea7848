"""Derived total fare for mission-based events."""

from collections.abc import Iterable

from event_engine.domain.models import Event, Mission, PricingType
from event_engine.domain.value_objects import Money


def recompute_total_fare(missions: Iterable[Mission]) -> Money:
    """Sum mission fares, counting a missing fare as zero."""
    total = Money.zero()
    for mission in missions:
        if mission.fare is not None:
            total = total + mission.fare
    return total


class FareAggregator:
    """Stateless calculator for an event's ``total_fare``.

    Persisting the result is the caller's job.
    """

    def recompute(self, event: Event) -> Money | None:
        """Return the new total, or None when the event is fixed-price.

        None means there is nothing to write.
        """
        if event.pricing_type is not PricingType.MISSION_BASED:
            return None
        return recompute_total_fare(event.missions)

    def needs_update(self, event: Event) -> bool:
        new_total = self.recompute(event)
        return new_total is not None and new_total != event.total_fare
