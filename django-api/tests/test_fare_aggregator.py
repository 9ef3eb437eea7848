"""Unit tests for the fare aggregator."""

from dataclasses import replace
from decimal import Decimal

from event_engine.domain import Money, PricingType
from event_engine.services.fare_aggregator import FareAggregator, recompute_total_fare
from tests.builders import make_event, make_mission, with_children


class TestRecomputeTotalFare:
    def test_missing_fares_count_as_zero(self):
        """Fares [10.50, null, 5.00] total 15.50."""
        event = make_event()
        missions = [
            make_mission(event, fare="10.50"),
            make_mission(event, fare=None),
            make_mission(event, fare="5.00"),
        ]
        assert recompute_total_fare(missions) == Money(Decimal("15.50"))

    def test_adding_a_mission_updates_the_total(self):
        """Adding a 2.25 mission moves the total from 15.50 to 17.75."""
        event = make_event()
        missions = [
            make_mission(event, fare="10.50"),
            make_mission(event, fare=None),
            make_mission(event, fare="5.00"),
            make_mission(event, fare="2.25"),
        ]
        assert recompute_total_fare(missions).amount == Decimal("17.75")

    def test_no_missions_is_zero(self):
        assert recompute_total_fare([]) == Money.zero()

    def test_cents_do_not_drift(self):
        event = make_event()
        missions = [make_mission(event, fare="0.10") for _ in range(10)]
        assert recompute_total_fare(missions).amount == Decimal("1.00")


class TestFareAggregator:
    def test_mission_based_event_returns_sum(self):
        event = make_event()
        event = with_children(event, missions=[make_mission(event, fare="12.00")])
        assert FareAggregator().recompute(event) == Money(Decimal("12.00"))

    def test_fixed_price_event_is_a_no_op(self):
        """Fixed-price events get no total and need no write."""
        event = make_event(pricing_type=PricingType.FIXED_PRICE, fixed_price="900.00")
        event = with_children(event, missions=[make_mission(event, fare="12.00")])
        aggregator = FareAggregator()
        assert aggregator.recompute(event) is None
        assert not aggregator.needs_update(event)

    def test_needs_update_only_when_total_differs(self):
        event = make_event(total_fare="12.00")
        event = with_children(event, missions=[make_mission(event, fare="12.00")])
        aggregator = FareAggregator()
        assert not aggregator.needs_update(event)
        assert aggregator.needs_update(replace(event, total_fare=None))
