"""Service-level tests for mission edits and the running fare total."""

from dataclasses import replace
from decimal import Decimal
from uuid import uuid4

import pytest

from event_engine.domain import EventStatus, MissionStatus, PricingType
from event_engine.domain.errors import (
    EventNotFoundError,
    InvalidTransitionError,
    MissionNotFoundError,
    ValidationError,
)
from event_engine.services.mission_service import MissionDraft
from tests.builders import (
    at,
    make_assignment,
    make_event,
    make_mission,
    make_ride,
    money,
    seed,
    vehicle,
    window,
    with_children,
)


def _draft(fare=None, title="Hotel shuttle"):
    return MissionDraft(title=title, window=window(at(13), at(14)), fare=money(fare))


@pytest.fixture
def event(store):
    event = make_event()
    return seed(
        store,
        with_children(
            event,
            missions=[
                make_mission(event, fare="10.50"),
                make_mission(event, fare=None),
                make_mission(event, fare="5.00"),
            ],
        ),
    )


class TestCreateMission:
    def test_new_mission_updates_the_total(self, store, missions, event):
        assert store.get_event(event.id).total_fare is None

        mission = missions.create_mission(str(event.id), _draft(fare="2.25"))

        assert mission.event_id == event.id
        assert mission.status is MissionStatus.PLANNED
        assert store.get_event(event.id).total_fare.amount == Decimal("17.75")

    def test_blank_title_is_rejected(self, missions, event):
        with pytest.raises(ValidationError) as exc_info:
            missions.create_mission(str(event.id), _draft(title="  "))
        assert exc_info.value.message == "Missing required fields"

    def test_empty_window_is_rejected(self, missions, event):
        draft = MissionDraft(title="Shuttle", window=window(at(13), at(13)))
        with pytest.raises(ValidationError):
            missions.create_mission(str(event.id), draft)

    def test_closed_event_takes_no_missions(self, store, missions):
        event = seed(store, make_event(status=EventStatus.COMPLETED))
        with pytest.raises(InvalidTransitionError):
            missions.create_mission(str(event.id), _draft())

    def test_unknown_event(self, missions):
        with pytest.raises(EventNotFoundError):
            missions.create_mission(str(uuid4()), _draft())

    def test_fixed_price_event_keeps_no_total(self, store, missions):
        event = seed(
            store, make_event(pricing_type=PricingType.FIXED_PRICE, fixed_price="900.00")
        )
        missions.create_mission(str(event.id), _draft(fare="40.00"))
        assert store.get_event(event.id).total_fare is None


class TestUpdateMission:
    def test_fare_edit_updates_the_total(self, store, missions, event):
        target = event.missions[1]

        updated = missions.update_mission(str(event.id), str(target.id), fare=money("4.50"))

        assert updated.fare.amount == Decimal("4.50")
        assert store.get_event(event.id).total_fare.amount == Decimal("20.00")

    def test_clearing_a_fare_counts_it_as_zero(self, store, missions, event):
        missions.update_mission(str(event.id), str(event.missions[0].id), fare=money("1.00"))
        missions.update_mission(str(event.id), str(event.missions[0].id), fare=None)
        assert store.get_event(event.id).total_fare.amount == Decimal("5.00")

    def test_descriptive_edit(self, missions, event):
        updated = missions.update_mission(
            str(event.id), str(event.missions[0].id), title="VIP arrivals", notes="Gate B"
        )
        assert updated.title == "VIP arrivals"
        assert updated.notes == "Gate B"

    def test_unknown_field_is_rejected(self, missions, event):
        with pytest.raises(ValidationError):
            missions.update_mission(str(event.id), str(event.missions[0].id), event_id=None)

    def test_id_named_change_is_rejected(self, missions, event):
        mission = event.missions[0]
        with pytest.raises(ValidationError) as exc_info:
            missions.update_mission(str(event.id), str(mission.id), mission_id=str(mission.id))
        assert "mission_id" in str(exc_info.value)

    def test_mission_of_another_event_is_not_found(self, store, missions, event):
        other = make_event()
        other = seed(store, with_children(other, missions=[make_mission(other)]))

        with pytest.raises(MissionNotFoundError):
            missions.update_mission(str(event.id), str(other.missions[0].id), title="x")

    def test_mission_under_cancelled_event_cannot_restart(
        self, store, missions, operations, event
    ):
        operations.apply_operation(str(event.id), "cancel")

        with pytest.raises(InvalidTransitionError):
            missions.update_mission(
                str(event.id), str(event.missions[0].id), status=MissionStatus.IN_PROGRESS
            )

        assert store.get_mission(event.missions[0].id).status is MissionStatus.CANCELLED


class TestDeleteMission:
    def test_delete_detaches_rides_and_updates_total(self, store, missions):
        event = make_event()
        kept = make_mission(event, fare="8.00")
        doomed = make_mission(event, fare="12.00", span=window(at(15), at(16)))
        ride = make_ride(doomed)
        booking = make_assignment(event, vehicle(), doomed.window, mission=doomed)
        event = seed(
            store,
            with_children(
                event,
                missions=[kept, replace(doomed, rides=(ride,))],
                assignments=[booking],
            ),
        )

        detached = missions.delete_mission(str(event.id), str(doomed.id))

        assert detached == 1
        assert store.get_mission(doomed.id) is None
        assert store.get_ride(ride.id).mission_id is None
        assert store.get_assignment(booking.id) is None
        assert store.get_event(event.id).total_fare.amount == Decimal("8.00")

    def test_unknown_mission(self, missions, event):
        with pytest.raises(MissionNotFoundError):
            missions.delete_mission(str(event.id), str(uuid4()))
