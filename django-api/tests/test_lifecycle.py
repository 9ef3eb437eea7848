"""Unit tests for the event lifecycle state machine."""

from dataclasses import replace

import pytest

from event_engine.domain import (
    AssignmentStatus,
    EventStatus,
    MissionStatus,
    RideStatus,
)
from event_engine.domain.errors import InvalidTransitionError
from event_engine.services.lifecycle import (
    ensure_accepts_children,
    ensure_child_status_allowed,
    ensure_transition_allowed,
    plan_cancel,
    plan_complete,
    plan_delete,
)
from tests.builders import (
    at,
    make_assignment,
    make_event,
    make_mission,
    make_ride,
    vehicle,
    window,
    with_children,
)


def _populated_event(status=EventStatus.PLANNED):
    event = make_event(status=status)
    first = make_mission(event, title="Arrivals")
    second = make_mission(event, title="Departures", span=window(at(14), at(16)))
    first = replace(first, rides=(make_ride(first), make_ride(first)))
    assignments = [
        make_assignment(event, vehicle(), window(at(9), at(12)), mission=first),
        make_assignment(
            event, vehicle(), window(at(14), at(16)), status=AssignmentStatus.CONFIRMED
        ),
        make_assignment(
            event, vehicle(), window(at(9), at(10)), status=AssignmentStatus.CANCELLED
        ),
    ]
    return with_children(event, missions=[first, second], assignments=assignments)


class TestTransitions:
    @pytest.mark.parametrize("requested", [EventStatus.CANCELLED, EventStatus.COMPLETED])
    @pytest.mark.parametrize("current", [EventStatus.PLANNED, EventStatus.IN_PROGRESS])
    def test_open_events_can_close(self, current, requested):
        ensure_transition_allowed(current, requested)

    @pytest.mark.parametrize("status", [EventStatus.CANCELLED, EventStatus.COMPLETED])
    def test_repeating_the_terminal_state_is_allowed(self, status):
        ensure_transition_allowed(status, status)

    def test_cancelled_event_cannot_complete(self):
        with pytest.raises(InvalidTransitionError) as exc_info:
            ensure_transition_allowed(EventStatus.CANCELLED, EventStatus.COMPLETED)
        assert exc_info.value.current == "CANCELLED"
        assert exc_info.value.requested == "COMPLETED"

    def test_completed_event_cannot_cancel(self):
        with pytest.raises(InvalidTransitionError):
            ensure_transition_allowed(EventStatus.COMPLETED, EventStatus.CANCELLED)

    def test_non_terminal_target_is_rejected(self):
        with pytest.raises(InvalidTransitionError):
            ensure_transition_allowed(EventStatus.PLANNED, EventStatus.IN_PROGRESS)


class TestCancelPlan:
    def test_cascade_covers_every_child(self):
        event = _populated_event()

        cascade = plan_cancel(event)

        assert cascade.event_status is EventStatus.CANCELLED
        assert cascade.mission_status is MissionStatus.CANCELLED
        assert cascade.ride_status is RideStatus.CANCELLED
        assert set(cascade.mission_ids) == {m.id for m in event.missions}

    def test_only_active_assignments_are_updated(self):
        event = _populated_event()

        cascade = plan_cancel(event)

        active_ids = {a.id for a in event.resource_assignments if a.is_active}
        assert {assignment_id for assignment_id, _ in cascade.assignment_updates} == active_ids
        assert all(
            status is AssignmentStatus.CANCELLED for _, status in cascade.assignment_updates
        )

    def test_apply_to_yields_fully_cancelled_subtree(self):
        event = _populated_event()
        cancelled = plan_cancel(event).apply_to(event)

        assert cancelled.status is EventStatus.CANCELLED
        assert all(m.status is MissionStatus.CANCELLED for m in cancelled.missions)
        assert all(r.status is RideStatus.CANCELLED for r in cancelled.rides)

    def test_recancel_reapplies_the_cascade(self):
        event = _populated_event(status=EventStatus.CANCELLED)
        cascade = plan_cancel(event)
        assert cascade.mission_ids == event.mission_ids


class TestCompletePlan:
    def test_booked_assignments_become_completed(self):
        event = _populated_event()

        cascade = plan_complete(event)
        updates = dict(cascade.assignment_updates)

        assert cascade.mission_status is MissionStatus.COMPLETED
        assert cascade.ride_status is RideStatus.COMPLETED
        assert len(updates) == 2
        assert set(updates.values()) == {AssignmentStatus.COMPLETED}

    def test_cancelled_assignment_keeps_its_status(self):
        event = _populated_event()
        cancelled_id = next(
            a.id for a in event.resource_assignments if a.status is AssignmentStatus.CANCELLED
        )
        assert cancelled_id not in dict(plan_complete(event).assignment_updates)

    def test_completing_a_cancelled_event_fails(self):
        with pytest.raises(InvalidTransitionError):
            plan_complete(_populated_event(status=EventStatus.CANCELLED))


class TestDeletePlan:
    def test_delete_is_allowed_in_any_status(self):
        for status in EventStatus:
            event = _populated_event(status=status)
            deletion = plan_delete(event)
            assert deletion.event_id == event.id
            assert deletion.mission_ids == event.mission_ids


class TestChildGuards:
    def test_open_event_accepts_children(self):
        ensure_accepts_children(make_event())

    @pytest.mark.parametrize("status", [EventStatus.CANCELLED, EventStatus.COMPLETED])
    def test_closed_event_rejects_children(self, status):
        with pytest.raises(InvalidTransitionError):
            ensure_accepts_children(make_event(status=status))

    def test_child_of_cancelled_event_cannot_be_reopened(self):
        event = make_event(status=EventStatus.CANCELLED)
        with pytest.raises(InvalidTransitionError):
            ensure_child_status_allowed(event, MissionStatus.IN_PROGRESS)

    def test_child_of_cancelled_event_may_stay_cancelled(self):
        ensure_child_status_allowed(
            make_event(status=EventStatus.CANCELLED), MissionStatus.CANCELLED
        )
