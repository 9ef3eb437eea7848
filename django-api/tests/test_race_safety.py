"""Concurrent bookings and lifecycle operations on one store."""

import threading

from event_engine.domain import AssignmentStatus, EventStatus
from event_engine.domain.errors import InvalidTransitionError, ResourceConflictError
from tests.builders import at, make_event, seed, vehicle, window


def _race(*calls):
    """Start every call at the same moment and collect results or errors."""
    barrier = threading.Barrier(len(calls))
    outcomes = [None] * len(calls)

    def run(index, call):
        barrier.wait()
        try:
            outcomes[index] = call()
        except Exception as exc:
            outcomes[index] = exc

    threads = [
        threading.Thread(target=run, args=(index, call)) for index, call in enumerate(calls)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10)
    return outcomes


class TestConcurrentBookings:
    def test_exactly_one_overlapping_booking_wins(self, store, operations):
        van = store.add_resource(vehicle(), "Mercedes S-Class")
        first = seed(store, make_event(title="Gala"))
        second = seed(store, make_event(title="Dinner"))

        def book(event, span):
            return lambda: operations.assign_resource(
                str(event.id), "vehicle", str(van.resource_id), window=span
            )

        outcomes = _race(
            book(first, window(at(10), at(11))),
            book(second, window(at(10, 30), at(11, 30))),
        )

        conflicts = [o for o in outcomes if isinstance(o, ResourceConflictError)]
        winners = [o for o in outcomes if not isinstance(o, Exception)]
        assert len(conflicts) == 1
        assert len(winners) == 1
        active = [
            a
            for a in store.list_assignments_for_resources([van])
            if a.status is AssignmentStatus.ASSIGNED
        ]
        assert active == winners

    def test_many_contenders_leave_one_booking(self, store, operations):
        van = store.add_resource(vehicle())
        events = [seed(store, make_event(title=f"Event {n}")) for n in range(6)]

        outcomes = _race(
            *(
                lambda event=event: operations.assign_resource(
                    str(event.id), "vehicle", str(van.resource_id), window=window(at(9), at(17))
                )
                for event in events
            )
        )

        assert sum(not isinstance(o, Exception) for o in outcomes) == 1
        assert len(store.list_assignments_for_resources([van])) == 1


class TestConcurrentTransitions:
    def test_cancel_and_complete_race_settles_on_one_state(self, store, operations):
        event = seed(store, make_event())

        outcomes = _race(
            lambda: operations.apply_operation(str(event.id), "cancel"),
            lambda: operations.apply_operation(str(event.id), "complete"),
        )

        errors = [o for o in outcomes if isinstance(o, Exception)]
        assert len(errors) == 1
        assert isinstance(errors[0], InvalidTransitionError)
        assert store.get_event(event.id).status in (EventStatus.CANCELLED, EventStatus.COMPLETED)
