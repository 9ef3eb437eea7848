"""Django ORM implementation of the EventStore.

Row locks use ``select_for_update``; they are held until the surrounding
``atomic()`` block ends. Status cascades and deletes are issued as bulk
``update``/``delete`` queries rather than per-row saves.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from functools import reduce
from operator import or_

from django.db import OperationalError, transaction
from django.db.models import Q
from django.utils import timezone

from event_engine import models as orm
from event_engine.domain import (
    AssignmentId,
    AssignmentStatus,
    Event,
    EventId,
    EventStatus,
    InvitationStatus,
    Mission,
    MissionId,
    MissionStatus,
    Money,
    Participant,
    ParticipantId,
    ParticipantRole,
    PricingType,
    ResourceAssignment,
    ResourceKind,
    ResourceRef,
    Ride,
    RideId,
    RideStatus,
    TimeWindow,
)
from event_engine.domain.errors import TransactionFailureError
from event_engine.services.lifecycle import EventDeletion, StatusCascade
from event_engine.stores.interfaces import EventStore

logger = logging.getLogger(__name__)


def _money(value) -> Money | None:
    return Money(value) if value is not None else None


def _amount(value: Money | None):
    return value.amount if value is not None else None


def ride_to_domain(row: orm.Ride) -> Ride:
    return Ride(
        id=RideId(row.id),
        mission_id=MissionId(row.mission_id) if row.mission_id else None,
        passenger_id=row.passenger_id,
        chauffeur_id=row.chauffeur_id,
        pickup_address=row.pickup_address,
        dropoff_address=row.dropoff_address,
        pickup_time=row.pickup_time,
        dropoff_time=row.dropoff_time,
        status=RideStatus(row.status),
        fare=_money(row.fare),
        notes=row.notes,
    )


def mission_to_domain(row: orm.Mission, rides: Iterable[orm.Ride] = ()) -> Mission:
    return Mission(
        id=MissionId(row.id),
        event_id=EventId(row.event_id),
        title=row.title,
        window=TimeWindow(start=row.start_date, end=row.end_date),
        status=MissionStatus(row.status),
        description=row.description,
        location=row.location,
        fare=_money(row.fare),
        notes=row.notes,
        rides=tuple(ride_to_domain(ride) for ride in rides),
    )


def assignment_to_domain(row: orm.ResourceAssignment) -> ResourceAssignment:
    return ResourceAssignment(
        id=AssignmentId(row.id),
        event_id=EventId(row.event_id),
        mission_id=MissionId(row.mission_id) if row.mission_id else None,
        resource=ResourceRef(kind=ResourceKind(row.resource_kind), resource_id=row.resource_id),
        window=TimeWindow(start=row.starts_at, end=row.ends_at),
        status=AssignmentStatus(row.status),
        notes=row.notes,
    )


def participant_to_domain(row: orm.Participant) -> Participant:
    return Participant(
        id=ParticipantId(row.id),
        event_id=EventId(row.event_id),
        user_id=row.user_id,
        role=ParticipantRole(row.role),
        status=InvitationStatus(row.status),
    )


def event_to_domain(row: orm.Event, missions=(), assignments=(), participants=()) -> Event:
    return Event(
        id=EventId(row.id),
        title=row.title,
        client_id=row.client_id,
        window=TimeWindow(start=row.start_date, end=row.end_date),
        status=EventStatus(row.status),
        pricing_type=PricingType(row.pricing_type),
        fixed_price=_money(row.fixed_price),
        total_fare=_money(row.total_fare),
        description=row.description,
        location=row.location,
        notes=row.notes,
        created_at=row.created_at,
        updated_at=row.updated_at,
        missions=tuple(missions),
        resource_assignments=tuple(assignments),
        participants=tuple(participants),
    )


def _mission_fields(mission: Mission) -> dict:
    return {
        "title": mission.title,
        "description": mission.description,
        "start_date": mission.window.start,
        "end_date": mission.window.end,
        "status": mission.status.value,
        "location": mission.location,
        "fare": _amount(mission.fare),
        "notes": mission.notes,
    }


def _assignment_row(assignment: ResourceAssignment) -> orm.ResourceAssignment:
    return orm.ResourceAssignment(
        id=assignment.id.value,
        event_id=assignment.event_id.value,
        mission_id=assignment.mission_id.value if assignment.mission_id else None,
        resource_kind=assignment.resource.kind.value,
        resource_id=assignment.resource.resource_id,
        starts_at=assignment.window.start,
        ends_at=assignment.window.end,
        status=assignment.status.value,
        notes=assignment.notes,
    )


class DjangoEventStore(EventStore):
    """PostgreSQL-backed event store using Django ORM."""

    @contextmanager
    def atomic(self) -> Iterator[None]:
        try:
            with transaction.atomic():
                yield
        except OperationalError as exc:
            logger.warning("Transaction rolled back: %s", exc)
            raise TransactionFailureError() from exc

    def get_event(self, event_id: EventId, *, for_update: bool = False) -> Event | None:
        events = orm.Event.objects.all()
        if for_update:
            events = events.select_for_update()
        row = events.filter(pk=event_id.value).first()
        if row is None:
            return None

        missions = orm.Mission.objects.filter(event_id=row.pk).prefetch_related("rides")
        return event_to_domain(
            row,
            missions=[mission_to_domain(m, m.rides.all()) for m in missions],
            assignments=[
                assignment_to_domain(a)
                for a in orm.ResourceAssignment.objects.filter(event_id=row.pk)
            ],
            participants=[
                participant_to_domain(p) for p in orm.Participant.objects.filter(event_id=row.pk)
            ],
        )

    def get_mission(self, mission_id: MissionId) -> Mission | None:
        row = orm.Mission.objects.filter(pk=mission_id.value).first()
        if row is None:
            return None
        return mission_to_domain(row, orm.Ride.objects.filter(mission_id=row.pk))

    def get_assignment(self, assignment_id: AssignmentId) -> ResourceAssignment | None:
        row = orm.ResourceAssignment.objects.filter(pk=assignment_id.value).first()
        return assignment_to_domain(row) if row else None

    def lock_resource(self, resource: ResourceRef) -> bool:
        model = orm.RESOURCE_MODELS[resource.kind]
        return model.objects.select_for_update().filter(pk=resource.resource_id).first() is not None

    def list_assignments_for_resources(
        self, resources: Iterable[ResourceRef]
    ) -> list[ResourceAssignment]:
        filters = [
            Q(resource_kind=r.kind.value, resource_id=r.resource_id) for r in resources
        ]
        if not filters:
            return []
        rows = orm.ResourceAssignment.objects.filter(reduce(or_, filters))
        return [assignment_to_domain(row) for row in rows]

    def create_event_tree(self, event: Event) -> Event:
        orm.Event.objects.create(
            id=event.id.value,
            title=event.title,
            description=event.description,
            client_id=event.client_id,
            start_date=event.window.start,
            end_date=event.window.end,
            status=event.status.value,
            location=event.location,
            pricing_type=event.pricing_type.value,
            fixed_price=_amount(event.fixed_price),
            total_fare=_amount(event.total_fare),
            notes=event.notes,
        )
        orm.Mission.objects.bulk_create(
            orm.Mission(id=m.id.value, event_id=event.id.value, **_mission_fields(m))
            for m in event.missions
        )
        orm.Participant.objects.bulk_create(
            orm.Participant(
                id=p.id.value,
                event_id=event.id.value,
                user_id=p.user_id,
                role=p.role.value,
                status=p.status.value,
            )
            for p in event.participants
        )
        orm.ResourceAssignment.objects.bulk_create(
            _assignment_row(a) for a in event.resource_assignments
        )
        return self.get_event(event.id)

    def apply_status_cascade(self, cascade: StatusCascade) -> None:
        now = timezone.now()
        mission_ids = [mission_id.value for mission_id in cascade.mission_ids]
        orm.Event.objects.filter(pk=cascade.event_id.value).update(
            status=cascade.event_status.value, updated_at=now
        )
        orm.Mission.objects.filter(pk__in=mission_ids).update(
            status=cascade.mission_status.value, updated_at=now
        )
        orm.Ride.objects.filter(mission_id__in=mission_ids).update(
            status=cascade.ride_status.value
        )

        by_status = defaultdict(list)
        for assignment_id, status in cascade.assignment_updates:
            by_status[status].append(assignment_id.value)
        for status, ids in by_status.items():
            orm.ResourceAssignment.objects.filter(pk__in=ids).update(status=status.value)

    def delete_event_tree(self, deletion: EventDeletion) -> int:
        event_pk = deletion.event_id.value
        mission_ids = [mission_id.value for mission_id in deletion.mission_ids]
        detached = orm.Ride.objects.filter(mission_id__in=mission_ids).update(mission=None)
        orm.Mission.objects.filter(pk__in=mission_ids).delete()
        orm.ResourceAssignment.objects.filter(event_id=event_pk).delete()
        orm.Participant.objects.filter(event_id=event_pk).delete()
        orm.Event.objects.filter(pk=event_pk).delete()
        return detached

    def set_total_fare(self, event_id: EventId, total_fare: Money) -> None:
        orm.Event.objects.filter(pk=event_id.value).update(
            total_fare=total_fare.amount, updated_at=timezone.now()
        )

    def add_assignment(self, assignment: ResourceAssignment) -> ResourceAssignment:
        _assignment_row(assignment).save(force_insert=True)
        return assignment

    def set_assignment_status(
        self, assignment_id: AssignmentId, status: AssignmentStatus
    ) -> None:
        orm.ResourceAssignment.objects.filter(pk=assignment_id.value).update(status=status.value)

    def add_mission(self, mission: Mission) -> Mission:
        orm.Mission.objects.create(
            id=mission.id.value, event_id=mission.event_id.value, **_mission_fields(mission)
        )
        return self.get_mission(mission.id)

    def save_mission(self, mission: Mission) -> Mission:
        orm.Mission.objects.filter(pk=mission.id.value).update(
            updated_at=timezone.now(), **_mission_fields(mission)
        )
        return self.get_mission(mission.id)

    def delete_mission(self, mission_id: MissionId) -> int:
        detached = orm.Ride.objects.filter(mission_id=mission_id.value).update(mission=None)
        orm.Mission.objects.filter(pk=mission_id.value).delete()
        return detached
