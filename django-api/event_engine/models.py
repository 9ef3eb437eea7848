"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models

from event_engine.domain.models import (
    AssignmentStatus,
    EventStatus,
    InvitationStatus,
    MissionStatus,
    ParticipantRole,
    PricingType,
    RideStatus,
)
from event_engine.domain.value_objects import ResourceKind


def _choices(enum_cls) -> list[tuple[str, str]]:
    return [(member.value, member.name.replace("_", " ").title()) for member in enum_cls]


class Vehicle(models.Model):
    """Bookable vehicle."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    plate_number = models.CharField(max_length=32, blank=True)

    def __str__(self) -> str:
        return self.name


class Venue(models.Model):
    """Bookable venue."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    address = models.CharField(max_length=500, blank=True)
    capacity = models.PositiveIntegerField(default=0)

    def __str__(self) -> str:
        return self.name


class Team(models.Model):
    """Bookable chauffeur team."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)

    def __str__(self) -> str:
        return self.name


RESOURCE_MODELS = {
    ResourceKind.VEHICLE: Vehicle,
    ResourceKind.VENUE: Venue,
    ResourceKind.TEAM: Team,
}


class Event(models.Model):
    """Persistence model for events."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    client_id = models.CharField(max_length=64)
    start_date = models.DateTimeField()
    end_date = models.DateTimeField()
    status = models.CharField(
        max_length=20, choices=_choices(EventStatus), default=EventStatus.PLANNED.value
    )
    location = models.CharField(max_length=255, blank=True, default="")
    pricing_type = models.CharField(
        max_length=20,
        choices=_choices(PricingType),
        default=PricingType.MISSION_BASED.value,
    )
    fixed_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    total_fare = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    notes = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-start_date"]
        indexes = [
            models.Index(fields=["client_id", "start_date"], name="event_client_start_idx"),
        ]

    def __str__(self) -> str:
        return self.title


class Mission(models.Model):
    """Persistence model for missions within an event."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.PROTECT, related_name="missions")
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    start_date = models.DateTimeField()
    end_date = models.DateTimeField()
    status = models.CharField(
        max_length=20, choices=_choices(MissionStatus), default=MissionStatus.PLANNED.value
    )
    location = models.CharField(max_length=255, blank=True, default="")
    fare = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    notes = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["start_date"]
        indexes = [
            models.Index(fields=["event", "start_date"], name="mission_event_start_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.event.title} - {self.title}"


class Ride(models.Model):
    """Persistence model for rides.

    Rides outlive missions: deleting a mission detaches its rides.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    mission = models.ForeignKey(
        Mission,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="rides",
    )
    passenger_id = models.CharField(max_length=64)
    chauffeur_id = models.CharField(max_length=64, null=True, blank=True)
    pickup_address = models.TextField()
    dropoff_address = models.TextField()
    pickup_time = models.DateTimeField()
    dropoff_time = models.DateTimeField(null=True, blank=True)
    status = models.CharField(
        max_length=20, choices=_choices(RideStatus), default=RideStatus.SCHEDULED.value
    )
    fare = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    notes = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["pickup_time"]
        indexes = [
            models.Index(fields=["mission"], name="ride_mission_idx"),
        ]

    def __str__(self) -> str:
        return f"Ride {self.id} - {self.status}"


class ResourceAssignment(models.Model):
    """Booking of a vehicle, venue or team for an event or mission."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(
        Event, on_delete=models.PROTECT, related_name="resource_assignments"
    )
    mission = models.ForeignKey(
        Mission,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="resource_assignments",
    )
    resource_kind = models.CharField(max_length=10, choices=_choices(ResourceKind))
    resource_id = models.UUIDField()
    starts_at = models.DateTimeField()
    ends_at = models.DateTimeField()
    status = models.CharField(
        max_length=20,
        choices=_choices(AssignmentStatus),
        default=AssignmentStatus.ASSIGNED.value,
    )
    notes = models.TextField(blank=True, default="")
    assigned_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["starts_at"]
        indexes = [
            models.Index(
                fields=["resource_kind", "resource_id", "starts_at"],
                name="assignment_resource_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.resource_kind}:{self.resource_id} - {self.starts_at}"


class Participant(models.Model):
    """Persistence model for event participants."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.PROTECT, related_name="participants")
    user_id = models.CharField(max_length=64)
    role = models.CharField(max_length=20, choices=_choices(ParticipantRole))
    status = models.CharField(
        max_length=20,
        choices=_choices(InvitationStatus),
        default=InvitationStatus.PENDING.value,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["event", "user_id"], name="unique_event_participant"
            )
        ]

    def __str__(self) -> str:
        return f"{self.user_id} ({self.role})"
