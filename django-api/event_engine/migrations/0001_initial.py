import uuid

import django.db.models.deletion
from django.db import migrations, models

EVENT_STATUS_CHOICES = [
    ("PLANNED", "Planned"),
    ("IN_PROGRESS", "In Progress"),
    ("COMPLETED", "Completed"),
    ("CANCELLED", "Cancelled"),
]
MISSION_STATUS_CHOICES = [
    ("PLANNED", "Planned"),
    ("ASSIGNED", "Assigned"),
    ("IN_PROGRESS", "In Progress"),
    ("COMPLETED", "Completed"),
    ("CANCELLED", "Cancelled"),
]
RIDE_STATUS_CHOICES = [
    ("SCHEDULED", "Scheduled"),
    ("ASSIGNED", "Assigned"),
    ("IN_PROGRESS", "In Progress"),
    ("COMPLETED", "Completed"),
    ("CANCELLED", "Cancelled"),
]
ASSIGNMENT_STATUS_CHOICES = [
    ("ASSIGNED", "Assigned"),
    ("CONFIRMED", "Confirmed"),
    ("CANCELLED", "Cancelled"),
    ("COMPLETED", "Completed"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Event",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                ("client_id", models.CharField(max_length=64)),
                ("start_date", models.DateTimeField()),
                ("end_date", models.DateTimeField()),
                ("status", models.CharField(choices=EVENT_STATUS_CHOICES, default="PLANNED", max_length=20)),
                ("location", models.CharField(blank=True, default="", max_length=255)),
                (
                    "pricing_type",
                    models.CharField(
                        choices=[("MISSION_BASED", "Mission Based"), ("FIXED_PRICE", "Fixed Price")],
                        default="MISSION_BASED",
                        max_length=20,
                    ),
                ),
                ("fixed_price", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("total_fare", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("notes", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-start_date"],
                "indexes": [
                    models.Index(fields=["client_id", "start_date"], name="event_client_start_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Team",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
            ],
        ),
        migrations.CreateModel(
            name="Vehicle",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("plate_number", models.CharField(blank=True, max_length=32)),
            ],
        ),
        migrations.CreateModel(
            name="Venue",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("address", models.CharField(blank=True, max_length=500)),
                ("capacity", models.PositiveIntegerField(default=0)),
            ],
        ),
        migrations.CreateModel(
            name="Mission",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                ("start_date", models.DateTimeField()),
                ("end_date", models.DateTimeField()),
                ("status", models.CharField(choices=MISSION_STATUS_CHOICES, default="PLANNED", max_length=20)),
                ("location", models.CharField(blank=True, default="", max_length=255)),
                ("fare", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("notes", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="missions",
                        to="event_engine.event",
                    ),
                ),
            ],
            options={
                "ordering": ["start_date"],
                "indexes": [
                    models.Index(fields=["event", "start_date"], name="mission_event_start_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Ride",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("passenger_id", models.CharField(max_length=64)),
                ("chauffeur_id", models.CharField(blank=True, max_length=64, null=True)),
                ("pickup_address", models.TextField()),
                ("dropoff_address", models.TextField()),
                ("pickup_time", models.DateTimeField()),
                ("dropoff_time", models.DateTimeField(blank=True, null=True)),
                ("status", models.CharField(choices=RIDE_STATUS_CHOICES, default="SCHEDULED", max_length=20)),
                ("fare", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("notes", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "mission",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="rides",
                        to="event_engine.mission",
                    ),
                ),
            ],
            options={
                "ordering": ["pickup_time"],
                "indexes": [
                    models.Index(fields=["mission"], name="ride_mission_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Participant",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("user_id", models.CharField(max_length=64)),
                (
                    "role",
                    models.CharField(
                        choices=[
                            ("TEAM_MEMBER", "Team Member"),
                            ("CHAUFFEUR", "Chauffeur"),
                            ("PARTNER", "Partner"),
                            ("CLIENT", "Client"),
                            ("PASSENGER", "Passenger"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("PENDING", "Pending"), ("ACCEPTED", "Accepted"), ("DECLINED", "Declined")],
                        default="PENDING",
                        max_length=20,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="participants",
                        to="event_engine.event",
                    ),
                ),
            ],
            options={
                "constraints": [
                    models.UniqueConstraint(fields=("event", "user_id"), name="unique_event_participant"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ResourceAssignment",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "resource_kind",
                    models.CharField(
                        choices=[("vehicle", "Vehicle"), ("venue", "Venue"), ("team", "Team")],
                        max_length=10,
                    ),
                ),
                ("resource_id", models.UUIDField()),
                ("starts_at", models.DateTimeField()),
                ("ends_at", models.DateTimeField()),
                ("status", models.CharField(choices=ASSIGNMENT_STATUS_CHOICES, default="ASSIGNED", max_length=20)),
                ("notes", models.TextField(blank=True, default="")),
                ("assigned_at", models.DateTimeField(auto_now_add=True)),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="resource_assignments",
                        to="event_engine.event",
                    ),
                ),
                (
                    "mission",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="resource_assignments",
                        to="event_engine.mission",
                    ),
                ),
            ],
            options={
                "ordering": ["starts_at"],
                "indexes": [
                    models.Index(
                        fields=["resource_kind", "resource_id", "starts_at"],
                        name="assignment_resource_idx",
                    ),
                ],
            },
        ),
    ]
