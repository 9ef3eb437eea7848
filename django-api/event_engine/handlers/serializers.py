"""Serializers for request parsing and for rendering domain models.

Output serializers read attributes off the frozen domain dataclasses;
input serializers only check shape and types, never business rules.
"""

from rest_framework import serializers

from event_engine.domain.models import MissionStatus
from event_engine.domain.value_objects import Money, TimeWindow
from event_engine.services.mission_service import MissionDraft


class RideSerializer(serializers.Serializer):
    id = serializers.UUIDField(source="id.value")
    mission_id = serializers.UUIDField(source="mission_id.value", allow_null=True)
    passenger_id = serializers.CharField()
    chauffeur_id = serializers.CharField(allow_null=True)
    pickup_address = serializers.CharField()
    dropoff_address = serializers.CharField()
    pickup_time = serializers.DateTimeField()
    dropoff_time = serializers.DateTimeField(allow_null=True)
    status = serializers.CharField(source="status.value")
    fare = serializers.DecimalField(
        source="fare.amount", max_digits=10, decimal_places=2, allow_null=True
    )


class MissionSerializer(serializers.Serializer):
    id = serializers.UUIDField(source="id.value")
    event_id = serializers.UUIDField(source="event_id.value")
    title = serializers.CharField()
    description = serializers.CharField()
    start_date = serializers.DateTimeField(source="window.start")
    end_date = serializers.DateTimeField(source="window.end")
    status = serializers.CharField(source="status.value")
    location = serializers.CharField()
    fare = serializers.DecimalField(
        source="fare.amount", max_digits=10, decimal_places=2, allow_null=True
    )
    notes = serializers.CharField()
    rides = RideSerializer(many=True)


class ResourceAssignmentSerializer(serializers.Serializer):
    id = serializers.UUIDField(source="id.value")
    event_id = serializers.UUIDField(source="event_id.value")
    mission_id = serializers.UUIDField(source="mission_id.value", allow_null=True)
    resource_kind = serializers.CharField(source="resource.kind.value")
    resource_id = serializers.UUIDField(source="resource.resource_id")
    starts_at = serializers.DateTimeField(source="window.start")
    ends_at = serializers.DateTimeField(source="window.end")
    status = serializers.CharField(source="status.value")
    notes = serializers.CharField()


class ParticipantSerializer(serializers.Serializer):
    id = serializers.UUIDField(source="id.value")
    user_id = serializers.CharField()
    role = serializers.CharField(source="role.value")
    status = serializers.CharField(source="status.value")


class EventSerializer(serializers.Serializer):
    """Serializer for an Event with its loaded subtree."""

    id = serializers.UUIDField(source="id.value")
    title = serializers.CharField()
    description = serializers.CharField()
    client_id = serializers.CharField()
    start_date = serializers.DateTimeField(source="window.start")
    end_date = serializers.DateTimeField(source="window.end")
    status = serializers.CharField(source="status.value")
    location = serializers.CharField()
    pricing_type = serializers.CharField(source="pricing_type.value")
    fixed_price = serializers.DecimalField(
        source="fixed_price.amount", max_digits=10, decimal_places=2, allow_null=True
    )
    total_fare = serializers.DecimalField(
        source="total_fare.amount", max_digits=10, decimal_places=2, allow_null=True
    )
    notes = serializers.CharField()
    missions = MissionSerializer(many=True)
    resource_assignments = ResourceAssignmentSerializer(many=True)
    participants = ParticipantSerializer(many=True)


class EventOperationRequestSerializer(serializers.Serializer):
    operation = serializers.CharField()
    starts_at = serializers.DateTimeField(required=False, allow_null=True, default=None)


class ResourceAssignmentRequestSerializer(serializers.Serializer):
    owner_id = serializers.CharField()
    resource_kind = serializers.CharField()
    resource_id = serializers.CharField()
    starts_at = serializers.DateTimeField(required=False, allow_null=True, default=None)
    ends_at = serializers.DateTimeField(required=False, allow_null=True, default=None)
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def validate(self, attrs):
        starts_at, ends_at = attrs.get("starts_at"), attrs.get("ends_at")
        if (starts_at is None) != (ends_at is None):
            raise serializers.ValidationError("starts_at and ends_at must be given together")
        if starts_at is not None and ends_at < starts_at:
            raise serializers.ValidationError("ends_at cannot be before starts_at")
        return attrs

    @property
    def window(self) -> TimeWindow | None:
        data = self.validated_data
        if data["starts_at"] is None:
            return None
        return TimeWindow(start=data["starts_at"], end=data["ends_at"])


class MissionRequestSerializer(serializers.Serializer):
    """Mission payload. With ``partial=True`` it validates an edit."""

    title = serializers.CharField()
    description = serializers.CharField(required=False, allow_blank=True, default="")
    start_date = serializers.DateTimeField()
    end_date = serializers.DateTimeField()
    status = serializers.ChoiceField(
        choices=[status.value for status in MissionStatus],
        required=False,
        default=MissionStatus.PLANNED.value,
    )
    location = serializers.CharField(required=False, allow_blank=True, default="")
    fare = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True, default=None
    )
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def validate(self, attrs):
        starts, ends = attrs.get("start_date"), attrs.get("end_date")
        if self.partial and (starts is None) != (ends is None):
            raise serializers.ValidationError("start_date and end_date must be given together")
        if starts is not None and ends is not None and ends < starts:
            raise serializers.ValidationError("end_date cannot be before start_date")
        return attrs

    def to_draft(self) -> MissionDraft:
        data = self.validated_data
        return MissionDraft(
            title=data["title"],
            window=TimeWindow(start=data["start_date"], end=data["end_date"]),
            description=data["description"],
            location=data["location"],
            fare=Money(data["fare"]) if data["fare"] is not None else None,
            notes=data["notes"],
            status=MissionStatus(data["status"]),
        )

    def to_changes(self) -> dict:
        # Only the keys present in the request body are edited.
        data = {key: value for key, value in self.validated_data.items() if key in self.initial_data}
        changes = {}
        if "start_date" in data:
            changes["window"] = TimeWindow(start=data.pop("start_date"), end=data.pop("end_date"))
        if "status" in data:
            changes["status"] = MissionStatus(data.pop("status"))
        if "fare" in data:
            fare = data.pop("fare")
            changes["fare"] = Money(fare) if fare is not None else None
        changes.update(data)
        return changes
