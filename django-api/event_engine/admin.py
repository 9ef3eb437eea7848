from django.contrib import admin

from event_engine.models import (
    Event,
    Mission,
    Participant,
    ResourceAssignment,
    Ride,
    Team,
    Vehicle,
    Venue,
)


class MissionInline(admin.TabularInline):
    model = Mission
    extra = 0


class ResourceAssignmentInline(admin.TabularInline):
    model = ResourceAssignment
    extra = 0


class ParticipantInline(admin.TabularInline):
    model = Participant
    extra = 0


class RideInline(admin.TabularInline):
    model = Ride
    extra = 0


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["title", "client_id", "start_date", "status", "pricing_type", "total_fare"]
    list_filter = ["status", "pricing_type"]
    search_fields = ["title", "location"]
    readonly_fields = ["total_fare"]
    inlines = [MissionInline, ResourceAssignmentInline, ParticipantInline]


@admin.register(Mission)
class MissionAdmin(admin.ModelAdmin):
    list_display = ["title", "event", "start_date", "end_date", "status", "fare"]
    list_filter = ["status"]
    inlines = [RideInline]


@admin.register(Ride)
class RideAdmin(admin.ModelAdmin):
    list_display = ["id", "mission", "pickup_time", "status"]
    list_filter = ["status"]


@admin.register(ResourceAssignment)
class ResourceAssignmentAdmin(admin.ModelAdmin):
    list_display = ["resource_kind", "resource_id", "event", "starts_at", "ends_at", "status"]
    list_filter = ["resource_kind", "status"]


admin.site.register([Vehicle, Venue, Team])
