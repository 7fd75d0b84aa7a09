from django.contrib import admin

from tenant_events.models import Event, EventLocation, EventSchedule, ScheduleSpeaker, Speaker


class EventLocationInline(admin.TabularInline):
    model = EventLocation
    extra = 1


class ScheduleSpeakerInline(admin.TabularInline):
    model = ScheduleSpeaker
    extra = 1
    autocomplete_fields = ["speaker"]


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["title", "tenant_id", "type", "status", "start_date"]
    list_filter = ["tenant_id", "type", "status", "format"]
    search_fields = ["title", "description"]
    inlines = [EventLocationInline]


@admin.register(EventSchedule)
class EventScheduleAdmin(admin.ModelAdmin):
    list_display = ["title", "tenant_id", "event_id", "session_type", "start_time"]
    list_filter = ["tenant_id", "session_type"]
    search_fields = ["title", "location", "event_id"]
    inlines = [ScheduleSpeakerInline]


@admin.register(Speaker)
class SpeakerAdmin(admin.ModelAdmin):
    list_display = ["name", "tenant_id", "company", "speaker_type"]
    list_filter = ["tenant_id", "speaker_type"]
    search_fields = ["name", "company"]
