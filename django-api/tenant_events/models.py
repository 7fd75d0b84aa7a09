"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

from django.db import models

from tenant_events.domain.enums import (
    Currency,
    EventFormat,
    EventStatus,
    EventType,
    SessionType,
    SpeakerType,
    enum_choices,
)
from tenant_events.domain.value_objects import EntityId


def new_entity_id() -> str:
    return EntityId.generate().value


class Event(models.Model):
    """Persistence model for events."""

    id = models.CharField(primary_key=True, max_length=24, default=new_entity_id, editable=False)
    tenant_id = models.CharField(max_length=64, db_index=True)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    type = models.CharField(max_length=32, choices=enum_choices(EventType))
    format = models.CharField(max_length=16, choices=enum_choices(EventFormat))
    status = models.CharField(
        max_length=16, choices=enum_choices(EventStatus), default=EventStatus.DRAFT.value
    )
    start_date = models.DateTimeField()
    end_date = models.DateTimeField()
    number_of_participants = models.PositiveIntegerField(default=0)
    currency = models.CharField(max_length=3, choices=enum_choices(Currency))
    is_public = models.BooleanField(default=False)
    created_by = models.CharField(max_length=24, blank=True, null=True)
    updated_by = models.CharField(max_length=24, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["start_date", "id"]
        indexes = [
            models.Index(fields=["tenant_id", "start_date"], name="event_tenant_start_idx"),
        ]

    def __str__(self) -> str:
        return self.title


class EventLocation(models.Model):
    """One entry of an event's ordered location list."""

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="locations")
    position = models.PositiveIntegerField(default=0)
    name = models.CharField(max_length=255)
    address = models.CharField(max_length=500)

    class Meta:
        ordering = ["position", "id"]

    def __str__(self) -> str:
        return f"{self.name} ({self.address})"


class Speaker(models.Model):
    """Persistence model for speakers."""

    id = models.CharField(primary_key=True, max_length=24, default=new_entity_id, editable=False)
    tenant_id = models.CharField(max_length=64, db_index=True)
    name = models.CharField(max_length=255)
    bio = models.TextField(blank=True, null=True)
    company = models.CharField(max_length=255, blank=True, null=True)
    email = models.EmailField(blank=True, null=True)
    linkedin_url = models.URLField(max_length=500, blank=True, null=True)
    speaker_type = models.CharField(
        max_length=32, choices=enum_choices(SpeakerType), blank=True, null=True
    )

    class Meta:
        ordering = ["name", "id"]
        constraints = [
            models.UniqueConstraint(fields=["tenant_id", "name"], name="unique_speaker_name_per_tenant"),
        ]

    def __str__(self) -> str:
        return self.name


class EventSchedule(models.Model):
    """Persistence model for event schedules.

    ``event_id`` is free text: it is not a foreign key and may hold values
    that do not identify any event.
    """

    id = models.CharField(primary_key=True, max_length=24, default=new_entity_id, editable=False)
    tenant_id = models.CharField(max_length=64, db_index=True)
    event_id = models.CharField(max_length=255)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    session_type = models.CharField(max_length=32, choices=enum_choices(SessionType))
    start_time = models.DateTimeField()
    end_time = models.DateTimeField()
    location = models.CharField(max_length=255, blank=True, null=True)
    speakers = models.ManyToManyField(Speaker, through="ScheduleSpeaker", related_name="schedules")

    class Meta:
        ordering = ["start_time", "id"]
        indexes = [
            models.Index(fields=["tenant_id", "start_time"], name="schedule_tenant_start_idx"),
            models.Index(fields=["tenant_id", "event_id"], name="schedule_tenant_event_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.title} - {self.start_time}"


class ScheduleSpeaker(models.Model):
    """Ordered, duplicate-free link between a schedule and a speaker."""

    schedule = models.ForeignKey(
        EventSchedule, on_delete=models.CASCADE, related_name="speaker_links"
    )
    speaker = models.ForeignKey(Speaker, on_delete=models.CASCADE, related_name="schedule_links")
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["position", "id"]
        constraints = [
            models.UniqueConstraint(fields=["schedule", "speaker"], name="unique_schedule_speaker"),
        ]

    def __str__(self) -> str:
        return f"{self.schedule_id} #{self.position}: {self.speaker_id}"
