"""Serializers for transforming domain models to API responses.

Output serializers read frozen domain dataclasses by attribute. Field names
on the wire are camelCase.
"""

from enum import Enum
from typing import Any

from rest_framework import serializers

from tenant_events.domain import EntityId, Page, ScheduleDraft
from tenant_events.domain.enums import SessionType


class EntityIdField(serializers.Field):
    default_error_messages = {
        "invalid": "Must be a 24 character hex identifier.",
    }

    def to_representation(self, value: EntityId) -> str:
        return str(value)

    def to_internal_value(self, data: Any) -> EntityId:
        if not EntityId.is_valid(data):
            self.fail("invalid")
        return EntityId(data)


class EnumValueField(serializers.ChoiceField):
    def __init__(self, enum_cls: type[Enum], **kwargs: Any) -> None:
        self.enum_cls = enum_cls
        super().__init__(choices=[member.value for member in enum_cls], **kwargs)

    def to_representation(self, value: Enum | str) -> str:
        return value.value if isinstance(value, Enum) else value

    def to_internal_value(self, data: Any) -> Enum:
        return self.enum_cls(super().to_internal_value(data))


class LocationSerializer(serializers.Serializer):
    name = serializers.CharField()
    address = serializers.CharField()


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = EntityIdField()
    tenantId = serializers.CharField(source="tenant_id")
    title = serializers.CharField()
    description = serializers.CharField(allow_null=True)
    type = serializers.CharField(source="type.value")
    format = serializers.CharField(source="format.value")
    status = serializers.CharField(source="status.value")
    startDate = serializers.DateTimeField(source="start_date")
    endDate = serializers.DateTimeField(source="end_date")
    locations = LocationSerializer(many=True)
    numberOfParticipants = serializers.IntegerField(source="number_of_participants")
    currency = serializers.CharField(source="currency.value")
    isPublic = serializers.BooleanField(source="is_public")
    createdBy = serializers.CharField(source="created_by", allow_null=True)
    updatedBy = serializers.CharField(source="updated_by", allow_null=True)
    createdAt = serializers.DateTimeField(source="created_at", allow_null=True)
    updatedAt = serializers.DateTimeField(source="updated_at", allow_null=True)


class SpeakerSerializer(serializers.Serializer):
    """Serializer for Speaker domain model."""

    id = EntityIdField()
    tenantId = serializers.CharField(source="tenant_id")
    name = serializers.CharField()
    bio = serializers.CharField(allow_null=True)
    company = serializers.CharField(allow_null=True)
    email = serializers.CharField(allow_null=True)
    linkedinUrl = serializers.CharField(source="linkedin_url", allow_null=True)
    speakerType = serializers.SerializerMethodField()

    def get_speakerType(self, speaker) -> str | None:
        return speaker.speaker_type.value if speaker.speaker_type else None


class EventScheduleSerializer(serializers.Serializer):
    """Serializer for EventSchedule domain model, with join enrichment."""

    id = EntityIdField()
    tenantId = serializers.CharField(source="tenant_id")
    eventId = serializers.CharField(source="event_id")
    eventTitle = serializers.CharField(source="event_title", allow_null=True)
    title = serializers.CharField()
    description = serializers.CharField(allow_null=True)
    sessionType = serializers.CharField(source="session_type.value")
    startTime = serializers.DateTimeField(source="start_time")
    endTime = serializers.DateTimeField(source="end_time")
    location = serializers.CharField(allow_null=True)
    speakerIds = serializers.ListField(source="speaker_ids", child=EntityIdField())
    speakers = SpeakerSerializer(many=True)


class ScheduleCreateSerializer(serializers.Serializer):
    """Input for POST /api/event-schedules."""

    eventId = EntityIdField()
    title = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    sessionType = EnumValueField(SessionType)
    startTime = serializers.DateTimeField()
    endTime = serializers.DateTimeField()
    location = serializers.CharField(
        required=False, allow_null=True, allow_blank=True, max_length=255
    )
    speakerIds = serializers.ListField(child=EntityIdField(), required=False, default=list)

    def validate_speakerIds(self, value: list[EntityId]) -> list[EntityId]:
        if len(set(value)) != len(value):
            raise serializers.ValidationError("Speaker ids must not repeat.")
        return value

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        if attrs["endTime"] < attrs["startTime"]:
            raise serializers.ValidationError({"endTime": "Must not be before startTime."})
        return attrs

    def to_draft(self) -> ScheduleDraft:
        data = self.validated_data
        return ScheduleDraft(
            event_id=data["eventId"],
            title=data["title"],
            session_type=data["sessionType"],
            start_time=data["startTime"],
            end_time=data["endTime"],
            description=data.get("description") or None,
            location=data.get("location") or None,
            speaker_ids=tuple(data["speakerIds"]),
        )


class AddSpeakerSerializer(serializers.Serializer):
    """Input for POST /api/event-schedules/add-speaker; ids are checked by the service."""

    scheduleId = serializers.CharField()
    speakerId = serializers.CharField()


def page_payload(page: Page, serializer_class: type[serializers.Serializer]) -> dict[str, Any]:
    return {
        "items": serializer_class(page.items, many=True).data,
        "total": page.total,
        "page": page.page,
        "limit": page.limit,
        "totalPages": page.total_pages,
    }
