"""Conversion of shaped store documents into domain models.

A document is a plain dict holding one row in the final plan shape: own
fields, embedded lists, and any computed fields the projection adds.
"""

from collections.abc import Callable, Mapping
from typing import Any

from tenant_events.domain import EntityId, Event, EventSchedule, Location, Speaker
from tenant_events.domain.enums import (
    Currency,
    EventFormat,
    EventStatus,
    EventType,
    SessionType,
    SpeakerType,
)
from tenant_events.query.specs import EVENT, EVENT_SCHEDULE, SPEAKER


def event_from_document(doc: Mapping[str, Any]) -> Event:
    return Event(
        id=EntityId(doc["id"]),
        tenant_id=doc["tenant_id"],
        title=doc["title"],
        description=doc.get("description"),
        type=EventType(doc["type"]),
        format=EventFormat(doc["format"]),
        status=EventStatus(doc["status"]),
        start_date=doc["start_date"],
        end_date=doc["end_date"],
        currency=Currency(doc["currency"]),
        locations=tuple(
            Location(name=loc["name"], address=loc["address"])
            for loc in doc.get("locations") or ()
        ),
        number_of_participants=doc.get("number_of_participants", 0),
        is_public=doc.get("is_public", False),
        created_by=doc.get("created_by"),
        updated_by=doc.get("updated_by"),
        created_at=doc.get("created_at"),
        updated_at=doc.get("updated_at"),
    )


def speaker_from_document(doc: Mapping[str, Any]) -> Speaker:
    speaker_type = doc.get("speaker_type")
    return Speaker(
        id=EntityId(doc["id"]),
        tenant_id=doc["tenant_id"],
        name=doc["name"],
        bio=doc.get("bio"),
        company=doc.get("company"),
        email=doc.get("email"),
        linkedin_url=doc.get("linkedin_url"),
        speaker_type=SpeakerType(speaker_type) if speaker_type else None,
    )


def schedule_from_document(doc: Mapping[str, Any]) -> EventSchedule:
    return EventSchedule(
        id=EntityId(doc["id"]),
        tenant_id=doc["tenant_id"],
        event_id=doc["event_id"],
        title=doc["title"],
        session_type=SessionType(doc["session_type"]),
        start_time=doc["start_time"],
        end_time=doc["end_time"],
        description=doc.get("description"),
        location=doc.get("location"),
        speaker_ids=tuple(EntityId(value) for value in doc.get("speaker_ids") or ()),
        speakers=tuple(speaker_from_document(s) for s in doc.get("speakers") or ()),
        event_title=doc.get("event_title"),
    )


FROM_DOCUMENT: dict[str, Callable[[Mapping[str, Any]], Any]] = {
    EVENT: event_from_document,
    EVENT_SCHEDULE: schedule_from_document,
    SPEAKER: speaker_from_document,
}


def to_domain(entity: str, doc: Mapping[str, Any]) -> Any:
    return FROM_DOCUMENT[entity](doc)
