"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in tenant_events/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Generic, TypeVar

from tenant_events.domain.enums import (
    Currency,
    EventFormat,
    EventStatus,
    EventType,
    SessionType,
    SpeakerType,
)
from tenant_events.domain.value_objects import EntityId

T = TypeVar("T")


@dataclass(frozen=True)
class Location:
    name: str
    address: str


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: EntityId
    tenant_id: str
    title: str
    description: str | None
    type: EventType
    format: EventFormat
    status: EventStatus
    start_date: datetime
    end_date: datetime
    currency: Currency
    locations: tuple[Location, ...] = ()
    number_of_participants: int = 0
    is_public: bool = False
    created_by: str | None = None
    updated_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class Speaker:
    """Domain representation of a Speaker."""

    id: EntityId
    tenant_id: str
    name: str
    bio: str | None = None
    company: str | None = None
    email: str | None = None
    linkedin_url: str | None = None
    speaker_type: SpeakerType | None = None


@dataclass(frozen=True)
class EventSchedule:
    """Domain representation of an EventSchedule.

    ``event_id`` is the raw stored text. ``speakers`` and ``event_title`` are
    join enrichment: speakers that no longer exist are simply absent, and
    ``event_title`` is None when the parent event cannot be resolved.
    """

    id: EntityId
    tenant_id: str
    event_id: str
    title: str
    session_type: SessionType
    start_time: datetime
    end_time: datetime
    description: str | None = None
    location: str | None = None
    speaker_ids: tuple[EntityId, ...] = ()
    speakers: tuple[Speaker, ...] = ()
    event_title: str | None = None


@dataclass(frozen=True)
class ScheduleDraft:
    """Validated input for creating an EventSchedule."""

    event_id: EntityId
    title: str
    session_type: SessionType
    start_time: datetime
    end_time: datetime
    description: str | None = None
    location: str | None = None
    speaker_ids: tuple[EntityId, ...] = ()

    def __post_init__(self) -> None:
        if len(set(self.speaker_ids)) != len(self.speaker_ids):
            raise ValueError("speaker_ids must not contain duplicates")
        if self.end_time < self.start_time:
            raise ValueError("end_time must not be before start_time")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a listing plus the totals needed to walk the others."""

    items: tuple[T, ...]
    total: int
    page: int
    limit: int
    total_pages: int
