"""Typed list filters and their normalization into predicate clauses.

Filters are parsed from raw query parameters (camelCase wire names) by
``from_params``. Parsing fails fast with ``InvalidInputError`` naming the
offending parameter, so nothing malformed ever reaches a store.
"""

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from functools import singledispatchmethod
from typing import Any, Self

from django.utils.dateparse import parse_date, parse_datetime

from tenant_events import conf
from tenant_events.domain.enums import (
    Currency,
    EventFormat,
    EventStatus,
    EventType,
    SessionType,
    SpeakerType,
)
from tenant_events.domain.errors import InvalidInputError
from tenant_events.domain.value_objects import EntityId, PageRequest
from tenant_events.query.clauses import (
    AnyOf,
    Predicate,
    at_least,
    at_most,
    contains_text,
    equals,
    same_identifier,
)

_TRUE = frozenset({"true", "1", "yes"})
_FALSE = frozenset({"false", "0", "no"})


class ParamReader:
    """Reads optional, typed values out of a query-parameter mapping."""

    def __init__(self, params: Mapping[str, Any]) -> None:
        self._params = params

    def _raw(self, name: str) -> Any:
        value = self._params.get(name)
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return None
        return value

    def text(self, name: str) -> str | None:
        value = self._raw(name)
        return None if value is None else str(value)

    def identifier(self, name: str) -> str | None:
        value = self._raw(name)
        if value is None:
            return None
        if not EntityId.is_valid(value):
            raise InvalidInputError(name, f"{name} must be a 24 character hex identifier")
        return EntityId(value).value

    def choice(self, name: str, enum_cls: type[Enum]) -> Any:
        value = self._raw(name)
        if value is None:
            return None
        try:
            return enum_cls(value)
        except ValueError:
            allowed = ", ".join(member.value for member in enum_cls)
            raise InvalidInputError(name, f"{name} must be one of: {allowed}") from None

    def timestamp(self, name: str) -> datetime | None:
        value = self._raw(name)
        if value is None:
            return None
        if isinstance(value, datetime):
            parsed = value
        else:
            try:
                parsed = parse_datetime(str(value))
                if parsed is None:
                    day = parse_date(str(value))
                    parsed = None if day is None else datetime(day.year, day.month, day.day)
            except ValueError:
                parsed = None
            if parsed is None:
                raise InvalidInputError(name, f"{name} must be an ISO 8601 date or date-time")
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        return parsed

    def integer(self, name: str, minimum: int) -> int | None:
        value = self._raw(name)
        if value is None:
            return None
        if isinstance(value, bool):
            raise InvalidInputError(name, f"{name} must be an integer")
        try:
            number = int(value) if isinstance(value, int) else int(str(value), 10)
        except ValueError:
            raise InvalidInputError(name, f"{name} must be an integer") from None
        if number < minimum:
            raise InvalidInputError(name, f"{name} must be >= {minimum}")
        return number

    def boolean(self, name: str) -> bool | None:
        value = self._raw(name)
        if value is None or isinstance(value, bool):
            return value
        lowered = str(value).lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        raise InvalidInputError(name, f"{name} must be true or false")

    def page(self) -> PageRequest:
        page = self.integer("page", minimum=1)
        limit = self.integer("limit", minimum=1)
        return PageRequest(
            page=1 if page is None else page,
            limit=conf.get_setting("DEFAULT_PAGE_SIZE") if limit is None else limit,
        )


@dataclass(frozen=True)
class EventFilter:
    page: PageRequest = PageRequest()
    tenant_id: str | None = None
    search: str | None = None
    title: str | None = None
    type: EventType | None = None
    format: EventFormat | None = None
    status: EventStatus | None = None
    start_date_from: datetime | None = None
    end_date_to: datetime | None = None
    location: str | None = None
    currency: Currency | None = None
    min_participants: int | None = None
    max_participants: int | None = None
    is_public: bool | None = None
    user_id: str | None = None

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> Self:
        read = ParamReader(params)
        return cls(
            page=read.page(),
            tenant_id=read.text("tenantId"),
            search=read.text("search"),
            title=read.text("title"),
            type=read.choice("type", EventType),
            format=read.choice("format", EventFormat),
            status=read.choice("status", EventStatus),
            start_date_from=read.timestamp("startDateFrom"),
            end_date_to=read.timestamp("endDateTo"),
            location=read.text("location"),
            currency=read.choice("currency", Currency),
            min_participants=read.integer("minParticipants", minimum=0),
            max_participants=read.integer("maxParticipants", minimum=0),
            is_public=read.boolean("isPublic"),
            user_id=read.identifier("userId"),
        )


@dataclass(frozen=True)
class ScheduleFilter:
    page: PageRequest = PageRequest()
    tenant_id: str | None = None
    event_id: str | None = None
    speaker_id: str | None = None
    session_type: SessionType | None = None
    start_time_from: datetime | None = None
    end_time_to: datetime | None = None
    search: str | None = None
    title: str | None = None
    location: str | None = None

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> Self:
        read = ParamReader(params)
        return cls(
            page=read.page(),
            tenant_id=read.text("tenantId"),
            event_id=read.identifier("eventId"),
            speaker_id=read.identifier("speakerId"),
            session_type=read.choice("sessionType", SessionType),
            start_time_from=read.timestamp("startTimeFrom"),
            end_time_to=read.timestamp("endTimeTo"),
            search=read.text("search"),
            title=read.text("title"),
            location=read.text("location"),
        )


@dataclass(frozen=True)
class SpeakerFilter:
    page: PageRequest = PageRequest()
    tenant_id: str | None = None
    name: str | None = None
    company: str | None = None
    speaker_type: SpeakerType | None = None

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> Self:
        read = ParamReader(params)
        return cls(
            page=read.page(),
            tenant_id=read.text("tenantId"),
            name=read.text("name"),
            company=read.text("company"),
            speaker_type=read.choice("speakerType", SpeakerType),
        )


@dataclass(frozen=True)
class EventSpeakersFilter:
    """Speakers attached to any schedule of one event."""

    event_id: str
    page: PageRequest = PageRequest()
    search: str | None = None
    name: str | None = None
    company: str | None = None

    @classmethod
    def from_params(cls, event_id: str, params: Mapping[str, Any]) -> Self:
        read = ParamReader({**params, "eventId": event_id})
        validated = read.identifier("eventId")
        if validated is None:
            raise InvalidInputError("eventId", "eventId is required")
        return cls(
            event_id=validated,
            page=read.page(),
            search=read.text("search"),
            name=read.text("name"),
            company=read.text("company"),
        )


@dataclass(frozen=True)
class NormalizedFilter:
    """Clauses derived from one filter object.

    ``text_clauses`` hold the field-specific text filters that a search term
    replaces; ``clauses`` always apply.
    """

    clauses: tuple[Predicate, ...]
    page: PageRequest
    text_clauses: tuple[Predicate, ...] = ()
    search: str | None = None
    tenant_id: str | None = None


class FilterNormalizer:
    """Turns a typed filter into independent predicate clauses."""

    @singledispatchmethod
    def normalize(self, filters: object) -> NormalizedFilter:
        raise TypeError(f"Unsupported filter type: {type(filters).__name__}")

    @normalize.register
    def _normalize_events(self, filters: EventFilter) -> NormalizedFilter:
        clauses: list[Predicate] = []
        for field, value in (
            ("type", filters.type),
            ("format", filters.format),
            ("status", filters.status),
            ("currency", filters.currency),
        ):
            if value is not None:
                clauses.append(equals(field, value.value))
        if filters.is_public is not None:
            clauses.append(equals("is_public", filters.is_public))
        if filters.min_participants is not None:
            clauses.append(at_least("number_of_participants", filters.min_participants))
        if filters.max_participants is not None:
            clauses.append(at_most("number_of_participants", filters.max_participants))
        if filters.start_date_from is not None:
            clauses.append(at_least("start_date", filters.start_date_from))
        if filters.end_date_to is not None:
            clauses.append(at_most("end_date", filters.end_date_to))
        if filters.user_id is not None:
            clauses.append(
                AnyOf((equals("created_by", filters.user_id), equals("updated_by", filters.user_id)))
            )

        text_clauses: list[Predicate] = []
        if filters.title:
            text_clauses.append(contains_text("title", filters.title))
        if filters.location:
            text_clauses.append(
                AnyOf(
                    (
                        contains_text("locations.name", filters.location),
                        contains_text("locations.address", filters.location),
                    )
                )
            )
        return NormalizedFilter(
            clauses=tuple(clauses),
            page=filters.page,
            text_clauses=tuple(text_clauses),
            search=filters.search,
            tenant_id=filters.tenant_id,
        )

    @normalize.register
    def _normalize_schedules(self, filters: ScheduleFilter) -> NormalizedFilter:
        clauses: list[Predicate] = []
        if filters.event_id is not None:
            clauses.append(same_identifier("event_id", filters.event_id))
        if filters.speaker_id is not None:
            clauses.append(equals("speaker_ids", filters.speaker_id))
        if filters.session_type is not None:
            clauses.append(equals("session_type", filters.session_type.value))
        if filters.start_time_from is not None:
            clauses.append(at_least("start_time", filters.start_time_from))
        if filters.end_time_to is not None:
            clauses.append(at_most("end_time", filters.end_time_to))

        text_clauses: list[Predicate] = []
        if filters.title:
            text_clauses.append(contains_text("title", filters.title))
        if filters.location:
            text_clauses.append(contains_text("location", filters.location))
        return NormalizedFilter(
            clauses=tuple(clauses),
            page=filters.page,
            text_clauses=tuple(text_clauses),
            search=filters.search,
            tenant_id=filters.tenant_id,
        )

    @normalize.register
    def _normalize_speakers(self, filters: SpeakerFilter) -> NormalizedFilter:
        clauses: list[Predicate] = []
        if filters.speaker_type is not None:
            clauses.append(equals("speaker_type", filters.speaker_type.value))
        text_clauses: list[Predicate] = []
        if filters.name:
            text_clauses.append(contains_text("name", filters.name))
        if filters.company:
            text_clauses.append(contains_text("company", filters.company))
        return NormalizedFilter(
            clauses=tuple(clauses),
            page=filters.page,
            text_clauses=tuple(text_clauses),
            tenant_id=filters.tenant_id,
        )

    @normalize.register
    def _normalize_event_speakers(self, filters: EventSpeakersFilter) -> NormalizedFilter:
        text_clauses: list[Predicate] = []
        if filters.name:
            text_clauses.append(contains_text("name", filters.name))
        if filters.company:
            text_clauses.append(contains_text("company", filters.company))
        return NormalizedFilter(
            clauses=(same_identifier("schedules.event_id", filters.event_id),),
            page=filters.page,
            text_clauses=tuple(text_clauses),
            search=filters.search,
        )


def parse_identifier(name: str, value: Any) -> str:
    """Validate a path or body identifier; raises ``InvalidInputError``."""
    validated = ParamReader({name: value}).identifier(name)
    if validated is None:
        raise InvalidInputError(name, f"{name} is required")
    return validated


def filter_fields(filters: object) -> list[str]:
    """Names of the filter fields that are set, for logging."""
    return sorted(
        field.name
        for field in dataclasses.fields(filters)
        if field.name != "page" and getattr(filters, field.name) is not None
    )
