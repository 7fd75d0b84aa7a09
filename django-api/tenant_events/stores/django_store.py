"""Django ORM implementation of the stores.

Plans are translated into querysets. Joins and multi-valued fields become
correlated ``Exists`` subqueries, so a matching row is never duplicated and
counts stay exact. The schedule → event join reads a coerced helper column
that is NULL whenever the stored ``event_id`` is not a structured id.
"""

import functools
import logging
from dataclasses import dataclass
from typing import Any

from asgiref.sync import sync_to_async
from django.db import DatabaseError, models, transaction
from django.db.models import Case, Exists, OuterRef, Prefetch, Q, Subquery, Value, When
from django.db.models.functions import Lower

from tenant_events import models as orm
from tenant_events.domain import EntityId, EventSchedule, ScheduleDraft
from tenant_events.domain.errors import ScheduleNotFoundError, StoreUnavailableError
from tenant_events.query.clauses import AnyOf, Clause, Comparator, Predicate
from tenant_events.query.coercion import IDENTIFIER_REGEX
from tenant_events.query.compiler import QueryPlan
from tenant_events.query.specs import EVENT, EVENT_SCHEDULE, SPEAKER
from tenant_events.stores.documents import to_domain
from tenant_events.stores.interfaces import EventStore, QueryStore

logger = logging.getLogger(__name__)

MODELS: dict[str, type[models.Model]] = {
    EVENT: orm.Event,
    EVENT_SCHEDULE: orm.EventSchedule,
    SPEAKER: orm.Speaker,
}


@dataclass(frozen=True)
class _Relation:
    """A multi-valued field or join, reached through a correlated subquery.

    ``link`` on ``model`` is correlated with ``outer`` on the primary row.
    ``prefix`` is prepended to the rest of the field path; ``tenant`` names
    the joined row's tenant column when the relation crosses entities.
    """

    model: type[models.Model]
    link: str
    outer: str
    prefix: str = ""
    tenant: str | None = None

    def lookup(self, rest: str) -> str:
        return "__".join(part for part in (self.prefix, rest.replace(".", "__")) if part)


RELATIONS: dict[str, dict[str, _Relation]] = {
    EVENT: {
        "locations": _Relation(orm.EventLocation, link="event", outer="pk"),
    },
    EVENT_SCHEDULE: {
        "speaker_ids": _Relation(orm.ScheduleSpeaker, link="schedule", outer="pk", prefix="speaker_id"),
        "speakers": _Relation(
            orm.ScheduleSpeaker,
            link="schedule",
            outer="pk",
            prefix="speaker",
            tenant="speaker__tenant_id",
        ),
        "event": _Relation(orm.Event, link="pk", outer="event_key", tenant="tenant_id"),
    },
    SPEAKER: {
        "schedules": _Relation(
            orm.ScheduleSpeaker,
            link="speaker",
            outer="pk",
            prefix="schedule",
            tenant="schedule__tenant_id",
        ),
    },
}


def _lookups(field: str, clause: Clause) -> dict[str, Any]:
    if clause.comparator is Comparator.EQUALS:
        return {field: clause.operand}
    if clause.comparator is Comparator.RANGE:
        bounds = clause.operand
        lookups = {}
        if bounds.lower is not None:
            lookups[f"{field}__gte"] = bounds.lower
        if bounds.upper is not None:
            lookups[f"{field}__lte"] = bounds.upper
        return lookups
    if clause.comparator is Comparator.REGEX_ICASE:
        return {f"{field}__iregex": clause.operand}
    if clause.comparator is Comparator.IN_SET:
        return {f"{field}__in": list(clause.operand)}
    if clause.comparator is Comparator.SAME_IDENTIFIER:
        # Operand is a valid identifier, so iexact equals comparing coerced keys.
        return {f"{field}__iexact": clause.operand}
    raise ValueError(f"Unsupported comparator: {clause.comparator}")


def clause_to_q(entity: str, clause: Clause) -> Q:
    root, _, rest = clause.field.partition(".")
    relation = RELATIONS[entity].get(root)
    if relation is None:
        return Q(**_lookups(clause.field.replace(".", "__"), clause))
    correlation = {relation.link: OuterRef(relation.outer)}
    if relation.tenant is not None:
        correlation[relation.tenant] = OuterRef("tenant_id")
    subquery = relation.model.objects.filter(
        **correlation, **_lookups(relation.lookup(rest), clause)
    )
    return Q(Exists(subquery))


def predicate_to_q(entity: str, predicate: Predicate) -> Q:
    if isinstance(predicate, AnyOf):
        combined = Q()
        for clause in predicate.clauses:
            combined |= clause_to_q(entity, clause)
        return combined
    return clause_to_q(entity, predicate)


def _schedule_event() -> models.QuerySet:
    return orm.Event.objects.filter(pk=OuterRef("event_key"), tenant_id=OuterRef("tenant_id"))


def _event_document(row: orm.Event) -> dict[str, Any]:
    return {
        "id": row.pk,
        "tenant_id": row.tenant_id,
        "title": row.title,
        "description": row.description,
        "type": row.type,
        "format": row.format,
        "status": row.status,
        "start_date": row.start_date,
        "end_date": row.end_date,
        "locations": [{"name": loc.name, "address": loc.address} for loc in row.locations.all()],
        "number_of_participants": row.number_of_participants,
        "currency": row.currency,
        "is_public": row.is_public,
        "created_by": row.created_by,
        "updated_by": row.updated_by,
        "created_at": row.created_at,
        "updated_at": row.updated_at,
    }


def _speaker_document(row: orm.Speaker) -> dict[str, Any]:
    return {
        "id": row.pk,
        "tenant_id": row.tenant_id,
        "name": row.name,
        "bio": row.bio,
        "company": row.company,
        "email": row.email,
        "linkedin_url": row.linkedin_url,
        "speaker_type": row.speaker_type,
    }


def _schedule_document(row: orm.EventSchedule) -> dict[str, Any]:
    links = list(row.speaker_links.all())
    return {
        "id": row.pk,
        "tenant_id": row.tenant_id,
        "event_id": row.event_id,
        "title": row.title,
        "description": row.description,
        "session_type": row.session_type,
        "start_time": row.start_time,
        "end_time": row.end_time,
        "location": row.location,
        "speaker_ids": [link.speaker_id for link in links],
        "speakers": [
            _speaker_document(link.speaker)
            for link in links
            if link.speaker.tenant_id == row.tenant_id
        ],
        "event_title": getattr(row, "event_title", None),
    }


DOCUMENTS = {
    EVENT: _event_document,
    EVENT_SCHEDULE: _schedule_document,
    SPEAKER: _speaker_document,
}


class DjangoQueryStore(QueryStore):
    """Relational store for compiled plans."""

    def _base(self, plan: QueryPlan) -> models.QuerySet:
        queryset = MODELS[plan.entity].objects.all()
        if plan.entity == EVENT_SCHEDULE:
            # Coerced event reference; NULL joins to nothing.
            queryset = queryset.annotate(
                event_key=Case(
                    When(event_id__regex=IDENTIFIER_REGEX, then=Lower("event_id")),
                    default=Value(None),
                    output_field=models.CharField(),
                )
            )
        for predicate in (*plan.match, *plan.post_join):
            queryset = queryset.filter(predicate_to_q(plan.entity, predicate))
        return queryset

    def _shaped(self, plan: QueryPlan, queryset: models.QuerySet) -> models.QuerySet:
        if plan.entity == EVENT:
            queryset = queryset.prefetch_related("locations")
        elif plan.entity == EVENT_SCHEDULE:
            queryset = queryset.annotate(
                event_title=Subquery(_schedule_event().values("title")[:1])
            ).prefetch_related(
                Prefetch(
                    "speaker_links",
                    queryset=orm.ScheduleSpeaker.objects.select_related("speaker").order_by(
                        "position", "id"
                    ),
                )
            )
        ordering = [f"-{key.field}" if key.descending else key.field for key in plan.sort]
        queryset = queryset.order_by(*ordering)
        if plan.window is not None:
            queryset = queryset[plan.window.offset : plan.window.offset + plan.window.limit]
        return queryset

    def _count(self, plan: QueryPlan) -> int:
        try:
            return self._base(plan).count()
        except DatabaseError as exc:
            raise StoreUnavailableError(plan.entity) from exc

    def _fetch(self, plan: QueryPlan) -> list[Any]:
        try:
            rows = list(self._shaped(plan, self._base(plan)))
        except DatabaseError as exc:
            raise StoreUnavailableError(plan.entity) from exc
        to_document = DOCUMENTS[plan.entity]
        return [to_domain(plan.entity, to_document(row)) for row in rows]

    async def count(self, plan: QueryPlan) -> int:
        return await sync_to_async(self._count)(plan)

    async def fetch(self, plan: QueryPlan) -> list[Any]:
        return await sync_to_async(self._fetch)(plan)


def _unavailable_on_database_error(entity: str):
    """Re-raise ``DatabaseError`` from a store method as ``StoreUnavailableError``."""

    def decorate(method):
        @functools.wraps(method)
        def wrapper(*args, **kwargs):
            try:
                return method(*args, **kwargs)
            except DatabaseError as exc:
                raise StoreUnavailableError(entity) from exc

        return wrapper

    return decorate


class DjangoEventStore(EventStore):
    """Write side backed by the Django ORM."""

    @_unavailable_on_database_error(EVENT)
    def event_exists(self, tenant_id: str, event_id: EntityId) -> bool:
        return orm.Event.objects.filter(tenant_id=tenant_id, pk=event_id.value).exists()

    @_unavailable_on_database_error(EVENT_SCHEDULE)
    def schedule_exists(self, tenant_id: str, schedule_id: EntityId) -> bool:
        return orm.EventSchedule.objects.filter(tenant_id=tenant_id, pk=schedule_id.value).exists()

    @_unavailable_on_database_error(SPEAKER)
    def missing_speaker_ids(
        self, tenant_id: str, speaker_ids: tuple[EntityId, ...]
    ) -> tuple[EntityId, ...]:
        found = set(
            orm.Speaker.objects.filter(
                tenant_id=tenant_id, pk__in=[speaker_id.value for speaker_id in speaker_ids]
            ).values_list("pk", flat=True)
        )
        return tuple(speaker_id for speaker_id in speaker_ids if speaker_id.value not in found)

    @_unavailable_on_database_error(EVENT_SCHEDULE)
    @transaction.atomic
    def create_schedule(self, tenant_id: str, draft: ScheduleDraft) -> EventSchedule:
        row = orm.EventSchedule.objects.create(
            tenant_id=tenant_id,
            event_id=draft.event_id.value,
            title=draft.title,
            description=draft.description,
            session_type=draft.session_type.value,
            start_time=draft.start_time,
            end_time=draft.end_time,
            location=draft.location,
        )
        orm.ScheduleSpeaker.objects.bulk_create(
            orm.ScheduleSpeaker(schedule=row, speaker_id=speaker_id.value, position=position)
            for position, speaker_id in enumerate(draft.speaker_ids)
        )
        logger.debug("Created schedule %s for tenant %s", row.pk, tenant_id)
        return EventSchedule(
            id=EntityId(row.pk),
            tenant_id=row.tenant_id,
            event_id=row.event_id,
            title=row.title,
            session_type=draft.session_type,
            start_time=row.start_time,
            end_time=row.end_time,
            description=row.description,
            location=row.location,
            speaker_ids=draft.speaker_ids,
        )

    @_unavailable_on_database_error(EVENT_SCHEDULE)
    @transaction.atomic
    def append_schedule_speaker(
        self, tenant_id: str, schedule_id: EntityId, speaker_id: EntityId
    ) -> bool:
        try:
            schedule = orm.EventSchedule.objects.select_for_update().get(
                tenant_id=tenant_id, pk=schedule_id.value
            )
        except orm.EventSchedule.DoesNotExist:
            raise ScheduleNotFoundError(schedule_id.value) from None
        links = schedule.speaker_links.all()
        if links.filter(speaker_id=speaker_id.value).exists():
            return False
        last = links.order_by("-position").values_list("position", flat=True).first()
        orm.ScheduleSpeaker.objects.create(
            schedule=schedule,
            speaker_id=speaker_id.value,
            position=0 if last is None else last + 1,
        )
        return True
