"""In-process stores over plain documents.

``MemoryQueryStore`` evaluates a compiled plan stage by stage, the way a
document database aggregation pipeline would. Collections are lists of
dicts keyed by entity type; they are shared with ``MemoryEventStore`` so
writes are visible to subsequent reads.
"""

import copy
import re
from collections.abc import Iterable
from typing import Any

from tenant_events.domain import EntityId, EventSchedule, ScheduleDraft
from tenant_events.domain.errors import ScheduleNotFoundError
from tenant_events.query.clauses import AnyOf, Clause, Comparator, Predicate
from tenant_events.query.coercion import join_key
from tenant_events.query.compiler import QueryPlan
from tenant_events.query.joins import Cardinality, Join
from tenant_events.query.specs import EVENT, EVENT_SCHEDULE, ID_FIELD, SPEAKER, TENANT_FIELD
from tenant_events.stores.documents import schedule_from_document, to_domain
from tenant_events.stores.interfaces import EventStore, QueryStore

Collections = dict[str, list[dict[str, Any]]]


def empty_collections() -> Collections:
    return {EVENT: [], EVENT_SCHEDULE: [], SPEAKER: []}


def values_at(doc: Any, path: str) -> list[Any]:
    """All leaf values at a dotted path; lists are flattened at every level."""
    current = [doc]
    for part in path.split("."):
        found = []
        for node in current:
            if not isinstance(node, dict):
                continue
            value = node.get(part)
            if isinstance(value, (list, tuple)):
                found.extend(value)
            elif value is not None:
                found.append(value)
        current = found
    return current


def _clause_matches(clause: Clause, doc: dict[str, Any]) -> bool:
    values = values_at(doc, clause.field)
    if clause.comparator is Comparator.EQUALS:
        return any(value == clause.operand for value in values)
    if clause.comparator is Comparator.RANGE:
        return any(clause.operand.contains(value) for value in values)
    if clause.comparator is Comparator.REGEX_ICASE:
        pattern = re.compile(clause.operand, re.IGNORECASE)
        return any(isinstance(value, str) and pattern.search(value) for value in values)
    if clause.comparator is Comparator.IN_SET:
        return any(value in clause.operand for value in values)
    if clause.comparator is Comparator.SAME_IDENTIFIER:
        key = join_key(clause.operand)
        return key is not None and any(join_key(value) == key for value in values)
    raise ValueError(f"Unsupported comparator: {clause.comparator}")


def matches(predicate: Predicate, doc: dict[str, Any]) -> bool:
    if isinstance(predicate, AnyOf):
        return any(_clause_matches(clause, doc) for clause in predicate.clauses)
    return _clause_matches(predicate, doc)


def _sort_value(value: Any) -> tuple[bool, Any]:
    # Missing values sort first, as in document stores.
    return (value is not None, value)


class MemoryQueryStore(QueryStore):
    def __init__(self, collections: Collections | None = None) -> None:
        self.collections = empty_collections() if collections is None else collections

    async def count(self, plan: QueryPlan) -> int:
        return len(self._filtered(plan))

    async def fetch(self, plan: QueryPlan) -> list[Any]:
        docs = self._filtered(plan)
        if plan.projection is not None:
            for doc in docs:
                for name, path in plan.projection.computed:
                    found = values_at(doc, path)
                    doc[name] = found[0] if found else None
                for name in plan.projection.hidden:
                    doc.pop(name, None)
        for key in reversed(plan.sort):
            docs.sort(
                key=lambda doc: _sort_value(doc.get(key.field)),
                reverse=key.descending,
            )
        if plan.window is not None:
            docs = docs[plan.window.offset : plan.window.offset + plan.window.limit]
        return [to_domain(plan.entity, doc) for doc in docs]

    def _filtered(self, plan: QueryPlan) -> list[dict[str, Any]]:
        docs = [
            copy.deepcopy(doc)
            for doc in self.collections[plan.entity]
            if all(matches(predicate, doc) for predicate in plan.match)
        ]
        for join in plan.joins:
            for doc in docs:
                self._join(doc, join)
        return [doc for doc in docs if all(matches(predicate, doc) for predicate in plan.post_join)]

    def _join(self, doc: dict[str, Any], join: Join) -> None:
        local = values_at(doc, join.local_field)
        if join.coerce_local:
            keys = [key for key in (join_key(value) for value in local) if key is not None]
            doc[join.helper_field] = keys[0] if keys else None
        else:
            keys = local
        position = {key: index for index, key in reversed(list(enumerate(keys)))}

        joined = []
        for target in self.collections[join.target]:
            if target.get(TENANT_FIELD) != doc.get(TENANT_FIELD):
                continue
            hits = [position[value] for value in values_at(target, join.foreign_field) if value in position]
            if hits:
                joined.append((min(hits), copy.deepcopy(target)))
        joined.sort(key=lambda pair: pair[0])
        rows = [row for _, row in joined]

        if join.cardinality is Cardinality.ONE:
            doc[join.name] = rows[0] if rows else None
        else:
            doc[join.name] = rows


class MemoryEventStore(EventStore):
    def __init__(self, collections: Collections | None = None) -> None:
        self.collections = empty_collections() if collections is None else collections

    def _find(self, entity: str, tenant_id: str, entity_id: str) -> dict[str, Any] | None:
        for doc in self.collections[entity]:
            if doc[TENANT_FIELD] == tenant_id and doc[ID_FIELD] == entity_id:
                return doc
        return None

    def event_exists(self, tenant_id: str, event_id: EntityId) -> bool:
        return self._find(EVENT, tenant_id, event_id.value) is not None

    def schedule_exists(self, tenant_id: str, schedule_id: EntityId) -> bool:
        return self._find(EVENT_SCHEDULE, tenant_id, schedule_id.value) is not None

    def missing_speaker_ids(
        self, tenant_id: str, speaker_ids: Iterable[EntityId]
    ) -> tuple[EntityId, ...]:
        return tuple(
            speaker_id
            for speaker_id in speaker_ids
            if self._find(SPEAKER, tenant_id, speaker_id.value) is None
        )

    def create_schedule(self, tenant_id: str, draft: ScheduleDraft) -> EventSchedule:
        doc = {
            ID_FIELD: EntityId.generate().value,
            TENANT_FIELD: tenant_id,
            "event_id": draft.event_id.value,
            "title": draft.title,
            "description": draft.description,
            "session_type": draft.session_type.value,
            "start_time": draft.start_time,
            "end_time": draft.end_time,
            "location": draft.location,
            "speaker_ids": [speaker_id.value for speaker_id in draft.speaker_ids],
        }
        self.collections[EVENT_SCHEDULE].append(doc)
        return schedule_from_document(doc)

    def append_schedule_speaker(
        self, tenant_id: str, schedule_id: EntityId, speaker_id: EntityId
    ) -> bool:
        doc = self._find(EVENT_SCHEDULE, tenant_id, schedule_id.value)
        if doc is None:
            raise ScheduleNotFoundError(schedule_id.value)
        speaker_ids = doc.setdefault("speaker_ids", [])
        if speaker_id.value in speaker_ids:
            return False
        speaker_ids.append(speaker_id.value)
        return True
