"""Fixed join graph per entity type.

Every join is tenant-scoped: a joined row must carry the same ``tenant_id``
as the primary row. Joins behave as left outer joins, so a primary row with
no matching rows stays in the result with empty enrichment.
"""

from dataclasses import dataclass
from enum import Enum

from tenant_events.query.specs import EVENT, EVENT_SCHEDULE, ID_FIELD, SPEAKER


class Cardinality(Enum):
    ONE = "one"
    MANY = "many"


@dataclass(frozen=True)
class Join:
    """Embed rows of ``target`` under ``name``.

    Rows match when a value of ``local_field`` on the primary row equals a
    value of ``foreign_field`` on the target row. With ``coerce_local`` the
    local value goes through identifier coercion first and the coerced key is
    kept in the transient ``helper_field``.
    """

    name: str
    target: str
    local_field: str
    foreign_field: str
    cardinality: Cardinality
    coerce_local: bool = False
    helper_field: str | None = None


SCHEDULE_SPEAKERS = Join(
    name="speakers",
    target=SPEAKER,
    local_field="speaker_ids",
    foreign_field=ID_FIELD,
    cardinality=Cardinality.MANY,
)

SCHEDULE_EVENT = Join(
    name="event",
    target=EVENT,
    local_field="event_id",
    foreign_field=ID_FIELD,
    cardinality=Cardinality.ONE,
    coerce_local=True,
    helper_field="event_key",
)

SPEAKER_SCHEDULES = Join(
    name="schedules",
    target=EVENT_SCHEDULE,
    local_field=ID_FIELD,
    foreign_field="speaker_ids",
    cardinality=Cardinality.MANY,
)

JOIN_GRAPH: dict[str, tuple[Join, ...]] = {
    EVENT: (),
    EVENT_SCHEDULE: (SCHEDULE_SPEAKERS, SCHEDULE_EVENT),
    SPEAKER: (SPEAKER_SCHEDULES,),
}


class JoinResolver:
    """Looks up the joins declared for an entity type."""

    def __init__(self, graph: dict[str, tuple[Join, ...]] | None = None) -> None:
        self._graph = JOIN_GRAPH if graph is None else graph

    def resolve(self, entity: str) -> tuple[Join, ...]:
        try:
            return self._graph[entity]
        except KeyError:
            raise ValueError(f"No join graph declared for entity {entity!r}") from None

    def join_for_path(self, entity: str, path: str) -> Join | None:
        """Return the join a field path reads from, or None for own fields."""
        root = path.split(".", 1)[0]
        for join in self.resolve(entity):
            if join.name == root:
                return join
        return None
