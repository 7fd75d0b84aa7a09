"""Per-entity query declarations consumed by the shared compiler.

Each ``EntityQuerySpec`` whitelists the fields a plan may reference, the
fields free-text search spans, what the final shape hides or derives, and
the default sort.
"""

from dataclasses import dataclass

from tenant_events.query.clauses import SortKey

EVENT = "event"
EVENT_SCHEDULE = "event_schedule"
SPEAKER = "speaker"

TENANT_FIELD = "tenant_id"
ID_FIELD = "id"


@dataclass(frozen=True)
class Projection:
    """Final-shape rules: fields dropped and fields derived from joined data."""

    hidden: tuple[str, ...] = ()
    computed: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class EntityQuerySpec:
    entity: str
    fields: frozenset[str]
    search_fields: tuple[str, ...]
    default_sort: tuple[SortKey, ...]
    projection: Projection = Projection()


EVENT_SPEC = EntityQuerySpec(
    entity=EVENT,
    fields=frozenset(
        {
            ID_FIELD,
            TENANT_FIELD,
            "title",
            "description",
            "type",
            "format",
            "status",
            "start_date",
            "end_date",
            "locations.name",
            "locations.address",
            "number_of_participants",
            "currency",
            "is_public",
            "created_by",
            "updated_by",
        }
    ),
    search_fields=("title", "description", "locations.name", "locations.address"),
    default_sort=(SortKey("start_date"), SortKey(ID_FIELD)),
)

EVENT_SCHEDULE_SPEC = EntityQuerySpec(
    entity=EVENT_SCHEDULE,
    fields=frozenset(
        {
            ID_FIELD,
            TENANT_FIELD,
            "event_id",
            "title",
            "description",
            "session_type",
            "start_time",
            "end_time",
            "location",
            "speaker_ids",
        }
    ),
    search_fields=(
        "title",
        "location",
        "speakers.name",
        "speakers.bio",
        "event.title",
        "event.description",
    ),
    default_sort=(SortKey("start_time"), SortKey(ID_FIELD)),
    projection=Projection(
        hidden=("event", "event_key"),
        computed=(("event_title", "event.title"),),
    ),
)

SPEAKER_SPEC = EntityQuerySpec(
    entity=SPEAKER,
    fields=frozenset(
        {
            ID_FIELD,
            TENANT_FIELD,
            "name",
            "bio",
            "company",
            "email",
            "linkedin_url",
            "speaker_type",
        }
    ),
    search_fields=("name", "company"),
    default_sort=(SortKey("name"), SortKey(ID_FIELD)),
    projection=Projection(hidden=("schedules",)),
)

SPECS = {spec.entity: spec for spec in (EVENT_SPEC, EVENT_SCHEDULE_SPEC, SPEAKER_SPEC)}
