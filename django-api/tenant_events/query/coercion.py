"""Coercion of loosely typed foreign keys into structured identifiers.

``EventSchedule.event_id`` is stored as free text. Values shaped like a
structured identifier join to the parent event; anything else is kept as
raw text and joins to nothing.
"""

from dataclasses import dataclass

from tenant_events.domain.value_objects import EntityId

# Same shape as EntityId, written for database regex engines.
IDENTIFIER_REGEX = r"^[0-9a-fA-F]{24}$"


@dataclass(frozen=True)
class Coerced:
    value: EntityId


@dataclass(frozen=True)
class Raw:
    """A stored value that is not coercible to a structured identifier."""

    value: str


def coerce_identifier(value: object) -> Coerced | Raw:
    """Never raises: malformed or missing values come back as ``Raw``."""
    if isinstance(value, EntityId):
        return Coerced(value)
    if EntityId.is_valid(value):
        return Coerced(EntityId(value))
    if value is None:
        return Raw("")
    return Raw(value if isinstance(value, str) else repr(value))


def join_key(value: object) -> str | None:
    """Comparable key for joins, or None when the value is not coercible."""
    coerced = coerce_identifier(value)
    if isinstance(coerced, Coerced):
        return coerced.value.value
    return None
