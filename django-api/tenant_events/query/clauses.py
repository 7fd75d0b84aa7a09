"""Typed predicate clauses.

A clause names a field path (``title``, ``speakers.name``), a comparator and
a primitive operand. Paths whose first segment is a join name are evaluated
after that join; a path that resolves to several values (embedded lists,
one-to-many joins) matches when any of its values does.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any


class Comparator(Enum):
    EQUALS = "equals"
    RANGE = "range"
    REGEX_ICASE = "regex-icase"
    IN_SET = "in-set"
    SAME_IDENTIFIER = "same-identifier"


@dataclass(frozen=True)
class Bounds:
    """Inclusive range; a missing side is unbounded."""

    lower: Any = None
    upper: Any = None

    def contains(self, value: Any) -> bool:
        if value is None:
            return False
        if self.lower is not None and value < self.lower:
            return False
        if self.upper is not None and value > self.upper:
            return False
        return True


@dataclass(frozen=True)
class Clause:
    field: str
    comparator: Comparator
    operand: Any

    @property
    def fields(self) -> tuple[str, ...]:
        return (self.field,)


@dataclass(frozen=True)
class AnyOf:
    """Disjunction of clauses."""

    clauses: tuple[Clause, ...]

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(clause.field for clause in self.clauses)


Predicate = Clause | AnyOf


@dataclass(frozen=True)
class SortKey:
    field: str
    descending: bool = False


def equals(field: str, value: Any) -> Clause:
    return Clause(field, Comparator.EQUALS, value)


def at_least(field: str, value: Any) -> Clause:
    return Clause(field, Comparator.RANGE, Bounds(lower=value))


def at_most(field: str, value: Any) -> Clause:
    return Clause(field, Comparator.RANGE, Bounds(upper=value))


def contains_text(field: str, text: str) -> Clause:
    """Case-insensitive substring match; ``text`` is matched literally."""
    return Clause(field, Comparator.REGEX_ICASE, re.escape(text))


def one_of(field: str, values: tuple[Any, ...]) -> Clause:
    return Clause(field, Comparator.IN_SET, tuple(values))


def same_identifier(field: str, value: str) -> Clause:
    """Match stored free-text references whose coerced identifier is ``value``."""
    return Clause(field, Comparator.SAME_IDENTIFIER, value)
