"""Free-text search across an entity and its first-level joins."""

from tenant_events.query.clauses import AnyOf, Predicate, contains_text
from tenant_events.query.specs import EntityQuerySpec


class SearchClauseBuilder:
    """Builds one OR-set of case-insensitive substring clauses.

    Search takes precedence over the entity's field-specific text filters:
    when a term is present those filters are dropped, never combined.
    """

    def build(self, spec: EntityQuerySpec, term: str | None) -> AnyOf | None:
        term = (term or "").strip()
        if not term:
            return None
        return AnyOf(tuple(contains_text(field, term) for field in spec.search_fields))

    def apply(
        self,
        spec: EntityQuerySpec,
        term: str | None,
        text_clauses: tuple[Predicate, ...],
    ) -> tuple[Predicate, ...]:
        search = self.build(spec, term)
        if search is None:
            return text_clauses
        return (search,)
