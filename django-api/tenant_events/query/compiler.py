"""Assembly of immutable query plans.

A plan is evaluated in a fixed order:

1. ``match``      tenant clause first, then clauses on the entity's own fields
2. ``joins``      the entity's declared join graph
3. ``post_join``  clauses that read joined data (search, parent filters)
4. ``projection`` transient join scaffolding dropped, derived fields added
5. ``sort``       stable, always ending on the id
6. ``window``     skip/limit, data variant only
"""

import dataclasses
from dataclasses import dataclass

from tenant_events.domain.value_objects import PageRequest, TenantContext
from tenant_events.query.clauses import Clause, Comparator, Predicate, SortKey, equals
from tenant_events.query.filters import NormalizedFilter
from tenant_events.query.joins import Join, JoinResolver
from tenant_events.query.search import SearchClauseBuilder
from tenant_events.query.specs import (
    ID_FIELD,
    SPECS,
    TENANT_FIELD,
    EntityQuerySpec,
    Projection,
)
from tenant_events.query.tenancy import TenantClauseInjector


@dataclass(frozen=True)
class Window:
    offset: int
    limit: int


@dataclass(frozen=True)
class QueryPlan:
    entity: str
    match: tuple[Predicate, ...]
    joins: tuple[Join, ...] = ()
    post_join: tuple[Predicate, ...] = ()
    projection: Projection | None = None
    sort: tuple[SortKey, ...] = ()
    window: Window | None = None

    def count_variant(self) -> "QueryPlan":
        """Same rows as the data variant, without shaping or pagination."""
        return dataclasses.replace(self, projection=None, sort=(), window=None)

    def paged(self, page: PageRequest) -> "QueryPlan":
        return dataclasses.replace(self, window=Window(offset=page.offset, limit=page.limit))

    @property
    def tenant_clause(self) -> Clause:
        clause = self.match[0]
        if not isinstance(clause, Clause) or clause.field != TENANT_FIELD:
            raise ValueError(f"Plan for {self.entity!r} does not start with the tenant clause")
        return clause

    @property
    def tenant(self) -> str | None:
        clause = self.tenant_clause
        return clause.operand if clause.comparator is Comparator.EQUALS else None

    def filter_shape(self) -> list[str]:
        """Names of the filtered fields, for logs. Never includes values."""
        fields = {
            field
            for predicate in (*self.match[1:], *self.post_join)
            for field in predicate.fields
        }
        return sorted(fields)


class PipelineCompiler:
    """Builds one ``QueryPlan`` from a spec, a tenant and normalized filters."""

    def __init__(
        self,
        joins: JoinResolver | None = None,
        search: SearchClauseBuilder | None = None,
        tenancy: TenantClauseInjector | None = None,
    ) -> None:
        self._joins = joins or JoinResolver()
        self._search = search or SearchClauseBuilder()
        self._tenancy = tenancy or TenantClauseInjector()

    def compile(
        self,
        spec: EntityQuerySpec,
        context: TenantContext,
        filters: NormalizedFilter,
    ) -> QueryPlan:
        caller = (
            *filters.clauses,
            *self._search.apply(spec, filters.search, filters.text_clauses),
        )
        for predicate in caller:
            self._check_fields(spec, predicate)

        match: list[Predicate] = []
        post_join: list[Predicate] = []
        for predicate in caller:
            if self._reads_joined_data(spec, predicate):
                post_join.append(predicate)
            else:
                match.append(predicate)

        return QueryPlan(
            entity=spec.entity,
            match=self._tenancy.inject(context, filters.tenant_id, tuple(match)),
            joins=self._joins.resolve(spec.entity),
            post_join=tuple(post_join),
            projection=spec.projection,
            sort=spec.default_sort,
        )

    def compile_lookup(
        self, spec: EntityQuerySpec, context: TenantContext, entity_id: str
    ) -> QueryPlan:
        """Plan for a single-entity fetch by id, with full enrichment."""
        filters = NormalizedFilter(clauses=(equals(ID_FIELD, entity_id),), page=PageRequest())
        return self.compile(spec, context, filters).paged(PageRequest(page=1, limit=1))

    def _reads_joined_data(self, spec: EntityQuerySpec, predicate: Predicate) -> bool:
        return any(
            self._joins.join_for_path(spec.entity, field) is not None
            for field in predicate.fields
        )

    def _check_fields(self, spec: EntityQuerySpec, predicate: Predicate) -> None:
        for field in predicate.fields:
            if field == TENANT_FIELD:
                raise ValueError("Tenant scoping is injected, not filtered on")
            join = self._joins.join_for_path(spec.entity, field)
            if join is None:
                known = field in spec.fields
            else:
                _, _, joined_field = field.partition(".")
                known = joined_field in SPECS[join.target].fields
            if not known:
                raise ValueError(f"Unknown field {field!r} for entity {spec.entity!r}")
