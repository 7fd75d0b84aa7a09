"""Mandatory tenant scoping for every plan."""

import logging

from tenant_events.domain.value_objects import TenantContext
from tenant_events.query.clauses import Clause, Predicate, equals, one_of
from tenant_events.query.specs import TENANT_FIELD

logger = logging.getLogger(__name__)


class TenantClauseInjector:
    """Prepends the tenant clause ahead of every caller-supplied clause.

    The tenant always comes from the authenticated context. A tenant value
    carried by the filter itself is only checked against it: on mismatch the
    tenant clause becomes an empty set membership, which matches no row.
    """

    def tenant_clause(self, context: TenantContext, requested_tenant: str | None) -> Clause:
        if requested_tenant is not None and requested_tenant != context.tenant_id:
            logger.warning(
                "Tenant filter does not match authenticated tenant %s; returning no rows",
                context.tenant_id,
            )
            return one_of(TENANT_FIELD, ())
        return equals(TENANT_FIELD, context.tenant_id)

    def inject(
        self,
        context: TenantContext,
        requested_tenant: str | None,
        clauses: tuple[Predicate, ...],
    ) -> tuple[Predicate, ...]:
        return (self.tenant_clause(context, requested_tenant), *clauses)
