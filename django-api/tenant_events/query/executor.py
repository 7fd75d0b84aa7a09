"""Concurrent count + data execution of a compiled plan."""

import asyncio
import logging
import math

from tenant_events.domain.errors import StoreUnavailableError
from tenant_events.domain.models import Page
from tenant_events.domain.value_objects import PageRequest
from tenant_events.query.compiler import QueryPlan
from tenant_events.stores.interfaces import QueryStore

logger = logging.getLogger(__name__)


def total_pages(total: int, limit: int) -> int:
    """Number of pages for ``total`` rows; an empty result still has one page."""
    return max(1, math.ceil(total / limit))


class PaginatedExecutor:
    """Runs the count variant and the data variant of a plan jointly.

    Either variant failing fails the whole call. Count and data are not
    read in one snapshot, so a write landing in between can skew them.
    """

    def __init__(self, store: QueryStore) -> None:
        self._store = store

    async def execute(self, plan: QueryPlan, page: PageRequest) -> Page:
        try:
            total, items = await asyncio.gather(
                self._store.count(plan.count_variant()),
                self._store.fetch(plan.paged(page)),
            )
        except StoreUnavailableError:
            logger.error(
                "Store query failed for %s (tenant=%s, filters=%s)",
                plan.entity,
                plan.tenant,
                plan.filter_shape(),
                exc_info=True,
            )
            raise
        return Page(
            items=tuple(items),
            total=total,
            page=page.page,
            limit=page.limit,
            total_pages=total_pages(total, page.limit),
        )
