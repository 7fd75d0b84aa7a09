"""One generic engine, parameterized per entity by an ``EntityQuerySpec``."""

import logging
from typing import Any

from tenant_events.domain.errors import StoreUnavailableError
from tenant_events.domain.models import Page
from tenant_events.domain.value_objects import TenantContext
from tenant_events.query.compiler import PipelineCompiler
from tenant_events.query.executor import PaginatedExecutor
from tenant_events.query.filters import FilterNormalizer
from tenant_events.query.specs import EntityQuerySpec
from tenant_events.stores.interfaces import QueryStore

logger = logging.getLogger(__name__)


class QueryEngine:
    def __init__(
        self,
        store: QueryStore,
        compiler: PipelineCompiler | None = None,
        normalizer: FilterNormalizer | None = None,
    ) -> None:
        self._store = store
        self._compiler = compiler or PipelineCompiler()
        self._normalizer = normalizer or FilterNormalizer()
        self._executor = PaginatedExecutor(store)

    async def list(self, spec: EntityQuerySpec, context: TenantContext, filters: Any) -> Page:
        """List one page of ``spec.entity`` rows visible to ``context``."""
        normalized = self._normalizer.normalize(filters)
        plan = self._compiler.compile(spec, context, normalized)
        logger.debug("Compiled %s plan with filters %s", spec.entity, plan.filter_shape())
        return await self._executor.execute(plan, normalized.page)

    async def get(self, spec: EntityQuerySpec, context: TenantContext, entity_id: str) -> Any | None:
        """Fetch one fully enriched row by id, or None when not visible."""
        plan = self._compiler.compile_lookup(spec, context, entity_id)
        try:
            items = await self._store.fetch(plan)
        except StoreUnavailableError:
            logger.error(
                "Store lookup failed for %s (tenant=%s, filters=%s)",
                plan.entity,
                plan.tenant,
                plan.filter_shape(),
                exc_info=True,
            )
            raise
        return items[0] if items else None
