"""Event service - all business logic lives here.

Services:
- Depend only on interfaces (stores, the query engine)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging

from tenant_events.domain import Event, Page, TenantContext
from tenant_events.domain.errors import EventNotFoundError
from tenant_events.query.engine import QueryEngine
from tenant_events.query.filters import EventFilter, filter_fields, parse_identifier
from tenant_events.query.specs import EVENT_SPEC

logger = logging.getLogger(__name__)


class EventService:
    """Service for event catalog operations."""

    def __init__(self, engine: QueryEngine) -> None:
        self._engine = engine

    async def list_events(self, context: TenantContext, filters: EventFilter) -> Page[Event]:
        """Return one page of the tenant's events."""
        logger.info(
            "Listing events for tenant %s (filters=%s)", context.tenant_id, filter_fields(filters)
        )
        page = await self._engine.list(EVENT_SPEC, context, filters)
        logger.debug("Listed %d of %d events", len(page.items), page.total)
        return page

    async def get_event(self, context: TenantContext, event_id: str) -> Event:
        """Return an event by ID.

        Raises:
            InvalidInputError: If the event_id is not a structured identifier.
            EventNotFoundError: If the event does not exist for the tenant.
        """
        event_id = parse_identifier("eventId", event_id)
        event = await self._engine.get(EVENT_SPEC, context, event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event
