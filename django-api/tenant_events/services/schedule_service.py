"""Event schedule listings and write operations."""

import logging

from asgiref.sync import sync_to_async

from tenant_events.domain import EntityId, EventSchedule, Page, ScheduleDraft, TenantContext
from tenant_events.domain.errors import (
    InvalidInputError,
    ScheduleNotFoundError,
    SpeakerNotFoundError,
)
from tenant_events.query.engine import QueryEngine
from tenant_events.query.filters import ScheduleFilter, filter_fields, parse_identifier
from tenant_events.query.specs import EVENT_SCHEDULE_SPEC
from tenant_events.stores.interfaces import EventStore

logger = logging.getLogger(__name__)


class ScheduleService:
    def __init__(self, engine: QueryEngine, store: EventStore) -> None:
        self._engine = engine
        self._store = store

    async def list_schedules(
        self, context: TenantContext, filters: ScheduleFilter
    ) -> Page[EventSchedule]:
        """Return one page of the tenant's schedules with speakers and event title.

        Schedules whose ``event_id`` does not resolve are still listed, with
        no event title.
        """
        logger.info(
            "Listing event schedules for tenant %s (filters=%s)",
            context.tenant_id,
            filter_fields(filters),
        )
        page = await self._engine.list(EVENT_SCHEDULE_SPEC, context, filters)
        logger.debug("Listed %d of %d event schedules", len(page.items), page.total)
        return page

    async def get_schedule(self, context: TenantContext, schedule_id: str) -> EventSchedule:
        """Return a schedule by ID.

        Raises:
            InvalidInputError: If the schedule_id is not a structured identifier.
            ScheduleNotFoundError: If the schedule does not exist for the tenant.
        """
        schedule_id = parse_identifier("scheduleId", schedule_id)
        schedule = await self._engine.get(EVENT_SCHEDULE_SPEC, context, schedule_id)
        if schedule is None:
            raise ScheduleNotFoundError(schedule_id)
        return schedule

    async def create_schedule(self, context: TenantContext, draft: ScheduleDraft) -> EventSchedule:
        """Create a schedule under an existing event of the tenant.

        The parent event and every speaker must exist in the caller's tenant;
        otherwise nothing is written.
        """
        tenant_id = context.tenant_id
        if not await sync_to_async(self._store.event_exists)(tenant_id, draft.event_id):
            raise InvalidInputError("eventId", "eventId does not reference an existing event")
        missing = await sync_to_async(self._store.missing_speaker_ids)(tenant_id, draft.speaker_ids)
        if missing:
            raise InvalidInputError(
                "speakerIds",
                "Unknown speaker ids: " + ", ".join(str(speaker_id) for speaker_id in missing),
            )
        created = await sync_to_async(self._store.create_schedule)(tenant_id, draft)
        logger.info("Created event schedule %s for tenant %s", created.id, tenant_id)
        return await self.get_schedule(context, created.id.value)

    async def add_speaker(
        self, context: TenantContext, schedule_id: str, speaker_id: str
    ) -> EventSchedule:
        """Attach a speaker to a schedule. Attaching twice changes nothing."""
        schedule_key = EntityId(parse_identifier("scheduleId", schedule_id))
        speaker_key = EntityId(parse_identifier("speakerId", speaker_id))
        tenant_id = context.tenant_id

        if not await sync_to_async(self._store.schedule_exists)(tenant_id, schedule_key):
            raise ScheduleNotFoundError(schedule_key.value)
        if await sync_to_async(self._store.missing_speaker_ids)(tenant_id, (speaker_key,)):
            raise SpeakerNotFoundError(speaker_key.value)

        added = await sync_to_async(self._store.append_schedule_speaker)(
            tenant_id, schedule_key, speaker_key
        )
        if added:
            logger.info("Added speaker %s to schedule %s", speaker_key, schedule_key)
        else:
            logger.warning("Speaker %s already attached to schedule %s", speaker_key, schedule_key)
        return await self.get_schedule(context, schedule_key.value)
