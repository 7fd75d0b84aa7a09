import dataclasses
import logging

from tenant_events.domain import EventSchedule, Page, Speaker, TenantContext
from tenant_events.domain.errors import SpeakerNotFoundError
from tenant_events.query.engine import QueryEngine
from tenant_events.query.filters import (
    EventSpeakersFilter,
    ScheduleFilter,
    SpeakerFilter,
    filter_fields,
    parse_identifier,
)
from tenant_events.query.specs import EVENT_SCHEDULE_SPEC, SPEAKER_SPEC

logger = logging.getLogger(__name__)


class SpeakerService:
    """Speaker listings, including speakers reached through schedules."""

    def __init__(self, engine: QueryEngine) -> None:
        self._engine = engine

    async def list_speakers(self, context: TenantContext, filters: SpeakerFilter) -> Page[Speaker]:
        logger.info(
            "Listing speakers for tenant %s (filters=%s)", context.tenant_id, filter_fields(filters)
        )
        return await self._engine.list(SPEAKER_SPEC, context, filters)

    async def get_speaker(self, context: TenantContext, speaker_id: str) -> Speaker:
        speaker_id = parse_identifier("speakerId", speaker_id)
        speaker = await self._engine.get(SPEAKER_SPEC, context, speaker_id)
        if speaker is None:
            raise SpeakerNotFoundError(speaker_id)
        return speaker

    async def list_event_speakers(
        self, context: TenantContext, filters: EventSpeakersFilter
    ) -> Page[Speaker]:
        """Speakers attached to at least one schedule of the event.

        An event with no schedules, or one the tenant cannot see, yields an
        empty page.
        """
        logger.info(
            "Listing speakers of event %s for tenant %s (filters=%s)",
            filters.event_id,
            context.tenant_id,
            filter_fields(filters),
        )
        return await self._engine.list(SPEAKER_SPEC, context, filters)

    async def list_speaker_schedules(
        self, context: TenantContext, speaker_id: str, filters: ScheduleFilter
    ) -> Page[EventSchedule]:
        """Schedules the speaker is attached to.

        Raises:
            InvalidInputError: If the speaker_id is not a structured identifier.
            SpeakerNotFoundError: If the speaker does not exist for the tenant.
        """
        speaker = await self.get_speaker(context, speaker_id)
        filters = dataclasses.replace(filters, speaker_id=speaker.id.value)
        logger.info(
            "Listing schedules of speaker %s for tenant %s", speaker.id, context.tenant_id
        )
        return await self._engine.list(EVENT_SCHEDULE_SPEC, context, filters)
