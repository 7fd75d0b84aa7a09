"""Service factories wired to the configured stores."""

from tenant_events import conf
from tenant_events.query.engine import QueryEngine
from tenant_events.services.event_service import EventService
from tenant_events.services.schedule_service import ScheduleService
from tenant_events.services.speaker_service import SpeakerService


def event_service() -> EventService:
    return EventService(QueryEngine(conf.query_store()))


def schedule_service() -> ScheduleService:
    return ScheduleService(QueryEngine(conf.query_store()), conf.event_store())


def speaker_service() -> SpeakerService:
    return SpeakerService(QueryEngine(conf.query_store()))


__all__ = [
    "EventService",
    "ScheduleService",
    "SpeakerService",
    "event_service",
    "schedule_service",
    "speaker_service",
]
