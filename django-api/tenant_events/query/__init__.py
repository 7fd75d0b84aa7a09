from tenant_events.query.compiler import PipelineCompiler, QueryPlan, Window
from tenant_events.query.engine import QueryEngine
from tenant_events.query.executor import PaginatedExecutor, total_pages
from tenant_events.query.filters import (
    EventFilter,
    EventSpeakersFilter,
    FilterNormalizer,
    NormalizedFilter,
    ScheduleFilter,
    SpeakerFilter,
)
from tenant_events.query.specs import EVENT_SCHEDULE_SPEC, EVENT_SPEC, SPEAKER_SPEC

__all__ = [
    "PipelineCompiler",
    "QueryPlan",
    "Window",
    "QueryEngine",
    "PaginatedExecutor",
    "total_pages",
    "EventFilter",
    "EventSpeakersFilter",
    "FilterNormalizer",
    "NormalizedFilter",
    "ScheduleFilter",
    "SpeakerFilter",
    "EVENT_SCHEDULE_SPEC",
    "EVENT_SPEC",
    "SPEAKER_SPEC",
]
