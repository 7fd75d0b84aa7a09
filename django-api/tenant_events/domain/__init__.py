from tenant_events.domain.models import (
    Event,
    EventSchedule,
    Location,
    Page,
    ScheduleDraft,
    Speaker,
)
from tenant_events.domain.value_objects import EntityId, PageRequest, TenantContext

__all__ = [
    "Event",
    "EventSchedule",
    "Location",
    "Page",
    "ScheduleDraft",
    "Speaker",
    "EntityId",
    "PageRequest",
    "TenantContext",
]
