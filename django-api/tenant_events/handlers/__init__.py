from tenant_events.handlers.views import (
    EventDetailView,
    EventListView,
    EventSpeakersView,
    ScheduleAddSpeakerView,
    ScheduleDetailView,
    ScheduleListView,
    SpeakerDetailView,
    SpeakerListView,
    SpeakerScheduleListView,
)

__all__ = [
    "EventDetailView",
    "EventListView",
    "EventSpeakersView",
    "ScheduleAddSpeakerView",
    "ScheduleDetailView",
    "ScheduleListView",
    "SpeakerDetailView",
    "SpeakerListView",
    "SpeakerScheduleListView",
]
