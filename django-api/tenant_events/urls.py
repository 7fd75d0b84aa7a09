from django.urls import path

from tenant_events.handlers import (
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

urlpatterns = [
    path("events", EventListView.as_view(), name="event-list"),
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path("event-schedules", ScheduleListView.as_view(), name="schedule-list"),
    path(
        "event-schedules/add-speaker",
        ScheduleAddSpeakerView.as_view(),
        name="schedule-add-speaker",
    ),
    path(
        "event-schedules/<str:event_id>/speakers",
        EventSpeakersView.as_view(),
        name="event-speaker-list",
    ),
    path(
        "event-schedules/<str:schedule_id>",
        ScheduleDetailView.as_view(),
        name="schedule-detail",
    ),
    path("speakers", SpeakerListView.as_view(), name="speaker-list"),
    path("speakers/<str:speaker_id>", SpeakerDetailView.as_view(), name="speaker-detail"),
    path(
        "speakers/<str:speaker_id>/schedules",
        SpeakerScheduleListView.as_view(),
        name="speaker-schedule-list",
    ),
]
