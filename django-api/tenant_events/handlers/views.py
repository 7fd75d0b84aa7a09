"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

import logging

from asgiref.sync import async_to_sync
from rest_framework import serializers, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from tenant_events import services
from tenant_events.domain import TenantContext
from tenant_events.domain.errors import DomainError, ErrorCode, InvalidInputError
from tenant_events.handlers.authentication import TenantHeaderAuthentication
from tenant_events.handlers.serializers import (
    AddSpeakerSerializer,
    EventScheduleSerializer,
    EventSerializer,
    ScheduleCreateSerializer,
    SpeakerSerializer,
    page_payload,
)
from tenant_events.query.filters import (
    EventFilter,
    EventSpeakersFilter,
    ScheduleFilter,
    SpeakerFilter,
)

logger = logging.getLogger(__name__)

STATUS_BY_CODE = {
    ErrorCode.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.SCHEDULE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.SPEAKER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.STORE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def domain_error_response(error: DomainError) -> Response:
    body = {"code": error.code.value, "message": error.message}
    if isinstance(error, InvalidInputError):
        body["field"] = error.field
    return Response(body, status=STATUS_BY_CODE[error.code])


def validated(serializer: serializers.Serializer) -> serializers.Serializer:
    """Run input validation, surfacing the first failure as Invalid Input."""
    if not serializer.is_valid():
        field, messages = next(iter(serializer.errors.items()))
        if isinstance(messages, dict):
            messages = next(iter(messages.values()))
        raise InvalidInputError(field, str(messages[0]))
    return serializer


class TenantAPIView(APIView):
    """Base view: tenant-authenticated, domain errors mapped to responses."""

    authentication_classes = [TenantHeaderAuthentication]
    permission_classes = [IsAuthenticated]

    @property
    def tenant(self) -> TenantContext:
        return self.request.auth

    def handle_exception(self, exc: Exception) -> Response:
        if isinstance(exc, DomainError):
            if exc.retriable:
                logger.warning("Request %s %s failed: %s", self.request.method, self.request.path, exc)
            return domain_error_response(exc)
        return super().handle_exception(exc)


class EventListView(TenantAPIView):
    """Handler for GET /api/events"""

    def get(self, request: Request) -> Response:
        filters = EventFilter.from_params(request.query_params)
        page = async_to_sync(services.event_service().list_events)(self.tenant, filters)
        return Response(page_payload(page, EventSerializer))


class EventDetailView(TenantAPIView):
    """Handler for GET /api/events/{event_id}"""

    def get(self, request: Request, event_id: str) -> Response:
        event = async_to_sync(services.event_service().get_event)(self.tenant, event_id)
        return Response(EventSerializer(event).data)


class ScheduleListView(TenantAPIView):
    """Handler for GET and POST /api/event-schedules"""

    def get(self, request: Request) -> Response:
        filters = ScheduleFilter.from_params(request.query_params)
        page = async_to_sync(services.schedule_service().list_schedules)(self.tenant, filters)
        return Response(page_payload(page, EventScheduleSerializer))

    def post(self, request: Request) -> Response:
        draft = validated(ScheduleCreateSerializer(data=request.data)).to_draft()
        schedule = async_to_sync(services.schedule_service().create_schedule)(self.tenant, draft)
        return Response(EventScheduleSerializer(schedule).data, status=status.HTTP_201_CREATED)


class ScheduleAddSpeakerView(TenantAPIView):
    """Handler for POST /api/event-schedules/add-speaker"""

    def post(self, request: Request) -> Response:
        data = validated(AddSpeakerSerializer(data=request.data)).validated_data
        schedule = async_to_sync(services.schedule_service().add_speaker)(
            self.tenant, data["scheduleId"], data["speakerId"]
        )
        return Response(EventScheduleSerializer(schedule).data)


class ScheduleDetailView(TenantAPIView):
    """Handler for GET /api/event-schedules/{schedule_id}"""

    def get(self, request: Request, schedule_id: str) -> Response:
        schedule = async_to_sync(services.schedule_service().get_schedule)(self.tenant, schedule_id)
        return Response(EventScheduleSerializer(schedule).data)


class EventSpeakersView(TenantAPIView):
    """Handler for GET /api/event-schedules/{event_id}/speakers"""

    def get(self, request: Request, event_id: str) -> Response:
        filters = EventSpeakersFilter.from_params(event_id, request.query_params)
        page = async_to_sync(services.speaker_service().list_event_speakers)(self.tenant, filters)
        return Response(page_payload(page, SpeakerSerializer))


class SpeakerListView(TenantAPIView):
    """Handler for GET /api/speakers"""

    def get(self, request: Request) -> Response:
        filters = SpeakerFilter.from_params(request.query_params)
        page = async_to_sync(services.speaker_service().list_speakers)(self.tenant, filters)
        return Response(page_payload(page, SpeakerSerializer))


class SpeakerDetailView(TenantAPIView):
    """Handler for GET /api/speakers/{speaker_id}"""

    def get(self, request: Request, speaker_id: str) -> Response:
        speaker = async_to_sync(services.speaker_service().get_speaker)(self.tenant, speaker_id)
        return Response(SpeakerSerializer(speaker).data)


class SpeakerScheduleListView(TenantAPIView):
    """Handler for GET /api/speakers/{speaker_id}/schedules"""

    def get(self, request: Request, speaker_id: str) -> Response:
        filters = ScheduleFilter.from_params(request.query_params)
        page = async_to_sync(services.speaker_service().list_speaker_schedules)(
            self.tenant, speaker_id, filters
        )
        return Response(page_payload(page, EventScheduleSerializer))
