"""Domain error codes for the tenant_events module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_INPUT = "INVALID_INPUT"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    SCHEDULE_NOT_FOUND = "SCHEDULE_NOT_FOUND"
    SPEAKER_NOT_FOUND = "SPEAKER_NOT_FOUND"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    @property
    def retriable(self) -> bool:
        return self.code is ErrorCode.STORE_UNAVAILABLE


class InvalidInputError(DomainError):
    """Raised before any query runs when a caller-supplied value is malformed."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_INPUT, message=message)
        self.field = field


class EventNotFoundError(DomainError):
    """Raised when an event is not found for the caller's tenant."""

    def __init__(self, event_id: str) -> None:
        super().__init__(code=ErrorCode.EVENT_NOT_FOUND, message="Event not found")
        self.event_id = event_id


class ScheduleNotFoundError(DomainError):
    """Raised when an event schedule is not found for the caller's tenant."""

    def __init__(self, schedule_id: str) -> None:
        super().__init__(
            code=ErrorCode.SCHEDULE_NOT_FOUND,
            message="Event schedule not found",
        )
        self.schedule_id = schedule_id


class SpeakerNotFoundError(DomainError):
    """Raised when a speaker is not found for the caller's tenant."""

    def __init__(self, speaker_id: str) -> None:
        super().__init__(code=ErrorCode.SPEAKER_NOT_FOUND, message="Speaker not found")
        self.speaker_id = speaker_id


class StoreUnavailableError(DomainError):
    """Raised when the backing store is unreachable or a query fails."""

    def __init__(self, entity: str) -> None:
        super().__init__(
            code=ErrorCode.STORE_UNAVAILABLE,
            message="The data store is temporarily unavailable",
        )
        self.entity = entity
