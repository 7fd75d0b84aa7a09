"""Closed value sets shared by the persistence and query layers."""

from enum import Enum


class EventType(Enum):
    CONFERENCE = "CONFERENCE"
    WORKSHOP = "WORKSHOP"
    SEMINAR = "SEMINAR"
    WEBINAR = "WEBINAR"
    MEETING = "MEETING"
    EXPOSITION = "EXPOSITION"
    FESTIVAL = "FESTIVAL"
    SPORTING_EVENT = "SPORTING_EVENT"
    CONCERT = "CONCERT"
    GALA = "GALA"
    SYMPOSIUM = "SYMPOSIUM"
    SUMMIT = "SUMMIT"
    OTHER = "OTHER"


class EventStatus(Enum):
    DRAFT = "DRAFT"
    SCHEDULED = "SCHEDULED"
    PUBLISHED = "PUBLISHED"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    ARCHIVED = "ARCHIVED"


class EventFormat(Enum):
    ONLINE = "ONLINE"
    IN_PERSON = "IN_PERSON"
    HYBRID = "HYBRID"
    OTHER = "OTHER"


class Currency(Enum):
    USD = "USD"
    EUR = "EUR"
    JPY = "JPY"
    GBP = "GBP"
    CAD = "CAD"
    INR = "INR"
    FBU = "FBU"
    AUD = "AUD"
    CHF = "CHF"
    CNY = "CNY"
    BRL = "BRL"
    RUB = "RUB"
    ZAR = "ZAR"
    KRW = "KRW"
    SGD = "SGD"
    NZD = "NZD"
    MXN = "MXN"
    HKD = "HKD"
    SEK = "SEK"
    NOK = "NOK"
    TRY = "TRY"
    AED = "AED"
    SAR = "SAR"
    THB = "THB"


class SessionType(Enum):
    KEYNOTE = "KEYNOTE"
    WORKSHOP = "WORKSHOP"
    PANEL_DISCUSSION = "PANEL_DISCUSSION"
    BREAK = "BREAK"
    LUNCH = "LUNCH"
    NETWORKING = "NETWORKING"
    CLOSING_REMARKS = "CLOSING_REMARKS"
    OTHER = "OTHER"
    SESSION = "SESSION"


class SpeakerType(Enum):
    SPEAKER = "SPEAKER"
    MODERATOR = "MODERATOR"
    PANELIST = "PANELIST"
    PRESENTER = "PRESENTER"
    GUEST = "GUEST"
    KEYNOTE_SPEAKER = "KEYNOTE_SPEAKER"
    VIP = "VIP"
    FACILITATOR = "FACILITATOR"
    WORKSHOP_LEADER = "WORKSHOP_LEADER"
    TRAINER = "TRAINER"
    GUEST_OF_HONOR = "GUEST_OF_HONOR"
    ANALYST = "ANALYST"
    INFLUENCER = "INFLUENCER"
    ROUNDTABLE_HOST = "ROUNDTABLE_HOST"


def enum_choices(enum_cls: type[Enum]) -> list[tuple[str, str]]:
    return [(member.value, member.name.replace("_", " ").title()) for member in enum_cls]
