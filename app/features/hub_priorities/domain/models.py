"""
Domain models for the hub priorities feature.

Candidates are read-only snapshots of store rows for a single scoring pass.
Temporal fields keep whatever the store returned (datetime/date/time objects
from psycopg, or ISO strings from other callers); the scorers parse them so a
malformed value only affects the one item that carries it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import StrEnum
from typing import Any, TypeVar

E = TypeVar("E", bound=StrEnum)


def coerce_enum(enum_cls: type[E], value: Any, default: E | None) -> E | None:
    """Map an upstream string onto a closed enum, falling back to ``default``."""
    if value is None:
        return default
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        return default


class ItemKind(StrEnum):
    MESSAGE = "message"
    TASK = "task"
    EVENT = "event"
    EXTRACTED_DATE = "extracted_date"


class MessageCategory(StrEnum):
    NEWSLETTERS_GENERAL = "newsletters_general"
    NEWS_POLITICS = "news_politics"
    PRODUCT_UPDATES = "product_updates"
    LOCAL = "local"
    SHOPPING = "shopping"
    TRAVEL = "travel"
    FINANCE = "finance"
    FAMILY_KIDS_SCHOOL = "family_kids_school"
    FAMILY_HEALTH_APPOINTMENTS = "family_health_appointments"
    CLIENT_PIPELINE = "client_pipeline"
    BUSINESS_WORK_GENERAL = "business_work_general"
    PERSONAL_FRIENDS_FAMILY = "personal_friends_family"
    UNKNOWN = "unknown"


class SignalStrength(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NOISE = "noise"


class ReplyWorthiness(StrEnum):
    MUST_REPLY = "must_reply"
    SHOULD_REPLY = "should_reply"
    OPTIONAL_REPLY = "optional_reply"
    NO_REPLY = "no_reply"


class ClientTier(StrEnum):
    VIP = "vip"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class DateType(StrEnum):
    DEADLINE = "deadline"
    PAYMENT_DUE = "payment_due"
    BIRTHDAY = "birthday"
    ANNIVERSARY = "anniversary"
    EXPIRATION = "expiration"
    APPOINTMENT = "appointment"
    FOLLOW_UP = "follow_up"
    EVENT = "event"
    REMINDER = "reminder"
    RECURRING = "recurring"
    OTHER = "other"


class TimeContext(StrEnum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


class DayContext(StrEnum):
    WEEKDAY = "weekday"
    WEEKEND = "weekend"
    FRIDAY = "friday"


class SuggestedAction(StrEnum):
    RESPOND = "respond"
    REVIEW = "review"
    DECIDE = "decide"
    SCHEDULE = "schedule"
    ARCHIVE = "archive"
    ATTEND = "attend"


# =================================================================
# CANDIDATES
# =================================================================


@dataclass(slots=True)
class MessageCandidate:
    """An unread or must-reply email with its classifier outputs."""

    id: str
    subject: str | None
    snippet: str | None
    sender_name: str | None
    sender_email: str | None
    received_at: datetime | str | None
    category: MessageCategory = MessageCategory.UNKNOWN
    priority_score: float | None = None
    is_read: bool = False
    contact_id: str | None = None
    thread_id: str | None = None
    summary: str | None = None
    quick_action: str | None = None
    signal_strength: SignalStrength | None = None
    reply_worthiness: ReplyWorthiness | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> MessageCandidate:
        return cls(
            id=str(row["id"]),
            subject=row.get("subject"),
            snippet=row.get("snippet"),
            sender_name=row.get("sender_name"),
            sender_email=row.get("sender_email"),
            received_at=row.get("date"),
            category=coerce_enum(MessageCategory, row.get("category"), MessageCategory.UNKNOWN),
            priority_score=row.get("priority_score"),
            is_read=bool(row.get("is_read")),
            contact_id=_optional_id(row.get("contact_id")),
            thread_id=row.get("thread_id"),
            summary=row.get("summary"),
            quick_action=row.get("quick_action"),
            signal_strength=coerce_enum(SignalStrength, row.get("signal_strength"), None),
            reply_worthiness=coerce_enum(ReplyWorthiness, row.get("reply_worthiness"), None),
        )


@dataclass(slots=True)
class TaskCandidate:
    """A pending action item, manually created or extracted from an email."""

    id: str
    title: str
    description: str | None
    task_type: str | None
    urgency_score: float
    deadline: datetime | str | None
    status: str
    created_at: datetime | str
    contact_id: str | None = None
    email_id: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> TaskCandidate:
        return cls(
            id=str(row["id"]),
            title=row.get("title") or "",
            description=row.get("description"),
            task_type=row.get("action_type"),
            urgency_score=row.get("urgency_score") or 0,
            deadline=row.get("deadline"),
            status=row.get("status") or "pending",
            created_at=row.get("created_at"),
            contact_id=_optional_id(row.get("contact_id")),
            email_id=_optional_id(row.get("email_id")),
        )


@dataclass(slots=True)
class EventCandidate:
    """A calendar entry starting within the forward window."""

    id: str
    title: str
    description: str | None
    start_date: date | str
    start_time: time | str | None
    location: str | None = None
    rsvp_required: bool = False
    rsvp_status: str | None = None

    @property
    def rsvp_pending(self) -> bool:
        return self.rsvp_required and self.rsvp_status != "accepted"

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> EventCandidate:
        return cls(
            id=str(row["id"]),
            title=row.get("title") or "",
            description=row.get("description"),
            start_date=row.get("start_date"),
            start_time=row.get("start_time"),
            location=row.get("location"),
            rsvp_required=bool(row.get("rsvp_required")),
            rsvp_status=row.get("rsvp_status"),
        )


@dataclass(slots=True)
class ExtractedDateCandidate:
    """A date the upstream extractor found in message content."""

    id: str
    date_type: DateType
    date: date | str | None
    time: time | str | None
    title: str
    description: str | None = None
    priority_score: float | None = None
    contact_id: str | None = None
    email_id: str | None = None
    is_recurring: bool = False
    related_entity: str | None = None
    confidence: float | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> ExtractedDateCandidate:
        confidence = row.get("confidence")
        return cls(
            id=str(row["id"]),
            date_type=coerce_enum(DateType, row.get("date_type"), DateType.OTHER),
            date=row.get("date"),
            time=row.get("event_time", row.get("time")),
            title=row.get("title") or "",
            description=row.get("description"),
            priority_score=row.get("priority_score"),
            contact_id=_optional_id(row.get("contact_id")),
            email_id=_optional_id(row.get("email_id")),
            is_recurring=bool(row.get("is_recurring")),
            related_entity=row.get("related_entity"),
            # NUMERIC(3,2) arrives as Decimal
            confidence=float(confidence) if confidence is not None else None,
        )


Candidate = MessageCandidate | TaskCandidate | EventCandidate | ExtractedDateCandidate


def candidate_kind(candidate: Candidate) -> ItemKind:
    match candidate:
        case MessageCandidate():
            return ItemKind.MESSAGE
        case TaskCandidate():
            return ItemKind.TASK
        case EventCandidate():
            return ItemKind.EVENT
        case ExtractedDateCandidate():
            return ItemKind.EXTRACTED_DATE
    raise TypeError(f"Unsupported candidate type: {type(candidate).__name__}")


def _optional_id(value: Any) -> str | None:
    return str(value) if value is not None else None


# =================================================================
# CLIENTS
# =================================================================


@dataclass(slots=True, frozen=True)
class ClientInfo:
    name: str
    tier: ClientTier


ClientLookup = dict[str, ClientInfo]


# =================================================================
# OUTPUT
# =================================================================


@dataclass(slots=True, frozen=True)
class ScoreFactors:
    """The multipliers that produced a score, kept for auditability."""

    base: float
    deadline: float
    client: float
    staleness: float
    momentum: float


@dataclass(slots=True, frozen=True)
class ScoredItem:
    id: str
    kind: ItemKind
    title: str
    description: str
    rationale: str
    score: int
    factors: ScoreFactors
    original_id: str
    href: str
    date: str
    ai_summary: str | None = None
    suggested_action: SuggestedAction | None = None
    deadline: str | None = None
    time_remaining: str | None = None
    client_name: str | None = None
    sender_name: str | None = None
    sender_email: str | None = None


@dataclass(slots=True)
class PriorityOptions:
    limit: int = 3
    # Accepted for API compatibility; scoring never calls a model
    include_ai_reasoning: bool = False
    time_context: TimeContext | None = None
    day_context: DayContext | None = None


@dataclass(slots=True)
class PriorityStats:
    total_candidates: int = 0
    messages_considered: int = 0
    tasks_considered: int = 0
    events_considered: int = 0
    extracted_dates_considered: int = 0
    processing_time_ms: float = 0.0


@dataclass(slots=True)
class PriorityResult:
    items: list[ScoredItem]
    stats: PriorityStats
    last_updated: datetime
    time_context: TimeContext | None = None
    day_context: DayContext | None = None
