"""
Per-kind scoring functions.

Every scorer multiplies a kind-specific base by the same factor chain:

    raw = base * client * staleness * deadline * momentum * time_of_day

then scales the raw value into 0..100. Factors that do not apply to a kind
stay at the neutral multiplier, and the recorded ScoreFactors are the exact
values that went into the product.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import assert_never

from app.features.hub_priorities.domain.models import (
    Candidate,
    ClientLookup,
    DateType,
    EventCandidate,
    ExtractedDateCandidate,
    ItemKind,
    MessageCandidate,
    ReplyWorthiness,
    ScoredItem,
    ScoreFactors,
    SuggestedAction,
    TaskCandidate,
    TimeContext,
)
from app.infrastructure.observability.logging import get_logger

from .config import DEFAULT_SCORING_CONFIG, HubScoringConfig
from .factors import (
    DeadlineBucket,
    MomentumProvider,
    client_factor,
    coerce_date,
    coerce_datetime,
    coerce_time,
    combine_local,
    days_between,
    deadline_bucket,
    deadline_factor,
    describe_event_time,
    describe_time_remaining,
    hours_between,
    neutral_momentum,
    staleness_factor,
    start_of_day,
    time_of_day_factor,
)
from .rationale import RationaleContext, generate_rationale

logger = get_logger(__name__)


@dataclass(slots=True)
class ScoringContext:
    """Everything a scorer needs besides the candidate itself."""

    now: datetime
    time_context: TimeContext
    clients: ClientLookup = field(default_factory=dict)
    config: HubScoringConfig = DEFAULT_SCORING_CONFIG
    momentum: MomentumProvider = neutral_momentum


QUICK_ACTIONS = {
    "respond": SuggestedAction.RESPOND,
    "review": SuggestedAction.REVIEW,
    "calendar": SuggestedAction.SCHEDULE,
    "archive": SuggestedAction.ARCHIVE,
}

TASK_TYPE_ACTIONS = {
    "respond": SuggestedAction.RESPOND,
    "review": SuggestedAction.REVIEW,
    "decide": SuggestedAction.DECIDE,
    "schedule": SuggestedAction.SCHEDULE,
}

DATE_TYPE_ACTIONS = {
    DateType.DEADLINE: SuggestedAction.DECIDE,
    DateType.PAYMENT_DUE: SuggestedAction.DECIDE,
    DateType.APPOINTMENT: SuggestedAction.ATTEND,
    DateType.EVENT: SuggestedAction.ATTEND,
    DateType.FOLLOW_UP: SuggestedAction.RESPOND,
}


def finalize_score(raw: float, kind: ItemKind, config: HubScoringConfig) -> int:
    scaled = round(raw * config.score_scale[kind])
    return max(0, min(config.max_score, scaled))


def _isoformat(value: date | str) -> str:
    return value.isoformat() if hasattr(value, "isoformat") else str(value)


# =================================================================
# MESSAGES
# =================================================================


def score_message(message: MessageCandidate, ctx: ScoringContext) -> ScoredItem:
    config = ctx.config
    neutral = config.neutral_multiplier

    received_at = coerce_datetime(message.received_at, config.timezone)

    base = config.base_weights[ItemKind.MESSAGE]
    base *= config.category_boosts.get(message.category, neutral)
    if message.signal_strength is not None:
        base *= config.signal_multipliers.get(message.signal_strength, neutral)
    if message.reply_worthiness is not None:
        base *= config.reply_multipliers.get(message.reply_worthiness, neutral)
    if not message.is_read:
        base *= config.unread_boost
    if message.priority_score:
        base *= 1 + (float(message.priority_score) * config.urgency_weight) / 10

    client, client_name, client_tier = client_factor(message.contact_id, ctx.clients, config)

    days_old = days_between(received_at, ctx.now)
    staleness = staleness_factor(days_old, config)
    # No explicit deadline on messages
    deadline = config.deadline_multipliers.normal
    momentum = ctx.momentum(message, config)
    time_boost = time_of_day_factor(config, ctx.time_context, ItemKind.MESSAGE)

    raw = base * client * staleness * deadline * momentum * time_boost
    score = finalize_score(raw, ItemKind.MESSAGE, config)

    rationale = generate_rationale(
        RationaleContext(
            kind=ItemKind.MESSAGE,
            client_tier=client_tier,
            client_name=client_name,
            client_factor=client,
            staleness_factor=staleness,
            days_old=days_old,
            category=message.category,
            reply_worthiness=message.reply_worthiness,
            vip_threshold=config.vip_rationale_threshold,
            staleness_threshold=config.rationale_staleness_threshold,
        )
    )

    suggested = QUICK_ACTIONS.get((message.quick_action or "").lower())
    if suggested is None and message.reply_worthiness is ReplyWorthiness.MUST_REPLY:
        suggested = SuggestedAction.RESPOND

    return ScoredItem(
        id=f"message-{message.id}",
        kind=ItemKind.MESSAGE,
        title=message.subject or "(No subject)",
        description=message.snippet or "",
        ai_summary=message.summary,
        rationale=rationale,
        suggested_action=suggested,
        score=score,
        factors=ScoreFactors(
            base=base, deadline=deadline, client=client, staleness=staleness, momentum=momentum
        ),
        client_name=client_name,
        sender_name=message.sender_name,
        sender_email=message.sender_email,
        original_id=message.id,
        href=f"/inbox?email={message.id}",
        date=received_at.isoformat(),
    )


# =================================================================
# TASKS
# =================================================================


def score_task(task: TaskCandidate, ctx: ScoringContext) -> ScoredItem:
    config = ctx.config

    base = config.base_weights[ItemKind.TASK]
    base *= 1 + float(task.urgency_score or 0) * config.urgency_weight

    client, client_name, client_tier = client_factor(task.contact_id, ctx.clients, config)

    deadline = config.deadline_multipliers.normal
    bucket: DeadlineBucket | None = None
    hours_remaining: float | None = None
    time_remaining: str | None = None
    deadline_text: str | None = None
    if task.deadline:
        due_at = coerce_datetime(task.deadline, config.timezone)
        hours_remaining = hours_between(ctx.now, due_at)
        bucket = deadline_bucket(hours_remaining, config)
        deadline = deadline_factor(bucket, config)
        time_remaining = describe_time_remaining(hours_remaining, bucket)
        deadline_text = due_at.isoformat()

    created_at = coerce_datetime(task.created_at, config.timezone)
    days_old = days_between(created_at, ctx.now)
    staleness = staleness_factor(days_old, config)
    momentum = ctx.momentum(task, config)
    time_boost = time_of_day_factor(config, ctx.time_context, ItemKind.TASK)

    raw = base * client * staleness * deadline * momentum * time_boost
    score = finalize_score(raw, ItemKind.TASK, config)

    rationale = generate_rationale(
        RationaleContext(
            kind=ItemKind.TASK,
            bucket=bucket,
            hours_remaining=hours_remaining,
            client_tier=client_tier,
            client_name=client_name,
            client_factor=client,
            staleness_factor=staleness,
            days_old=days_old,
            vip_threshold=config.vip_rationale_threshold,
            staleness_threshold=config.rationale_staleness_threshold,
        )
    )

    return ScoredItem(
        id=f"task-{task.id}",
        kind=ItemKind.TASK,
        title=task.title,
        description=task.description or "",
        rationale=rationale,
        suggested_action=TASK_TYPE_ACTIONS.get((task.task_type or "").lower()),
        score=score,
        factors=ScoreFactors(
            base=base, deadline=deadline, client=client, staleness=staleness, momentum=momentum
        ),
        deadline=deadline_text,
        time_remaining=time_remaining,
        client_name=client_name,
        original_id=task.id,
        href=f"/tasks?task={task.id}",
        date=created_at.isoformat(),
    )


# =================================================================
# EVENTS
# =================================================================


def score_event(event: EventCandidate, ctx: ScoringContext) -> ScoredItem:
    config = ctx.config
    neutral = config.neutral_multiplier

    base = config.base_weights[ItemKind.EVENT]
    if event.rsvp_pending:
        base *= config.rsvp_boost

    starts_at = combine_local(
        coerce_date(event.start_date), coerce_time(event.start_time), config
    )
    hours_until = hours_between(ctx.now, starts_at)
    if hours_until < 0:
        bucket = None
        deadline = config.past_event_factor
    else:
        bucket = deadline_bucket(hours_until, config)
        deadline = deadline_factor(bucket, config)

    client = neutral
    staleness = neutral
    momentum = ctx.momentum(event, config)
    time_boost = time_of_day_factor(config, ctx.time_context, ItemKind.EVENT)

    raw = base * client * staleness * deadline * momentum * time_boost
    score = finalize_score(raw, ItemKind.EVENT, config)

    rationale = generate_rationale(
        RationaleContext(
            kind=ItemKind.EVENT,
            bucket=bucket,
            hours_remaining=hours_until,
            rsvp_pending=event.rsvp_pending,
        )
    )

    return ScoredItem(
        id=f"event-{event.id}",
        kind=ItemKind.EVENT,
        title=event.title,
        description=event.description or event.location or "",
        rationale=rationale,
        suggested_action=SuggestedAction.ATTEND if event.rsvp_required else SuggestedAction.REVIEW,
        score=score,
        factors=ScoreFactors(
            base=base, deadline=deadline, client=client, staleness=staleness, momentum=momentum
        ),
        deadline=starts_at.isoformat(),
        time_remaining=describe_event_time(hours_until),
        original_id=event.id,
        href=f"/calendar?event={event.id}",
        date=_isoformat(event.start_date),
    )


# =================================================================
# EXTRACTED DATES
# =================================================================


def _resolve_extracted_due(item: ExtractedDateCandidate, ctx: ScoringContext) -> datetime:
    """Due moment of an extracted date, falling back to today at the default hour."""
    config = ctx.config
    try:
        day = coerce_date(item.date)
    except (TypeError, ValueError) as exc:
        logger.warning(
            "Unparseable extracted date, defaulting to today",
            candidate_id=item.id,
            kind=ItemKind.EXTRACTED_DATE.value,
            value=str(item.date),
            error=str(exc),
        )
        day = start_of_day(ctx.now, config.timezone).date()
    try:
        at = coerce_time(item.time)
    except (TypeError, ValueError) as exc:
        logger.warning(
            "Unparseable extracted time, using default hour",
            candidate_id=item.id,
            kind=ItemKind.EXTRACTED_DATE.value,
            value=str(item.time),
            error=str(exc),
        )
        at = None
    return combine_local(day, at, config)


def score_extracted_date(item: ExtractedDateCandidate, ctx: ScoringContext) -> ScoredItem:
    config = ctx.config
    neutral = config.neutral_multiplier

    base = config.base_weights[ItemKind.EXTRACTED_DATE]
    base *= config.date_type_weights.get(item.date_type, neutral)
    if item.priority_score:
        base *= 1 + (float(item.priority_score) * config.urgency_weight) / 10
    if item.is_recurring:
        base *= config.recurring_reduction
    if item.confidence is not None and item.confidence < config.low_confidence_threshold:
        base *= config.low_confidence_reduction

    due_at = _resolve_extracted_due(item, ctx)
    hours_remaining = hours_between(ctx.now, due_at)
    bucket = deadline_bucket(hours_remaining, config)
    deadline = deadline_factor(bucket, config)

    client = neutral
    staleness = neutral
    momentum = ctx.momentum(item, config)
    time_boost = time_of_day_factor(config, ctx.time_context, ItemKind.EXTRACTED_DATE)

    raw = base * client * staleness * deadline * momentum * time_boost
    score = finalize_score(raw, ItemKind.EXTRACTED_DATE, config)

    rationale = generate_rationale(
        RationaleContext(
            kind=ItemKind.EXTRACTED_DATE,
            bucket=bucket,
            hours_remaining=hours_remaining,
            date_type=item.date_type,
            related_entity=item.related_entity,
        )
    )

    return ScoredItem(
        id=f"extracted_date-{item.id}",
        kind=ItemKind.EXTRACTED_DATE,
        title=item.title,
        description=item.description or item.related_entity or "",
        rationale=rationale,
        suggested_action=DATE_TYPE_ACTIONS.get(item.date_type, SuggestedAction.REVIEW),
        score=score,
        factors=ScoreFactors(
            base=base, deadline=deadline, client=client, staleness=staleness, momentum=momentum
        ),
        deadline=due_at.isoformat(),
        time_remaining=describe_time_remaining(hours_remaining, bucket),
        original_id=item.id,
        href=f"/calendar?highlight={item.id}",
        date=due_at.date().isoformat(),
    )


# =================================================================
# DISPATCH
# =================================================================


def score_candidate(candidate: Candidate, ctx: ScoringContext) -> ScoredItem:
    match candidate:
        case MessageCandidate():
            return score_message(candidate, ctx)
        case TaskCandidate():
            return score_task(candidate, ctx)
        case EventCandidate():
            return score_event(candidate, ctx)
        case ExtractedDateCandidate():
            return score_extracted_date(candidate, ctx)
        case _:
            assert_never(candidate)
