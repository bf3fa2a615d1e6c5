"""
Rationale generation for scored hub items.

Rules run in a fixed order and the first rule that applies writes the
sentence: overdue, critical deadline, urgent deadline, VIP client, staleness,
kind template, kind default. Each rule is a plain function returning either
a sentence or None, so the chain is deterministic for a given context.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from app.features.hub_priorities.domain.models import (
    ClientTier,
    DateType,
    ItemKind,
    MessageCategory,
    ReplyWorthiness,
)

from .factors import DeadlineBucket


@dataclass(slots=True, frozen=True)
class RationaleContext:
    kind: ItemKind
    bucket: DeadlineBucket | None = None
    hours_remaining: float | None = None
    client_tier: ClientTier | None = None
    client_name: str | None = None
    client_factor: float = 1.0
    staleness_factor: float = 1.0
    days_old: float | None = None
    date_type: DateType | None = None
    related_entity: str | None = None
    category: MessageCategory | None = None
    reply_worthiness: ReplyWorthiness | None = None
    rsvp_pending: bool = False
    vip_threshold: float = 2.0
    staleness_threshold: float = 1.2


Rule = Callable[[RationaleContext], str | None]


DATE_TYPE_LABELS = {
    DateType.DEADLINE: "Deadline",
    DateType.PAYMENT_DUE: "Payment",
    DateType.BIRTHDAY: "Birthday",
    DateType.ANNIVERSARY: "Anniversary",
    DateType.EXPIRATION: "Expiration",
    DateType.APPOINTMENT: "Appointment",
    DateType.FOLLOW_UP: "Follow-up",
    DateType.EVENT: "Event",
    DateType.REMINDER: "Reminder",
    DateType.RECURRING: "Recurring date",
    DateType.OTHER: "Date",
}


def _hours_phrase(hours: float) -> str:
    if hours < 1:
        return "less than an hour"
    rounded = round(hours)
    return "1 hour" if rounded == 1 else f"{rounded} hours"


def _days_phrase(days: float) -> str:
    rounded = max(1, round(days))
    return "1 day" if rounded == 1 else f"{rounded} days"


def _subject(ctx: RationaleContext) -> str:
    if ctx.kind is ItemKind.EXTRACTED_DATE and ctx.date_type:
        return DATE_TYPE_LABELS[ctx.date_type]
    return "Due"


# =================================================================
# RULES
# =================================================================


def overdue_rule(ctx: RationaleContext) -> str | None:
    if ctx.bucket is not DeadlineBucket.OVERDUE:
        return None
    if ctx.kind is ItemKind.EXTRACTED_DATE and ctx.date_type:
        return f"{DATE_TYPE_LABELS[ctx.date_type]} is overdue and needs immediate attention."
    return "This is overdue and needs immediate attention."


def critical_rule(ctx: RationaleContext) -> str | None:
    if ctx.bucket is not DeadlineBucket.CRITICAL or ctx.hours_remaining is None:
        return None
    if ctx.kind is ItemKind.EVENT:
        return "Happening very soon - prepare now!"
    subject = _subject(ctx)
    connector = "in" if subject == "Due" else "due in"
    return f"{subject} {connector} {_hours_phrase(ctx.hours_remaining)} - act now!"


def urgent_rule(ctx: RationaleContext) -> str | None:
    if ctx.bucket is not DeadlineBucket.URGENT or ctx.hours_remaining is None:
        return None
    if ctx.kind is ItemKind.EVENT:
        return "Happening today - prepare now!"
    subject = _subject(ctx)
    connector = "in" if subject == "Due" else "due in"
    return f"{subject} {connector} {_hours_phrase(ctx.hours_remaining)} - prioritize today."


def vip_client_rule(ctx: RationaleContext) -> str | None:
    if ctx.client_tier is not ClientTier.VIP and ctx.client_factor < ctx.vip_threshold:
        return None
    if ctx.client_name:
        return f"From VIP client {ctx.client_name} - high relationship value."
    return "From a VIP client - prioritize this relationship."


def staleness_rule(ctx: RationaleContext) -> str | None:
    if ctx.staleness_factor <= ctx.staleness_threshold or ctx.days_old is None:
        return None
    return f"Sitting for {_days_phrase(ctx.days_old)} - don't let this slip through the cracks."


def message_template_rule(ctx: RationaleContext) -> str | None:
    if ctx.kind is not ItemKind.MESSAGE:
        return None
    if ctx.reply_worthiness is ReplyWorthiness.MUST_REPLY:
        return "Someone is waiting on your reply."
    if ctx.category is MessageCategory.CLIENT_PIPELINE:
        return "Direct client correspondence - keep the project moving."
    if ctx.reply_worthiness is ReplyWorthiness.SHOULD_REPLY:
        return "A reply here would strengthen the relationship."
    return None


def task_template_rule(ctx: RationaleContext) -> str | None:
    if ctx.kind is not ItemKind.TASK or ctx.hours_remaining is None:
        return None
    if ctx.bucket in (DeadlineBucket.SOON, DeadlineBucket.APPROACHING):
        return f"Due in {_days_phrase(ctx.hours_remaining / 24)} - plan to handle this soon."
    return None


def event_template_rule(ctx: RationaleContext) -> str | None:
    if ctx.kind is not ItemKind.EVENT or ctx.hours_remaining is None:
        return None
    if ctx.hours_remaining < 0:
        return "Happening now."
    return f"Coming up in {_days_phrase(ctx.hours_remaining / 24)}."


def _days_until(ctx: RationaleContext) -> str:
    hours = ctx.hours_remaining or 0.0
    if hours < 24:
        return "today"
    if hours < 48:
        return "tomorrow"
    return f"in {_days_phrase(hours / 24)}"


def extracted_date_template_rule(ctx: RationaleContext) -> str | None:
    if ctx.kind is not ItemKind.EXTRACTED_DATE or ctx.date_type is None:
        return None
    when = _days_until(ctx)
    entity = ctx.related_entity
    match ctx.date_type:
        case DateType.DEADLINE:
            return f"Deadline {when}{f' for {entity}' if entity else ''} - plan your time."
        case DateType.PAYMENT_DUE:
            return f"Payment due {when}{f' to {entity}' if entity else ''} - avoid late fees."
        case DateType.BIRTHDAY:
            who = f"{entity}'s birthday" if entity else "A birthday"
            return f"{who} is {when} - send your wishes."
        case DateType.ANNIVERSARY:
            return f"Anniversary {when}{f' with {entity}' if entity else ''} - worth marking."
        case DateType.EXPIRATION:
            return f"Something expires {when} - renew or let it lapse deliberately."
        case DateType.APPOINTMENT:
            return f"Appointment {when} - confirm you can make it."
        case DateType.FOLLOW_UP:
            return f"Follow-up planned {when}{f' with {entity}' if entity else ''}."
    return None


def default_rule(ctx: RationaleContext) -> str:
    match ctx.kind:
        case ItemKind.MESSAGE:
            return "Needs your attention based on AI analysis."
        case ItemKind.TASK:
            return "Pending task extracted from your emails."
        case ItemKind.EVENT:
            return "Upcoming event that may require preparation."
        case ItemKind.EXTRACTED_DATE:
            return "Upcoming date detected in your emails."
    raise ValueError(f"Unknown item kind: {ctx.kind}")


RULE_CHAIN: tuple[Rule, ...] = (
    overdue_rule,
    critical_rule,
    urgent_rule,
    vip_client_rule,
    staleness_rule,
    message_template_rule,
    task_template_rule,
    event_template_rule,
    extracted_date_template_rule,
)


def generate_rationale(ctx: RationaleContext, rules: tuple[Rule, ...] = RULE_CHAIN) -> str:
    """Pick the most specific applicable sentence for an item."""
    rationale = next((text for rule in rules if (text := rule(ctx)) is not None), None)
    if rationale is None:
        rationale = default_rule(ctx)
    if ctx.rsvp_pending:
        rationale = f"RSVP needed: {rationale}"
    return rationale
