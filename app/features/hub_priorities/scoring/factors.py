"""
Factor lookups shared by the per-kind scorers.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from datetime import date, datetime, time, timedelta, tzinfo
from enum import StrEnum

from app.features.hub_priorities.domain.models import (
    Candidate,
    ClientLookup,
    ClientTier,
    DayContext,
    ItemKind,
    TimeContext,
)

from .config import HubScoringConfig

SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400


class DeadlineBucket(StrEnum):
    OVERDUE = "overdue"
    CRITICAL = "critical"
    URGENT = "urgent"
    SOON = "soon"
    APPROACHING = "approaching"
    NORMAL = "normal"


# =================================================================
# DATETIME COERCION
# =================================================================


def coerce_datetime(value: datetime | date | str | None, tz: tzinfo) -> datetime:
    """
    Parse a store timestamp into an aware datetime.

    Naive values are interpreted in ``tz``. Raises ValueError when the value
    is missing or unparseable.
    """
    if value is None:
        raise ValueError("timestamp is missing")
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    else:
        parsed = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz)
    return parsed


def coerce_date(value: date | datetime | str | None) -> date:
    if value is None:
        raise ValueError("date is missing")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip()[:10])


def coerce_time(value: time | str | None) -> time | None:
    if value is None:
        return None
    if isinstance(value, time):
        return value
    text = str(value).strip()
    if not text:
        return None
    return time.fromisoformat(text)


def combine_local(day: date, at: time | None, config: HubScoringConfig) -> datetime:
    """Date plus optional time of day, defaulting to the configured hour."""
    at = at or time(hour=config.default_hour)
    combined = datetime.combine(day, at.replace(tzinfo=None))
    return combined.replace(tzinfo=at.tzinfo or config.timezone)


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / SECONDS_PER_HOUR


def days_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / SECONDS_PER_DAY


# =================================================================
# CONTEXT
# =================================================================


def get_time_context(now: datetime, tz: tzinfo | None = None) -> TimeContext:
    """Morning before noon, afternoon until 17:00, evening after."""
    local = now.astimezone(tz) if tz and now.tzinfo else now
    if local.hour < 12:
        return TimeContext.MORNING
    if local.hour < 17:
        return TimeContext.AFTERNOON
    return TimeContext.EVENING


def get_day_context(now: datetime, tz: tzinfo | None = None) -> DayContext:
    local = now.astimezone(tz) if tz and now.tzinfo else now
    weekday = local.weekday()
    if weekday >= 5:
        return DayContext.WEEKEND
    if weekday == 4:
        return DayContext.FRIDAY
    return DayContext.WEEKDAY


def time_of_day_factor(config: HubScoringConfig, time_context: TimeContext, kind: ItemKind) -> float:
    column = ItemKind.EVENT if kind is ItemKind.EXTRACTED_DATE else kind
    return config.time_context_boosts[time_context].get(column, config.neutral_multiplier)


# =================================================================
# DEADLINE PROXIMITY
# =================================================================


def deadline_bucket(hours_remaining: float, config: HubScoringConfig) -> DeadlineBucket:
    thresholds = config.deadline_thresholds
    if hours_remaining < 0:
        return DeadlineBucket.OVERDUE
    if hours_remaining <= thresholds.critical_hours:
        return DeadlineBucket.CRITICAL
    if hours_remaining <= thresholds.urgent_hours:
        return DeadlineBucket.URGENT
    if hours_remaining <= thresholds.soon_hours:
        return DeadlineBucket.SOON
    if hours_remaining <= thresholds.approaching_hours:
        return DeadlineBucket.APPROACHING
    return DeadlineBucket.NORMAL


def deadline_factor(bucket: DeadlineBucket, config: HubScoringConfig) -> float:
    return getattr(config.deadline_multipliers, bucket.value)


def describe_time_remaining(hours_remaining: float, bucket: DeadlineBucket) -> str:
    if bucket is DeadlineBucket.OVERDUE:
        overdue_days = math.floor(-hours_remaining / 24)
        if overdue_days >= 1:
            return f"Overdue by {_plural(overdue_days, 'day')}"
        return "Overdue"
    if bucket in (DeadlineBucket.CRITICAL, DeadlineBucket.URGENT):
        return _plural(max(1, math.ceil(hours_remaining)), "hour")
    return _plural(max(1, round(hours_remaining / 24)), "day")


def describe_event_time(hours_until: float) -> str:
    if hours_until < 0:
        return "Now"
    if hours_until < 12:
        return _plural(max(1, math.ceil(hours_until)), "hour")
    if hours_until < 24:
        return "Today"
    if hours_until < 48:
        return "Tomorrow"
    return _plural(round(hours_until / 24), "day")


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


# =================================================================
# STALENESS / CLIENT / MOMENTUM
# =================================================================


def staleness_factor(days_old: float, config: HubScoringConfig) -> float:
    thresholds = config.staleness_thresholds
    multipliers = config.staleness_multipliers
    if days_old > thresholds.very_stale_days:
        return multipliers.very_stale
    if days_old > thresholds.stale_days:
        return multipliers.stale
    if days_old > thresholds.aging_days:
        return multipliers.aging
    return multipliers.fresh


def client_factor(
    contact_id: str | None, clients: ClientLookup, config: HubScoringConfig
) -> tuple[float, str | None, ClientTier | None]:
    """Return (factor, client name, tier) for a linked contact."""
    if not contact_id or contact_id not in clients:
        return config.neutral_multiplier, None, None
    client = clients[contact_id]
    factor = config.client_multipliers.get(client.tier, config.neutral_multiplier)
    return factor, client.name, client.tier


MomentumProvider = Callable[[Candidate, HubScoringConfig], float]


def neutral_momentum(candidate: Candidate, config: HubScoringConfig) -> float:
    """Default momentum: thread activity is not scored yet."""
    return config.momentum_multipliers.normal


def start_of_day(now: datetime, tz: tzinfo) -> datetime:
    local = now.astimezone(tz)
    return local.replace(hour=0, minute=0, second=0, microsecond=0)


def window_bounds(now: datetime, config: HubScoringConfig) -> tuple[date, date]:
    """Inclusive [today, today + forward window] in the configured timezone."""
    today = start_of_day(now, config.timezone).date()
    return today, today + timedelta(days=config.forward_window_days)
