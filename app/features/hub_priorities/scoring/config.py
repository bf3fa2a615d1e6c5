"""
Scoring configuration for hub priorities.

One frozen value holds every weight and threshold the scorers read. It is
passed explicitly into each scoring call; alternate configurations are built
with ``dataclasses.replace(DEFAULT_SCORING_CONFIG, ...)``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, tzinfo
from types import MappingProxyType

from app.features.hub_priorities.domain.models import (
    ClientTier,
    DateType,
    ItemKind,
    MessageCategory,
    ReplyWorthiness,
    SignalStrength,
    TimeContext,
)


def _frozen(table: dict) -> Mapping:
    return MappingProxyType(dict(table))


@dataclass(frozen=True, slots=True)
class DeadlineMultipliers:
    overdue: float = 3.0
    critical: float = 2.5
    urgent: float = 2.0
    soon: float = 1.5
    approaching: float = 1.2
    normal: float = 1.0


@dataclass(frozen=True, slots=True)
class DeadlineThresholds:
    """Upper bounds (inclusive) in hours for each proximity bucket."""

    critical_hours: float = 4.0
    urgent_hours: float = 24.0
    soon_hours: float = 48.0
    approaching_hours: float = 72.0


@dataclass(frozen=True, slots=True)
class StalenessMultipliers:
    very_stale: float = 1.4
    stale: float = 1.25
    aging: float = 1.1
    fresh: float = 1.0


@dataclass(frozen=True, slots=True)
class StalenessThresholds:
    """Lower bounds (exclusive) in days for each staleness bucket."""

    very_stale_days: float = 5.0
    stale_days: float = 3.0
    aging_days: float = 1.0


@dataclass(frozen=True, slots=True)
class MomentumMultipliers:
    hot: float = 1.5
    active: float = 1.25
    normal: float = 1.0


@dataclass(frozen=True, slots=True)
class FetchLimits:
    messages: int = 20
    tasks: int = 15
    events: int = 10
    extracted_dates: int = 15


@dataclass(frozen=True, slots=True)
class HubScoringConfig:
    max_score: int = 100

    base_weights: Mapping[ItemKind, float] = field(
        default_factory=lambda: _frozen(
            {
                ItemKind.MESSAGE: 10.0,
                ItemKind.TASK: 15.0,
                ItemKind.EVENT: 12.0,
                ItemKind.EXTRACTED_DATE: 13.0,
            }
        )
    )
    # raw score -> 0..100
    score_scale: Mapping[ItemKind, float] = field(
        default_factory=lambda: _frozen(
            {
                ItemKind.MESSAGE: 5.0,
                ItemKind.TASK: 4.0,
                ItemKind.EVENT: 4.0,
                ItemKind.EXTRACTED_DATE: 4.0,
            }
        )
    )

    deadline_multipliers: DeadlineMultipliers = field(default_factory=DeadlineMultipliers)
    deadline_thresholds: DeadlineThresholds = field(default_factory=DeadlineThresholds)
    past_event_factor: float = 0.5

    client_multipliers: Mapping[ClientTier, float] = field(
        default_factory=lambda: _frozen(
            {
                ClientTier.VIP: 2.0,
                ClientTier.HIGH: 1.5,
                ClientTier.MEDIUM: 1.0,
                ClientTier.LOW: 0.8,
            }
        )
    )

    staleness_multipliers: StalenessMultipliers = field(default_factory=StalenessMultipliers)
    staleness_thresholds: StalenessThresholds = field(default_factory=StalenessThresholds)
    momentum_multipliers: MomentumMultipliers = field(default_factory=MomentumMultipliers)

    category_boosts: Mapping[MessageCategory, float] = field(
        default_factory=lambda: _frozen(
            {
                MessageCategory.CLIENT_PIPELINE: 1.5,
                MessageCategory.BUSINESS_WORK_GENERAL: 1.3,
                MessageCategory.FAMILY_HEALTH_APPOINTMENTS: 1.3,
                MessageCategory.FAMILY_KIDS_SCHOOL: 1.25,
                MessageCategory.FINANCE: 1.2,
                MessageCategory.PERSONAL_FRIENDS_FAMILY: 1.2,
                MessageCategory.TRAVEL: 1.15,
                MessageCategory.LOCAL: 0.8,
                MessageCategory.SHOPPING: 0.6,
                MessageCategory.NEWS_POLITICS: 0.5,
                MessageCategory.NEWSLETTERS_GENERAL: 0.4,
                MessageCategory.PRODUCT_UPDATES: 0.4,
                MessageCategory.UNKNOWN: 1.0,
            }
        )
    )
    signal_multipliers: Mapping[SignalStrength, float] = field(
        default_factory=lambda: _frozen(
            {
                SignalStrength.HIGH: 1.5,
                SignalStrength.MEDIUM: 1.0,
                SignalStrength.LOW: 0.5,
                SignalStrength.NOISE: 0.05,
            }
        )
    )
    reply_multipliers: Mapping[ReplyWorthiness, float] = field(
        default_factory=lambda: _frozen(
            {
                ReplyWorthiness.MUST_REPLY: 1.5,
                ReplyWorthiness.SHOULD_REPLY: 1.25,
                ReplyWorthiness.OPTIONAL_REPLY: 1.0,
                ReplyWorthiness.NO_REPLY: 0.8,
            }
        )
    )
    date_type_weights: Mapping[DateType, float] = field(
        default_factory=lambda: _frozen(
            {
                DateType.DEADLINE: 1.6,
                DateType.PAYMENT_DUE: 1.5,
                DateType.EXPIRATION: 1.4,
                DateType.APPOINTMENT: 1.3,
                DateType.FOLLOW_UP: 1.2,
                DateType.EVENT: 1.2,
                DateType.BIRTHDAY: 1.0,
                DateType.REMINDER: 1.0,
                DateType.ANNIVERSARY: 0.9,
                DateType.RECURRING: 0.7,
                DateType.OTHER: 0.7,
            }
        )
    )
    # Applied when a classifier value is missing or unrecognized
    neutral_multiplier: float = 1.0

    unread_boost: float = 1.2
    urgency_weight: float = 0.15
    rsvp_boost: float = 1.3
    recurring_reduction: float = 0.7
    low_confidence_threshold: float = 0.7
    low_confidence_reduction: float = 0.85

    # Extracted dates share the "event" column
    time_context_boosts: Mapping[TimeContext, Mapping[ItemKind, float]] = field(
        default_factory=lambda: _frozen(
            {
                TimeContext.MORNING: _frozen(
                    {ItemKind.TASK: 1.2, ItemKind.MESSAGE: 1.1, ItemKind.EVENT: 1.3}
                ),
                TimeContext.AFTERNOON: _frozen(
                    {ItemKind.TASK: 1.0, ItemKind.MESSAGE: 1.2, ItemKind.EVENT: 1.0}
                ),
                TimeContext.EVENING: _frozen(
                    {ItemKind.TASK: 0.9, ItemKind.MESSAGE: 0.8, ItemKind.EVENT: 1.4}
                ),
            }
        )
    )

    friday_staleness_threshold: float = 1.1
    rationale_staleness_threshold: float = 1.2
    vip_rationale_threshold: float = 2.0

    fetch_limits: FetchLimits = field(default_factory=FetchLimits)
    max_age_days: int = 14
    forward_window_days: int = 7
    default_hour: int = 9
    timezone: tzinfo = UTC


DEFAULT_SCORING_CONFIG = HubScoringConfig()
