"""
Aggregation and ranking of scored hub items.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import replace

from app.features.hub_priorities.domain.models import (
    Candidate,
    DayContext,
    ItemKind,
    ScoredItem,
    candidate_kind,
)
from app.infrastructure.observability.logging import get_logger

from .config import HubScoringConfig

logger = get_logger(__name__)

# Equal scores: tasks first, then extracted dates, events, messages
KIND_ORDER = {
    ItemKind.TASK: 0,
    ItemKind.EXTRACTED_DATE: 1,
    ItemKind.EVENT: 2,
    ItemKind.MESSAGE: 3,
}

FRIDAY_PREFIX = "Friday cleanup: "


def score_all(
    candidates: Iterable[Candidate], scorer: Callable[[Candidate], ScoredItem]
) -> list[ScoredItem]:
    """
    Score each candidate independently.

    A candidate whose scoring raises is logged with its id and kind and left
    out; the rest of the batch is unaffected.
    """
    scored: list[ScoredItem] = []
    for candidate in candidates:
        try:
            item = scorer(candidate)
        except Exception as e:
            logger.warning(
                "Failed to score hub candidate",
                candidate_id=getattr(candidate, "id", None),
                kind=candidate_kind(candidate).value,
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
            continue
        scored.append(item)
    return scored


def sort_key(item: ScoredItem) -> tuple[int, int, str]:
    return (-item.score, KIND_ORDER[item.kind], item.original_id)


def rank(items: Iterable[ScoredItem], limit: int) -> list[ScoredItem]:
    """Drop non-positive scores, sort descending and keep the top ``limit``."""
    if limit <= 0:
        return []
    positive = [item for item in items if item.score > 0]
    positive.sort(key=sort_key)
    return positive[:limit]


def apply_day_context(
    items: list[ScoredItem], day_context: DayContext, config: HubScoringConfig
) -> list[ScoredItem]:
    """On Fridays, flag stale items as end-of-week cleanup. Scores are untouched."""
    if day_context is not DayContext.FRIDAY:
        return items
    return [
        (
            replace(item, rationale=f"{FRIDAY_PREFIX}{item.rationale}")
            if item.factors.staleness > config.friday_staleness_threshold
            else item
        )
        for item in items
    ]
