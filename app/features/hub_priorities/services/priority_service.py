"""
Hub priority service - surfaces the few items that most deserve attention.

Messages, tasks, calendar events and extracted dates are fetched
concurrently, scored with per-kind multiplicative factor chains, merged and
ranked. No scores are persisted; each call is a fresh computation from the
record store and the supplied ``now``.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import replace
from datetime import UTC, datetime
from functools import partial
from zoneinfo import ZoneInfo

from app.config import settings
from app.features.hub_priorities.domain.models import (
    PriorityOptions,
    PriorityResult,
    PriorityStats,
)
from app.features.hub_priorities.scoring.config import DEFAULT_SCORING_CONFIG, HubScoringConfig
from app.features.hub_priorities.scoring.factors import (
    MomentumProvider,
    get_day_context,
    get_time_context,
    neutral_momentum,
)
from app.features.hub_priorities.scoring.ranking import apply_day_context, rank, score_all
from app.features.hub_priorities.scoring.scorers import ScoringContext, score_candidate
from app.infrastructure.observability.logging import get_logger

from .fetchers import CandidateFetcher

logger = get_logger(__name__)


class HubPriorityService:
    DEFAULT_LIMIT = 3

    def __init__(
        self,
        fetcher: CandidateFetcher | None = None,
        config: HubScoringConfig = DEFAULT_SCORING_CONFIG,
        momentum: MomentumProvider = neutral_momentum,
    ):
        self.config = config
        self.fetcher = fetcher or CandidateFetcher(config=config)
        self.momentum = momentum

    async def get_top_priority_items(
        self,
        user_id: str,
        options: PriorityOptions | None = None,
        *,
        now: datetime | None = None,
    ) -> PriorityResult:
        """
        Rank the user's pending items across all sources.

        Args:
            user_id: User to rank items for
            options: Limit and optional time/day context overrides
            now: Reference instant; defaults to the current UTC time

        Returns:
            PriorityResult with at most ``options.limit`` items, sorted by score
        """
        started = time.perf_counter()
        options = options or PriorityOptions(limit=self.DEFAULT_LIMIT)
        now = now or datetime.now(UTC)
        if now.tzinfo is None:
            # Same reading as naive store timestamps
            now = now.replace(tzinfo=self.config.timezone)
        time_context = options.time_context or get_time_context(now, self.config.timezone)
        day_context = options.day_context or get_day_context(now, self.config.timezone)

        logger.info(
            "Calculating hub priorities",
            user_id=user_id,
            limit=options.limit,
            time_context=time_context.value,
            day_context=day_context.value,
        )

        messages, tasks, events, extracted_dates, clients = await asyncio.gather(
            self.fetcher.fetch_messages(user_id, now),
            self.fetcher.fetch_tasks(user_id, now),
            self.fetcher.fetch_events(user_id, now),
            self.fetcher.fetch_extracted_dates(user_id, now),
            self.fetcher.resolve_clients(user_id),
        )

        stats = PriorityStats(
            total_candidates=len(messages) + len(tasks) + len(events) + len(extracted_dates),
            messages_considered=len(messages),
            tasks_considered=len(tasks),
            events_considered=len(events),
            extracted_dates_considered=len(extracted_dates),
        )
        logger.debug(
            "Fetched hub candidates",
            user_id=user_id,
            total_candidates=stats.total_candidates,
            messages=stats.messages_considered,
            tasks=stats.tasks_considered,
            events=stats.events_considered,
            extracted_dates=stats.extracted_dates_considered,
            clients=len(clients),
        )

        ctx = ScoringContext(
            now=now,
            time_context=time_context,
            clients=clients,
            config=self.config,
            momentum=self.momentum,
        )
        scorer = partial(score_candidate, ctx=ctx)

        scored = []
        for batch in (messages, tasks, events, extracted_dates):
            scored.extend(score_all(batch, scorer))

        top = apply_day_context(rank(scored, options.limit), day_context, self.config)
        stats.processing_time_ms = round((time.perf_counter() - started) * 1000, 2)

        logger.info(
            "Hub priorities calculated",
            user_id=user_id,
            scored=len(scored),
            top_item_count=len(top),
            highest_score=top[0].score if top else 0,
            processing_time_ms=stats.processing_time_ms,
        )

        return PriorityResult(
            items=top,
            stats=stats,
            last_updated=now,
            time_context=time_context,
            day_context=day_context,
        )


hub_priority_service = HubPriorityService(
    config=replace(DEFAULT_SCORING_CONFIG, timezone=ZoneInfo(settings.HUB_TIMEZONE))
)
