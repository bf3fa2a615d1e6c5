"""
Candidate fetchers and the client importance resolver.

Each fetch is independent and degrades to an empty result on failure so a
single broken source never blocks the ranking of the others.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta
from typing import Any, TypeVar

from app.features.hub_priorities.domain.models import (
    ClientInfo,
    ClientLookup,
    ClientTier,
    EventCandidate,
    ExtractedDateCandidate,
    MessageCandidate,
    TaskCandidate,
    coerce_enum,
)
from app.features.hub_priorities.repository.candidate_repository import HubCandidateRepository
from app.features.hub_priorities.scoring.config import DEFAULT_SCORING_CONFIG, HubScoringConfig
from app.features.hub_priorities.scoring.factors import window_bounds
from app.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)

C = TypeVar("C")


class CandidateFetcher:
    """Queries the record store for each candidate kind."""

    def __init__(
        self,
        repository: Any = HubCandidateRepository,
        config: HubScoringConfig = DEFAULT_SCORING_CONFIG,
    ):
        self.repository = repository
        self.config = config

    async def fetch_messages(self, user_id: str, now: datetime) -> list[MessageCandidate]:
        cutoff = now - timedelta(days=self.config.max_age_days)
        return await self._fetch(
            "messages",
            user_id,
            lambda: self.repository.fetch_messages(
                user_id, cutoff, self.config.fetch_limits.messages
            ),
            MessageCandidate.from_row,
        )

    async def fetch_tasks(self, user_id: str, now: datetime) -> list[TaskCandidate]:
        cutoff = now - timedelta(days=self.config.max_age_days)
        return await self._fetch(
            "tasks",
            user_id,
            lambda: self.repository.fetch_tasks(user_id, cutoff, self.config.fetch_limits.tasks),
            TaskCandidate.from_row,
        )

    async def fetch_events(self, user_id: str, now: datetime) -> list[EventCandidate]:
        start, end = window_bounds(now, self.config)
        return await self._fetch(
            "events",
            user_id,
            lambda: self.repository.fetch_events(
                user_id, start, end, self.config.fetch_limits.events
            ),
            EventCandidate.from_row,
        )

    async def fetch_extracted_dates(
        self, user_id: str, now: datetime
    ) -> list[ExtractedDateCandidate]:
        start, end = window_bounds(now, self.config)
        return await self._fetch(
            "extracted_dates",
            user_id,
            lambda: self.repository.fetch_extracted_dates(
                user_id, start, end, now, self.config.fetch_limits.extracted_dates
            ),
            ExtractedDateCandidate.from_row,
        )

    async def resolve_clients(self, user_id: str) -> ClientLookup:
        """Map active client contacts to their name and priority tier."""
        try:
            rows = await self.repository.fetch_clients(user_id)
        except Exception as e:
            logger.warning(
                "Failed to fetch clients, using neutral client factors",
                user_id=user_id,
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
            return {}

        clients: ClientLookup = {}
        for row in rows or []:
            try:
                tier = coerce_enum(ClientTier, row.get("client_priority"), ClientTier.MEDIUM)
                clients[str(row["id"])] = ClientInfo(name=row.get("name") or "", tier=tier)
            except (AttributeError, KeyError, TypeError) as e:
                logger.warning(
                    "Skipping malformed client row",
                    user_id=user_id,
                    error=str(e),
                    error_type=type(e).__name__,
                )
        return clients

    async def _fetch(
        self,
        source: str,
        user_id: str,
        query: Callable[[], Awaitable[list[dict]]],
        convert: Callable[[dict], C],
    ) -> list[C]:
        try:
            rows = await query()
        except Exception as e:
            logger.warning(
                "Failed to fetch hub candidates",
                source=source,
                user_id=user_id,
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
            return []

        candidates: list[C] = []
        for row in rows or []:
            try:
                candidates.append(convert(row))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(
                    "Skipping malformed hub candidate row",
                    source=source,
                    user_id=user_id,
                    candidate_id=row.get("id") if isinstance(row, dict) else None,
                    error=str(e),
                )
        return candidates
