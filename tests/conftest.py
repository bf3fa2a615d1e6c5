from datetime import UTC, datetime

import pytest

from app.auth.verify import auth_dependency
from app.features.hub_priorities.domain.models import TimeContext
from app.features.hub_priorities.scoring.scorers import ScoringContext

# Tuesday afternoon; afternoon boosts are neutral for tasks, events and extracted dates
NOW = datetime(2025, 6, 10, 14, 0, tzinfo=UTC)


@pytest.fixture
def auth_override():
    def _override():
        return {"sub": "user-123"}

    return _override


@pytest.fixture
def apply_auth_override(auth_override):
    def _apply(app):
        app.dependency_overrides[auth_dependency] = auth_override

    return _apply


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def scoring_ctx():
    def _build(**overrides):
        values = {"now": NOW, "time_context": TimeContext.AFTERNOON}
        values.update(overrides)
        return ScoringContext(**values)

    return _build


class FakeCandidateRepository:
    """In-memory stand-in for HubCandidateRepository."""

    def __init__(
        self,
        messages=None,
        tasks=None,
        events=None,
        extracted_dates=None,
        clients=None,
        failing=(),
    ):
        self.rows = {
            "messages": messages or [],
            "tasks": tasks or [],
            "events": events or [],
            "extracted_dates": extracted_dates or [],
            "clients": clients or [],
        }
        self.failing = set(failing)
        self.calls: dict[str, tuple] = {}

    async def _rows(self, source, *args):
        self.calls[source] = args
        if source in self.failing:
            raise RuntimeError(f"{source} unavailable")
        return self.rows[source]

    async def fetch_messages(self, user_id, cutoff, limit):
        return await self._rows("messages", user_id, cutoff, limit)

    async def fetch_tasks(self, user_id, cutoff, limit):
        return await self._rows("tasks", user_id, cutoff, limit)

    async def fetch_events(self, user_id, start, end, limit):
        return await self._rows("events", user_id, start, end, limit)

    async def fetch_extracted_dates(self, user_id, start, end, now, limit):
        return await self._rows("extracted_dates", user_id, start, end, now, limit)

    async def fetch_clients(self, user_id):
        return await self._rows("clients", user_id)


@pytest.fixture
def fake_repository():
    return FakeCandidateRepository
