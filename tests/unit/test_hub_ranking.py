from app.features.hub_priorities.domain.models import (
    DayContext,
    ItemKind,
    MessageCandidate,
    ScoredItem,
    ScoreFactors,
)
from app.features.hub_priorities.scoring.config import DEFAULT_SCORING_CONFIG
from app.features.hub_priorities.scoring.ranking import (
    FRIDAY_PREFIX,
    apply_day_context,
    rank,
    score_all,
)


def _item(original_id: str, score: int, kind: ItemKind = ItemKind.TASK, staleness: float = 1.0):
    return ScoredItem(
        id=f"{kind.value}-{original_id}",
        kind=kind,
        title=original_id,
        description="",
        rationale="Pending task extracted from your emails.",
        score=score,
        factors=ScoreFactors(base=15.0, deadline=1.0, client=1.0, staleness=staleness, momentum=1.0),
        original_id=original_id,
        href=f"/tasks?task={original_id}",
        date="2025-06-10",
    )


def test_rank_sorts_descending_and_truncates():
    items = [_item("a", 40), _item("b", 90), _item("c", 70), _item("d", 10)]

    ranked = rank(items, limit=3)

    assert [i.original_id for i in ranked] == ["b", "c", "a"]


def test_rank_drops_non_positive_scores():
    ranked = rank([_item("a", 0), _item("b", 5)], limit=5)
    assert [i.original_id for i in ranked] == ["b"]


def test_rank_with_zero_limit_is_empty():
    assert rank([_item("a", 50)], limit=0) == []


def test_rank_tie_break_is_kind_then_id():
    items = [
        _item("m1", 60, ItemKind.MESSAGE),
        _item("e1", 60, ItemKind.EVENT),
        _item("t2", 60, ItemKind.TASK),
        _item("x1", 60, ItemKind.EXTRACTED_DATE),
        _item("t1", 60, ItemKind.TASK),
    ]

    ranked = rank(items, limit=5)

    assert [i.original_id for i in ranked] == ["t1", "t2", "x1", "e1", "m1"]
    # Input order does not matter
    assert rank(list(reversed(items)), limit=5) == ranked


def test_score_all_skips_failures():
    candidates = [
        MessageCandidate(id="ok", subject=None, snippet=None, sender_name=None,
                         sender_email=None, received_at="2025-06-10"),
        MessageCandidate(id="bad", subject=None, snippet=None, sender_name=None,
                         sender_email=None, received_at=None),
    ]

    def scorer(candidate):
        if candidate.received_at is None:
            raise ValueError("timestamp is missing")
        return _item(candidate.id, 10, ItemKind.MESSAGE)

    scored = score_all(candidates, scorer)

    assert [i.original_id for i in scored] == ["ok"]


def test_friday_prefixes_stale_items_only():
    items = [_item("fresh", 50, staleness=1.0), _item("stale", 40, staleness=1.25)]

    adjusted = apply_day_context(items, DayContext.FRIDAY, DEFAULT_SCORING_CONFIG)

    assert not adjusted[0].rationale.startswith(FRIDAY_PREFIX)
    assert adjusted[1].rationale.startswith(FRIDAY_PREFIX)
    assert [i.score for i in adjusted] == [50, 40]


def test_weekday_leaves_items_untouched():
    items = [_item("stale", 40, staleness=1.4)]
    assert apply_day_context(items, DayContext.WEEKDAY, DEFAULT_SCORING_CONFIG) == items
