"""
Per-kind scoring behavior.

All cases use a Tuesday 14:00 UTC reference and the afternoon time context,
where task, event and extracted-date boosts are neutral.
"""

from datetime import UTC, date, datetime, time, timedelta

import pytest

from app.features.hub_priorities.domain.models import (
    ClientInfo,
    ClientTier,
    DateType,
    EventCandidate,
    ExtractedDateCandidate,
    ItemKind,
    MessageCandidate,
    MessageCategory,
    ReplyWorthiness,
    SignalStrength,
    SuggestedAction,
    TaskCandidate,
)
from app.features.hub_priorities.scoring.scorers import (
    score_candidate,
    score_event,
    score_extracted_date,
    score_message,
    score_task,
)

NOW = datetime(2025, 6, 10, 14, 0, tzinfo=UTC)

CLIENTS = {
    "vip-contact": ClientInfo(name="Acme Corp", tier=ClientTier.VIP),
    "medium-contact": ClientInfo(name="Beta LLC", tier=ClientTier.MEDIUM),
}


def _task(**overrides):
    values = {
        "id": "t1",
        "title": "Send proposal",
        "description": None,
        "task_type": "respond",
        "urgency_score": 0,
        "deadline": None,
        "status": "pending",
        "created_at": NOW - timedelta(hours=1),
    }
    values.update(overrides)
    return TaskCandidate(**values)


def _extracted(**overrides):
    values = {
        "id": "d1",
        "date_type": DateType.DEADLINE,
        "date": date(2025, 6, 15),
        "time": None,
        "title": "Contract deadline",
        "priority_score": 5,
        "confidence": 0.95,
    }
    values.update(overrides)
    return ExtractedDateCandidate(**values)


def _message(**overrides):
    values = {
        "id": "m1",
        "subject": "Kickoff next week",
        "snippet": "Can we meet Tuesday?",
        "sender_name": "Dana",
        "sender_email": "dana@example.com",
        "received_at": NOW - timedelta(hours=2),
    }
    values.update(overrides)
    return MessageCandidate(**values)


# =================================================================
# TASKS
# =================================================================


def test_urgent_vip_task_scenario(scoring_ctx):
    task = _task(
        urgency_score=9,
        deadline=NOW + timedelta(hours=4),
        contact_id="vip-contact",
        created_at=NOW - timedelta(days=1),
    )

    item = score_task(task, scoring_ctx(clients=CLIENTS))

    assert item.factors.deadline == 2.5
    assert item.factors.client == 2.0
    assert item.factors.staleness == 1.0
    assert item.rationale == "Due in 4 hours - act now!"
    assert item.time_remaining == "4 hours"
    assert item.client_name == "Acme Corp"
    assert 0 < item.score <= 100


def test_overdue_task_outranks_far_deadline(scoring_ctx):
    ctx = scoring_ctx()
    overdue = score_task(_task(deadline=NOW - timedelta(hours=6)), ctx)
    far = score_task(_task(deadline=NOW + timedelta(days=10)), ctx)

    assert overdue.factors.deadline > far.factors.deadline
    assert overdue.score > far.score
    assert overdue.rationale == "This is overdue and needs immediate attention."


def test_vip_task_outranks_medium_task(scoring_ctx):
    ctx = scoring_ctx(clients=CLIENTS)
    vip = score_task(_task(contact_id="vip-contact"), ctx)
    medium = score_task(_task(contact_id="medium-contact"), ctx)

    assert vip.score > medium.score
    assert medium.factors.client == 1.0
    assert vip.rationale == "From VIP client Acme Corp - high relationship value."


def test_task_without_deadline_keeps_neutral_deadline_factor(scoring_ctx):
    item = score_task(_task(), scoring_ctx())

    assert item.factors.deadline == 1.0
    assert item.deadline is None
    assert item.time_remaining is None
    # 15 base * 4 scale
    assert item.score == 60
    assert item.rationale == "Pending task extracted from your emails."


def test_stale_task_mentions_age(scoring_ctx):
    item = score_task(_task(created_at=NOW - timedelta(days=6)), scoring_ctx())

    assert item.factors.staleness == 1.4
    assert item.rationale.startswith("Sitting for 6 days")


def test_task_href_and_action(scoring_ctx):
    item = score_task(_task(task_type="Decide"), scoring_ctx())

    assert item.id == "task-t1"
    assert item.kind is ItemKind.TASK
    assert item.href == "/tasks?task=t1"
    assert item.suggested_action is SuggestedAction.DECIDE


# =================================================================
# EXTRACTED DATES
# =================================================================


def test_recurring_extracted_date_scores_lower(scoring_ctx):
    ctx = scoring_ctx()
    single = score_extracted_date(_extracted(is_recurring=False), ctx)
    recurring = score_extracted_date(_extracted(is_recurring=True), ctx)

    assert single.score > recurring.score


def test_low_confidence_extracted_date_scores_lower(scoring_ctx):
    ctx = scoring_ctx()
    confident = score_extracted_date(_extracted(confidence=0.95), ctx)
    unsure = score_extracted_date(_extracted(confidence=0.5), ctx)

    assert confident.score > unsure.score


def test_birthday_scenario(scoring_ctx):
    item = score_extracted_date(
        _extracted(
            date_type=DateType.BIRTHDAY,
            date=date(2025, 6, 13),
            title="Sam's birthday",
            related_entity="Sam",
            confidence=0.85,
            priority_score=None,
        ),
        scoring_ctx(),
    )

    assert "birthday" in item.rationale.lower()
    assert item.rationale == "Sam's birthday is in 3 days - send your wishes."
    assert item.suggested_action is SuggestedAction.REVIEW


def test_overdue_deadline_scenario(scoring_ctx):
    ctx = scoring_ctx()
    overdue = score_extracted_date(_extracted(date=date(2025, 6, 9)), ctx)
    upcoming = score_extracted_date(_extracted(date=date(2025, 6, 15)), ctx)

    assert "overdue" in overdue.time_remaining.lower()
    assert overdue.score > upcoming.score


def test_extracted_date_actions_and_href(scoring_ctx):
    ctx = scoring_ctx()
    expected = {
        DateType.DEADLINE: SuggestedAction.DECIDE,
        DateType.APPOINTMENT: SuggestedAction.ATTEND,
        DateType.FOLLOW_UP: SuggestedAction.RESPOND,
        DateType.BIRTHDAY: SuggestedAction.REVIEW,
    }
    for date_type, action in expected.items():
        item = score_extracted_date(_extracted(id="abc-42", date_type=date_type), ctx)
        assert item.suggested_action is action
        assert "/calendar" in item.href
        assert "abc-42" in item.href


def test_unparseable_extracted_date_falls_back_to_today(scoring_ctx):
    item = score_extracted_date(_extracted(date="someday", time="later"), scoring_ctx())

    # Today 09:00 is already past at 14:00
    assert item.deadline == "2025-06-10T09:00:00+00:00"
    assert item.factors.deadline == 3.0


def test_extracted_date_uses_time_of_day(scoring_ctx):
    item = score_extracted_date(
        _extracted(date=date(2025, 6, 10), time=time(16, 0)), scoring_ctx()
    )

    assert item.time_remaining == "2 hours"
    assert item.rationale == "Deadline due in 2 hours - act now!"


# =================================================================
# EVENTS
# =================================================================


def test_event_tomorrow_is_urgent(scoring_ctx):
    event = EventCandidate(
        id="e1",
        title="Site walk",
        description=None,
        start_date=date(2025, 6, 11),
        start_time=time(10, 0),
    )

    item = score_event(event, scoring_ctx())

    assert item.factors.deadline == 2.0
    assert item.time_remaining == "Today"
    assert item.rationale == "Happening today - prepare now!"
    assert item.href == "/calendar?event=e1"
    assert item.suggested_action is SuggestedAction.REVIEW


def test_started_event_is_dampened(scoring_ctx):
    event = EventCandidate(
        id="e2",
        title="Standup",
        description=None,
        start_date=date(2025, 6, 10),
        start_time="10:00",
    )

    item = score_event(event, scoring_ctx())

    assert item.factors.deadline == 0.5
    assert item.time_remaining == "Now"
    assert item.score == 24


def test_rsvp_pending_event_is_boosted_and_flagged(scoring_ctx):
    kwargs = {
        "id": "e3",
        "title": "Client dinner",
        "description": None,
        "start_date": date(2025, 6, 14),
        "start_time": None,
    }
    ctx = scoring_ctx()
    pending = score_event(EventCandidate(rsvp_required=True, **kwargs), ctx)
    accepted = score_event(
        EventCandidate(rsvp_required=True, rsvp_status="accepted", **kwargs), ctx
    )

    assert pending.rationale.startswith("RSVP needed: ")
    assert not accepted.rationale.startswith("RSVP needed: ")
    assert pending.score > accepted.score
    assert pending.suggested_action is SuggestedAction.ATTEND


# =================================================================
# MESSAGES
# =================================================================


def test_unread_message_score(scoring_ctx):
    item = score_message(_message(), scoring_ctx())

    # 10 base * 1.2 unread * 1.2 afternoon * 5 scale
    assert item.score == 72
    assert item.href == "/inbox?email=m1"
    assert item.sender_email == "dana@example.com"


def test_message_classifier_signals_shift_score(scoring_ctx):
    ctx = scoring_ctx()
    noise = score_message(
        _message(category=MessageCategory.NEWSLETTERS_GENERAL, signal_strength=SignalStrength.NOISE),
        ctx,
    )
    client = score_message(
        _message(
            category=MessageCategory.CLIENT_PIPELINE,
            reply_worthiness=ReplyWorthiness.MUST_REPLY,
            is_read=True,
        ),
        ctx,
    )

    assert client.score > noise.score
    assert client.suggested_action is SuggestedAction.RESPOND
    assert client.rationale == "Someone is waiting on your reply."


def test_message_quick_action_maps_to_suggested_action(scoring_ctx):
    item = score_message(_message(quick_action="calendar"), scoring_ctx())
    assert item.suggested_action is SuggestedAction.SCHEDULE


def test_message_with_bad_timestamp_raises(scoring_ctx):
    with pytest.raises(ValueError):
        score_message(_message(received_at="yesterday-ish"), scoring_ctx())


def test_score_candidate_dispatches_by_kind(scoring_ctx):
    ctx = scoring_ctx()
    assert score_candidate(_message(), ctx).kind is ItemKind.MESSAGE
    assert score_candidate(_task(), ctx).kind is ItemKind.TASK
    assert score_candidate(_extracted(), ctx).kind is ItemKind.EXTRACTED_DATE


def test_score_is_capped_but_factors_are_not(scoring_ctx):
    task = _task(
        urgency_score=10,
        deadline=NOW - timedelta(hours=2),
        contact_id="vip-contact",
    )

    item = score_task(task, scoring_ctx(clients=CLIENTS))

    # 37.5 base * 3.0 overdue * 2.0 vip * 4 scale = 900 before the cap
    assert item.score == 100
    assert item.factors.base == 37.5
    assert item.factors.deadline == 3.0
    assert item.factors.client == 2.0
