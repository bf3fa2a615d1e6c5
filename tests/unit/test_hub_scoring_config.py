from dataclasses import FrozenInstanceError, replace

import pytest

from app.features.hub_priorities.domain.models import (
    ClientTier,
    DateType,
    ItemKind,
    MessageCategory,
    TimeContext,
)
from app.features.hub_priorities.scoring.config import DEFAULT_SCORING_CONFIG, DeadlineMultipliers


def test_default_config_is_immutable():
    with pytest.raises(FrozenInstanceError):
        DEFAULT_SCORING_CONFIG.max_score = 50

    with pytest.raises(TypeError):
        DEFAULT_SCORING_CONFIG.base_weights[ItemKind.TASK] = 99.0


def test_deadline_multipliers_are_ordered_by_urgency():
    m = DEFAULT_SCORING_CONFIG.deadline_multipliers
    assert m.overdue > m.critical > m.urgent > m.soon > m.approaching > m.normal == 1.0


def test_every_enum_value_has_a_weight():
    config = DEFAULT_SCORING_CONFIG
    assert set(config.category_boosts) == set(MessageCategory)
    assert set(config.date_type_weights) == set(DateType)
    assert set(config.client_multipliers) == set(ClientTier)
    assert set(config.time_context_boosts) == set(TimeContext)
    assert set(config.base_weights) == set(ItemKind)


def test_unknown_category_is_neutral():
    assert DEFAULT_SCORING_CONFIG.category_boosts[MessageCategory.UNKNOWN] == 1.0


def test_replace_builds_alternate_config_without_touching_default():
    alternate = replace(
        DEFAULT_SCORING_CONFIG,
        deadline_multipliers=DeadlineMultipliers(overdue=5.0),
        max_age_days=30,
    )

    assert alternate.deadline_multipliers.overdue == 5.0
    assert alternate.max_age_days == 30
    assert DEFAULT_SCORING_CONFIG.deadline_multipliers.overdue == 3.0
    assert DEFAULT_SCORING_CONFIG.max_age_days == 14
