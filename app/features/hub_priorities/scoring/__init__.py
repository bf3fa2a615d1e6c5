"""
Hub priority scoring.

Immutable configuration, factor lookups, per-kind scorers, rationale rules
and ranking. Everything here is pure and synchronous.
"""

from .config import DEFAULT_SCORING_CONFIG, HubScoringConfig
from .ranking import rank, score_all
from .scorers import ScoringContext, score_candidate

__all__ = [
    "DEFAULT_SCORING_CONFIG",
    "HubScoringConfig",
    "ScoringContext",
    "rank",
    "score_all",
    "score_candidate",
]
