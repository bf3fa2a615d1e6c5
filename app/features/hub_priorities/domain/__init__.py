"""
Domain subpackage for the hub priorities feature.
"""

from .models import (
    Candidate,
    ClientInfo,
    ClientLookup,
    EventCandidate,
    ExtractedDateCandidate,
    ItemKind,
    MessageCandidate,
    PriorityOptions,
    PriorityResult,
    PriorityStats,
    ScoredItem,
    ScoreFactors,
    TaskCandidate,
)

__all__ = [
    "Candidate",
    "ClientInfo",
    "ClientLookup",
    "EventCandidate",
    "ExtractedDateCandidate",
    "ItemKind",
    "MessageCandidate",
    "PriorityOptions",
    "PriorityResult",
    "PriorityStats",
    "ScoredItem",
    "ScoreFactors",
    "TaskCandidate",
]
