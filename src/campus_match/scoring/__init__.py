"""Compatibility scoring and ranking for roommate and peer matching.

This module provides a scheme-driven scoring engine that combines:
- Per-field rules (categorical, numeric range, preference, closeness, set)
- Priority boosting of up to three user-selected fields
- Threshold filtering and stable ranking of a candidate pool

Everything here is pure, synchronous computation over caller-supplied data.
"""

from campus_match.scoring.engine import CompatibilityEngine, score_candidate
from campus_match.scoring.fields import FieldScorer
from campus_match.scoring.priorities import (
    MAX_PRIORITIES,
    PRIORITY_MULTIPLIER,
    effective_weight,
    normalize_priorities,
    toggle_priority,
    validate_priorities,
)
from campus_match.scoring.ranker import MatchRanker, rank_candidates
from campus_match.scoring.similarity import intersection, jaccard

__all__ = [
    "CompatibilityEngine",
    "FieldScorer",
    "MAX_PRIORITIES",
    "MatchRanker",
    "PRIORITY_MULTIPLIER",
    "effective_weight",
    "intersection",
    "jaccard",
    "normalize_priorities",
    "rank_candidates",
    "score_candidate",
    "toggle_priority",
    "validate_priorities",
]
