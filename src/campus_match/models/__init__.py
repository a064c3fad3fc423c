"""Data models for Campus Match."""

from campus_match.models.profile import Profile
from campus_match.models.request import HardFilter, MatchRequest
from campus_match.models.result import SELF_MATCH_SCORE, MatchRecord, ScoredResult
from campus_match.models.scheme import FieldDefinition, FieldKind, ScoringScheme

__all__ = [
    "FieldDefinition",
    "FieldKind",
    "HardFilter",
    "MatchRecord",
    "MatchRequest",
    "Profile",
    "SELF_MATCH_SCORE",
    "ScoredResult",
    "ScoringScheme",
]
