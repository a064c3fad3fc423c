"""Compatibility scoring of one candidate against the requesting profile."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from campus_match.models.profile import Profile
from campus_match.models.result import SELF_MATCH_SCORE, ScoredResult
from campus_match.models.scheme import FieldKind, ScoringScheme
from campus_match.scoring.fields import FieldScorer
from campus_match.scoring.priorities import effective_weight, validate_priorities
from campus_match.scoring.similarity import intersection
from campus_match.utils.normalize import MalformedValueError, coerce_string_set

logger = logging.getLogger(__name__)


class CompatibilityEngine:
    """Sum weighted field contributions for a (self, candidate) pair.

    The engine holds no per-request state; one instance can score any number
    of candidates under any scheme, from any number of threads.
    """

    def __init__(self, field_scorer: FieldScorer | None = None) -> None:
        self.field_scorer = field_scorer or FieldScorer()

    def score(
        self,
        profile: Profile,
        candidate: Profile,
        scheme: ScoringScheme,
        priorities: Iterable[str] | None = None,
    ) -> ScoredResult:
        """Score one candidate.

        Args:
            profile: The requesting ("self") profile.
            candidate: Profile to compare against.
            scheme: Fields, weights and comparison rules to apply.
            priorities: Up to three field names whose weight is tripled.

        Returns:
            ScoredResult with total score, non-zero fields and per-field breakdown.
            Comparing a profile with itself returns the self-match sentinel.

        Raises:
            SchemeConfigurationError: If a priority names an unknown field.
        """
        active = validate_priorities(priorities, scheme)

        if profile.id == candidate.id:
            return ScoredResult(candidate=candidate, score=SELF_MATCH_SCORE, self_match=True)

        total = 0.0
        breakdown: dict[str, float] = {}
        for definition in scheme.definitions:
            contribution = self.field_scorer.score(
                definition,
                profile,
                candidate,
                effective_weight(definition, active),
                case_sensitive=scheme.case_sensitive,
            )
            if contribution != 0:
                breakdown[definition.name] = contribution
            total += contribution

        return ScoredResult(
            candidate=candidate,
            score=total,
            matched_fields=list(breakdown),
            breakdown=breakdown,
        )

    def shared_values(
        self,
        profile: Profile,
        candidate: Profile,
        scheme: ScoringScheme,
        field_name: str,
    ) -> set[str]:
        """Items both profiles list for a set field, for "Shared: X" badges.

        Raises:
            SchemeConfigurationError: If the scheme has no such field.
        """
        definition = scheme.get_field(field_name)
        if definition.kind is not FieldKind.SET:
            return set()

        try:
            mine = coerce_string_set(profile.lookup(definition.lookup_keys), scheme.case_sensitive)
            theirs = coerce_string_set(
                candidate.lookup(definition.lookup_keys), scheme.case_sensitive
            )
        except MalformedValueError as e:
            logger.warning(f"Cannot compare '{field_name}' values: {e}")
            return set()
        return intersection(mine, theirs)


_default_engine = CompatibilityEngine()


def score_candidate(
    profile: Profile,
    candidate: Profile,
    scheme: ScoringScheme,
    priorities: Iterable[str] | None = None,
) -> ScoredResult:
    """Score one candidate with a shared default engine."""
    return _default_engine.score(profile, candidate, scheme, priorities)
