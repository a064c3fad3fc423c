"""Candidate filtering, ranking and truncation."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from campus_match.models.profile import Profile
from campus_match.models.request import HardFilter
from campus_match.models.result import ScoredResult
from campus_match.models.scheme import ScoringScheme
from campus_match.scoring.engine import CompatibilityEngine
from campus_match.scoring.priorities import validate_priorities
from campus_match.utils.normalize import MalformedValueError, normalize_text

logger = logging.getLogger(__name__)


class MatchRanker:
    """Produce a ranked, filtered and truncated match list.

    Flow:
    1. Drop candidates failing hard filters or the free-text search
    2. Score the rest with the CompatibilityEngine
    3. Drop the self-match and scores below the scheme's inclusion threshold
    4. Stable sort by score, highest first (ties keep input order)
    5. Truncate to the limit
    """

    def __init__(self, engine: CompatibilityEngine | None = None) -> None:
        self.engine = engine or CompatibilityEngine()

    def rank(
        self,
        profile: Profile,
        candidates: Sequence[Profile],
        scheme: ScoringScheme,
        priorities: Iterable[str] | None = None,
        limit: int | None = None,
        filters: Iterable[HardFilter] | None = None,
        search: str | None = None,
    ) -> list[ScoredResult]:
        """Rank candidates against a profile.

        Args:
            profile: The requesting ("self") profile.
            candidates: Candidate pool. Not modified.
            scheme: Scoring scheme to apply.
            priorities: Up to three field names to boost.
            limit: Maximum results; defaults to the scheme's default_limit,
                and no cap when that is unset.
            filters: Attribute equality filters every candidate must pass.
            search: Free-text term matched against the scheme's search attributes.

        Returns:
            Scored results, highest score first.

        Raises:
            SchemeConfigurationError: If a priority names an unknown field.
            ValueError: If limit is negative.
        """
        if limit is not None and limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")

        active = validate_priorities(priorities, scheme)
        hard_filters = list(filters or ())

        pool = [
            candidate
            for candidate in candidates
            if self._passes_filters(candidate, hard_filters, scheme)
            and self._matches_search(candidate, search, scheme)
        ]

        results: list[ScoredResult] = []
        for candidate in pool:
            result = self.engine.score(profile, candidate, scheme, active)
            if result.self_match or not scheme.passes_threshold(result.score):
                continue
            results.append(result)

        results.sort(key=lambda r: r.score, reverse=True)

        cap = limit if limit is not None else scheme.default_limit
        if cap is not None:
            results = results[:cap]

        logger.debug(
            f"Ranked {len(candidates)} candidates with scheme '{scheme.name}': "
            f"{len(pool)} passed filters, {len(results)} returned"
        )
        return results

    @staticmethod
    def _passes_filters(
        candidate: Profile,
        filters: list[HardFilter],
        scheme: ScoringScheme,
    ) -> bool:
        """Check every hard filter against the candidate's raw values.

        A filter with an empty value is inactive.
        """
        for hard_filter in filters:
            try:
                wanted = normalize_text(hard_filter.value, scheme.case_sensitive)
                if wanted is None:
                    continue
                actual = candidate.values.get(hard_filter.attribute)
                if isinstance(actual, (list, tuple, set, frozenset)):
                    present = {normalize_text(item, scheme.case_sensitive) for item in actual}
                    if wanted not in present:
                        return False
                elif normalize_text(actual, scheme.case_sensitive) != wanted:
                    return False
            except MalformedValueError as e:
                logger.warning(
                    f"Excluding candidate {candidate.id}: "
                    f"cannot apply filter on '{hard_filter.attribute}': {e}"
                )
                return False
        return True

    @staticmethod
    def _matches_search(
        candidate: Profile,
        search: str | None,
        scheme: ScoringScheme,
    ) -> bool:
        """Case-insensitive substring search over text and list values."""
        if search is None or not search.strip():
            return True

        term = search.strip().casefold()
        keys = scheme.search_attributes or tuple(candidate.values)
        for key in keys:
            value: Any = candidate.values.get(key)
            if isinstance(value, str) and term in value.casefold():
                return True
            if isinstance(value, (list, tuple, set, frozenset)):
                if any(isinstance(item, str) and term in item.casefold() for item in value):
                    return True
        return False


_default_ranker = MatchRanker()


def rank_candidates(
    profile: Profile,
    candidates: Sequence[Profile],
    scheme: ScoringScheme,
    priorities: Iterable[str] | None = None,
    limit: int | None = None,
    filters: Iterable[HardFilter] | None = None,
    search: str | None = None,
) -> list[ScoredResult]:
    """Rank candidates with a shared default ranker."""
    return _default_ranker.rank(
        profile,
        candidates,
        scheme,
        priorities=priorities,
        limit=limit,
        filters=filters,
        search=search,
    )
