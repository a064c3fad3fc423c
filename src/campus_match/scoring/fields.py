"""Per-field scoring rules.

Each rule compares one field of the requesting profile against the same field
of a candidate and returns a signed contribution. Missing values contribute
nothing; malformed values are logged and also contribute nothing so one bad
record never aborts a ranking pass.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from campus_match.models.profile import Profile
from campus_match.models.scheme import FieldDefinition, FieldKind
from campus_match.scoring.similarity import jaccard
from campus_match.utils.normalize import (
    MalformedValueError,
    coerce_flag,
    coerce_number,
    coerce_range,
    coerce_string_set,
    normalize_text,
)

logger = logging.getLogger(__name__)


class FieldScorer:
    """Score a single field for one (self, candidate) pair.

    Dispatches on the field kind. The weight passed in is the effective
    (priority-boosted) weight; the boolean-preference penalty is read from the
    field definition and is never boosted.
    """

    def __init__(self) -> None:
        self._rules: dict[FieldKind, Callable[..., float]] = {
            FieldKind.CATEGORICAL: self._score_categorical,
            FieldKind.NUMERIC_RANGE: self._score_numeric_range,
            FieldKind.BOOLEAN_PREFERENCE: self._score_boolean_preference,
            FieldKind.CLOSENESS: self._score_closeness,
            FieldKind.SET: self._score_set,
        }

    def score(
        self,
        definition: FieldDefinition,
        profile: Profile,
        candidate: Profile,
        weight: float,
        case_sensitive: bool = False,
    ) -> float:
        """Compute one field's contribution.

        Args:
            definition: Field being scored.
            profile: The requesting ("self") profile.
            candidate: The profile being compared.
            weight: Effective weight after priority boost.
            case_sensitive: Compare text values without casefolding.

        Returns:
            The contribution; 0.0 for missing or malformed values.
        """
        rule = self._rules[definition.kind]
        try:
            return rule(definition, profile, candidate, weight, case_sensitive)
        except MalformedValueError as e:
            logger.warning(
                f"Ignoring malformed '{definition.name}' value "
                f"(profile={profile.id}, candidate={candidate.id}): {e}"
            )
            return 0.0

    def _score_categorical(
        self,
        definition: FieldDefinition,
        profile: Profile,
        candidate: Profile,
        weight: float,
        case_sensitive: bool,
    ) -> float:
        """Full weight on an exact match."""
        mine = normalize_text(profile.lookup(definition.lookup_keys), case_sensitive)
        theirs = normalize_text(candidate.lookup(definition.lookup_keys), case_sensitive)
        if mine is not None and theirs is not None and mine == theirs:
            return weight
        return 0.0

    def _score_numeric_range(
        self,
        definition: FieldDefinition,
        profile: Profile,
        candidate: Profile,
        weight: float,
        case_sensitive: bool,
    ) -> float:
        """Binary overlap test on two [min, max] ranges."""
        mine = self._read_range(definition, profile)
        theirs = self._read_range(definition, candidate)
        if mine is None or theirs is None:
            return 0.0

        (my_min, my_max), (their_min, their_max) = mine, theirs
        if my_max >= their_min and their_max >= my_min:
            return weight * definition.range_multiplier
        return 0.0

    def _score_boolean_preference(
        self,
        definition: FieldDefinition,
        profile: Profile,
        candidate: Profile,
        weight: float,
        case_sensitive: bool,
    ) -> float:
        """Reward a match or apply the fixed penalty, only if self opted in."""
        flag = profile.values.get(definition.preference_attribute or "")
        if not coerce_flag(flag):
            return 0.0

        mine = normalize_text(profile.lookup(definition.lookup_keys), case_sensitive)
        theirs = normalize_text(candidate.lookup(definition.lookup_keys), case_sensitive)
        if mine is not None and theirs is not None and mine == theirs:
            return weight
        return -definition.penalty

    def _score_closeness(
        self,
        definition: FieldDefinition,
        profile: Profile,
        candidate: Profile,
        weight: float,
        case_sensitive: bool,
    ) -> float:
        """Full weight when equal, half when one step apart."""
        mine = coerce_number(profile.lookup(definition.lookup_keys))
        theirs = coerce_number(candidate.lookup(definition.lookup_keys))
        if mine is None or theirs is None:
            return 0.0

        diff = abs(mine - theirs)
        if diff == 0:
            return weight
        if diff == 1:
            return weight / 2
        return 0.0

    def _score_set(
        self,
        definition: FieldDefinition,
        profile: Profile,
        candidate: Profile,
        weight: float,
        case_sensitive: bool,
    ) -> float:
        """Jaccard similarity scaled by weight."""
        mine = coerce_string_set(profile.lookup(definition.lookup_keys), case_sensitive)
        theirs = coerce_string_set(candidate.lookup(definition.lookup_keys), case_sensitive)
        return jaccard(mine, theirs) * weight

    @staticmethod
    def _read_range(definition: FieldDefinition, profile: Profile) -> tuple[float, float] | None:
        """Read a range from a pair attribute or from separate min/max columns."""
        pair: Any = profile.lookup(definition.lookup_keys)
        if pair is not None:
            return coerce_range(pair)

        if definition.min_attribute and definition.max_attribute:
            low = profile.values.get(definition.min_attribute)
            high = profile.values.get(definition.max_attribute)
            if low is None or high is None:
                return None
            return coerce_range((low, high))
        return None
