"""Match result models."""

from typing import Any, TypedDict

from pydantic import BaseModel, Field

from campus_match.models.profile import Profile

# Reserved score for a profile compared with itself
SELF_MATCH_SCORE = -1.0


class MatchRecord(TypedDict):
    """Serializable form of a scored candidate for API and CLI output."""

    candidate_id: str
    score: float
    matched_fields: list[str]
    breakdown: dict[str, float]


class ScoredResult(BaseModel):
    """Compatibility score of one candidate against the requesting profile."""

    candidate: Profile
    score: float
    matched_fields: list[str] = Field(default_factory=list)
    breakdown: dict[str, float] = Field(default_factory=dict)

    # Set only for the self-comparison sentinel, so a legitimately computed
    # score of -1 is never mistaken for it
    self_match: bool = False

    @property
    def candidate_id(self) -> str:
        return self.candidate.id

    def to_record(self, precision: int | None = None) -> MatchRecord:
        """Convert to a plain dict for output.

        Args:
            precision: Round scores to this many decimals if given.
        """

        def _round(value: float) -> float:
            return round(value, precision) if precision is not None else value

        return MatchRecord(
            candidate_id=self.candidate_id,
            score=_round(self.score),
            matched_fields=list(self.matched_fields),
            breakdown={name: _round(value) for name, value in self.breakdown.items()},
        )

    def candidate_value(self, key: str) -> Any:
        """Read a raw value from the candidate profile for display."""
        return self.candidate.values.get(key)
