"""Tests for the MatchRanker."""

import pytest

from campus_match.exceptions import SchemeConfigurationError
from campus_match.models.profile import Profile
from campus_match.models.request import HardFilter
from campus_match.models.scheme import FieldDefinition, FieldKind, ScoringScheme
from campus_match.scoring.ranker import MatchRanker, rank_candidates


@pytest.fixture
def ranker() -> MatchRanker:
    """Create a MatchRanker instance."""
    return MatchRanker()


@pytest.fixture
def flat_scheme() -> ScoringScheme:
    """Single-field scheme for exercising ordering and limits."""
    return ScoringScheme(
        name="flat",
        definitions=(FieldDefinition(name="level", kind=FieldKind.CLOSENESS, weight=2),),
        inclusion_threshold=0.0,
        include_threshold=True,
    )


class TestRoommateRanking:
    """Tests for ranking under the roommate scheme."""

    def test_order_and_exclusions(
        self,
        ranker: MatchRanker,
        roommate_self: Profile,
        roommate_pool: list[Profile],
        roommate_scheme: ScoringScheme,
    ) -> None:
        """cand-2 scores -5 and self is excluded; the rest rank by score."""
        results = ranker.rank(roommate_self, roommate_pool, roommate_scheme, ["budget"])

        assert [r.candidate_id for r in results] == ["cand-1", "cand-3"]
        assert results[0].score == pytest.approx(20 + 1 / 3)
        assert results[1].score == pytest.approx(19 + 1 / 3)

    def test_self_never_included(
        self,
        ranker: MatchRanker,
        roommate_self: Profile,
        roommate_pool: list[Profile],
        roommate_scheme: ScoringScheme,
    ) -> None:
        results = ranker.rank(roommate_self, roommate_pool, roommate_scheme)
        assert roommate_self.id not in {r.candidate_id for r in results}

    def test_zero_scores_dropped(
        self,
        ranker: MatchRanker,
        roommate_scheme: ScoringScheme,
    ) -> None:
        nobody = Profile(id="nobody", values={"gender": "female"})
        results = ranker.rank(
            Profile(id="me", values={"city": "SF"}), [nobody], roommate_scheme
        )
        assert results == []

    def test_default_limit_is_ten(
        self,
        ranker: MatchRanker,
        roommate_scheme: ScoringScheme,
    ) -> None:
        me = Profile(id="me", values={"city": "SF"})
        pool = [Profile(id=f"c{i}", values={"city": "SF"}) for i in range(15)]

        results = ranker.rank(me, pool, roommate_scheme)

        assert len(results) == 10

    def test_explicit_limit_overrides_default(
        self,
        ranker: MatchRanker,
        roommate_scheme: ScoringScheme,
    ) -> None:
        me = Profile(id="me", values={"city": "SF"})
        pool = [Profile(id=f"c{i}", values={"city": "SF"}) for i in range(15)]

        assert len(ranker.rank(me, pool, roommate_scheme, limit=12)) == 12
        assert ranker.rank(me, pool, roommate_scheme, limit=0) == []

    def test_entirely_empty_self_profile(
        self,
        ranker: MatchRanker,
        roommate_pool: list[Profile],
        roommate_scheme: ScoringScheme,
    ) -> None:
        assert ranker.rank(Profile(id="blank"), roommate_pool, roommate_scheme) == []


class TestPeerRanking:
    """Tests for ranking under the peer scheme."""

    def test_order_keeps_zero_scores(
        self,
        ranker: MatchRanker,
        peer_self: Profile,
        peer_pool: list[Profile],
        peer_scheme: ScoringScheme,
    ) -> None:
        results = ranker.rank(peer_self, peer_pool, peer_scheme)

        assert [r.candidate_id for r in results] == ["p-3", "p-2", "p-1"]
        assert results[0].score == pytest.approx(13)
        assert results[1].score == pytest.approx(3 + 4 / 3 + 2)
        assert results[2].score == 0

    def test_no_default_cap(
        self,
        ranker: MatchRanker,
        peer_scheme: ScoringScheme,
    ) -> None:
        me = Profile(id="me", values={"university": "MIT"})
        pool = [Profile(id=f"c{i}", values={"university": "MIT"}) for i in range(25)]
        assert len(ranker.rank(me, pool, peer_scheme)) == 25

    def test_location_filter(
        self,
        ranker: MatchRanker,
        peer_self: Profile,
        peer_pool: list[Profile],
        peer_scheme: ScoringScheme,
    ) -> None:
        results = ranker.rank(
            peer_self,
            peer_pool,
            peer_scheme,
            filters=[HardFilter(attribute="location", value="berkeley")],
        )
        assert [r.candidate_id for r in results] == ["p-3"]

    @pytest.mark.parametrize("value", ["", "  ", None])
    def test_empty_filter_is_inactive(
        self,
        ranker: MatchRanker,
        peer_scheme: ScoringScheme,
        value: str | None,
    ) -> None:
        """An empty dropdown value means "all", not "attribute missing"."""
        me = Profile(id="me", values={"university": "MIT"})
        pool = [
            Profile(id="a", values={"location": "Boston"}),
            Profile(id="b", values={}),
        ]

        results = ranker.rank(
            me, pool, peer_scheme, filters=[HardFilter(attribute="location", value=value)]
        )

        assert [r.candidate_id for r in results] == ["a", "b"]

    def test_filter_on_list_attribute(
        self,
        ranker: MatchRanker,
        peer_self: Profile,
        peer_pool: list[Profile],
        peer_scheme: ScoringScheme,
    ) -> None:
        results = ranker.rank(
            peer_self,
            peer_pool,
            peer_scheme,
            filters=[HardFilter(attribute="skills", value="Go")],
        )
        assert [r.candidate_id for r in results] == ["p-2"]

    def test_free_text_search(
        self,
        ranker: MatchRanker,
        peer_self: Profile,
        peer_pool: list[Profile],
        peer_scheme: ScoringScheme,
    ) -> None:
        """Search matches bio text and list items, case-insensitively."""
        by_bio = ranker.rank(peer_self, peer_pool, peer_scheme, search="INTERN")
        assert [r.candidate_id for r in by_bio] == ["p-1"]
        by_skill = ranker.rank(peer_self, peer_pool, peer_scheme, search="sq")
        assert [r.candidate_id for r in by_skill] == ["p-3"]

    def test_blank_search_matches_all(
        self,
        ranker: MatchRanker,
        peer_self: Profile,
        peer_pool: list[Profile],
        peer_scheme: ScoringScheme,
    ) -> None:
        assert len(ranker.rank(peer_self, peer_pool, peer_scheme, search="  ")) == 3


class TestRankingProperties:
    """Invariants that hold for any pool."""

    def test_empty_pool(
        self,
        ranker: MatchRanker,
        roommate_self: Profile,
        roommate_scheme: ScoringScheme,
    ) -> None:
        assert ranker.rank(roommate_self, [], roommate_scheme) == []

    def test_non_increasing_scores(
        self,
        ranker: MatchRanker,
        flat_scheme: ScoringScheme,
    ) -> None:
        me = Profile(id="me", values={"level": 3})
        pool = [Profile(id=f"c{i}", values={"level": i % 6}) for i in range(20)]

        results = ranker.rank(me, pool, flat_scheme)

        scores = [r.score for r in results]
        assert all(a >= b for a, b in zip(scores, scores[1:]))

    def test_ties_keep_input_order(
        self,
        ranker: MatchRanker,
        flat_scheme: ScoringScheme,
    ) -> None:
        me = Profile(id="me", values={"level": 3})
        pool = [
            Profile(id="half-a", values={"level": 2}),
            Profile(id="full-a", values={"level": 3}),
            Profile(id="half-b", values={"level": 4}),
            Profile(id="full-b", values={"level": 3}),
        ]

        results = ranker.rank(me, pool, flat_scheme)

        assert [r.candidate_id for r in results] == ["full-a", "full-b", "half-a", "half-b"]

    @pytest.mark.parametrize("limit", [0, 1, 3, 50])
    def test_length_bounded_by_limit_and_pool(
        self,
        ranker: MatchRanker,
        flat_scheme: ScoringScheme,
        limit: int,
    ) -> None:
        me = Profile(id="me", values={"level": 3})
        pool = [Profile(id=f"c{i}", values={"level": 3}) for i in range(5)]

        results = ranker.rank(me, pool, flat_scheme, limit=limit)

        assert len(results) <= limit
        assert len(results) <= len(pool)

    def test_does_not_mutate_pool(
        self,
        ranker: MatchRanker,
        roommate_self: Profile,
        roommate_pool: list[Profile],
        roommate_scheme: ScoringScheme,
    ) -> None:
        before = list(roommate_pool)
        ranker.rank(roommate_self, roommate_pool, roommate_scheme, ["hobbies"])
        assert roommate_pool == before

    def test_negative_limit_raises(
        self,
        ranker: MatchRanker,
        roommate_self: Profile,
        roommate_scheme: ScoringScheme,
    ) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            ranker.rank(roommate_self, [], roommate_scheme, limit=-1)

    def test_unknown_priority_fails_even_for_empty_pool(
        self,
        ranker: MatchRanker,
        roommate_self: Profile,
        roommate_scheme: ScoringScheme,
    ) -> None:
        with pytest.raises(SchemeConfigurationError):
            ranker.rank(roommate_self, [], roommate_scheme, ["skills"])

    def test_module_level_helper(
        self,
        roommate_self: Profile,
        roommate_pool: list[Profile],
        roommate_scheme: ScoringScheme,
    ) -> None:
        results = rank_candidates(roommate_self, roommate_pool, roommate_scheme, ["budget"])
        assert [r.candidate_id for r in results] == ["cand-1", "cand-3"]
