"""Campus Match - roommate and peer compatibility matching."""

__version__ = "0.1.0"

from campus_match.exceptions import (  # noqa: E402
    CampusMatchError,
    SchemeConfigurationError,
    SchemeFileError,
)
from campus_match.models import (  # noqa: E402
    FieldDefinition,
    FieldKind,
    HardFilter,
    Profile,
    ScoredResult,
    ScoringScheme,
)
from campus_match.schemes import PEER_SCHEME, ROOMMATE_SCHEME, get_scheme  # noqa: E402
from campus_match.scoring import (  # noqa: E402
    CompatibilityEngine,
    MatchRanker,
    intersection,
    jaccard,
    rank_candidates,
    score_candidate,
    toggle_priority,
)

__all__ = [
    "CampusMatchError",
    "CompatibilityEngine",
    "FieldDefinition",
    "FieldKind",
    "HardFilter",
    "MatchRanker",
    "PEER_SCHEME",
    "Profile",
    "ROOMMATE_SCHEME",
    "SchemeConfigurationError",
    "SchemeFileError",
    "ScoredResult",
    "ScoringScheme",
    "__version__",
    "get_scheme",
    "intersection",
    "jaccard",
    "rank_candidates",
    "score_candidate",
    "toggle_priority",
]
