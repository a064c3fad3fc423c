"""Request-level entry point shared by the HTTP API and the CLI."""

import logging

from campus_match.config import Settings, get_settings
from campus_match.models.request import MatchRequest
from campus_match.models.result import ScoredResult
from campus_match.models.scheme import ScoringScheme
from campus_match.schemes import get_scheme
from campus_match.scoring.ranker import MatchRanker

logger = logging.getLogger(__name__)


def run_match(
    request: MatchRequest,
    settings: Settings | None = None,
    ranker: MatchRanker | None = None,
) -> tuple[ScoringScheme, list[ScoredResult]]:
    """Resolve the scheme and rank the request's candidates.

    The limit is taken from the request, then the configured default_limit,
    then the scheme's own default.

    Args:
        request: Validated match request.
        settings: Settings override (defaults to cached settings).
        ranker: Ranker override.

    Returns:
        Tuple of (resolved scheme, ranked results).

    Raises:
        SchemeConfigurationError: On an unknown scheme or priority field, or an
            invalid inline scheme.
        SchemeFileError: If the configured scheme file is missing or invalid.
    """
    settings = settings or get_settings()
    ranker = ranker or MatchRanker()

    reference = request.scheme if request.scheme is not None else settings.default_scheme
    scheme = get_scheme(reference, settings.schemes_file)
    limit = request.limit if request.limit is not None else settings.default_limit

    logger.info(
        f"Matching profile {request.profile.id} against {len(request.candidates)} "
        f"candidates (scheme={scheme.name}, priorities={request.priorities})"
    )
    results = ranker.rank(
        request.profile,
        request.candidates,
        scheme,
        priorities=request.priorities,
        limit=limit,
        filters=request.filters,
        search=request.search,
    )
    return scheme, results
