"""FastAPI application exposing the matching engine over HTTP.

Endpoints:
    POST /match    Rank candidates for a profile
    GET  /schemes  List available scoring schemes
    GET  /health   Liveness check

The engine is synchronous, so the endpoints are plain ``def`` functions and
run in FastAPI's threadpool.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from campus_match import __version__
from campus_match.config import get_settings
from campus_match.exceptions import CampusMatchError, SchemeFileError
from campus_match.models.request import MatchRequest
from campus_match.models.scheme import FieldKind
from campus_match.schemes import available_schemes
from campus_match.workflow import run_match

logger = logging.getLogger(__name__)


# ============================================================================
# RESPONSE MODELS
# ============================================================================


class MatchResultOut(BaseModel):
    """One ranked candidate."""

    candidate_id: str
    score: float
    matched_fields: list[str] = Field(default_factory=list)
    breakdown: dict[str, float] = Field(default_factory=dict)


class MatchResponse(BaseModel):
    """Ranked results for a match request."""

    scheme: str
    count: int
    results: list[MatchResultOut]


class SchemeFieldOut(BaseModel):
    name: str
    kind: FieldKind
    weight: float


class SchemeOut(BaseModel):
    name: str
    description: str
    default_limit: int | None
    fields: list[SchemeFieldOut]


# ============================================================================
# APPLICATION
# ============================================================================

app = FastAPI(title="Campus Match API", version=__version__)


@app.exception_handler(CampusMatchError)
def handle_campus_match_error(request: Request, exc: CampusMatchError) -> JSONResponse:
    """Scheme and priority reference errors are the caller's fault."""
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


@app.exception_handler(SchemeFileError)
def handle_scheme_file_error(request: Request, exc: SchemeFileError) -> JSONResponse:
    """A broken server-side scheme file is not the caller's fault."""
    logger.error(f"Scheme file error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": str(exc)}
    )


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "version": __version__}


@app.get("/schemes", response_model=list[SchemeOut])
def list_schemes() -> list[SchemeOut]:
    """List built-in and configured custom schemes."""
    schemes = available_schemes(get_settings().schemes_file)
    return [
        SchemeOut(
            name=scheme.name,
            description=scheme.description,
            default_limit=scheme.default_limit,
            fields=[
                SchemeFieldOut(name=d.name, kind=d.kind, weight=d.weight)
                for d in scheme.definitions
            ],
        )
        for scheme in schemes.values()
    ]


@app.post("/match", response_model=MatchResponse)
def match(request: MatchRequest) -> MatchResponse:
    """Rank candidates against the requesting profile.

    Returns 400 for an unknown scheme or priority field. An empty or
    low-scoring pool is not an error and yields an empty result list.
    """
    scheme, results = run_match(request)
    return MatchResponse(
        scheme=scheme.name,
        count=len(results),
        results=[MatchResultOut(**result.to_record()) for result in results],
    )
