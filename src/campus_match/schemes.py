"""Built-in scoring schemes and scheme loading.

Both built-in schemes are plain data. A custom scheme is just another
``ScoringScheme``, either passed inline or loaded from a JSON file.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from campus_match.config import get_settings
from campus_match.exceptions import SchemeConfigurationError, SchemeFileError
from campus_match.models.scheme import FieldDefinition, FieldKind, ScoringScheme

logger = logging.getLogger(__name__)


ROOMMATE_SCHEME = ScoringScheme(
    name="roommate",
    description="Roommate preferences: location, budget, lifestyle and hobbies",
    definitions=(
        FieldDefinition(name="city", kind=FieldKind.CATEGORICAL, weight=2),
        FieldDefinition(
            name="budget",
            kind=FieldKind.NUMERIC_RANGE,
            weight=3,
            min_attribute="budget_min",
            max_attribute="budget_max",
        ),
        FieldDefinition(
            name="gender",
            kind=FieldKind.BOOLEAN_PREFERENCE,
            weight=5,
            preference_attribute="prefers_same_gender",
        ),
        FieldDefinition(
            name="religion",
            kind=FieldKind.BOOLEAN_PREFERENCE,
            weight=5,
            preference_attribute="prefers_same_religion",
        ),
        FieldDefinition(
            name="sleep",
            kind=FieldKind.CATEGORICAL,
            weight=2,
            attribute="sleep_schedule",
            aliases=("sleep",),
        ),
        FieldDefinition(name="cleanliness", kind=FieldKind.CLOSENESS, weight=2),
        FieldDefinition(name="guests", kind=FieldKind.CATEGORICAL, weight=2),
        FieldDefinition(name="hobbies", kind=FieldKind.SET, weight=4),
    ),
    inclusion_threshold=0.0,
    include_threshold=False,
    default_limit=10,
    search_attributes=("city", "sleep_schedule", "guests", "hobbies"),
)

PEER_SCHEME = ScoringScheme(
    name="peer",
    description="Peer networking: university, location, skills and interests",
    definitions=(
        FieldDefinition(name="university", kind=FieldKind.CATEGORICAL, weight=3),
        FieldDefinition(name="location", kind=FieldKind.CATEGORICAL, weight=2),
        FieldDefinition(name="skills", kind=FieldKind.SET, weight=4),
        FieldDefinition(name="interests", kind=FieldKind.SET, weight=4),
    ),
    inclusion_threshold=0.0,
    include_threshold=True,
    default_limit=None,
    search_attributes=("full_name", "university", "location", "bio", "interests", "skills"),
)

BUILTIN_SCHEMES: dict[str, ScoringScheme] = {
    ROOMMATE_SCHEME.name: ROOMMATE_SCHEME,
    PEER_SCHEME.name: PEER_SCHEME,
}


def build_scheme(data: dict[str, Any]) -> ScoringScheme:
    """Validate a scheme definition.

    Raises:
        SchemeConfigurationError: If the definition is invalid.
    """
    try:
        return ScoringScheme.model_validate(data)
    except ValidationError as e:
        name = data.get("name", "<unnamed>") if isinstance(data, dict) else "<unnamed>"
        raise SchemeConfigurationError(f"Invalid scoring scheme '{name}': {e}") from e


def load_scheme_file(path: str | Path) -> dict[str, ScoringScheme]:
    """Load custom schemes from a JSON file.

    The file holds either one scheme object or a list of them.

    Raises:
        SchemeFileError: If the file is missing, not JSON, or invalid.
    """
    path = Path(path)
    if not path.exists():
        raise SchemeFileError(f"Scheme file not found: {path}")

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SchemeFileError(f"Scheme file is not valid JSON: {path}: {e}") from e

    entries = raw if isinstance(raw, list) else [raw]
    schemes: dict[str, ScoringScheme] = {}
    for entry in entries:
        if not isinstance(entry, dict):
            raise SchemeFileError(f"Scheme entries must be objects in {path}")
        try:
            scheme = build_scheme(entry)
        except SchemeConfigurationError as e:
            raise SchemeFileError(f"{path}: {e}") from e
        if scheme.name in schemes:
            raise SchemeFileError(f"Duplicate scheme '{scheme.name}' in {path}")
        if scheme.name in BUILTIN_SCHEMES:
            raise SchemeFileError(f"Custom scheme '{scheme.name}' shadows a built-in scheme")
        schemes[scheme.name] = scheme

    logger.info(f"Loaded {len(schemes)} scheme(s) from {path}")
    return schemes


@lru_cache(maxsize=8)
def _cached_scheme_file(path: Path, mtime_ns: int) -> dict[str, ScoringScheme]:
    """Registry for one version of a scheme file; mtime invalidates it."""
    return load_scheme_file(path)


def available_schemes(schemes_file: str | Path | None = None) -> dict[str, ScoringScheme]:
    """Built-in schemes plus any from the configured schemes file.

    The file is parsed once per modification time. Custom schemes may not
    shadow a built-in name.
    """
    path = schemes_file if schemes_file is not None else get_settings().schemes_file
    schemes = dict(BUILTIN_SCHEMES)
    if path is None:
        return schemes

    path = Path(path)
    try:
        mtime_ns = path.stat().st_mtime_ns
    except OSError as e:
        raise SchemeFileError(f"Scheme file not found: {path}") from e
    schemes.update(_cached_scheme_file(path, mtime_ns))
    return schemes


def get_scheme(
    scheme: str | dict[str, Any] | ScoringScheme | None = None,
    schemes_file: str | Path | None = None,
) -> ScoringScheme:
    """Resolve a scheme reference.

    Args:
        scheme: A scheme name, an inline scheme definition, a ScoringScheme,
            or None for the configured default.
        schemes_file: Override the configured custom-scheme file.

    Raises:
        SchemeConfigurationError: If the name is unknown or the inline
            definition is invalid.
    """
    if isinstance(scheme, ScoringScheme):
        return scheme
    if isinstance(scheme, dict):
        return build_scheme(scheme)

    name = scheme or get_settings().default_scheme
    if name in BUILTIN_SCHEMES and schemes_file is None:
        return BUILTIN_SCHEMES[name]

    schemes = available_schemes(schemes_file)
    if name not in schemes:
        raise SchemeConfigurationError(
            f"Unknown scoring scheme '{name}' (available: {', '.join(sorted(schemes))})"
        )
    return schemes[name]
