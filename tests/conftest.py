"""Pytest configuration and fixtures."""

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from campus_match.config import get_settings
from campus_match.models.profile import Profile
from campus_match.models.scheme import ScoringScheme
from campus_match.schemes import PEER_SCHEME, ROOMMATE_SCHEME, _cached_scheme_file


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Iterator[None]:
    """Make every test read settings and scheme files fresh."""
    get_settings.cache_clear()
    _cached_scheme_file.cache_clear()
    yield
    get_settings.cache_clear()
    _cached_scheme_file.cache_clear()


@pytest.fixture
def sample_request_path() -> Path:
    """Path to the example roommate request shipped with the repo."""
    return Path(__file__).parent.parent / "examples" / "roommate_request.json"


@pytest.fixture
def sample_request_data(sample_request_path: Path) -> dict[str, Any]:
    """Load the example roommate request."""
    return json.loads(sample_request_path.read_text(encoding="utf-8"))


@pytest.fixture
def roommate_scheme() -> ScoringScheme:
    return ROOMMATE_SCHEME


@pytest.fixture
def peer_scheme() -> ScoringScheme:
    return PEER_SCHEME


@pytest.fixture
def roommate_self() -> Profile:
    """Requesting roommate profile that prefers a same-gender roommate."""
    return Profile.model_validate(
        {
            "id": "self",
            "city": "SF",
            "budget": [1000, 2000],
            "prefers_same_gender": True,
            "gender": "female",
            "sleep": "normal",
            "cleanliness": 3,
            "hobbies": ["gym", "cooking"],
        }
    )


@pytest.fixture
def roommate_candidate() -> Profile:
    """Candidate compatible on every field the self profile fills in."""
    return Profile.model_validate(
        {
            "id": "cand-1",
            "city": "SF",
            "budget": [1500, 2500],
            "gender": "female",
            "sleep": "normal",
            "cleanliness": 4,
            "hobbies": ["gym", "reading"],
        }
    )


@pytest.fixture
def roommate_pool(roommate_self: Profile, roommate_candidate: Profile) -> list[Profile]:
    """Candidate pool including the requesting profile itself."""
    return [
        roommate_candidate,
        Profile(
            id="cand-2",
            values={
                "city": "Oakland",
                "budget_min": 500,
                "budget_max": 900,
                "gender": "male",
                "sleep_schedule": "late",
                "cleanliness": 1,
            },
        ),
        roommate_self,
        Profile(
            id="cand-3",
            values={
                "city": "sf",
                "budget_min": 1800,
                "budget_max": 2200,
                "gender": "Female",
                "sleep_schedule": "early",
                "cleanliness": 3,
                "hobbies": "cooking, hiking",
            },
        ),
    ]


@pytest.fixture
def peer_self() -> Profile:
    return Profile.model_validate(
        {
            "id": "p-self",
            "full_name": "Dana Kim",
            "university": "UC Berkeley",
            "location": "Berkeley",
            "skills": ["Python", "SQL"],
            "interests": ["hiking", "chess"],
        }
    )


@pytest.fixture
def peer_pool() -> list[Profile]:
    return [
        Profile.model_validate(
            {
                "id": "p-1",
                "full_name": "Ari Patel",
                "university": "Stanford",
                "location": "Palo Alto",
                "skills": ["Java"],
                "interests": ["music"],
                "bio": "Backend intern",
            }
        ),
        Profile.model_validate(
            {
                "id": "p-2",
                "full_name": "Sam Lee",
                "university": "UC Berkeley",
                "location": "Oakland",
                "skills": ["python", "Go"],
                "interests": ["chess"],
            }
        ),
        Profile.model_validate(
            {
                "id": "p-3",
                "full_name": "Jo Rivera",
                "university": "UC Berkeley",
                "location": "Berkeley",
                "skills": ["Python", "SQL"],
                "interests": ["hiking", "chess"],
            }
        ),
    ]
