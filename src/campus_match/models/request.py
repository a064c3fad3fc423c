"""Match request model shared by the HTTP API and the CLI."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from campus_match.models.profile import Profile


class HardFilter(BaseModel):
    """Keep only candidates whose attribute equals a value."""

    model_config = ConfigDict(frozen=True)

    attribute: str = Field(min_length=1)
    value: Any


class MatchRequest(BaseModel):
    """Everything needed for one ranking pass."""

    model_config = ConfigDict(populate_by_name=True)

    profile: Profile = Field(alias="self")
    candidates: list[Profile] = Field(default_factory=list)
    priorities: list[str] = Field(default_factory=list)
    scheme: str | dict[str, Any] | None = Field(
        default=None,
        description="Scheme name or an inline scheme definition; defaults to settings",
    )
    limit: int | None = Field(default=None, ge=0)
    filters: list[HardFilter] = Field(default_factory=list)
    search: str | None = None
