"""Profile data model."""

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Keys that identify a stored row; the first one present becomes the profile id.
ID_KEYS = ("id", "user_id")


class Profile(BaseModel):
    """A user or candidate record supplied by the caller for one request.

    Accepts either ``{"id": ..., "values": {...}}`` or a flat row such as
    ``{"user_id": "u1", "city": "SF", "hobbies": ["gym"]}``.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    values: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def coerce_flat_record(cls, data: Any) -> Any:
        """Split a flat row into an id and its values."""
        if not isinstance(data, dict) or "values" in data:
            return data

        record = dict(data)
        profile_id = None
        for key in ID_KEYS:
            if key in record:
                profile_id = record.pop(key)
                break
        return {"id": profile_id, "values": record}

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        """Accept integer ids from numeric primary keys."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    def lookup(self, keys: Iterable[str]) -> Any:
        """Return the first non-None value among ``keys``."""
        for key in keys:
            value = self.values.get(key)
            if value is not None:
                return value
        return None
