"""Value coercion helpers for loosely-typed profile data.

Profile values come straight from stored rows and form input, so every helper
here returns ``None`` for a missing value and raises ``MalformedValueError``
for a present value of the wrong shape. Callers decide whether a malformed
value is logged or surfaced.
"""

import json
from collections.abc import Iterable
from typing import Any


class MalformedValueError(ValueError):
    """A profile value is present but cannot be read as the expected kind."""


def normalize_text(value: Any, case_sensitive: bool = False) -> str | None:
    """Normalize a categorical value for equality comparison.

    Args:
        value: Raw profile value (string or number). Integral floats compare
            equal to the matching int.
        case_sensitive: Keep the original casing when True.

    Returns:
        Stripped (and casefolded unless case_sensitive) text, or None if empty.

    Examples:
        >>> normalize_text("  San Francisco ")
        'san francisco'
        >>> normalize_text("") is None
        True
    """
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise MalformedValueError(f"expected text, got {type(value).__name__}")
    if isinstance(value, float) and value.is_integer():
        value = int(value)

    text = str(value).strip()
    if not text:
        return None
    return text if case_sensitive else text.casefold()


def coerce_number(value: Any) -> float | None:
    """Read a numeric value, accepting numeric strings."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise MalformedValueError("expected a number, got bool")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            return float(value)
        except ValueError as e:
            raise MalformedValueError(f"expected a number, got {value!r}") from e
    raise MalformedValueError(f"expected a number, got {type(value).__name__}")


def coerce_range(value: Any) -> tuple[float, float] | None:
    """Read a ``[min, max]`` pair."""
    if value is None:
        return None
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        raise MalformedValueError(f"expected a [min, max] pair, got {type(value).__name__}")

    bounds = list(value)
    if len(bounds) != 2:
        raise MalformedValueError(f"expected 2 range bounds, got {len(bounds)}")

    low, high = coerce_number(bounds[0]), coerce_number(bounds[1])
    if low is None or high is None:
        return None
    if low > high:
        raise MalformedValueError(f"range minimum {low} exceeds maximum {high}")
    return low, high


def coerce_string_set(value: Any, case_sensitive: bool = False) -> set[str] | None:
    """Read a collection of strings as a normalized set.

    Lists, tuples and sets are accepted as-is. A string is parsed as a JSON
    array when it looks like one, otherwise split on commas, which is how
    hobbies and interests are typed into forms.
    """
    if value is None:
        return None

    if isinstance(value, str):
        text = value.strip()
        parsed: Any = None
        if text.startswith("["):
            try:
                parsed = json.loads(text)
            except json.JSONDecodeError:
                parsed = None
        items: list[Any] = parsed if isinstance(parsed, list) else text.split(",")
    elif isinstance(value, (list, tuple, set, frozenset)):
        items = list(value)
    else:
        raise MalformedValueError(f"expected a collection of strings, got {type(value).__name__}")

    result: set[str] = set()
    for item in items:
        normalized = normalize_text(item, case_sensitive)
        if normalized is not None:
            result.add(normalized)
    return result


def coerce_flag(value: Any) -> bool:
    """Read a boolean preference flag. Missing means False."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in {"true", "false"}:
        return value.strip().lower() == "true"
    raise MalformedValueError(f"expected a boolean, got {value!r}")
