"""Priority field selection and weight boosting."""

import logging
from collections.abc import Iterable
from typing import AbstractSet

from campus_match.models.scheme import FieldDefinition, ScoringScheme

logger = logging.getLogger(__name__)

MAX_PRIORITIES = 3
PRIORITY_MULTIPLIER = 3.0


def effective_weight(definition: FieldDefinition, priorities: AbstractSet[str]) -> float:
    """Base weight, tripled when the field is a priority."""
    if definition.name in priorities:
        return definition.weight * PRIORITY_MULTIPLIER
    return definition.weight


def toggle_priority(current: AbstractSet[str], field: str) -> frozenset[str]:
    """Remove ``field`` if selected, otherwise add it while under the cap.

    Adding beyond MAX_PRIORITIES is a silent no-op.

    Examples:
        >>> sorted(toggle_priority({"budget"}, "hobbies"))
        ['budget', 'hobbies']
        >>> sorted(toggle_priority({"budget"}, "budget"))
        []
    """
    if field in current:
        return frozenset(current - {field})
    if len(current) >= MAX_PRIORITIES:
        return frozenset(current)
    return frozenset(current | {field})


def normalize_priorities(selected: Iterable[str] | None) -> frozenset[str]:
    """Build a capped priority set from a stored selection.

    Entries are applied in order, so the first MAX_PRIORITIES distinct names win.
    """
    priorities: frozenset[str] = frozenset()
    if selected is None:
        return priorities

    for name in selected:
        if name in priorities:
            continue
        if len(priorities) >= MAX_PRIORITIES:
            logger.debug(f"Priority cap reached, ignoring '{name}'")
            continue
        priorities = toggle_priority(priorities, name)
    return priorities


def validate_priorities(
    selected: Iterable[str] | None, scheme: ScoringScheme
) -> frozenset[str]:
    """Cap a priority selection and check every name exists in the scheme.

    Raises:
        SchemeConfigurationError: If a priority names an unknown field.
    """
    names = list(selected or ())
    for name in names:
        scheme.get_field(name)
    return normalize_priorities(names)
