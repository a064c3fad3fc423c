"""Set-overlap helpers used by set-valued field scoring and shared-item display."""

from collections.abc import Iterable


def intersection(a: Iterable[str] | None, b: Iterable[str] | None) -> set[str]:
    """Elements present in both collections. None is treated as empty."""
    if a is None or b is None:
        return set()
    return set(a) & set(b)


def jaccard(a: Iterable[str] | None, b: Iterable[str] | None) -> float:
    """Jaccard index |a & b| / |a | b| in [0, 1].

    Returns 0.0 when either side is empty or None.

    Examples:
        >>> jaccard({"gym", "cooking"}, {"gym", "reading"})
        0.3333333333333333
        >>> jaccard(set(), set())
        0.0
    """
    set_a = set(a) if a is not None else set()
    set_b = set(b) if b is not None else set()
    if not set_a or not set_b:
        return 0.0

    union = set_a | set_b
    return len(set_a & set_b) / len(union)
