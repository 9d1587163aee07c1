"""Small collection helpers."""

from __future__ import annotations

from typing import Callable, Hashable, Iterable, List, Optional, TypeVar

T = TypeVar("T")


def unique_by(
    items: Iterable[T],
    key: Optional[Callable[[T], Hashable]] = None,
    *,
    equals: Optional[Callable[[T, T], bool]] = None,
) -> List[T]:
    """Drop duplicate items, keeping first occurrences in order.

    Duplicates are detected either by a hashable ``key`` or, for values
    without a usable key, by a pairwise ``equals`` predicate. Exactly one of
    the two must be given.
    """

    if (key is None) == (equals is None):
        raise TypeError("unique_by() needs exactly one of 'key' or 'equals'")
    unique: List[T] = []
    if equals is not None:
        for item in items:
            if not any(equals(existing, item) for existing in unique):
                unique.append(item)
        return unique

    seen: set = set()
    for item in items:
        marker = key(item)  # type: ignore[misc]
        if marker in seen:
            continue
        seen.add(marker)
        unique.append(item)
    return unique
