from __future__ import annotations

import pytest

from mimesniff.utils import unique_by


def test_unique_by_keeps_first_occurrence_in_order() -> None:
    items = ["b", "A", "a", "B", "c"]
    assert unique_by(items, str.lower) == ["b", "A", "c"]


def test_unique_by_handles_empty_input() -> None:
    assert unique_by([], str) == []


def test_unique_by_supports_pairwise_equality() -> None:
    points = [(0, 0), (0, 1), (1, 0), (2, 2), (3, 3)]
    same_parity = lambda a, b: (a[0] + a[1]) % 2 == (b[0] + b[1]) % 2  # noqa: E731
    assert unique_by(points, equals=same_parity) == [(0, 0), (0, 1)]


@pytest.mark.parametrize("kwargs", [{}, {"key": str, "equals": lambda a, b: a == b}])
def test_unique_by_requires_one_strategy(kwargs) -> None:
    with pytest.raises(TypeError):
        unique_by([1, 2], **kwargs)
