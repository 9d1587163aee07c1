"""Text-prefix decoding and pattern matching."""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import FrozenSet, Optional, Pattern

DEFAULT_TEXT_WINDOW = 128


def decode_prefix(buffer: bytes, size: int = DEFAULT_TEXT_WINDOW) -> str:
    """Decode the first ``size`` bytes of ``buffer`` as UTF-8.

    Undecodable sequences become U+FFFD and a leading byte-order mark is
    dropped.
    """

    return bytes(buffer[:size]).decode("utf-8-sig", errors="replace")


@dataclass(frozen=True)
class CategoryPattern:
    """Pattern-like matcher accepting text made only of given Unicode classes.

    ``categories`` holds major category letters (``"L"``, ``"N"``, ...) as
    reported by :func:`unicodedata.category`; ``extra`` lists individual
    characters accepted regardless of their category. ``search`` mirrors
    :meth:`re.Pattern.search` closely enough for :func:`match_pattern`: it
    returns the scanned text on success and ``None`` otherwise.
    """

    categories: FrozenSet[str]
    extra: FrozenSet[str] = frozenset()

    @property
    def pattern(self) -> str:
        classes = "".join(f"\\p{{{name}}}" for name in sorted(self.categories))
        extra = "".join(sorted(self.extra)).encode("unicode_escape").decode("ascii")
        return f"^[{classes}{extra}]*$"

    def search(self, text: str) -> Optional[str]:
        for char in text:
            if char in self.extra:
                continue
            if unicodedata.category(char)[0] not in self.categories:
                return None
        return text


def match_pattern(
    buffer: bytes,
    pattern: Pattern[str],
    *,
    window: int = DEFAULT_TEXT_WINDOW,
) -> bool:
    return pattern.search(decode_prefix(buffer, window)) is not None
