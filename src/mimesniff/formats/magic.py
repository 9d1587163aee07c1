"""Byte-signature matching anchored at offset zero.

A signature is either a single ordered sequence of byte values (with ``"*"``
as a wildcard) or a collection of such sequences treated as alternatives.
"""

from __future__ import annotations

from typing import Sequence, Tuple, Union

WILDCARD = "*"

MagicByte = Union[int, str]
MagicBytes = Tuple[MagicByte, ...]
Magic = Union[MagicBytes, Tuple[MagicBytes, ...]]


def _is_sequence(value: object) -> bool:
    return isinstance(value, (list, tuple, bytes, bytearray))


def has_choices(magic: Sequence[object]) -> bool:
    """Return ``True`` when ``magic`` holds alternative sequences."""

    return len(magic) > 0 and _is_sequence(magic[0])


def match_magic(buffer: bytes, magic: Sequence[object]) -> bool:
    """Return whether ``buffer`` starts with ``magic`` (or any alternative).

    Positions past the end of ``buffer`` never match, wildcards included, so
    a buffer shorter than the signature is always a miss.
    """

    if has_choices(magic):
        return any(match_magic(buffer, choice) for choice in magic)  # type: ignore[arg-type]
    size = len(buffer)
    for index, expected in enumerate(magic):
        if index >= size:
            return False
        if expected == WILDCARD:
            continue
        if buffer[index] != expected:
            return False
    return True

