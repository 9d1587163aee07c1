"""Signature definitions and per-definition detection results.

A :class:`SignatureDefinition` is a passive record: an optional label, the
``type``/``subtype`` it asserts, and up to three match facets. The detector
evaluates each declared facet independently and records the outcome in a
:class:`DetectionResult`.

Example
-------
>>> definition = SignatureDefinition(
...     id="png",
...     type="image",
...     subtype="png",
...     byte_signature=(0x89, 0x50, 0x4E, 0x47),
... )
>>> definition.facets
('byte_signature',)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Pattern, Sequence, Tuple

from ..formats.magic import WILDCARD, Magic, MagicBytes, has_choices


class DefinitionError(ValueError):
    """Raised when a signature definition is malformed."""


def _normalise_sequence(sequence: Sequence[object], *, label: str) -> MagicBytes:
    if isinstance(sequence, (str, int)) or not isinstance(sequence, (list, tuple, bytes, bytearray)):
        raise DefinitionError(f"{label} must be a sequence of byte values.")
    if len(sequence) == 0:
        raise DefinitionError(f"{label} cannot be empty.")
    normalised = []
    for value in sequence:
        if value == WILDCARD:
            normalised.append(WILDCARD)
            continue
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 0xFF:
            raise DefinitionError(
                f"{label} contains {value!r}; expected 0-255 or {WILDCARD!r}."
            )
        normalised.append(value)
    return tuple(normalised)


def _normalise_magic(magic: Sequence[object]) -> Magic:
    if isinstance(magic, (str, int)) or not isinstance(magic, (list, tuple, bytes, bytearray)):
        raise DefinitionError("byte_signature must be a sequence.")
    if len(magic) == 0:
        raise DefinitionError("byte_signature cannot be empty.")
    if has_choices(magic):
        return tuple(
            _normalise_sequence(choice, label=f"byte_signature[{index}]")  # type: ignore[arg-type]
            for index, choice in enumerate(magic)
        )
    return _normalise_sequence(magic, label="byte_signature")


def _normalise_members(members: Sequence[str]) -> Tuple[str, ...]:
    if isinstance(members, str):
        raise DefinitionError("required_members must be a sequence of paths, not a string.")
    normalised = tuple(members)
    if not normalised:
        raise DefinitionError("required_members cannot be empty.")
    for member in normalised:
        if not isinstance(member, str) or not member:
            raise DefinitionError(f"Invalid member path: {member!r}")
    return normalised


@dataclass(frozen=True)
class SignatureDefinition:
    """Registry entry describing how to recognise one content type."""

    type: str
    subtype: str
    id: Optional[str] = None
    byte_signature: Optional[Magic] = None
    required_members: Optional[Tuple[str, ...]] = None
    text_pattern: Optional[Pattern[str]] = None

    def __post_init__(self) -> None:
        for name in ("type", "subtype"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise DefinitionError(f"{name} must be a non-empty string.")
        if self.byte_signature is not None:
            object.__setattr__(self, "byte_signature", _normalise_magic(self.byte_signature))
        if self.required_members is not None:
            object.__setattr__(
                self, "required_members", _normalise_members(self.required_members)
            )
        if isinstance(self.text_pattern, str):
            try:
                compiled = re.compile(self.text_pattern)
            except re.error as exc:
                raise DefinitionError(f"Invalid text_pattern: {exc}") from exc
            object.__setattr__(self, "text_pattern", compiled)
        elif self.text_pattern is not None and not hasattr(self.text_pattern, "search"):
            raise DefinitionError("text_pattern must be a string or compiled pattern.")

    @property
    def facets(self) -> Tuple[str, ...]:
        """Names of the facets this definition declares."""

        return tuple(
            name
            for name in ("byte_signature", "required_members", "text_pattern")
            if getattr(self, name) is not None
        )

    @property
    def code(self) -> str:
        return f"{self.type}/{self.subtype}"

    def to_dict(self) -> Dict[str, Any]:
        pattern = self.text_pattern
        return {
            "id": self.id,
            "type": self.type,
            "subtype": self.subtype,
            "facets": list(self.facets),
            "pattern": getattr(pattern, "pattern", None) if pattern is not None else None,
        }


def definition_from_mapping(payload: Mapping[str, Any]) -> SignatureDefinition:
    """Build a definition from a JSON-style mapping.

    Recognised keys: ``id``, ``type``, ``subtype``, ``magic`` (list of bytes
    or list of alternatives, ``"*"`` for wildcards), ``members``, ``pattern``
    and ``ignore_case``.
    """

    if not isinstance(payload, Mapping):
        raise DefinitionError("Definition entries must be mappings.")
    unknown = set(payload) - {"id", "type", "subtype", "magic", "members", "pattern", "ignore_case"}
    if unknown:
        raise DefinitionError(f"Unknown definition keys: {sorted(unknown)}")
    if "type" not in payload or "subtype" not in payload:
        raise DefinitionError("Definition entries require 'type' and 'subtype'.")

    pattern = payload.get("pattern")
    if pattern is not None:
        if not isinstance(pattern, str):
            raise DefinitionError("'pattern' must be a string.")
        flags = re.IGNORECASE if payload.get("ignore_case") else 0
        try:
            pattern = re.compile(pattern, flags)
        except re.error as exc:
            raise DefinitionError(f"Invalid pattern {payload['pattern']!r}: {exc}") from exc

    return SignatureDefinition(
        id=payload.get("id"),
        type=payload["type"],
        subtype=payload["subtype"],
        byte_signature=payload.get("magic"),
        required_members=payload.get("members"),
        text_pattern=pattern,
    )


@dataclass(frozen=True)
class DetectionResult:
    """Facet outcomes for one definition against one buffer.

    Facets the definition does not declare are always ``False``.
    """

    definition: SignatureDefinition
    magic_matched: bool = False
    members_matched: bool = False
    pattern_matched: bool = False

    @property
    def matched(self) -> bool:
        return self.magic_matched or self.members_matched or self.pattern_matched

    @property
    def rank(self) -> Tuple[bool, bool, bool]:
        """Sort key: lower ranks win (magic, then members, then pattern)."""

        return (not self.magic_matched, not self.members_matched, not self.pattern_matched)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "definition": self.definition.to_dict(),
            "magic": self.magic_matched,
            "members": self.members_matched,
            "pattern": self.pattern_matched,
        }
