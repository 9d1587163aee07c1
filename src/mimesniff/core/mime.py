"""MIME type values: parsing, canonical serialisation and comparison.

Example
-------
>>> Mime.normalize('text / plain; CHARSET="utf-8"')
'text/plain; charset=utf-8'
>>> Mime.parse("text/*").includes(Mime.parse("text/plain"))
True
>>> Mime.parse("text/plain").includes(Mime.parse("text/*"))
False
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, List, Mapping, Optional

from ..utils import unique_by
from .detector import Detector
from .types import SignatureDefinition

WILDCARD = "*"

_TOKEN = re.compile(r"^[A-Za-z0-9!#$&^_.+-]+$")
SUPPORTED_CHARS = "*, A-Z, a-z, 0-9, !, #, $, &, ^, _, ., +, -"
_CHARSET_HINT = f"Supported characters: {SUPPORTED_CHARS}"


class ParseRule(str, Enum):
    """Grammar rule violated by an unparseable MIME expression."""

    MISSING_SEPARATOR = "missing-separator"
    INVALID_TYPE = "invalid-type"
    INVALID_SUBTYPE = "invalid-subtype"
    MALFORMED_PARAMETER = "malformed-parameter"
    INVALID_PARAMETER_KEY = "invalid-parameter-key"
    INVALID_PARAMETER_VALUE = "invalid-parameter-value"


class MimeParseError(ValueError):
    """An expression could not be parsed as a MIME type.

    Attributes:
        rule: The violated :class:`ParseRule`.
        expression: The input that failed to parse.
        format: Hint describing the expected grammar or character set.
    """

    def __init__(
        self,
        message: str = "Expression could not be parsed",
        *,
        rule: Optional[ParseRule] = None,
        expression: Optional[str] = None,
        format: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.rule = rule
        self.expression = expression
        self.format = format

    def __repr__(self) -> str:  # pragma: no cover - trivial wrapper
        return (
            f"MimeParseError({self.message!r}, rule={self.rule!r}, "
            f"expression={self.expression!r})"
        )


def _is_token(value: str) -> bool:
    return bool(_TOKEN.match(value))


def _split_media_type(expression: str, media_part: str) -> tuple[str, str]:
    media_type = media_part.strip()
    if "/" not in media_type:
        raise MimeParseError(
            "Invalid MIME: missing type/subtype",
            rule=ParseRule.MISSING_SEPARATOR,
            expression=expression,
            format="type/subtype; parameters",
        )
    type_, subtype = (part.strip().lower() for part in media_type.split("/", 1))
    if type_ != WILDCARD and not _is_token(type_):
        raise MimeParseError(
            f"Invalid MIME type: '{type_}'",
            rule=ParseRule.INVALID_TYPE,
            expression=expression,
            format=_CHARSET_HINT,
        )
    if subtype != WILDCARD and not _is_token(subtype):
        raise MimeParseError(
            f"Invalid MIME subtype: '{subtype}'",
            rule=ParseRule.INVALID_SUBTYPE,
            expression=expression,
            format=_CHARSET_HINT,
        )
    return type_, subtype


def _parse_parameters(expression: str, segments: Iterable[str]) -> dict[str, str]:
    parameters: dict[str, str] = {}
    for segment in segments:
        trimmed = segment.strip()
        if not trimmed:
            continue
        if "=" not in trimmed:
            raise MimeParseError(
                f"Invalid MIME parameter: '{trimmed}'",
                rule=ParseRule.MALFORMED_PARAMETER,
                expression=expression,
                format="key=value",
            )
        key, value = (part.strip() for part in trimmed.split("=", 1))
        if not key or not _is_token(key):
            raise MimeParseError(
                f"Invalid MIME parameter key: '{key}'",
                rule=ParseRule.INVALID_PARAMETER_KEY,
                expression=expression,
                format=_CHARSET_HINT,
            )
        unquoted = value
        if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
            unquoted = value[1:-1]
        if unquoted and not _is_token(unquoted):
            raise MimeParseError(
                f"Invalid MIME parameter value: '{value}'",
                rule=ParseRule.INVALID_PARAMETER_VALUE,
                expression=expression,
                format=_CHARSET_HINT,
            )
        parameters[key.lower()] = unquoted
    return parameters


@dataclass(frozen=True, eq=False)
class Mime:
    """A ``type/subtype; key=value`` identifier.

    Both ``type`` and ``subtype`` default to the wildcard ``*``. Parameter
    keys are stored lowercased; the mapping is read-only.
    """

    type: str = WILDCARD
    subtype: str = WILDCARD
    parameters: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        normalised = {str(key).lower(): str(value) for key, value in dict(self.parameters).items()}
        object.__setattr__(self, "parameters", MappingProxyType(normalised))

    @property
    def has_parameters(self) -> bool:
        """Whether this value carries any parameters, e.g. ``charset=utf-8``."""

        return len(self.parameters) > 0

    @property
    def is_known(self) -> bool:
        """Whether ``type/subtype`` appears in the known subtype table."""

        from ..catalog import KNOWN_SUBTYPES

        return self.subtype in KNOWN_SUBTYPES.get(self.type, ())

    def equals(self, other: "Mime", *, check_parameters: bool = True) -> bool:
        """Exact comparison; wildcards are compared literally."""

        if self.type != other.type or self.subtype != other.subtype:
            return False
        if not check_parameters:
            return True
        return len(self.parameters) == len(other.parameters) and all(
            other.parameters.get(key) == value for key, value in self.parameters.items()
        )

    def includes(self, other: "Mime", *, check_parameters: bool = True) -> bool:
        """Whether this (possibly wildcarded) value accepts ``other``.

        Every parameter on this value must appear with the same value on
        ``other``; extra parameters on ``other`` are ignored.

        >>> Mime.parse("text/*; charset=utf-8").includes(
        ...     Mime.parse("text/plain; charset=utf-8; format=flowed"))
        True
        """

        if self.type != WILDCARD and self.type != other.type:
            return False
        if self.subtype != WILDCARD and self.subtype != other.subtype:
            return False
        if not check_parameters:
            return True
        return all(
            key in other.parameters and other.parameters[key] == value
            for key, value in self.parameters.items()
        )

    def to_string(self) -> str:
        """Canonical form; parameter values are never re-quoted."""

        code = f"{self.type}/{self.subtype}"
        if not self.parameters:
            return code
        parts = "; ".join(f"{key}={value}" for key, value in self.parameters.items())
        return f"{code}; {parts}"

    def __str__(self) -> str:
        return self.to_string()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mime):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash((self.type, self.subtype, frozenset(self.parameters.items())))

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "subtype": self.subtype,
            "parameters": dict(self.parameters),
            "mime": self.to_string(),
        }

    @classmethod
    def from_definition(cls, definition: SignatureDefinition) -> "Mime":
        return cls(type=definition.type, subtype=definition.subtype)

    @classmethod
    def parse(cls, expression: str) -> "Mime":
        """Parse ``type/subtype; key=value; ...`` into a :class:`Mime`.

        Raises:
            MimeParseError: If ``expression`` violates the grammar.
        """

        if not isinstance(expression, str):
            raise TypeError(f"Expected a string, got {type(expression).__name__}")
        media_part, *parameter_parts = expression.split(";")
        type_, subtype = _split_media_type(expression, media_part)
        parameters = _parse_parameters(expression, parameter_parts)
        return cls(type=type_, subtype=subtype, parameters=parameters)

    @staticmethod
    def normalize(expression: str) -> str:
        """Return the canonical string form of ``expression``."""

        return Mime.parse(expression).to_string()

    @staticmethod
    def any_includes(
        sources: Iterable["Mime"],
        targets: Iterable["Mime"],
        *,
        check_parameters: bool = True,
    ) -> bool:
        """Whether any of ``sources`` includes any of ``targets``.

        Useful to check detected types against a list of accepted ones.
        """

        target_list = list(targets)
        return any(
            source.includes(target, check_parameters=check_parameters)
            for source in sources
            for target in target_list
        )

    @classmethod
    def detect(cls, buffer: bytes, detection: Optional[Detector] = None) -> List["Mime"]:
        """Detect candidate types for ``buffer``, deduplicated by string form."""

        detector = detection if detection is not None else Detector()
        return unique_by(
            (cls.from_definition(definition) for definition in detector.detect(buffer)),
            str,
        )

    @classmethod
    async def detect_async(
        cls, buffer: bytes, detection: Optional[Detector] = None
    ) -> List["Mime"]:
        detector = detection if detection is not None else Detector()
        definitions = await detector.detect_async(buffer)
        return unique_by((cls.from_definition(definition) for definition in definitions), str)

    @classmethod
    def known_types(cls, detection: Optional[Detector] = None) -> List["Mime"]:
        """List the types the detector registry can report."""

        detector = detection if detection is not None else Detector()
        return unique_by(
            (cls.from_definition(definition) for definition in detector.definitions),
            str,
        )


def includes(
    sources: Iterable[Mime],
    targets: Iterable[Mime],
    *,
    check_parameters: bool = True,
) -> bool:
    """Module-level alias of :meth:`Mime.any_includes`."""

    return Mime.any_includes(sources, targets, check_parameters=check_parameters)
