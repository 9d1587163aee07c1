"""mimesniff core module exports."""

from .types import (
    DefinitionError,
    DetectionResult,
    SignatureDefinition,
    definition_from_mapping,
)
from .detector import Detector
from .mime import Mime, MimeParseError, ParseRule, includes

__all__ = [
    "DefinitionError",
    "DetectionResult",
    "Detector",
    "Mime",
    "MimeParseError",
    "ParseRule",
    "SignatureDefinition",
    "definition_from_mapping",
    "includes",
]
