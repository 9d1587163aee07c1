"""mimesniff package.

Content-type detection from raw bytes plus a small MIME value model:

>>> from mimesniff import Mime
>>> [str(mime) for mime in Mime.detect(b"%PDF-1.7")]
['application/pdf']
"""

from __future__ import annotations

from .catalog import FILE_EXTENSIONS, KNOWN_SUBTYPES, MIME_DEFINITIONS, is_known_extension
from .core import (
    DefinitionError,
    DetectionResult,
    Detector,
    Mime,
    MimeParseError,
    ParseRule,
    SignatureDefinition,
    definition_from_mapping,
    includes,
)

__version__ = "0.1.0"

__all__ = [
    "DefinitionError",
    "DetectionResult",
    "Detector",
    "FILE_EXTENSIONS",
    "KNOWN_SUBTYPES",
    "MIME_DEFINITIONS",
    "Mime",
    "MimeParseError",
    "ParseRule",
    "SignatureDefinition",
    "definition_from_mapping",
    "includes",
    "is_known_extension",
]
