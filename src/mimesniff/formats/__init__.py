"""Facet matchers used by the detector."""

from .archive import ArchiveOpener, list_zip_members, match_members
from .magic import WILDCARD, Magic, MagicBytes, has_choices, match_magic
from .text import DEFAULT_TEXT_WINDOW, CategoryPattern, decode_prefix, match_pattern

__all__ = [
    "ArchiveOpener",
    "CategoryPattern",
    "DEFAULT_TEXT_WINDOW",
    "Magic",
    "MagicBytes",
    "WILDCARD",
    "decode_prefix",
    "has_choices",
    "list_zip_members",
    "match_magic",
    "match_members",
    "match_pattern",
]
