from __future__ import annotations

import codecs
import re

from mimesniff.formats.text import DEFAULT_TEXT_WINDOW, CategoryPattern, decode_prefix, match_pattern


def test_decode_prefix_limits_window() -> None:
    payload = b"a" * 300
    assert len(decode_prefix(payload)) == DEFAULT_TEXT_WINDOW == 128
    assert decode_prefix(payload, 10) == "a" * 10


def test_decode_prefix_replaces_invalid_bytes() -> None:
    text = decode_prefix(b"ok\xff\xfe\x80done")
    assert text.startswith("ok")
    assert text.endswith("done")
    assert "\ufffd" in text


def test_decode_prefix_drops_utf8_bom() -> None:
    assert decode_prefix(codecs.BOM_UTF8 + b"<?xml") == "<?xml"


def test_pattern_only_sees_prefix() -> None:
    pattern = re.compile(r"^\s*<\?php", re.IGNORECASE)
    assert match_pattern(b"  <?php echo 1;", pattern)
    assert not match_pattern(b" " * 200 + b"<?php", pattern)
    assert match_pattern(b" " * 200 + b"<?php", pattern, window=256)


def test_pattern_uses_search_semantics() -> None:
    assert match_pattern(b"prefix needle suffix", re.compile("needle"))


def test_category_pattern_accepts_listed_classes_only() -> None:
    pattern = CategoryPattern(frozenset("LNPSZ"), frozenset("\r\n"))
    assert pattern.search("Caf\u00e9 au lait, 3 \u20ac!\r\n") is not None
    assert pattern.search("") is not None
    assert pattern.search("tab\tseparated") is None
    assert pattern.search("cafe\u0301") is None  # combining acute accent (Mn)
    assert pattern.search("hello\u200bworld") is None  # zero width space (Cf)
    assert pattern.search("private \ue000 use") is None  # private use (Co)


def test_category_pattern_works_with_match_pattern() -> None:
    pattern = CategoryPattern(frozenset("L"))
    assert match_pattern(b"letters", pattern)
    assert not match_pattern(b"two words", pattern)
    assert pattern.pattern == "^[\\p{L}]*$"
