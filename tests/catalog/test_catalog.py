from __future__ import annotations

import pytest

from mimesniff.catalog import (
    FILE_EXTENSIONS,
    KNOWN_SUBTYPES,
    MIME_DEFINITIONS,
    extension_categories,
    is_known_extension,
    normalize_extension,
)
from mimesniff.core.detector import Detector
from mimesniff.core.mime import Mime


def _by_id(identifier: str):
    return [definition for definition in MIME_DEFINITIONS if definition.id == identifier]


def test_every_builtin_type_parses_and_is_known() -> None:
    for definition in MIME_DEFINITIONS:
        mime = Mime.parse(definition.code)
        assert mime.is_known, definition.code


def test_openxml_definitions_reuse_the_zip_signature() -> None:
    [zip_definition] = _by_id("zip")
    for identifier in ("word_openxml", "excel_openxml", "powerpoint_openxml"):
        [definition] = _by_id(identifier)
        assert definition.byte_signature == zip_definition.byte_signature
        assert definition.required_members[0] == "[Content_Types].xml"


def test_offset_anchored_formats_are_listed_without_facets() -> None:
    [tar] = _by_id("tar")
    assert tar.facets == ()


@pytest.mark.parametrize(
    ("payload", "expected"),
    [
        (b"\x89PNG\r\n\x1a\n", ["image/png"]),
        (b"GIF87a\x10\x00", ["image/gif"]),
        (b"MM\x00\x2a\x00\x00", ["image/tiff"]),
        (b"RIFF\x10\x00\x00\x00WEBPVP8 ", ["image/webp"]),
        (b"RIFF\x10\x00\x00\x00WAVEfmt ", ["audio/wav"]),
        (b"ID3\x03\x00", ["audio/mpeg"]),
        (b"OggS\x00\x02", ["audio/ogg"]),
        (b"%PDF-1.7\n%", ["application/pdf"]),
        (b"\x1f\x8b\x08\x00", ["application/gzip"]),
        (b"7z\xbc\xaf\x27\x1c", ["application/x-7z-compressed"]),
        (b"Rar!\x1a\x07\x00", ["application/x-rar-compressed"]),
        (b"\x1a\x45\xdf\xa3\x01", ["video/x-matroska", "video/webm"]),
        (b"wOF2\x00\x01", ["font/woff2"]),
    ],
)
def test_builtin_signatures(payload: bytes, expected: list) -> None:
    assert [str(mime) for mime in Mime.detect(payload)] == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("<?xml version=\"1.0\"?><root/>", "application/xml"),
        ("<?php echo 'hi';", "application/x-httpd-php"),
        ("<!DOCTYPE html><html></html>", "text/html"),
        ("  <svg xmlns=\"http://www.w3.org/2000/svg\">", "image/svg+xml"),
        ("-----BEGIN CERTIFICATE-----\nMIIB", "application/x-pem-file"),
        ("#!/bin/sh\necho hi\n", "application/x-sh"),
    ],
)
def test_builtin_text_patterns(text: str, expected: str) -> None:
    detected = [str(mime) for mime in Mime.detect(text.encode("utf-8"))]
    assert expected in detected


def test_plain_prose_is_text_plain() -> None:
    detected = Detector().detect(b"Hello there, nothing special in here.\n")
    assert ("text", "plain") in {(d.type, d.subtype) for d in detected}


def test_control_bytes_are_not_text_plain() -> None:
    detected = Detector().detect(b"\x01\x02 binary \x03")
    assert ("text", "plain") not in {(d.type, d.subtype) for d in detected}


@pytest.mark.parametrize(
    "text",
    ["cafe\u0301 au lait", "hello\u200bworld", "soft\u00adhyphen"],
)
def test_marks_and_format_characters_are_not_text_plain(text: str) -> None:
    detected = Detector().detect(text.encode("utf-8"))
    assert ("text", "plain") not in {(d.type, d.subtype) for d in detected}


def test_known_subtypes_cover_builtin_top_level_types() -> None:
    assert {definition.type for definition in MIME_DEFINITIONS} <= set(KNOWN_SUBTYPES)


def test_extension_helpers() -> None:
    assert normalize_extension(".DOCX ") == "docx"
    assert is_known_extension(".pdf")
    assert is_known_extension("TAR.GZ")
    assert not is_known_extension("definitely-not-an-extension")
    assert extension_categories("bin") == ("data", "executable", "game", "encoded", "disk-image")
    assert all(extensions for extensions in FILE_EXTENSIONS.values())
