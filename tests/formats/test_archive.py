from __future__ import annotations

import io
import zipfile

from mimesniff.formats.archive import list_zip_members, match_members


def _zip(*names: str) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name in names:
            archive.writestr(name, "<xml/>")
    return buffer.getvalue()


def test_list_zip_members_returns_paths() -> None:
    payload = _zip("[Content_Types].xml", "word/document.xml")
    assert list_zip_members(payload) == {"[Content_Types].xml", "word/document.xml"}


def test_all_members_must_be_present() -> None:
    payload = _zip("[Content_Types].xml", "word/document.xml")
    assert match_members(payload, ["[Content_Types].xml", "word/document.xml"])
    assert not match_members(payload, ["[Content_Types].xml", "xl/workbook.xml"])


def test_member_paths_are_compared_verbatim() -> None:
    payload = _zip("Word/Document.xml")
    assert not match_members(payload, ["word/document.xml"])
    assert not match_members(payload, ["Word\\Document.xml"])


def test_invalid_container_is_a_clean_miss() -> None:
    assert not match_members(b"PK\x03\x04 truncated garbage", ["a.txt"])
    assert not match_members(b"", ["a.txt"])


def test_custom_opener_is_used_and_failures_are_swallowed() -> None:
    calls: list[bytes] = []

    def opener(buffer: bytes) -> set[str]:
        calls.append(buffer)
        return {"mimetype", "content.xml"}

    assert match_members(b"payload", ["mimetype"], opener=opener)
    assert calls == [b"payload"]

    def exploding(buffer: bytes) -> set[str]:
        raise RuntimeError("decoder crashed")

    assert not match_members(b"payload", ["mimetype"], opener=exploding)
