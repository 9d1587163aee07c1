from __future__ import annotations

import io
import json
import zipfile
from pathlib import Path

import pytest

from mimesniff import cli


def _write(tmp_path: Path, name: str, payload: bytes) -> Path:
    target = tmp_path / name
    target.write_bytes(payload)
    return target


def test_detect_emits_table(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    image = _write(tmp_path, "photo.bin", b"\xff\xd8\xff\xe0\x00")
    empty = _write(tmp_path, "empty.dat", b"")

    exit_code = cli.main([str(image), str(empty)])

    output = capsys.readouterr().out.splitlines()
    assert exit_code == 0
    assert output[0].startswith("Path")
    assert any(line.startswith(str(image)) and "image/jpeg" in line for line in output)
    assert any(line.startswith(str(empty)) and "(none)" in line for line in output)


def test_detect_emits_json_lines(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        archive.writestr("[Content_Types].xml", "<Types/>")
        archive.writestr("xl/workbook.xml", "<workbook/>")
    sheet = _write(tmp_path, "book.xlsx", buffer.getvalue())

    exit_code = cli.main([str(sheet), "--json"])

    payload = json.loads(capsys.readouterr().out.strip())
    assert exit_code == 0
    assert payload["detected"] is True
    assert payload["types"] == ["application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"]


def test_detect_reports_missing_files(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = cli.main([str(tmp_path / "missing.bin"), "--json"])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert "unable to read" in captured.err


def test_detect_with_custom_definitions(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    definitions = tmp_path / "definitions.json"
    definitions.write_text(
        json.dumps([{"id": "acme", "type": "application", "subtype": "x-acme", "magic": [65, "*", 77]}]),
        encoding="utf-8",
    )
    target = _write(tmp_path, "sample.acme", b"A\x00M\x01\x02")

    exit_code = cli.main(["--definitions", str(definitions), "--json", str(target)])

    payload = json.loads(capsys.readouterr().out.strip())
    assert exit_code == 0
    assert payload["types"] == ["application/x-acme"]


def test_detect_rejects_bad_definitions(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    definitions = tmp_path / "definitions.json"
    definitions.write_text(json.dumps({"type": "application"}), encoding="utf-8")
    target = _write(tmp_path, "sample.bin", b"data")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--definitions", str(definitions), str(target)])
    assert excinfo.value.code == 2
    assert "must contain a JSON list" in capsys.readouterr().err


def test_parse_prints_canonical_forms(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = cli.main(["parse", 'text / plain; CHARSET="utf-8"', "textplain"])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert captured.out.splitlines() == ["text/plain; charset=utf-8"]
    assert "missing type/subtype" in captured.err


def test_known_lists_types(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["known"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert "image/jpeg" in lines
    assert len(lines) == len(set(lines))


def test_known_json_and_extensions(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["known", "--json"]) == 0
    known = json.loads(capsys.readouterr().out)
    assert {"type": "image", "subtype": "png", "parameters": {}, "mime": "image/png"} in known

    assert cli.main(["known", "--extensions", "--json"]) == 0
    extensions = json.loads(capsys.readouterr().out)
    assert "docx" in extensions["text"]
