"""Command-line entry point for mimesniff.

* ``mimesniff PATH...`` detects content types for each file.
* ``mimesniff parse EXPR...`` prints canonical MIME strings.
* ``mimesniff known`` lists the known-type or file-extension catalogue.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Sequence, Tuple

from .catalog import FILE_EXTENSIONS
from .core.detector import Detector
from .core.mime import Mime, MimeParseError
from .core.types import DefinitionError, SignatureDefinition, definition_from_mapping

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _add_log_level(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--log-level",
        choices=_LOG_LEVELS,
        default="WARNING",
        help="Logging verbosity (default: WARNING).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mimesniff", description="Detect content types from file bytes"
    )
    parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="Files to inspect.",
    )
    parser.add_argument(
        "--definitions",
        type=Path,
        help="JSON file with extra signature definitions to register.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit JSON lines instead of a table.",
    )
    _add_log_level(parser)
    return parser


def _build_parse_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mimesniff parse",
        description="Normalise MIME type expressions.",
    )
    parser.add_argument("expressions", nargs="+", help="MIME expressions to parse.")
    _add_log_level(parser)
    return parser


def _build_known_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mimesniff known",
        description="List the types the built-in catalogue can detect.",
    )
    parser.add_argument(
        "--extensions",
        action="store_true",
        help="List known file extensions per category instead.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit JSON instead of plain lines.",
    )
    _add_log_level(parser)
    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_definitions(path: Path) -> List[SignatureDefinition]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise DefinitionError(f"Unable to read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise DefinitionError(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(payload, list):
        raise DefinitionError(f"{path} must contain a JSON list of definitions")
    return [definition_from_mapping(entry) for entry in payload]


def _emit_table(results: Sequence[Tuple[Path, List[Mime]]]) -> None:
    rows = [
        (str(path), ", ".join(str(mime) for mime in mimes) or "(none)")
        for path, mimes in results
    ]
    width = max([len("Path")] + [len(row[0]) for row in rows])
    print(f"{'Path'.ljust(width)}  Types")
    print(f"{'-' * width}  {'-' * 5}")
    for path, types in rows:
        print(f"{path.ljust(width)}  {types}")


def _emit_json(results: Sequence[Tuple[Path, List[Mime]]]) -> None:
    for path, mimes in results:
        payload = {
            "path": str(path),
            "detected": bool(mimes),
            "types": [str(mime) for mime in mimes],
        }
        print(json.dumps(payload, sort_keys=True))


def _run_parse(argv: Sequence[str]) -> int:
    parser = _build_parse_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    exit_code = 0
    for expression in args.expressions:
        try:
            sys.stdout.write(f"{Mime.normalize(expression)}\n")
        except MimeParseError as exc:
            sys.stderr.write(f"error: {exc} ({exc.format})\n")
            exit_code = 1
    return exit_code


def _run_known(argv: Sequence[str]) -> int:
    parser = _build_known_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    if args.extensions:
        if args.json:
            print(json.dumps({key: list(value) for key, value in FILE_EXTENSIONS.items()}, indent=2))
        else:
            for category, extensions in FILE_EXTENSIONS.items():
                print(f"{category}: {' '.join(extensions)}")
        return 0

    known = Mime.known_types()
    if args.json:
        print(json.dumps([mime.to_dict() for mime in known], indent=2))
    else:
        for mime in known:
            print(mime)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    if argv is None:
        argv = list(sys.argv[1:])
    else:
        argv = list(argv)
    if argv and argv[0] == "parse":
        return _run_parse(argv[1:])
    if argv and argv[0] == "known":
        return _run_known(argv[1:])

    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    detector = Detector()
    if args.definitions is not None:
        try:
            detector.add_definitions(_load_definitions(args.definitions))
        except DefinitionError as exc:
            parser.error(str(exc))

    exit_code = 0
    results: List[Tuple[Path, List[Mime]]] = []
    for path in args.paths:
        try:
            buffer = path.read_bytes()
        except OSError as exc:
            sys.stderr.write(f"error: unable to read {path}: {exc}\n")
            exit_code = 1
            continue
        logger.debug("Read %d byte(s) from %s", len(buffer), path)
        results.append((path, Mime.detect(buffer, detector)))

    if args.json:
        _emit_json(results)
    else:
        _emit_table(results)
    return exit_code


def console_main() -> None:
    """Entry point for ``mimesniff`` console script."""

    sys.exit(main())


if __name__ == "__main__":  # pragma: no cover - CLI entry
    sys.exit(main())
