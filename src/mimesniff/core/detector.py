"""Core detection orchestration for mimesniff.

Every registered definition is evaluated against the buffer on a thread
pool. Each evaluation is isolated: an exception raised while checking one
definition turns into an all-``False`` result for that definition and never
aborts the batch. Matching results are then ranked (byte signature, then
archive members, then text pattern) and the whole best-ranked tie group is
returned in registration order.

Examples
--------
>>> from mimesniff.core.types import SignatureDefinition
>>> detector = Detector(
...     definitions=[SignatureDefinition(id="fixture", type="application",
...                                      subtype="x-fixture", byte_signature=b"FX")],
...     builtins=(),
... )
>>> [definition.id for definition in detector.detect(b"FX-payload")]
['fixture']
>>> detector.detect(b"")
[]
"""

from __future__ import annotations

import asyncio
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Sequence, Tuple

from ..formats.archive import ArchiveOpener, list_zip_members, match_members
from ..formats.magic import match_magic
from ..formats.text import DEFAULT_TEXT_WINDOW, match_pattern
from .types import DetectionResult, SignatureDefinition

logger = logging.getLogger(__name__)

_DEFAULT_MAX_WORKERS = min(32, (os.cpu_count() or 4) + 4)
_MAX_TEXT_WINDOW = 64 * 1024  # Guardrail against decoding whole payloads.


def _validate_max_workers(value: Optional[int]) -> int:
    if value is None:
        return _DEFAULT_MAX_WORKERS
    if value <= 0:
        raise ValueError("max_workers must be a positive integer")
    return value


def _validate_text_window(value: Optional[int]) -> int:
    """Clamp and validate the text prefix window."""

    if value is None:
        return DEFAULT_TEXT_WINDOW
    if value <= 0:
        raise ValueError("text_window must be a positive integer")
    if value > _MAX_TEXT_WINDOW:
        logger.warning(
            "Text window %s exceeds %s bytes; clamping to guardrail.",
            value,
            _MAX_TEXT_WINDOW,
        )
        return _MAX_TEXT_WINDOW
    return value


def _coerce_buffer(buffer: object) -> bytes:
    if isinstance(buffer, bytes):
        return buffer
    if isinstance(buffer, (bytearray, memoryview)):
        return bytes(buffer)
    raise TypeError(
        f"Expected a bytes-like buffer, got {type(buffer).__name__}"
    )


def _check_definitions(definitions: Iterable[SignatureDefinition]) -> Tuple[SignatureDefinition, ...]:
    checked = tuple(definitions)
    for definition in checked:
        if not isinstance(definition, SignatureDefinition):
            raise TypeError(
                f"Expected SignatureDefinition instances, got {type(definition).__name__}"
            )
    return checked


class Detector:
    """Evaluates a registry of signature definitions against byte buffers.

    Example
    -------
    >>> detector = Detector()
    >>> [d.subtype for d in detector.detect(b"\\xff\\xd8\\xff\\xe0")]
    ['jpeg']
    """

    def __init__(
        self,
        definitions: Optional[Iterable[SignatureDefinition]] = None,
        *,
        builtins: Optional[Sequence[SignatureDefinition]] = None,
        max_workers: Optional[int] = None,
        text_window: Optional[int] = None,
        archive_opener: Optional[ArchiveOpener] = None,
    ) -> None:
        """Create a detector.

        Args:
            definitions: Extra definitions appended after ``builtins``.
            builtins: Base catalogue, ``MIME_DEFINITIONS`` when omitted.
                Pass ``()`` for a detector that only knows the caller
                supplied definitions.
            max_workers: Upper bound on concurrent evaluations.
            text_window: Number of leading bytes decoded for text patterns.
                Defaults to 128.
            archive_opener: Callable listing the member paths of an archive
                buffer. Defaults to the zip reader.
        """
        if builtins is None:
            from ..catalog import MIME_DEFINITIONS

            builtins = MIME_DEFINITIONS
        self._definitions: Tuple[SignatureDefinition, ...] = _check_definitions(builtins)
        if definitions is not None:
            self.add_definitions(definitions)
        self._max_workers = _validate_max_workers(max_workers)
        self._text_window = _validate_text_window(text_window)
        self._archive_opener = archive_opener or list_zip_members

    @property
    def definitions(self) -> Tuple[SignatureDefinition, ...]:
        """Snapshot of the registry in registration order."""

        return self._definitions

    @property
    def text_window(self) -> int:
        return self._text_window

    def add_definitions(self, definitions: Iterable[SignatureDefinition]) -> None:
        """Append ``definitions`` to the registry.

        No deduplication happens; later entries become additional candidates.
        The registry tuple is replaced rather than mutated so in-flight
        detections keep the snapshot they started with.
        """

        self._definitions = self._definitions + _check_definitions(definitions)

    def evaluate(self, buffer: bytes, definition: SignatureDefinition) -> DetectionResult:
        """Evaluate every facet ``definition`` declares against ``buffer``."""

        magic = definition.byte_signature
        members = definition.required_members
        pattern = definition.text_pattern
        return DetectionResult(
            definition=definition,
            magic_matched=magic is not None and match_magic(buffer, magic),
            members_matched=members is not None
            and match_members(buffer, members, opener=self._archive_opener),
            pattern_matched=pattern is not None
            and match_pattern(buffer, pattern, window=self._text_window),
        )

    def _evaluate_isolated(self, buffer: bytes, definition: SignatureDefinition) -> DetectionResult:
        try:
            return self.evaluate(buffer, definition)
        except Exception:  # noqa: BLE001
            logger.warning(
                "Evaluation of definition %r (%s) failed; treating as no match",
                definition.id,
                definition.code,
                exc_info=True,
            )
            return DetectionResult(definition=definition)

    def results(self, buffer: bytes) -> List[DetectionResult]:
        """Return one result per registered definition, in registry order."""

        data = _coerce_buffer(buffer)
        snapshot = self._definitions
        if not snapshot:
            return []
        workers = min(self._max_workers, len(snapshot))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="mimesniff") as pool:
            futures = [
                pool.submit(self._evaluate_isolated, data, definition)
                for definition in snapshot
            ]
            return [future.result() for future in futures]

    def detect(self, buffer: bytes) -> List[SignatureDefinition]:
        """Return the best-ranked tie group of definitions matching ``buffer``.

        An empty buffer, or one that matches nothing, yields ``[]``.
        """

        data = _coerce_buffer(buffer)
        if not data:
            return []
        matches = [result for result in self.results(data) if result.matched]
        if not matches:
            return []
        best = min(result.rank for result in matches)
        winners = [result.definition for result in matches if result.rank == best]
        logger.debug(
            "Detected %d candidate(s) out of %d match(es): %s",
            len(winners),
            len(matches),
            ", ".join(definition.code for definition in winners),
        )
        return winners

    async def detect_async(self, buffer: bytes) -> List[SignatureDefinition]:
        """Run :meth:`detect` on the running loop's default executor."""

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.detect, buffer)
