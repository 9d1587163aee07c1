"""Archive-member matching.

The buffer is opened as a container and the requested member paths are
looked up verbatim. Anything that goes wrong while opening the container is a
miss rather than an error.
"""

from __future__ import annotations

import io
import logging
import zipfile
from typing import Callable, Collection, FrozenSet, Iterable

logger = logging.getLogger(__name__)

ArchiveOpener = Callable[[bytes], Collection[str]]


def list_zip_members(buffer: bytes) -> FrozenSet[str]:
    """Return the member paths of the zip container held in ``buffer``."""

    with zipfile.ZipFile(io.BytesIO(buffer)) as archive:
        return frozenset(archive.namelist())


def match_members(
    buffer: bytes,
    members: Iterable[str],
    *,
    opener: ArchiveOpener = list_zip_members,
) -> bool:
    """Return whether every path in ``members`` exists inside ``buffer``.

    Args:
        buffer: Raw content, expected to be an archive container.
        members: Exact member paths that must all be present.
        opener: Callable returning the container's member paths. Defaults to
            the zip reader.
    """

    try:
        entries = opener(buffer)
    except Exception as exc:  # noqa: BLE001
        logger.debug("Buffer could not be opened as an archive: %s", exc)
        return False
    return all(member in entries for member in members)
