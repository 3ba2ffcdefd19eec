"""Split the output of ``make -n -p`` into raw per-target blocks."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from makes.models import DumpScan, RawBlock, UnexpectedEOFError

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

FILES_MARKER = "# Files"
VERSION_PREFIX = "# "


def scan_dump(lines: Iterable[str]) -> DumpScan:
    """Group the "# Files" section of a make database dump into blocks.

    The first line is taken as the version line. Everything up to the
    ``# Files`` marker is skipped, as is the separator line that follows it.
    Each blank line after that closes the block accumulated so far, even an
    empty one; a final block with no trailing blank line is dropped.

    Args:
        lines: Dump text, one line per item (line endings are ignored)

    Returns:
        The version line and the closed blocks in dump order

    Raises:
        UnexpectedEOFError: If the input ends right after the marker
    """
    stream = (line.rstrip("\r\n") for line in lines)

    version = next(stream, "")
    version = version.removeprefix(VERSION_PREFIX)

    if not any(line == FILES_MARKER for line in stream):
        return DumpScan(version=version)

    # separator line under the marker
    if next(stream, None) is None:
        raise UnexpectedEOFError

    blocks = []
    current: list[str] = []
    for line in stream:
        if not line:
            blocks.append(RawBlock(tuple(current)))
            current = []
            continue
        current.append(line)

    logger.debug("Scanned %d blocks from dump", len(blocks))
    return DumpScan(version=version, blocks=tuple(blocks), found_files_section=True)
