"""Derive target names and metadata from raw dump blocks."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import TYPE_CHECKING

from makes.models import ClassifiedTarget, InvalidTimestampError, RawBlock

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

NOT_A_TARGET = "# Not a target:"
PHONY_MARKER = "Phony target (prerequisite of .PHONY)"
LAST_MODIFIED_MARKER = "Last modified"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
TIMESTAMP_PATTERN = re.compile(r"(?P<seconds>\d{4}-\d{2}-\d{2} \d{1,2}:\d{2}:\d{2})(?:\.(?P<fraction>\d+))?", re.ASCII)
EXCLUDED_PREFIXES = ("#", ".PHONY")


def block_name(block: RawBlock) -> str:
    """Return the text before the first colon of the block's first line."""
    if not block.lines:
        return NOT_A_TARGET
    return block.lines[0].partition(":")[0]


def is_phony(block: RawBlock) -> bool:
    """Check whether make reported the block as a phony target."""
    return any(PHONY_MARKER in line for line in block.lines)


def last_update(block: RawBlock) -> datetime | None:
    """Return the block's last modification time in the local time zone.

    make prints ``YYYY-MM-DD HH:MM:SS`` optionally followed by a fraction of
    a second (nanoseconds on GNU make 4.x); the fraction is kept to the
    microsecond.

    Returns:
        Aware datetime, or None if the block has no "Last modified" line

    Raises:
        InvalidTimestampError: If the timestamp does not match TIMESTAMP_PATTERN
    """
    for line in block.lines:
        if LAST_MODIFIED_MARKER not in line:
            continue
        stamp = " ".join(line.split()[-2:])
        match = TIMESTAMP_PATTERN.fullmatch(stamp)
        if match is None:
            msg = f"parsing time {stamp!r} as {TIMESTAMP_FORMAT!r}: does not match"
            raise InvalidTimestampError(msg)
        try:
            # naive local time, made aware in the host zone
            parsed = datetime.strptime(match["seconds"], TIMESTAMP_FORMAT)  # noqa: DTZ007
        except ValueError as e:
            msg = f"parsing time {stamp!r} as {TIMESTAMP_FORMAT!r}: {e}"
            raise InvalidTimestampError(msg) from e
        fraction = match["fraction"] or ""
        microseconds = int(fraction[:6].ljust(6, "0"))
        return parsed.replace(microsecond=microseconds).astimezone()
    return None


def is_target_block(block: RawBlock) -> bool:
    """Check whether a block describes a user-facing target.

    Comments, make's own bookkeeping entries and the ``.PHONY`` declaration
    are excluded.
    """
    return not block_name(block).startswith(EXCLUDED_PREFIXES)


def classify(block: RawBlock) -> ClassifiedTarget:
    """Build a ClassifiedTarget from a block."""
    return ClassifiedTarget(
        name=block_name(block),
        is_phony=is_phony(block),
        last_update=last_update(block),
    )


def classify_blocks(blocks: Iterable[RawBlock]) -> list[ClassifiedTarget]:
    """Classify the target blocks in dump order, keeping duplicates."""
    classified = [classify(block) for block in blocks if is_target_block(block)]
    logger.debug("Classified %d targets", len(classified))
    return classified
