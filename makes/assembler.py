"""Join classified targets with their help comments."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from makes.annotator import build_comment_index, help_text
from makes.classifier import classify_blocks
from makes.dump_scanner import FILES_MARKER, scan_dump
from makes.models import ClassifiedTarget, Target

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

logger = logging.getLogger(__name__)


def assemble_targets(classified: Iterable[ClassifiedTarget], comments: Mapping[str, str]) -> list[Target]:
    """Attach help text to each classified target, keeping dump order."""
    targets = []
    for ctarget in classified:
        raw = comments.get(ctarget.name)
        targets.append(
            Target(
                name=ctarget.name,
                help=help_text(raw) if raw is not None else "",
                is_phony=ctarget.is_phony,
                updated=ctarget.last_update,
            ),
        )
    return targets


def load_targets(dump_lines: Iterable[str], makefile_lines: Iterable[str]) -> tuple[str, list[Target]]:
    """Turn a database dump and its makefile into the list of targets.

    Args:
        dump_lines: Output of ``make -n -p``
        makefile_lines: Contents of the makefile the dump was produced from

    Returns:
        The make version line and the targets in dump order
    """
    scan = scan_dump(dump_lines)
    if not scan.found_files_section:
        logger.info("No %r section in make output, no targets to offer", FILES_MARKER)
    classified = classify_blocks(scan.blocks)
    comments = build_comment_index(makefile_lines)
    targets = assemble_targets(classified, comments)
    logger.debug("Assembled %d targets (%d documented)", len(targets), sum(1 for t in targets if t.help))
    return scan.version, targets
