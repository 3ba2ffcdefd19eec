"""Lift ``##`` help comments out of a makefile."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

HELP_MARKER = "##"


def build_comment_index(lines: Iterable[str]) -> dict[str, str]:
    """Get a mapping of {target: raw comment} for documented makefile lines.

    Only lines of the form ``target: deps ## help`` with exactly one colon
    are considered. The key is used as written and the value is everything
    after the colon; later lines win.
    """
    comments = {}
    for line in lines:
        if HELP_MARKER not in line:
            continue
        parts = line.rstrip("\r\n").split(":")
        if len(parts) != 2:  # noqa: PLR2004
            continue
        target, rest = parts
        comments[target] = rest
    logger.debug("Indexed %d documented targets", len(comments))
    return comments


def help_text(raw: str) -> str:
    """Return the text after the last ``##`` marker, stripped."""
    return raw.rpartition(HELP_MARKER)[-1].strip()
