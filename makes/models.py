"""Data types and exceptions shared by the target extraction pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from datetime import datetime


class MakesError(Exception):
    """Base class for errors that abort a run."""


class UnexpectedEOFError(MakesError):
    """Raised when the dump ends right after the files section marker."""

    def __init__(self) -> None:
        """Initialize with the fixed message."""
        super().__init__("unexpected EOF")


class InvalidTimestampError(MakesError):
    """Raised when a "Last modified" line carries an unparseable timestamp."""


class MakeFailedError(MakesError):
    """Raised when make exits non-zero while dumping its database."""


class SelectionAbortedError(MakesError):
    """Raised when the operator cancels the interactive selection."""


class NoTargetsError(MakesError):
    """Raised when there is nothing to select from."""


@dataclass(frozen=True)
class RawBlock:
    """One blank-line delimited group of lines from the "# Files" section."""

    lines: tuple[str, ...] = ()


@dataclass(frozen=True)
class DumpScan:
    """Result of scanning a database dump."""

    version: str
    blocks: tuple[RawBlock, ...] = field(default_factory=tuple)
    found_files_section: bool = False


@dataclass(frozen=True)
class ClassifiedTarget:
    """A target derived from a raw block, before annotation."""

    name: str
    is_phony: bool = False
    last_update: datetime | None = None


@dataclass(frozen=True)
class Target:
    """A documented make target, ready for presentation.

    Attributes:
        name: Target name as printed by make
        help: Text of the ``##`` comment on the target line, or ""
        is_phony: Whether the target is declared ``.PHONY``
        updated: Last modification time in local time, None if never built
    """

    name: str
    help: str = ""
    is_phony: bool = False
    updated: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping of this target."""
        return {
            "name": self.name,
            "help": self.help,
            "is_phony": self.is_phony,
            "updated": self.updated.isoformat() if self.updated else None,
        }
