"""Settings module for runtime configuration."""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_MAKE = "make"
DEFAULT_MAKEFILE = "Makefile"
DEFAULT_MAX_SIZE = 10
DEFAULT_LOG_LEVEL = "WARNING"


def _positive_int(value: str | None, default: int) -> int:
    """Parse a positive integer, falling back to a default.

    Args:
        value: String value to parse
        default: Value to use when parsing fails

    Returns:
        The parsed integer if it is positive, default otherwise
    """
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError:
        logger.warning("Ignoring invalid MAKES_MAX_SIZE=%r, using %d", value, default)
        return default
    if parsed < 1:
        logger.warning("Ignoring non-positive MAKES_MAX_SIZE=%r, using %d", value, default)
        return default
    return parsed


def _log_level(value: str) -> str:
    """Return value as an upper-case logging level name, or the default."""
    level = value.upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("Ignoring unknown MAKES_LOG_LEVEL=%r, using %s", value, DEFAULT_LOG_LEVEL)
        return DEFAULT_LOG_LEVEL
    return level


class Settings:
    """Simple settings class for runtime configuration."""

    def __init__(self) -> None:
        """Initialize settings from environment variables."""
        self.make = os.environ.get("MAKES_MAKE", DEFAULT_MAKE)
        self.makefile = os.environ.get("MAKES_MAKEFILE", DEFAULT_MAKEFILE)
        self.max_size = _positive_int(os.environ.get("MAKES_MAX_SIZE"), DEFAULT_MAX_SIZE)
        self.log_level = _log_level(os.environ.get("MAKES_LOG_LEVEL", DEFAULT_LOG_LEVEL))

    @property
    def uses_default_makefile(self) -> bool:
        """Check if make should find the makefile on its own."""
        return self.makefile == DEFAULT_MAKEFILE

    def make_command(self, *args: str) -> list[str]:
        """Build a make command line honoring the configured makefile."""
        cmd = [self.make]
        if not self.uses_default_makefile:
            cmd.extend(["-f", self.makefile])
        cmd.extend(args)
        return cmd

