"""Run make, both to dump its database and to build the chosen target."""

from __future__ import annotations

import logging
import shlex
import subprocess
import time
from pathlib import Path
from typing import TYPE_CHECKING

from makes.assembler import load_targets
from makes.models import MakeFailedError

if TYPE_CHECKING:
    from makes.models import Target
    from makes.settings import Settings

logger = logging.getLogger(__name__)

DUMP_FLAGS = ("-n", "-p")
ERROR_MARKER = "*** "


def dump_database(settings: Settings) -> str:
    """Run make in dry-run, print-database mode and return its combined output.

    Raises:
        MakeFailedError: If make exits non-zero
        FileNotFoundError: If the make executable is missing
    """
    cmd = settings.make_command(*DUMP_FLAGS)
    logger.debug("Running %s", cmd)
    try:
        result = subprocess.run(  # noqa: S603
            cmd,
            check=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
        )
    except subprocess.CalledProcessError as e:
        errors = [line for line in (e.output or "").splitlines() if ERROR_MARKER in line]
        msg = "\n".join([f"{shlex.join(cmd)}: exit status {e.returncode}", *errors])
        raise MakeFailedError(msg) from e
    return result.stdout


def discover_targets(settings: Settings) -> tuple[str, list[Target]]:
    """Collect the targets of the configured makefile.

    Returns:
        The make version line and the targets in dump order
    """
    started = time.perf_counter()
    dump = dump_database(settings)
    with Path(settings.makefile).open(encoding="utf-8", errors="replace") as mkfilefh:
        version, targets = load_targets(dump.splitlines(), mkfilefh)
    logger.debug("Discovered %d targets in %.3fs", len(targets), time.perf_counter() - started)
    return version, targets


def run_target(name: str, settings: Settings) -> int:
    """Build a target, streaming make's output to our stdout.

    Returns:
        The exit status of make
    """
    cmd = settings.make_command(name)
    logger.debug("Running %s", cmd)
    return subprocess.run(cmd, check=False, stderr=subprocess.STDOUT).returncode  # noqa: S603
