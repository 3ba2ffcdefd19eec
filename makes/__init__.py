"""Interactively select make targets from a Makefile."""

from makes.assembler import assemble_targets, load_targets
from makes.models import MakesError, Target

__version__ = "0.1.0"

__all__ = ["MakesError", "Target", "__version__", "assemble_targets", "load_targets"]
