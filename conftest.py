"""Fixtures for the test suite."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

logging.basicConfig(
    force=True,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.DEBUG,
)

# make_dump.txt is `make -n -p` (GNU Make 4.3) run on the Makefile next to it,
# trimmed to the blocks the tests care about.
DATA_DIR = Path(__file__).parent / "makes" / "tests" / "data"


@pytest.fixture
def sample_dump() -> str:
    """Combined output of ``make -n -p`` for the sample makefile."""
    return (DATA_DIR / "make_dump.txt").read_text(encoding="utf-8")


@pytest.fixture
def sample_makefile() -> str:
    """A makefile with ``##`` help comments."""
    return (DATA_DIR / "Makefile").read_text(encoding="utf-8")


@pytest.fixture
def project_dir(tmp_path: Path, sample_makefile: str, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A working directory holding the sample makefile and its sources."""
    (tmp_path / "Makefile").write_text(sample_makefile, encoding="utf-8")
    (tmp_path / "main.c").write_text("int main(void) { return 0; }\n", encoding="utf-8")
    (tmp_path / "main.o").write_bytes(b"")
    monkeypatch.chdir(tmp_path)
    return tmp_path
