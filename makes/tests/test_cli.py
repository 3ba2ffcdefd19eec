"""Tests for the command-line interface."""

from datetime import datetime
from unittest import mock

import orjson
import pytest

from makes.cli import Args, get_args, main
from makes.models import SelectionAbortedError, Target, UnexpectedEOFError

TARGETS = [
    Target(name="build", help="Build the program", updated=datetime(2024, 1, 2, 3, 4, 5).astimezone()),  # noqa: DTZ001
    Target(name="test", help="", is_phony=True),
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's MAKES_* variables out of the tests."""
    for name in ("MAKES_MAKE", "MAKES_MAKEFILE", "MAKES_MAX_SIZE", "MAKES_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


class TestGetArgs:
    """Test cases for get_args."""

    def test_defaults(self) -> None:
        """Test parsing an empty command line."""
        assert get_args([]) == Args()

    def test_flags(self) -> None:
        """Test parsing every flag."""
        assert get_args(["-f", "build.mk", "-l", "-v"]) == Args(file="build.mk", list_only=True, verbose=True)
        assert get_args(["--json"]).as_json

    def test_make_and_max_size(self) -> None:
        """Test the flags that override MAKES_MAKE and MAKES_MAX_SIZE."""
        assert get_args(["--make", "gmake", "--max-size", "4"]) == Args(make="gmake", max_size=4)

    @pytest.mark.parametrize("value", ["0", "-1", "lots"])
    def test_max_size_must_be_positive(self, value: str) -> None:
        """Test that a bad row count is a usage error."""
        with pytest.raises(SystemExit):
            get_args(["--max-size", value])

    def test_list_and_json_are_exclusive(self) -> None:
        """Test that only one output mode can be chosen."""
        with pytest.raises(SystemExit):
            get_args(["--list", "--json"])

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that --version prints the product name."""
        with pytest.raises(SystemExit):
            get_args(["--version"])
        assert capsys.readouterr().out.startswith("makes ")


class TestMain:
    """Test cases for main."""

    def test_runs_selected_target(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test the interactive flow returns make's exit status."""
        with (
            mock.patch("makes.cli.discover_targets", return_value=("GNU Make 4.3", TARGETS)),
            mock.patch("makes.cli.select_target", return_value=TARGETS[1]) as select,
            mock.patch("makes.cli.run_target", return_value=2) as run,
        ):
            assert main([]) == 2

        select.assert_called_once_with(TARGETS, 10)
        assert run.call_args.args[0] == "test"
        out = capsys.readouterr().out
        assert "GNU Make 4.3 (duration=" in out
        assert 'Running "make test" ...' in out

    def test_file_flag_sets_makefile(self) -> None:
        """Test that -f reaches the settings used for discovery."""
        with (
            mock.patch("makes.cli.discover_targets", return_value=("v", TARGETS)) as discover,
            mock.patch("makes.cli.select_target", return_value=TARGETS[0]),
            mock.patch("makes.cli.run_target", return_value=0),
        ):
            main(["-f", "build.mk"])
        assert discover.call_args.args[0].makefile == "build.mk"

    def test_flags_override_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that command-line flags win over MAKES_* variables."""
        monkeypatch.setenv("MAKES_MAKE", "make")
        monkeypatch.setenv("MAKES_MAX_SIZE", "20")
        with (
            mock.patch("makes.cli.discover_targets", return_value=("v", TARGETS)) as discover,
            mock.patch("makes.cli.select_target", return_value=TARGETS[0]) as select,
            mock.patch("makes.cli.run_target", return_value=0),
        ):
            main(["--make", "gmake", "--max-size", "3"])
        assert discover.call_args.args[0].make == "gmake"
        select.assert_called_once_with(TARGETS, 3)

    def test_environment_is_used_without_flags(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that MAKES_MAX_SIZE applies when no flag is given."""
        monkeypatch.setenv("MAKES_MAX_SIZE", "20")
        with (
            mock.patch("makes.cli.discover_targets", return_value=("v", TARGETS)),
            mock.patch("makes.cli.select_target", return_value=TARGETS[0]) as select,
            mock.patch("makes.cli.run_target", return_value=0),
        ):
            main([])
        select.assert_called_once_with(TARGETS, 20)

    def test_list(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test plain listing without the menu."""
        with (
            mock.patch("makes.cli.discover_targets", return_value=("v", TARGETS)),
            mock.patch("makes.cli.select_target") as select,
        ):
            assert main(["--list"]) == 0
        select.assert_not_called()
        assert capsys.readouterr().out.splitlines() == ["build  Build the program", "test"]

    def test_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test JSON listing in dump order."""
        with mock.patch("makes.cli.discover_targets", return_value=("v", TARGETS)):
            assert main(["--json"]) == 0
        payload = orjson.loads(capsys.readouterr().out)
        assert [item["name"] for item in payload] == ["build", "test"]
        assert payload[0]["updated"] == TARGETS[0].updated.isoformat()
        assert payload[1] == {"name": "test", "help": "", "is_phony": True, "updated": None}

    @pytest.mark.parametrize(
        "error",
        [UnexpectedEOFError(), FileNotFoundError(2, "No such file or directory", "Makefile")],
    )
    def test_fatal_errors(self, error: Exception, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that fatal errors print a message and exit 1."""
        with mock.patch("makes.cli.discover_targets", side_effect=error):
            assert main([]) == 1
        assert capsys.readouterr().err.startswith("Error: ")

    def test_cancelled_selection(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that aborting the menu exits 1 without running make."""
        with (
            mock.patch("makes.cli.discover_targets", return_value=("v", TARGETS)),
            mock.patch("makes.cli.select_target", side_effect=SelectionAbortedError("^C")),
            mock.patch("makes.cli.run_target") as run,
        ):
            assert main([]) == 1
        run.assert_not_called()
        assert capsys.readouterr().err == "Error: ^C\n"
