# topmark:header:start
#
#   project      : LfsDiag
#   file         : test_version.py
#   file_relpath : tests/cli/test_version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test: `version` command output and root group basics."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from lfsdiag.constants import LFSDIAG_VERSION
from tests.cli.conftest import assert_ERROR, assert_SUCCESS, run_cli
from tests.conftest import mark_cli

if TYPE_CHECKING:
    from pathlib import Path

_DESCRIPTOR_RE = re.compile(r"^lfsdiag/(?P<version>\S+) \(\S+ \S+; python \S+\)$")


@mark_cli
def test_version_outputs_descriptor(tmp_path: Path) -> None:
    """It should print the version descriptor that heads crash logs."""
    result = run_cli(["--no-color", "version"], log_dir=tmp_path / "logs")

    assert_SUCCESS(result)

    out: str = result.output.strip()
    match = _DESCRIPTOR_RE.fullmatch(out)
    assert match is not None, out
    assert match.group("version") == LFSDIAG_VERSION


@mark_cli
def test_verbose_version_shows_git_and_log_dir(tmp_path: Path) -> None:
    """With -v the git version line and the log directory follow."""
    log_dir = tmp_path / "logs"
    result = run_cli(["-v", "version"], log_dir=log_dir)

    assert_SUCCESS(result)

    lines = result.output.splitlines()
    assert len(lines) == 3
    assert lines[1].startswith(("git version", "Error getting git version:"))
    assert lines[2] == f"Log directory: {log_dir}"


@mark_cli
def test_verbose_and_quiet_flags_parse(tmp_path: Path) -> None:
    """It should accept verbosity and quietness flags and exit with code 0."""
    for args in (["-v", "version"], ["-vv", "version"], ["-q", "version"]):
        assert_SUCCESS(run_cli(args, log_dir=tmp_path / "logs"))


@mark_cli
def test_verbose_and_quiet_are_exclusive(tmp_path: Path) -> None:
    """Combining -v and -q is a usage error."""
    result = run_cli(["-v", "-q", "version"], log_dir=tmp_path / "logs")

    assert_ERROR(result)
    assert "mutually exclusive" in result.output


@mark_cli
def test_no_command_prints_descriptor_and_help(tmp_path: Path) -> None:
    """Without a subcommand the descriptor and the help text are shown."""
    result = run_cli([], log_dir=tmp_path / "logs")

    assert_SUCCESS(result)
    assert result.output.startswith("lfsdiag/")
    assert "Usage:" in result.output
    assert "logs" in result.output
