# topmark:header:start
#
#   project      : LfsDiag
#   file         : test_uncaught.py
#   file_relpath : tests/cli/test_uncaught.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test: exceptions escaping a command are classified and logged."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from lfsdiag.cli.main import DiagnosticsGroup
from lfsdiag.diagnostics.errors import WrappedError
from tests.cli.conftest import assert_ERROR, run_cli
from tests.conftest import mark_cli

if TYPE_CHECKING:
    from pathlib import Path


@click.group(cls=DiagnosticsGroup)
def crashy() -> None:
    """Throwaway root group exercising the uncaught-error path."""


@crashy.command(name="explode")
def explode_command() -> None:
    raise RuntimeError("disk on fire")


@crashy.command(name="refuse")
def refuse_command() -> None:
    raise WrappedError(FileNotFoundError("a.bin"), "smudge failed")


@crashy.command(name="usage")
def usage_command() -> None:
    raise click.UsageError("bad flag")


@mark_cli
def test_unexpected_exception_is_fatal(log_dir: Path) -> None:
    """An arbitrary exception is a crash: message, crash log, status 2."""
    result = run_cli(["explode"], log_dir=log_dir, command=crashy)

    assert_ERROR(result)
    assert result.output.startswith("disk on fire\n")
    (log,) = sorted(log_dir.iterdir())
    assert f"Errors logged to {log}" in result.output

    body = log.read_text("utf-8")
    assert "\ndisk on fire\n" in body
    assert "RuntimeError: disk on fire" in body


@mark_cli
def test_diagnostic_error_is_recoverable(log_dir: Path) -> None:
    """A non-fatal diagnostic error prints inner and outer messages, no log."""
    result = run_cli(["refuse"], log_dir=log_dir, command=crashy)

    assert_ERROR(result)
    assert result.output == "a.bin\nsmudge failed\n"
    assert not log_dir.exists()


@mark_cli
def test_debug_environment_escalates(log_dir: Path) -> None:
    """With LFSDIAG_DEBUG set even recoverable errors are logged."""
    result = run_cli(["refuse"], log_dir=log_dir, command=crashy, env={"LFSDIAG_DEBUG": "1"})

    assert_ERROR(result)
    assert len(list(log_dir.iterdir())) == 1


@mark_cli
def test_click_errors_are_left_to_click(log_dir: Path) -> None:
    """Usage errors keep Click's own reporting and write no log."""
    result = run_cli(["usage"], log_dir=log_dir, command=crashy)

    assert result.exit_code == click.UsageError.exit_code
    assert "bad flag" in result.output
    assert not log_dir.exists()
