# topmark:header:start
#
#   project      : LfsDiag
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running LfsDiag against a temporary log directory.

The CLI builds its own [`Diagnostics`][lfsdiag.diagnostics.dispatch.Diagnostics]
inside the Click runner, so everything it prints (including crash log notices
written to the real stderr) shows up in ``Result.output``. Crash logs are
redirected to the given directory through ``LFSDIAG_LOG_DIR``.
"""

from __future__ import annotations

from typing import IO, TYPE_CHECKING, Any, Sequence

from click.testing import CliRunner, Result

from lfsdiag.cli.main import cli
from lfsdiag.cli_shared.exit_codes import ExitCode

if TYPE_CHECKING:
    from pathlib import Path

    import click


def run_cli(
    argv: str | Sequence[str] | None,
    *,
    log_dir: Path,
    env: dict[str, str | None] | None = None,
    input_text: str | bytes | IO[Any] | None = None,
    command: click.Command | None = None,
) -> Result:
    """Invoke the CLI with crash logs going to ``log_dir``.

    Args:
        argv (str | Sequence[str] | None): CLI argument vector, e.g. ``["logs", "last"]``.
        log_dir (Path): Crash log directory for this invocation.
        env (dict[str, str | None] | None): Extra environment overrides (None unsets).
        input_text (str | bytes | IO[Any] | None): Optional standard input.
        command (click.Command | None): Command to invoke instead of the root group.

    Returns:
        Result: The `click.testing.Result` produced by
            `click.testing.CliRunner.invoke`.

    Example:
        ```python
        result = run_cli(["logs"], log_dir=tmp_path / "logs")
        assert_SUCCESS(result)
        ```
    """
    runner = CliRunner()
    full_env: dict[str, str | None] = {"LFSDIAG_LOG_DIR": str(log_dir), "NO_COLOR": "1"}
    full_env.update(env or {})
    return runner.invoke(command or cli, argv, input=input_text, env=full_env)


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0).

    Args:
        result (Result): The Result object returned by `run_cli`.
    """
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_FAILURE(result: Result) -> None:
    """Assert that the command exited with FAILURE (code 1).

    Args:
        result (Result): The Result object returned by `run_cli`.
    """
    assert result.exit_code == ExitCode.FAILURE, result.output


def assert_ERROR(result: Result) -> None:
    """Assert that the command exited with ERROR (code 2).

    Args:
        result (Result): The Result object returned by `run_cli`.
    """
    assert result.exit_code == ExitCode.ERROR, result.output
