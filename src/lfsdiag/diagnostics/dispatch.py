# topmark:header:start
#
#   project      : LfsDiag
#   file         : dispatch.py
#   file_relpath : src/lfsdiag/diagnostics/dispatch.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Dispatch surface of the diagnostic subsystem.

[`Diagnostics`][lfsdiag.diagnostics.dispatch.Diagnostics] is built once at
startup and handed to every command (the CLI keeps it in
``ctx.obj["diagnostics"]``). Commands report through it instead of printing
directly:

| Entry point        | Prints            | Crash log | Terminates |
| ------------------ | ----------------- | --------- | ---------- |
| ``print``          | stdout            | no        | no         |
| ``error``          | stderr            | no        | no         |
| ``debug``          | stderr, if debug  | no        | no         |
| ``exit``           | stderr            | no        | yes (2)    |
| ``logged_error``   | stderr            | yes       | no         |
| ``panic``          | stderr            | yes       | yes (2)    |
| ``exit_with_error``| stderr            | if fatal  | yes (2)    |

Everything printed goes through the dual-sink writers and therefore ends up
in the transcript embedded in crash logs.
"""

from __future__ import annotations

import sys
from dataclasses import replace
from datetime import datetime
from typing import TYPE_CHECKING, Callable, TextIO

import click

from lfsdiag.cli_shared.exit_codes import ExitCode
from lfsdiag.config.logging import get_logger, setup_debug_channel
from lfsdiag.constants import PROGRAM_NAME
from lfsdiag.diagnostics.classifier import (
    Decision,
    decide_exit_with_error,
    decide_logged_error,
    decide_panic,
)
from lfsdiag.diagnostics.environment import ProcessEnvironment
from lfsdiag.diagnostics.panic_log import PanicLogWriter
from lfsdiag.diagnostics.transcript import DualSinkWriter, TranscriptBuffer

if TYPE_CHECKING:
    from collections.abc import Sequence

    from lfsdiag.config.logging import LfsDiagLogger
    from lfsdiag.config.settings import Settings
    from lfsdiag.diagnostics.environment import EnvironmentProvider

logger: LfsDiagLogger = get_logger(__name__)

ExitFunc = Callable[[int], object]


def _format(fmt: str, args: tuple[object, ...]) -> str:
    return fmt % args if args else fmt


class Diagnostics:
    """Process-wide diagnostic context and dispatch entry points.

    Args:
        settings (Settings): Resolved settings (debug flag, log directory, ...).
        stdout (TextIO | None): Real standard output. Defaults to ``sys.stdout``.
        stderr (TextIO | None): Real standard error. Defaults to ``sys.stderr``.
        stdin (TextIO | None): Standard input, for ``require_stdin``. Defaults to ``sys.stdin``.
        argv (Sequence[str] | None): Process arguments recorded in crash logs. Defaults to
            ``sys.argv``.
        environment (EnvironmentProvider | None): Version/environment source for crash logs.
        transcript (TranscriptBuffer | None): Transcript to append to; a new one by default.
        exit (ExitFunc): Terminates the process; ``sys.exit`` by default.
        clock (Callable[[], datetime]): Time source for crash log names.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
        stdin: TextIO | None = None,
        argv: Sequence[str] | None = None,
        environment: EnvironmentProvider | None = None,
        transcript: TranscriptBuffer | None = None,
        exit: ExitFunc = sys.exit,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.settings = settings
        self.transcript = transcript if transcript is not None else TranscriptBuffer()
        self.out = DualSinkWriter(stdout if stdout is not None else sys.stdout, self.transcript)
        self.err = DualSinkWriter(stderr if stderr is not None else sys.stderr, self.transcript)
        self.stdin: TextIO | None = stdin if stdin is not None else sys.stdin
        self.argv: list[str] = list(sys.argv if argv is None else argv)
        # The default environment reports the settings, so it follows enable_debugging().
        self._owns_environment = environment is None
        self.environment: EnvironmentProvider = environment or ProcessEnvironment(settings)
        self.panic_log = PanicLogWriter(
            settings.log_dir,
            self.transcript,
            self.environment,
            self.argv,
            self.err.real,
            clock=clock,
        )
        self._exit = exit
        self._debugging = settings.debugging
        self.debug_logger: LfsDiagLogger = setup_debug_channel(self.err, enabled=self._debugging)

    @property
    def debugging(self) -> bool:
        """The global debug flag."""
        return self._debugging

    def enable_debugging(self) -> None:
        """Turn the debug flag on. Called once at startup (``--debug``).

        ``settings`` is replaced so that crash logs report ``Debugging=true``.
        """
        self._debugging = True
        self.settings = replace(self.settings, debugging=True)
        if self._owns_environment:
            self.environment = ProcessEnvironment(self.settings)
            self.panic_log.environment = self.environment
        self.debug_logger = setup_debug_channel(self.err, enabled=True)

    # --- Output ---

    def print(self, fmt: str, *args: object) -> None:
        """Print a formatted line to stdout (and the transcript)."""
        click.echo(_format(fmt, args), file=self.out)

    def error(self, fmt: str, *args: object) -> None:
        """Print a formatted line to stderr (and the transcript)."""
        click.echo(_format(fmt, args), file=self.err)

    def debug(self, fmt: str, *args: object) -> None:
        """Emit a timestamped debug line, only when debugging is enabled."""
        if not self._debugging:
            return
        self.debug_logger.debug(fmt, *args)

    # --- Termination and crash logs ---

    def exit(self, fmt: str, *args: object) -> None:
        """Print an error and terminate with status 2, without a crash log."""
        self.error(fmt, *args)
        self._exit(ExitCode.ERROR)

    def logged_error(self, err: BaseException | None, fmt: str, *args: object) -> None:
        """Print an error and write a crash log for ``err``. Never terminates."""
        self.apply(decide_logged_error(err, _format(fmt, args)), err)

    def panic(self, err: BaseException | None, fmt: str, *args: object) -> None:
        """Print an error, write a crash log for ``err`` and terminate with status 2."""
        self.apply(decide_panic(err, _format(fmt, args)), err)

    def exit_with_error(self, err: BaseException) -> None:
        """Terminate on ``err``: panic if it is fatal (or debugging), else just report."""
        self.apply(decide_exit_with_error(err, debugging=self._debugging), err)

    def apply(self, decision: Decision, err: BaseException | None) -> None:
        """Carry out ``decision``: print, write the crash log, terminate."""
        for message in decision.messages:
            self.error(message)
        if decision.write_log:
            self._report_log(self._write_log(err))
        if decision.exit_code is not None:
            self._exit(decision.exit_code)

    def _write_log(self, err: BaseException | None) -> str:
        try:
            return self.panic_log.handle_panic(err)
        except Exception as exc:
            # Crash logging must not mask the error being reported.
            logger.error("Crash log could not be written", exc_info=exc)
            self.err.real.write(f"Unable to log panic: {exc}\n")
            return ""

    def _report_log(self, path: str) -> None:
        if not path:
            return
        real = self.err.real
        real.write(
            f"\nErrors logged to {path}\n"
            f"Use `{PROGRAM_NAME} logs last` to view the log.\n"
        )
        real.flush()

    # --- Preconditions ---

    def require_stdin(self, msg: str) -> None:
        """Exit with status 1 unless STDIN is a readable, non-interactive stream."""
        out = ""
        if self.stdin is None:
            out = f"Cannot read from STDIN. {msg} (standard input is closed)"
        else:
            try:
                if self.stdin.isatty():
                    out = f"Cannot read from STDIN. {msg}"
            except (OSError, ValueError) as exc:
                out = f"Cannot read from STDIN. {msg} ({exc})"

        if out:
            self.error(out)
            self._exit(ExitCode.FAILURE)

    def require_in_repo(self) -> None:
        """Exit with status 128 unless running inside a git repository."""
        if self.settings.git_dir is None:
            self.print("Not in a git repository.")
            self._exit(ExitCode.NOT_IN_REPO)
