# topmark:header:start
#
#   project      : LfsDiag
#   file         : logs.py
#   file_relpath : src/lfsdiag/cli/commands/logs.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LfsDiag `logs` command group.

Lists, shows and clears the crash logs in the configured log directory.

Subcommands:
    - ``logs``: list log names, oldest first.
    - ``logs last``: show the newest log.
    - ``logs show NAME``: show one log.
    - ``logs clear``: delete the log directory.
    - ``logs boomtown``: crash on purpose (requires ``LFSDIAGBOOMTOWNENABLED=1``).

Log contents are written to the real stdout, bypassing the transcript, so a
crash while showing a log does not copy that log into the next one.
"""

from __future__ import annotations

import shutil
from typing import TYPE_CHECKING

import click

from lfsdiag.cli.console_helpers import get_console, get_diagnostics
from lfsdiag.cli.errors import CommandDisabledError
from lfsdiag.config.settings import is_command_enabled
from lfsdiag.diagnostics.errors import WrappedError
from lfsdiag.diagnostics.panic_log import log_sort_key

if TYPE_CHECKING:
    from pathlib import Path

    from lfsdiag.cli_shared.console_api import ConsoleLike
    from lfsdiag.diagnostics.dispatch import Diagnostics


def sorted_logs(log_dir: Path) -> list[str]:
    """Return the names of the log files in ``log_dir``, oldest first.

    A missing or unreadable directory yields an empty list.
    """
    try:
        return sorted((p.name for p in log_dir.iterdir() if not p.is_dir()), key=log_sort_key)
    except OSError:
        return []


def show_log(diagnostics: Diagnostics, console: ConsoleLike, name: str) -> None:
    """Replay log ``name`` on the real stdout, or exit if it cannot be read."""
    path = diagnostics.settings.log_dir / name
    try:
        data = path.read_bytes()
    except OSError:
        diagnostics.exit("Error reading log: %s", name)
        return
    diagnostics.debug("Reading log: %s", name)
    console.raw(data.decode("utf-8", errors="replace"))


@click.group(
    name="logs",
    invoke_without_command=True,
    help="Show crash logs written by LfsDiag.",
)
@click.pass_context
def logs_command(ctx: click.Context) -> None:
    """List crash logs when no subcommand is given."""
    if ctx.invoked_subcommand is not None:
        return
    diagnostics = get_diagnostics(ctx)
    names = sorted_logs(diagnostics.settings.log_dir)
    if not names:
        diagnostics.print("No logs to show")
        return
    for name in names:
        diagnostics.print(name)


@logs_command.command(name="last", help="Show the most recent crash log.")
def logs_last_command() -> None:
    diagnostics = get_diagnostics()
    names = sorted_logs(diagnostics.settings.log_dir)
    if not names:
        diagnostics.print("No logs to show")
        return
    show_log(diagnostics, get_console(), names[-1])


@logs_command.command(name="show", help="Show the crash log NAME.")
@click.argument("name")
def logs_show_command(name: str) -> None:
    show_log(get_diagnostics(), get_console(), name)


@logs_command.command(name="clear", help="Delete all crash logs.")
def logs_clear_command() -> None:
    diagnostics = get_diagnostics()
    log_dir = diagnostics.settings.log_dir
    try:
        shutil.rmtree(log_dir)
    except FileNotFoundError:
        pass
    except OSError as exc:
        diagnostics.panic(exc, "Error clearing %s", log_dir)
        return
    diagnostics.print("Cleared %s", log_dir)


@logs_command.command(name="boomtown", hidden=True, help="Crash on purpose to test crash logs.")
def logs_boomtown_command() -> None:
    if not is_command_enabled("boomtown"):
        raise CommandDisabledError(
            "'logs boomtown' is disabled; set LFSDIAGBOOMTOWNENABLED=1 to enable it."
        )
    diagnostics = get_diagnostics()
    diagnostics.debug("Debug message")
    err = WrappedError(ValueError("Inner error message!"), "Error!")
    diagnostics.panic(err, "Welcome to Boomtown")
    diagnostics.debug("Never seen")
