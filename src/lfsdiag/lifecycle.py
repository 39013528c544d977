# topmark:header:start
#
#   project      : LfsDiag
#   file         : lifecycle.py
#   file_relpath : src/lfsdiag/lifecycle.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Process lifecycle: startup, command dispatch, stats flush and cleanup.

[`run`][lfsdiag.lifecycle.run] is what the ``lfsdiag`` console script calls:

1. resolve settings and build the process
   [`Diagnostics`][lfsdiag.diagnostics.dispatch.Diagnostics];
2. dispatch the command line through the Click CLI;
3. run the registered stats flushers (after dispatch, whatever the outcome);
4. run the registered cleanup hooks (once, at shutdown).

Collaborators plug in with
[`register_stats_flusher`][lfsdiag.lifecycle.register_stats_flusher] and
[`register_cleanup`][lfsdiag.lifecycle.register_cleanup].
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Callable

from lfsdiag.cli.main import cli
from lfsdiag.cli_shared.exit_codes import ExitCode
from lfsdiag.config.logging import get_logger
from lfsdiag.config.settings import load_settings
from lfsdiag.constants import PROGRAM_NAME
from lfsdiag.diagnostics.dispatch import Diagnostics

if TYPE_CHECKING:
    from collections.abc import Sequence

    from lfsdiag.config.logging import LfsDiagLogger

logger: LfsDiagLogger = get_logger(__name__)

Hook = Callable[[], None]

_cleanup_hooks: list[Hook] = []
_stats_flushers: list[Hook] = []


def register_cleanup(hook: Hook) -> Hook:
    """Register ``hook`` to run once at program shutdown. Usable as a decorator."""
    _cleanup_hooks.append(hook)
    return hook


def register_stats_flusher(hook: Hook) -> Hook:
    """Register ``hook`` to run after command dispatch completes. Usable as a decorator."""
    _stats_flushers.append(hook)
    return hook


def reset_hooks() -> None:
    """Forget every registered hook."""
    _cleanup_hooks.clear()
    _stats_flushers.clear()


def flush_stats(diagnostics: Diagnostics) -> None:
    """Run the stats flushers. Failures are reported as debug lines only."""
    for hook in list(_stats_flushers):
        try:
            hook()
        except Exception as exc:
            logger.warning("Stats flush %r failed: %s", hook, exc)
            diagnostics.debug("Error flushing stats: %s", exc)


def cleanup(diagnostics: Diagnostics) -> None:
    """Run the cleanup hooks once each; a failing hook does not stop the others."""
    hooks = list(_cleanup_hooks)
    _cleanup_hooks.clear()
    for hook in hooks:
        try:
            hook()
        except Exception as exc:
            logger.warning("Cleanup %r failed: %s", hook, exc)
            diagnostics.err.real.write(f"Error clearing old temp files: {exc}\n")


def _exit_status(code: object) -> int:
    if code is None:
        return ExitCode.SUCCESS
    if isinstance(code, int):
        return code
    # sys.exit("message") prints the message and exits with 1.
    return ExitCode.FAILURE


def run(argv: Sequence[str] | None = None, *, diagnostics: Diagnostics | None = None) -> int:
    """Run the CLI for ``argv`` (defaults to ``sys.argv[1:]``) and return the exit status.

    Args:
        argv (Sequence[str] | None): Arguments after the program name.
        diagnostics (Diagnostics | None): Pre-built diagnostics (tests); built from
            the environment otherwise.

    Returns:
        int: The process exit status.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    if diagnostics is None:
        diagnostics = Diagnostics(load_settings(), argv=[PROGRAM_NAME, *args])

    try:
        cli.main(
            args=args,
            prog_name=PROGRAM_NAME,
            obj={"diagnostics": diagnostics},
            standalone_mode=True,
        )
        status: int = ExitCode.SUCCESS
    except SystemExit as exc:
        status = _exit_status(exc.code)

    flush_stats(diagnostics)
    cleanup(diagnostics)
    return status


def main() -> None:
    """Console script entry point."""
    sys.exit(run())
