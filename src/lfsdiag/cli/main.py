# topmark:header:start
#
#   project      : LfsDiag
#   file         : main.py
#   file_relpath : src/lfsdiag/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click root group for LfsDiag.

Key ideas:
- Group-level options are resolved once and placed into ``ctx.obj``.
- The process [`Diagnostics`][lfsdiag.diagnostics.dispatch.Diagnostics] is
  injected through ``ctx.obj["diagnostics"]`` (see [`lfsdiag.lifecycle.run`][])
  or built from the environment on first use.
- Exceptions escaping a command are handed to
  [`Diagnostics.exit_with_error`][lfsdiag.diagnostics.dispatch.Diagnostics.exit_with_error];
  anything that is not already a diagnostic error is treated as a crash.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from lfsdiag.cli.commands.logs import logs_command
from lfsdiag.cli.commands.version import version_command
from lfsdiag.cli.console_helpers import get_console, get_diagnostics
from lfsdiag.cli.options import (
    common_color_options,
    common_debug_options,
    common_verbose_options,
    resolve_color,
    resolve_verbosity,
)
from lfsdiag.config.logging import get_logger, resolve_env_log_level, setup_logging
from lfsdiag.diagnostics.errors import WrappedError, new_fatal_error

if TYPE_CHECKING:
    from lfsdiag.cli_shared.console_api import ConsoleLike
    from lfsdiag.config.logging import LfsDiagLogger

logger: LfsDiagLogger = get_logger(__name__)


class DiagnosticsGroup(click.Group):
    """Click group that reports uncaught command errors through the diagnostic subsystem."""

    def invoke(self, ctx: click.Context) -> Any:
        try:
            return super().invoke(ctx)
        except (click.exceptions.ClickException, click.exceptions.Exit, click.exceptions.Abort):
            raise
        except Exception as exc:
            err = exc if isinstance(exc, WrappedError) else new_fatal_error(exc)
            get_diagnostics(ctx).exit_with_error(err)
            raise


def init_common_state(
    ctx: click.Context,
    *,
    debug: bool,
    verbose: int,
    quiet: int,
    no_color: bool,
) -> None:
    """Initialize shared state (diagnostics, logging, verbosity, color) on the Click context.

    Args:
        ctx (click.Context): Current Click context; ``obj`` and ``color`` are set.
        debug (bool): Whether ``--debug`` was passed.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    obj = ctx.ensure_object(dict)

    obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    enable_color = resolve_color(no_color)
    obj["color_enabled"] = enable_color
    ctx.color = enable_color

    diagnostics = get_diagnostics(ctx)
    if debug and not diagnostics.debugging:
        diagnostics.enable_debugging()

    # Internal logging goes through the error writer so it is part of the transcript.
    level_env = resolve_env_log_level()
    obj["log_level"] = level_env
    setup_logging(level=level_env, stream=diagnostics.err)

    get_console(ctx)


@click.group(
    cls=DiagnosticsGroup,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="LfsDiag: transcript capture and crash logs for git-style CLIs.",
)
@common_debug_options
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    debug: bool,
    verbose: int,
    quiet: int,
    no_color: bool,
) -> None:
    """Entry point for the LfsDiag CLI."""
    init_common_state(ctx, debug=debug, verbose=verbose, quiet=quiet, no_color=no_color)
    diagnostics = get_diagnostics(ctx)
    console: ConsoleLike = get_console(ctx)

    if ctx.invoked_subcommand is None:
        console.print(diagnostics.settings.version_desc)
        console.print()
        console.print(ctx.get_help())
        return

    diagnostics.debug("Running command: %s", ctx.invoked_subcommand)


cli.add_command(version_command)

cli.add_command(logs_command)

if __name__ == "__main__":
    cli()
