# topmark:header:start
#
#   project      : LfsDiag
#   file         : version.py
#   file_relpath : src/lfsdiag/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LfsDiag `version` command.

Prints the version descriptor that also heads every crash log.
"""

from __future__ import annotations

import subprocess
from typing import TYPE_CHECKING

import click

from lfsdiag.cli.console_helpers import get_console, get_diagnostics, get_verbosity

if TYPE_CHECKING:
    from lfsdiag.cli_shared.console_api import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of LfsDiag.",
)
def version_command() -> None:
    """Show the current version of LfsDiag.

    With ``-v`` the git version and the crash log directory are shown as well.
    """
    ctx = click.get_current_context()
    diagnostics = get_diagnostics(ctx)
    console: ConsoleLike = get_console(ctx)

    console.print(console.styled(diagnostics.settings.version_desc, bold=True))

    if get_verbosity(ctx) > 0:
        try:
            git_version = diagnostics.environment.git_version()
        except (OSError, subprocess.SubprocessError) as exc:
            git_version = f"Error getting git version: {exc}"
        console.print(git_version)
        console.print(f"Log directory: {diagnostics.settings.log_dir}")
