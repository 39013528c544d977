# topmark:header:start
#
#   project      : LfsDiag
#   file         : errors.py
#   file_relpath : src/lfsdiag/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the LfsDiag CLI.

Usage:
    Raise these exceptions in CLI commands to signal invocation problems with
    standardized messages and exit codes. Domain failures are *not* reported
    this way; they go through
    [`Diagnostics.exit_with_error`][lfsdiag.diagnostics.dispatch.Diagnostics.exit_with_error].

Styling:
    Exceptions prefer the project console if available (see `show()`), which
    also puts the message into the transcript; otherwise they fall back to
    Click's default styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from lfsdiag.cli_shared.exit_codes import ExitCode


class LfsDiagError(click.ClickException):
    """Base class for all LfsDiag CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available.

        Falls back to Click's default error display when no console is present.
        """
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(self.format_message(), fg="bright_red"))
                return
        super().show(file)


class LfsDiagUsageError(LfsDiagError):
    """Error for command-line invocation errors (invalid flag combinations)."""

    exit_code = ExitCode.ERROR


class CommandDisabledError(LfsDiagError):
    """Error for experimental commands that are not enabled in the environment."""

    exit_code = ExitCode.FAILURE
