# topmark:header:start
#
#   project      : LfsDiag
#   file         : console.py
#   file_relpath : src/lfsdiag/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click-backed console bound to a [`Diagnostics`][lfsdiag.diagnostics.dispatch.Diagnostics].

Styled output goes through the diagnostic dual-sink writers. ANSI sequences
are only emitted when color is enabled, so transcripts (and therefore crash
logs) of non-interactive runs stay plain text.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from lfsdiag.cli_shared.console_api import ConsoleLike

if TYPE_CHECKING:
    from lfsdiag.diagnostics.dispatch import Diagnostics


class ClickConsole(ConsoleLike):
    """Console writing to the dual-sink writers of ``diagnostics``.

    Args:
        diagnostics (Diagnostics): Owner of the writers and of the real streams.
        enable_color (bool): If True, enables ANSI color codes in the output.
    """

    def __init__(self, diagnostics: Diagnostics, *, enable_color: bool = False) -> None:
        self.diagnostics = diagnostics
        self.enable_color = enable_color

    def print(self, text: str = "", *, nl: bool = True) -> None:
        click.echo(text, nl=nl, file=self.diagnostics.out, color=self.enable_color)

    def error(self, text: str, *, nl: bool = True) -> None:
        click.echo(text, nl=nl, file=self.diagnostics.err, color=self.enable_color)

    def raw(self, text: str) -> None:
        real = self.diagnostics.out.real
        real.write(text)
        real.flush()

    def styled(self, text: str, **style_kwargs: Any) -> str:
        """Return ``text`` styled with `click.style` when color is enabled."""
        if not self.enable_color:
            return text
        return click.style(text, **style_kwargs)
