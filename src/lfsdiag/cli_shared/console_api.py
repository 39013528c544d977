# topmark:header:start
#
#   project      : LfsDiag
#   file         : console_api.py
#   file_relpath : src/lfsdiag/cli_shared/console_api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Console interface used by LfsDiag commands.

Commands print through a console rather than to ``sys.stdout`` so that their
output is part of the diagnostic transcript. The one exception is
[`ConsoleLike.raw`][lfsdiag.cli_shared.console_api.ConsoleLike.raw], which is
reserved for replaying stored content such as crash logs.
"""

from __future__ import annotations

from typing import Protocol


class ConsoleLike(Protocol):
    """Program output surface for CLI commands."""

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write a line to stdout; recorded in the transcript."""
        ...

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write a line to stderr; recorded in the transcript."""
        ...

    def raw(self, text: str) -> None:
        """Write ``text`` verbatim to the real stdout; *not* recorded."""
        ...

    def styled(self, text: str, **style_kwargs: object) -> str:
        """Return a styled string (no-op if styling is disabled)."""
        ...
