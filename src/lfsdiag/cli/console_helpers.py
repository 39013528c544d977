# topmark:header:start
#
#   project      : LfsDiag
#   file         : console_helpers.py
#   file_relpath : src/lfsdiag/cli/console_helpers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Access to the per-invocation state stored on the Click context.

The root group keeps two objects in ``ctx.obj``:

- ``"diagnostics"``: the process [`Diagnostics`][lfsdiag.diagnostics.dispatch.Diagnostics];
- ``"console"``: a [`ConsoleLike`][lfsdiag.cli_shared.console_api.ConsoleLike]
  bound to the diagnostic dual-sink writers.

Both helpers create the object on first use, so commands also work when they
are invoked without going through the root group (e.g. from tests).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from lfsdiag.cli.console import ClickConsole
from lfsdiag.config.settings import load_settings
from lfsdiag.diagnostics.dispatch import Diagnostics

if TYPE_CHECKING:
    from lfsdiag.cli_shared.console_api import ConsoleLike


def _context_obj(ctx: click.Context | None) -> dict[str, object]:
    ctx = ctx or click.get_current_context()
    obj = ctx.find_root().ensure_object(dict)
    return obj


def get_diagnostics(ctx: click.Context | None = None) -> Diagnostics:
    """Return the invocation's Diagnostics, creating it from the environment if needed."""
    obj = _context_obj(ctx)
    diagnostics = obj.get("diagnostics")
    if not isinstance(diagnostics, Diagnostics):
        diagnostics = Diagnostics(load_settings())
        obj["diagnostics"] = diagnostics
    return diagnostics


def get_console(ctx: click.Context | None = None) -> ConsoleLike:
    """Return the invocation's console, bound to the diagnostic writers."""
    obj = _context_obj(ctx)
    console = obj.get("console")
    if console is None:
        diagnostics = get_diagnostics(ctx)
        console = ClickConsole(diagnostics, enable_color=bool(obj.get("color_enabled", False)))
        obj["console"] = console
    return console  # type: ignore[return-value]


def get_verbosity(ctx: click.Context | None = None) -> int:
    """Return the program-output verbosity resolved by the root group (0 if unset)."""
    return int(_context_obj(ctx).get("verbosity_level", 0))  # type: ignore[arg-type]
