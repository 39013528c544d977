# topmark:header:start
#
#   project      : LfsDiag
#   file         : options.py
#   file_relpath : src/lfsdiag/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities.

This module centralizes the options of the root group (debug, verbosity,
color) and their resolution logic, so commands can stay thin.
"""

from __future__ import annotations

import os
import sys
from typing import Callable, ParamSpec, TypeVar

import click

from lfsdiag.cli.errors import LfsDiagUsageError

P = ParamSpec("P")
R = TypeVar("R")


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output verbosity level.

    Args:
        verbose_count: Number of times the verbose flag (-v) is passed.
        quiet_count: Number of times the quiet flag (-q) is passed.

    Returns:
        ``verbose_count`` as a positive level, ``-1`` when quiet, ``0`` by default.

    Raises:
        LfsDiagUsageError: If both verbose and quiet flags are used simultaneously.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise LfsDiagUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if quiet_count > 0:
        return -1
    return verbose_count


def resolve_color(no_color: bool) -> bool:
    """Return whether ANSI colors should be emitted.

    Color is on only for an interactive stdout, and ``NO_COLOR`` or
    ``--no-color`` always turn it off.
    """
    if no_color or os.environ.get("NO_COLOR"):
        return False
    return sys.stdout.isatty()


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds --verbose and --quiet options to a command."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity. Specify up to twice for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Suppress non-essential output.",
    )(f)
    return f


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds the --no-color option to a command."""
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        default=False,
        help="Disable ANSI colors in output.",
    )(f)
    return f


def common_debug_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds the --debug option to a command.

    ``--debug`` escalates every error to a crash log and enables debug lines.
    When omitted, ``LFSDIAG_DEBUG`` and ``.lfsdiag.toml`` decide.
    """
    f = click.option(
        "--debug",
        is_flag=True,
        default=False,
        help="Log every error to a crash log and print debug messages.",
    )(f)
    return f
