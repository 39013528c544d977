# topmark:header:start
#
#   project      : LfsDiag
#   file         : __init__.py
#   file_relpath : src/lfsdiag/diagnostics/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostic capture and crash reporting.

Layers, leaves first:
    - [`transcript`][lfsdiag.diagnostics.transcript]: dual-sink writers and the
      shared transcript buffer.
    - [`errors`][lfsdiag.diagnostics.errors]: the diagnostic capability and the
      fatal / inner-error queries.
    - [`classifier`][lfsdiag.diagnostics.classifier]: pure outcome decisions.
    - [`panic_log`][lfsdiag.diagnostics.panic_log]: crash log files with a
      stream fallback.
    - [`dispatch`][lfsdiag.diagnostics.dispatch]: the entry points commands call.
"""

from __future__ import annotations

from lfsdiag.diagnostics.classifier import Decision, Outcome, classify_error
from lfsdiag.diagnostics.dispatch import Diagnostics
from lfsdiag.diagnostics.errors import (
    ErrorWithStack,
    WrappedError,
    error_get_context,
    error_set_context,
    get_inner_error,
    is_fatal_error,
    new_fatal_error,
    wrap_error,
)
from lfsdiag.diagnostics.transcript import DualSinkWriter, TranscriptBuffer

__all__ = [
    "Decision",
    "Diagnostics",
    "DualSinkWriter",
    "ErrorWithStack",
    "Outcome",
    "TranscriptBuffer",
    "WrappedError",
    "classify_error",
    "error_get_context",
    "error_set_context",
    "get_inner_error",
    "is_fatal_error",
    "new_fatal_error",
    "wrap_error",
]
