# topmark:header:start
#
#   project      : LfsDiag
#   file         : __init__.py
#   file_relpath : src/lfsdiag/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LfsDiag command-line interface (Click).

The CLI is a thin layer over [`lfsdiag.diagnostics`][]: the root group builds
(or receives) the process [`Diagnostics`][lfsdiag.diagnostics.dispatch.Diagnostics]
and routes uncaught command errors to ``exit_with_error``.
"""
