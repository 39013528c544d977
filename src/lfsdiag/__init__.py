# topmark:header:start
#
#   project      : LfsDiag
#   file         : __init__.py
#   file_relpath : src/lfsdiag/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LfsDiag package.

LfsDiag is the diagnostic layer of a git-style command-line program. It mirrors
everything the program prints into an in-memory transcript, classifies errors as
fatal or recoverable, and writes self-contained crash logs ("panic logs") that
users can attach to bug reports.
"""

from __future__ import annotations
