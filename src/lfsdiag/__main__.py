# topmark:header:start
#
#   project      : LfsDiag
#   file         : __main__.py
#   file_relpath : src/lfsdiag/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running LfsDiag via ``python -m lfsdiag``.

It delegates to [`lfsdiag.lifecycle.main`][], so the transcript, stats flush
and cleanup hooks behave exactly as with the ``lfsdiag`` console script.

Examples:
    Show the most recent crash log::

        python -m lfsdiag logs last
"""

from __future__ import annotations

from lfsdiag.lifecycle import main

if __name__ == "__main__":
    main()
