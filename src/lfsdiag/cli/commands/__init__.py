# topmark:header:start
#
#   project      : LfsDiag
#   file         : __init__.py
#   file_relpath : src/lfsdiag/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LfsDiag CLI subcommands."""
