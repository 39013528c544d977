# topmark:header:start
#
#   project      : LfsDiag
#   file         : __init__.py
#   file_relpath : src/lfsdiag/cli_shared/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click-free building blocks shared by the CLI and the diagnostic subsystem."""
