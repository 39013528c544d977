# topmark:header:start
#
#   project      : LfsDiag
#   file         : exit_codes.py
#   file_relpath : src/lfsdiag/cli_shared/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the LfsDiag CLI.

Every termination path of the dispatch surface uses ``ERROR=2``, whether or not
a crash log was written, so scripts can rely on a single failure status. The
two remaining non-zero codes are reserved for precondition checks.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for LfsDiag.

    Attributes:
        SUCCESS: Successful execution with no errors.
        FAILURE: A precondition on the invocation failed (e.g. STDIN is not
            readable when a command requires it).
        ERROR: The command failed. Used by ``exit``, ``panic`` and
            ``exit_with_error``; a crash log may or may not have been written.
        NOT_IN_REPO: The command must run inside a git repository.
    """

    SUCCESS = 0
    FAILURE = 1
    ERROR = 2
    NOT_IN_REPO = 128
