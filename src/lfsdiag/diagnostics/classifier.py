# topmark:header:start
#
#   project      : LfsDiag
#   file         : classifier.py
#   file_relpath : src/lfsdiag/diagnostics/classifier.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Error classification.

Pure decision logic: given an error (and the global debug flag) return a
[`Decision`][lfsdiag.diagnostics.classifier.Decision] describing what to print,
whether to write a crash log and which exit status to use. Applying the
decision (the only place that performs I/O or terminates) is the job of
[`Diagnostics.apply`][lfsdiag.diagnostics.dispatch.Diagnostics.apply].
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from lfsdiag.cli_shared.exit_codes import ExitCode
from lfsdiag.diagnostics.errors import get_inner_error, is_fatal_error


class Outcome(Enum):
    """How the dispatch surface handles an error.

    Attributes:
        RECOVERABLE: Print the message(s) and exit, without a crash log.
        FATAL: Print the message, write a crash log and exit.
        LOGGED_NON_FATAL: Print the message and write a crash log; keep running.
    """

    RECOVERABLE = "recoverable"
    FATAL = "fatal"
    LOGGED_NON_FATAL = "logged_non_fatal"


@dataclass(frozen=True)
class Decision:
    """Outcome of classifying an error.

    Attributes:
        outcome (Outcome): The classification.
        messages (tuple[str, ...]): Lines to print to the error stream, in order.
        write_log (bool): Whether a crash log must be written.
        exit_code (int | None): Exit status, or None to keep running.
    """

    outcome: Outcome
    messages: tuple[str, ...]
    write_log: bool
    exit_code: int | None


def classify_error(err: BaseException | None, *, debugging: bool) -> Outcome:
    """Return FATAL when debugging or when ``err`` is fatal, else RECOVERABLE."""
    if debugging or is_fatal_error(err):
        return Outcome.FATAL
    return Outcome.RECOVERABLE


def decide_panic(err: BaseException | None, message: str) -> Decision:
    """Decision for an explicit panic: log and exit."""
    return Decision(Outcome.FATAL, (message,), write_log=True, exit_code=ExitCode.ERROR)


def decide_logged_error(err: BaseException | None, message: str) -> Decision:
    """Decision for an explicitly logged, non-fatal error: log, keep running."""
    return Decision(Outcome.LOGGED_NON_FATAL, (message,), write_log=True, exit_code=None)


def decide_exit_with_error(err: BaseException, *, debugging: bool) -> Decision:
    """Decide how to terminate on ``err``.

    Fatal errors (or any error while debugging) take the panic path. Other
    errors print the inner cause first, when there is one with a different
    message, then the error's own message, and exit without a crash log.
    """
    message = str(err)
    if classify_error(err, debugging=debugging) is Outcome.FATAL:
        return decide_panic(err, message)

    messages: list[str] = []
    inner = get_inner_error(err)
    if inner is not None and str(inner) != message:
        messages.append(str(inner))
    messages.append(message)
    return Decision(
        Outcome.RECOVERABLE, tuple(messages), write_log=False, exit_code=ExitCode.ERROR
    )
