# topmark:header:start
#
#   project      : LfsDiag
#   file         : errors.py
#   file_relpath : src/lfsdiag/diagnostics/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Error taxonomy used by the diagnostic subsystem.

Domain code raises whatever exceptions it likes. This module supplies:

- the optional diagnostic capability
  ([`ErrorWithStack`][lfsdiag.diagnostics.errors.ErrorWithStack]) that lets an
  error expose a context map, an inner error description and a stack;
- [`WrappedError`][lfsdiag.diagnostics.errors.WrappedError], the concrete
  error that implements it;
- the two queries the classifier delegates to:
  [`is_fatal_error`][lfsdiag.diagnostics.errors.is_fatal_error] and
  [`get_inner_error`][lfsdiag.diagnostics.errors.get_inner_error].

Stack capture:
    An error without the capability gets a generic capture from
    [`stack_capture`][lfsdiag.diagnostics.errors.stack_capture]. If the error
    was raised, the capture is its own traceback (the point of failure);
    otherwise it is the stack at the point of logging.
"""

from __future__ import annotations

import traceback
from typing import Protocol, runtime_checkable

STACK_ENCODING = "utf-8"


@runtime_checkable
class ErrorWithStack(Protocol):
    """Optional capability of an error value carrying extra diagnostics."""

    def context(self) -> dict[str, str]:
        """Return the key/value context attached to the error."""
        ...

    def inner_error(self) -> str:
        """Return the description of the wrapped (inner) error."""
        ...

    def stack(self) -> bytes:
        """Return the raw stack trace recorded for the error."""
        ...


def has_diagnostics(err: BaseException | None) -> bool:
    """Return True if ``err`` implements the diagnostic capability."""
    return err is not None and isinstance(err, ErrorWithStack)


def _format_traceback(err: BaseException) -> str:
    return "".join(traceback.format_exception(type(err), err, err.__traceback__))


class WrappedError(Exception):
    """Exception carrying a cause, a context map, a stack snapshot and a fatal flag.

    Args:
        cause (BaseException | None): The wrapped error, if any.
        message (str | None): The error's own message; defaults to ``str(cause)``.
        fatal (bool): Whether the error is unrecoverable.
        context (dict[str, str] | None): Initial context entries.
    """

    def __init__(
        self,
        cause: BaseException | None = None,
        message: str | None = None,
        *,
        fatal: bool = False,
        context: dict[str, str] | None = None,
    ) -> None:
        if message is None:
            message = str(cause) if cause is not None else ""
        super().__init__(message)
        self.message: str = message
        self.cause: BaseException | None = cause
        self.fatal: bool = fatal
        self._context: dict[str, str] = dict(context or {})
        # Drop this frame so the snapshot ends at the caller.
        self._stack: str = "".join(traceback.format_stack()[:-1])
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return self.message

    def context(self) -> dict[str, str]:
        return dict(self._context)

    def set_context(self, key: str, value: str) -> None:
        self._context[key] = value

    def get_context(self, key: str) -> str | None:
        return self._context.get(key)

    def del_context(self, key: str) -> None:
        self._context.pop(key, None)

    def inner_error(self) -> str:
        return str(self.cause) if self.cause is not None else ""

    def stack(self) -> bytes:
        """Return the stack recorded at construction, preceded by the cause's traceback."""
        text = self._stack
        if self.cause is not None and self.cause.__traceback__ is not None:
            text = _format_traceback(self.cause) + text
        return text.encode(STACK_ENCODING, errors="replace")


def wrap_error(err: BaseException, message: str | None = None) -> WrappedError:
    """Wrap ``err`` in a [`WrappedError`][lfsdiag.diagnostics.errors.WrappedError].

    A ``WrappedError`` is returned unchanged when no new message is given.
    """
    if isinstance(err, WrappedError) and message is None:
        return err
    fatal = is_fatal_error(err)
    context = err.context() if isinstance(err, WrappedError) else None
    return WrappedError(err, message, fatal=fatal, context=context)


def new_fatal_error(err: BaseException) -> WrappedError:
    """Return a fatal error wrapping ``err``, keeping its message and context."""
    context = err.context() if isinstance(err, WrappedError) else None
    return WrappedError(err, str(err), fatal=True, context=context)


def is_fatal_error(err: BaseException | None) -> bool:
    """Return True if ``err`` is flagged fatal.

    An error is fatal when it carries a truthy boolean ``fatal`` attribute,
    either per instance (``WrappedError``) or per class (``fatal = True``).
    """
    if err is None:
        return False
    return getattr(err, "fatal", False) is True


def get_inner_error(err: BaseException | None) -> BaseException | None:
    """Return the error wrapped by ``err``, or None.

    ``WrappedError.cause`` is preferred, then the ``__cause__`` set by
    ``raise ... from ...``. An error is never its own inner error.
    """
    if err is None:
        return None
    inner = err.cause if isinstance(err, WrappedError) else err.__cause__
    if inner is err:
        return None
    return inner


def error_set_context(err: BaseException, key: str, value: str) -> None:
    """Attach a context entry to ``err`` (no-op without the capability)."""
    if isinstance(err, WrappedError):
        err.set_context(key, value)


def error_get_context(err: BaseException, key: str) -> str | None:
    """Return the context entry ``key`` of ``err``, or None."""
    if isinstance(err, WrappedError):
        return err.get_context(key)
    return None


def error_del_context(err: BaseException, key: str) -> None:
    """Remove context entry ``key`` from ``err`` (no-op if absent)."""
    if isinstance(err, WrappedError):
        err.del_context(key)


def stack_capture(err: BaseException | None = None) -> bytes:
    """Return a generic stack capture for an error without the capability.

    Args:
        err (BaseException | None): The error being logged.

    Returns:
        bytes: The error's traceback if it was raised, else the current stack.
    """
    if err is not None and err.__traceback__ is not None:
        text = _format_traceback(err)
    else:
        text = "".join(traceback.format_stack()[:-1])
    return text.encode(STACK_ENCODING, errors="replace")
