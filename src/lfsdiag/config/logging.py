# topmark:header:start
#
#   project      : LfsDiag
#   file         : logging.py
#   file_relpath : src/lfsdiag/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Custom LfsDiag logging with TRACE logging.

This module extends the standard logging module with LfsDiag-specific features:
a custom TRACE level, a specialized logger class, colored output formatting for
internal diagnostics, and the timestamped debug logger behind
[`lfsdiag.diagnostics.dispatch.Diagnostics.debug`][].
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Final, TextIO, cast

from yachalk import chalk

from lfsdiag.constants import ENV_LOG_LEVEL

if TYPE_CHECKING:
    from collections.abc import Mapping

# Define TRACE_LEVEL as a module-level constant
TRACE_LEVEL: Final[int] = logging.DEBUG - 5


class LfsDiagLogger(logging.Logger):
    """Custom logger class for LfsDiag with support for a TRACE log level below DEBUG."""

    def trace(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log 'msg % args' with severity 'TRACE'.

        Args:
            msg (object): The message to be logged.
            *args (object): Variable length argument list for the message.
            extra (Mapping[str, object] | None): Optional dictionary of extra information to pass
                to the logger.
        """
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(
                TRACE_LEVEL,
                msg=msg,
                args=args,
                extra=extra,
                stacklevel=2,
            )


if not hasattr(logging, "TRACE"):
    logging.addLevelName(TRACE_LEVEL, "TRACE")
    # Expose TRACE_LEVEL as logging.TRACE
    logging.TRACE = TRACE_LEVEL  # type: ignore

logging.setLoggerClass(LfsDiagLogger)


LOG_FORMAT = "[%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT = "[%(levelname)s] [%(filename)s:%(lineno)d] [%(funcName)s] %(message)s"

# The user-facing debug channel mimics a classic CLI trace log: "2025/01/31 12:00:00 message".
DEBUG_LOGGER_NAME: Final[str] = "lfsdiag.debug"
DEBUG_CHANNEL_FORMAT: Final[str] = "%(asctime)s %(message)s"
DEBUG_CHANNEL_DATEFMT: Final[str] = "%Y/%m/%d %H:%M:%S"


class ChalkFormatter(logging.Formatter):
    """Formatter that outputs log records with chalk-colored formatting based on severity level."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the specified record with colors based on log level.

        Args:
            record (logging.LogRecord): The LogRecord to be formatted.

        Returns:
            str: The colorized formatted log message as a string.
        """
        level = record.levelno
        message = super().format(record)

        if level >= logging.CRITICAL:
            return chalk.red_bright(message)
        if level >= logging.ERROR:
            return chalk.red(message)
        if level >= logging.WARNING:
            return chalk.yellow(message)
        if level >= logging.INFO:
            return chalk.green(message)
        if level >= logging.DEBUG:
            return chalk.gray(message)
        if level >= TRACE_LEVEL:
            return chalk.blue(message)
        # Fallback color for unknown or lower-than-TRACE levels
        return chalk.dim.red(message)


def resolve_env_log_level() -> int | None:
    """Return a logging level from environment or None if unset.

    Honors LFSDIAG_LOG_LEVEL (e.g., "TRACE", "DEBUG", "INFO", numeric "10").
    """
    val = os.environ.get(ENV_LOG_LEVEL)
    if val:
        v = val.strip().upper()
        if v.isdigit():
            return int(v)
        name_to_level = {
            "TRACE": TRACE_LEVEL,
            "DEBUG": logging.DEBUG,
            "INFO": logging.INFO,
            "WARNING": logging.WARNING,
            "WARN": logging.WARNING,
            "ERROR": logging.ERROR,
            "CRITICAL": logging.CRITICAL,
            "FATAL": logging.CRITICAL,
            "NOTSET": logging.NOTSET,
        }
        return name_to_level.get(v)
    return None


def setup_logging(level: int | None = None, *, stream: TextIO | None = None) -> None:
    """Configure the root logger with a specified log level and colored output.

    If ``level`` is None, environment variables are consulted via
    [`resolve_env_log_level`][lfsdiag.config.logging.resolve_env_log_level].
    Default is CRITICAL when unspecified.

    Args:
        level (int | None): Explicit log level, or None to consult the environment.
        stream (TextIO | None): Destination stream. Defaults to ``sys.stderr``; the CLI passes
            the error dual-sink writer so internal log lines also reach the transcript.
    """
    if level is None:
        level = resolve_env_log_level() or logging.CRITICAL

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove all existing handlers to prevent duplicate log messages
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    # Use detailed logging format below INFO, simpler otherwise
    formatter = ChalkFormatter(LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def setup_debug_channel(stream: TextIO, *, enabled: bool) -> LfsDiagLogger:
    """Attach the timestamped debug channel to ``stream``.

    The channel is independent from the root logger: it never propagates, and
    it only emits when ``enabled`` is set (the process-wide debug flag).

    Args:
        stream (TextIO): Destination stream (normally the error dual-sink writer).
        enabled (bool): Whether debug lines should be emitted at all.

    Returns:
        LfsDiagLogger: The configured debug logger.
    """
    logger = get_logger(DEBUG_LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(DEBUG_CHANNEL_FORMAT, datefmt=DEBUG_CHANNEL_DATEFMT))
    logger.addHandler(handler)
    logger.propagate = False
    logger.setLevel(logging.DEBUG if enabled else logging.CRITICAL + 1)
    return logger


def get_logger(name: str) -> LfsDiagLogger:
    """Retrieve a LfsDiagLogger instance with the specified name.

    Args:
        name (str): The name of the logger.

    Returns:
        LfsDiagLogger: A LfsDiagLogger instance.
    """
    logger = logging.getLogger(name)
    return cast("LfsDiagLogger", logger)
