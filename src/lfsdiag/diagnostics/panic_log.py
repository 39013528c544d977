# topmark:header:start
#
#   project      : LfsDiag
#   file         : panic_log.py
#   file_relpath : src/lfsdiag/diagnostics/panic_log.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Crash ("panic") log writer.

A panic log is a write-once text file named after the time it was written,
with sub-second precision, e.g. ``20250131T120000.123456.log``. Its body has a
fixed layout:

```text
<version descriptor>
<git version | Error getting git version: ...>

$ <program> <args...>

<transcript>

<error message>
<inner error>                       # only with the diagnostic capability
key=value ...                       # only with the diagnostic capability
<stack>

ENV:
KEY=VALUE ...
```

Log writing degrades gracefully: when the log directory or the file cannot be
created, a warning and the full body go to the real error stream instead, and
the reported path is empty. Nothing here ever terminates the process.
"""

from __future__ import annotations

import os
import re
import subprocess
import threading
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO, Callable, TextIO

from lfsdiag.config.logging import get_logger
from lfsdiag.constants import ENV_MARKER, LOG_FILE_SUFFIX, LOG_TIMESTAMP_FORMAT
from lfsdiag.diagnostics.errors import ErrorWithStack, stack_capture

if TYPE_CHECKING:
    from collections.abc import Sequence

    from lfsdiag.config.logging import LfsDiagLogger
    from lfsdiag.diagnostics.environment import EnvironmentProvider
    from lfsdiag.diagnostics.transcript import TranscriptBuffer

logger: LfsDiagLogger = get_logger(__name__)

RECORD_ENCODING = "utf-8"

# Guards log directory creation and exclusive file creation across threads.
_LOG_DIR_LOCK = threading.Lock()

# Upper bound on "-<n>" suffixes tried for same-timestamp collisions.
MAX_NAME_ATTEMPTS = 1000

_LOG_NAME_RE = re.compile(
    r"(?P<stamp>\d{8}T\d{6})(?:\.(?P<fraction>\d{1,6}))?(?:-(?P<attempt>\d+))?"
    + re.escape(LOG_FILE_SUFFIX)
)


def log_file_name(now: datetime, attempt: int = 0) -> str:
    """Return the panic log file name for ``now``.

    The fraction of a second is trimmed of trailing zeros (and dropped with its
    dot when zero). ``attempt > 0`` appends a ``-<attempt>`` disambiguator.
    """
    name = now.strftime(LOG_TIMESTAMP_FORMAT)
    if now.microsecond:
        name += "." + f"{now.microsecond:06d}".rstrip("0")
    if attempt:
        name += f"-{attempt}"
    return name + LOG_FILE_SUFFIX


def log_sort_key(name: str) -> tuple[int, str, int, int, str]:
    """Return a key ordering panic log names by the time they were written.

    Plain string order is wrong here: ``-`` sorts before ``.``, and a name
    without a fraction sorts after one with a fraction. Names not produced by
    [`log_file_name`][lfsdiag.diagnostics.panic_log.log_file_name] sort last,
    by name.
    """
    match = _LOG_NAME_RE.fullmatch(name)
    if match is None:
        return (1, "", 0, 0, name)
    fraction = int((match.group("fraction") or "").ljust(6, "0"))
    attempt = int(match.group("attempt") or 0)
    return (0, match.group("stamp"), fraction, attempt, name)


def format_command_line(argv: Sequence[str]) -> str:
    """Return ``$ <basename(argv[0])> <argv[1:]...>``."""
    if not argv:
        return "$ "
    line = f"$ {os.path.basename(argv[0])}"
    if len(argv) > 1:
        line += " " + " ".join(argv[1:])
    return line


def render_panic_record(
    err: BaseException,
    *,
    version_desc: str,
    git_version: str,
    argv: Sequence[str],
    transcript: bytes,
    environ: Sequence[str],
) -> bytes:
    """Assemble the panic log body.

    Args:
        err (BaseException): The error being logged.
        version_desc (str): Program version descriptor.
        git_version (str): Git version line (or the lookup error description).
        argv (Sequence[str]): The process argument vector.
        transcript (bytes): Everything printed so far.
        environ (Sequence[str]): ``KEY=VALUE`` environment lines.

    Returns:
        bytes: The complete record.
    """

    def line(text: str = "") -> bytes:
        return (text + "\n").encode(RECORD_ENCODING, errors="replace")

    parts: list[bytes] = [
        line(version_desc),
        line(git_version),
        line(),
        line(format_command_line(argv)),
        line(),
        transcript,
        line(),
        line(str(err)),
    ]

    if isinstance(err, ErrorWithStack):
        parts.append(line(err.inner_error()))
        context: dict[str, str] = err.context()
        parts.extend(line(f"{key}={value}") for key, value in sorted(context.items()))
        parts.append(err.stack())
    else:
        parts.append(stack_capture(err))

    parts.append(line())
    parts.append(line(ENV_MARKER))
    parts.extend(line(env) for env in environ)
    return b"".join(parts)


class PanicLogWriter:
    """Writes panic logs for errors.

    Args:
        log_dir (Path): Directory receiving the logs; created on demand.
        transcript (TranscriptBuffer): Transcript of everything printed so far.
        environment (EnvironmentProvider): Version and environment information.
        argv (Sequence[str]): The process argument vector.
        err_stream (TextIO): The *real* error stream (not the dual-sink), used for
            warnings and as the fallback destination.
        clock (Callable[[], datetime]): Time source for file names.
    """

    def __init__(
        self,
        log_dir: Path,
        transcript: TranscriptBuffer,
        environment: EnvironmentProvider,
        argv: Sequence[str],
        err_stream: TextIO,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.log_dir = Path(log_dir)
        self.transcript = transcript
        self.environment = environment
        self.argv = list(argv)
        self.err_stream = err_stream
        self.clock = clock

    def handle_panic(self, err: BaseException | None) -> str:
        """Write a panic log for ``err``; return its path, or "" for None or on fallback."""
        if err is None:
            return ""
        return self.log_panic(err)

    def log_panic(self, err: BaseException) -> str:
        """Write a panic log for ``err`` and return the file path ("" if not persisted)."""
        now = self.clock()
        try:
            with _LOG_DIR_LOCK:
                self.log_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            self._warn(f"Unable to log panic to {self.log_dir}: {exc}\n\n")
            self._emit_to_stream(err)
            return ""

        try:
            path, fh = self._create_file(now)
        except OSError as exc:
            target = self.log_dir / log_file_name(now)
            logger.warning("Cannot create panic log %s: %s", target, exc)
            self._warn(f"Unable to log panic to {target}\n\n")
            self._emit_to_stream(err)
            return ""

        record = self.render(err)
        try:
            with fh:
                fh.write(record)
        except OSError as exc:
            logger.warning("Failed writing panic log %s: %s", path, exc)
            self._warn(f"Unable to write panic log {path}: {exc}\n\n")
            self._write_stream(record)
            return ""
        logger.debug("Panic log written to %s", path)
        return str(path)

    def render(self, err: BaseException) -> bytes:
        """Render the record for ``err`` using live process state."""
        try:
            git_version = self.environment.git_version()
        except (OSError, subprocess.SubprocessError) as exc:
            git_version = f"Error getting git version: {exc}"
        return render_panic_record(
            err,
            version_desc=self.environment.version_desc,
            git_version=git_version,
            argv=self.argv,
            transcript=self.transcript.getvalue(),
            environ=self.environment.environ(),
        )

    def _create_file(self, now: datetime) -> tuple[Path, BinaryIO]:
        with _LOG_DIR_LOCK:
            for attempt in range(MAX_NAME_ATTEMPTS):
                path = self.log_dir / log_file_name(now, attempt)
                try:
                    return path, open(path, "xb")
                except FileExistsError:
                    continue
        raise FileExistsError(f"no free panic log name for {log_file_name(now)}")

    def _emit_to_stream(self, err: BaseException) -> None:
        self._write_stream(self.render(err))

    def _write_stream(self, record: bytes) -> None:
        self.err_stream.write(record.decode(RECORD_ENCODING, errors="replace"))
        self.err_stream.flush()

    def _warn(self, text: str) -> None:
        self.err_stream.write(text)
        self.err_stream.flush()
