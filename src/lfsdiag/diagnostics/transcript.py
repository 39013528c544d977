# topmark:header:start
#
#   project      : LfsDiag
#   file         : transcript.py
#   file_relpath : src/lfsdiag/diagnostics/transcript.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Transcript capture.

A [`TranscriptBuffer`][lfsdiag.diagnostics.transcript.TranscriptBuffer] records
every byte the program prints. Two
[`DualSinkWriter`][lfsdiag.diagnostics.transcript.DualSinkWriter] instances,
one wrapping stdout and one wrapping stderr, share a single buffer so the
interleaving the user saw is preserved in the crash log.
"""

from __future__ import annotations

import io
import threading
from typing import TextIO

TRANSCRIPT_ENCODING = "utf-8"


class TranscriptBuffer:
    """Append-only, process-wide byte store.

    Appends are serialized with a lock, so concurrent writers keep their
    relative order. The buffer is never cleared; reading returns a copy.
    """

    def __init__(self) -> None:
        self._data = bytearray()
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        """Lock held while a write is in flight; writers share it to keep order."""
        return self._lock

    def write(self, data: bytes) -> int:
        """Append ``data`` and return its length."""
        with self._lock:
            self._data += data
        return len(data)

    def getvalue(self) -> bytes:
        """Return a snapshot of everything written so far."""
        with self._lock:
            return bytes(self._data)

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


class DualSinkWriter(io.TextIOBase):
    """Text stream that fans every write out to a real stream and a transcript.

    The real stream is written first. If it raises, the error propagates and
    the transcript is left untouched, so the transcript never contains text
    the user did not see.

    Args:
        real (TextIO): The destination the user sees (``sys.stdout``/``sys.stderr``).
        transcript (TranscriptBuffer): Shared transcript buffer.
    """

    def __init__(self, real: TextIO, transcript: TranscriptBuffer) -> None:
        super().__init__()
        self._real = real
        self._transcript = transcript

    @property
    def real(self) -> TextIO:
        """The wrapped real stream."""
        return self._real

    @property
    def transcript(self) -> TranscriptBuffer:
        """The shared transcript buffer."""
        return self._transcript

    @property
    def encoding(self) -> str:  # type: ignore[override]
        return getattr(self._real, "encoding", None) or TRANSCRIPT_ENCODING

    @property
    def errors(self) -> str | None:  # type: ignore[override]
        return getattr(self._real, "errors", None)

    def writable(self) -> bool:
        return True

    def write(self, text: str) -> int:  # type: ignore[override]
        """Write ``text`` to the real stream, then append it to the transcript."""
        with self._transcript.lock:
            self._real.write(text)
            self._transcript.write(text.encode(TRANSCRIPT_ENCODING, errors="replace"))
        return len(text)

    def write_bytes(self, data: bytes) -> int:
        """Write raw bytes: decoded for the real text stream, stored verbatim in the transcript."""
        with self._transcript.lock:
            self._real.write(data.decode(TRANSCRIPT_ENCODING, errors="replace"))
            self._transcript.write(data)
        return len(data)

    def flush(self) -> None:
        # Also reached from close() at garbage collection, when the real stream may be closed.
        if not getattr(self._real, "closed", False):
            self._real.flush()

    def isatty(self) -> bool:
        try:
            return self._real.isatty()
        except (AttributeError, ValueError):
            return False

    def fileno(self) -> int:
        return self._real.fileno()
