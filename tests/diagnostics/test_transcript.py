# topmark:header:start
#
#   project      : LfsDiag
#   file         : test_transcript.py
#   file_relpath : tests/diagnostics/test_transcript.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Transcript buffer and dual-sink writer behavior."""

from __future__ import annotations

import io
import threading

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lfsdiag.diagnostics.transcript import DualSinkWriter, TranscriptBuffer


class _BrokenStream(io.StringIO):
    def write(self, s: str) -> int:
        raise OSError("broken pipe")


def test_writes_reach_real_stream_and_transcript() -> None:
    """Each write lands in the wrapped stream and in the transcript."""
    transcript = TranscriptBuffer()
    real = io.StringIO()
    writer = DualSinkWriter(real, transcript)

    assert writer.write("hello\n") == len("hello\n")

    assert real.getvalue() == "hello\n"
    assert transcript.getvalue() == b"hello\n"


def test_transcript_is_utf8_encoded() -> None:
    """Non-ASCII text is stored as UTF-8 bytes."""
    transcript = TranscriptBuffer()
    DualSinkWriter(io.StringIO(), transcript).write("héllo ✓\n")

    assert transcript.getvalue() == "héllo ✓\n".encode()


def test_write_bytes_keeps_raw_bytes_in_transcript() -> None:
    """Raw bytes are stored verbatim; the real stream gets a decoded rendition."""
    transcript = TranscriptBuffer()
    real = io.StringIO()
    writer = DualSinkWriter(real, transcript)

    writer.write_bytes(b"ok \xff\n")

    assert transcript.getvalue() == b"ok \xff\n"
    assert real.getvalue() == "ok �\n"


def test_failed_real_write_is_not_recorded() -> None:
    """If the real stream fails, the error propagates and the transcript is untouched."""
    transcript = TranscriptBuffer()
    writer = DualSinkWriter(_BrokenStream(), transcript)

    with pytest.raises(OSError, match="broken pipe"):
        writer.write("lost\n")

    assert transcript.getvalue() == b""


def test_reading_does_not_clear() -> None:
    """getvalue() returns a snapshot; the buffer keeps growing."""
    transcript = TranscriptBuffer()
    transcript.write(b"a")
    assert transcript.getvalue() == b"a"
    transcript.write(b"b")
    assert transcript.getvalue() == b"ab"
    assert len(transcript) == 2


def test_writer_delegates_stream_properties() -> None:
    """isatty() and real expose the wrapped stream."""
    real = io.StringIO()
    writer = DualSinkWriter(real, TranscriptBuffer())

    assert writer.real is real
    assert writer.isatty() is False
    assert writer.writable() is True


@given(
    st.lists(
        st.tuples(st.booleans(), st.text(max_size=20)),
        max_size=30,
    )
)
def test_interleaved_writes_preserve_call_order(writes: list[tuple[bool, str]]) -> None:
    """Transcript == concatenation of all writes across both writers, in call order."""
    transcript = TranscriptBuffer()
    out = DualSinkWriter(io.StringIO(), transcript)
    err = DualSinkWriter(io.StringIO(), transcript)

    for to_err, text in writes:
        (err if to_err else out).write(text)

    expected = "".join(text for _, text in writes).encode("utf-8", errors="replace")
    assert transcript.getvalue() == expected


def test_concurrent_writes_keep_each_write_whole() -> None:
    """Concurrent writers never split a single write in the transcript."""
    transcript = TranscriptBuffer()
    out = DualSinkWriter(io.StringIO(), transcript)
    err = DualSinkWriter(io.StringIO(), transcript)
    lines_per_thread = 200

    def worker(writer: DualSinkWriter, tag: str) -> None:
        for i in range(lines_per_thread):
            writer.write(f"{tag}-{i:04d}\n")

    threads = [
        threading.Thread(target=worker, args=(out, "out")),
        threading.Thread(target=worker, args=(err, "err")),
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    lines = transcript.getvalue().decode().splitlines()
    assert len(lines) == 2 * lines_per_thread
    assert [ln for ln in lines if ln.startswith("out-")] == [
        f"out-{i:04d}" for i in range(lines_per_thread)
    ]
    assert [ln for ln in lines if ln.startswith("err-")] == [
        f"err-{i:04d}" for i in range(lines_per_thread)
    ]
