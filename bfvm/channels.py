"""
I/O channels — the byte source and byte sink a machine talks to.

The engine needs exactly two operations:

    read_byte()         -> int 0..255, or None at end-of-stream
    write_byte(value)   -> None

Any failure other than a clean end-of-stream is raised as InputError /
OutputError. Stream-backed channels wrap binary file objects (the process's
stdin/stdout by default); buffer-backed channels keep everything in memory,
which is what the tests and embedding callers use.
"""

from __future__ import annotations
import io
import logging
import sys
from collections import deque
from typing import BinaryIO, Iterable, Optional, Union

from .config import OUTPUT_MASK
from .errors import InputError, OutputError

log = logging.getLogger(__name__)


# ──────────────────────────────────────────────
# Input
# ──────────────────────────────────────────────

class StreamSource:
    """Reads single bytes from a binary stream (default: sys.stdin.buffer)."""

    def __init__(self, stream: Optional[BinaryIO] = None):
        if isinstance(stream, io.TextIOBase):
            raise TypeError("StreamSource needs a binary stream, got a text stream")
        self.stream = stream if stream is not None else sys.stdin.buffer

    def read_byte(self) -> Optional[int]:
        try:
            data = self.stream.read(1)
        except (OSError, ValueError) as e:
            raise InputError(f"Read failed: {e}") from e
        if data is None:
            # Non-blocking stream with nothing ready: not a byte, not EOF
            raise InputError("Read failed: stream returned no data")
        if not isinstance(data, (bytes, bytearray)):
            raise InputError(f"Read failed: expected bytes, got {type(data).__name__}")
        if len(data) == 0:
            return None
        return data[0]


class BufferSource:
    """Serves bytes from an in-memory queue. Empty queue = end-of-stream.

    More data can be pushed at any time with feed(), so a caller can drive
    an interactive program one step at a time.
    """

    def __init__(self, data: Iterable[int] = b""):
        self._queue: deque = deque()
        self.feed(data)

    def feed(self, data: Iterable[int]):
        for byte in data:
            self._queue.append(byte & 0xFF)

    def read_byte(self) -> Optional[int]:
        if not self._queue:
            return None
        return self._queue.popleft()

    @property
    def remaining(self) -> int:
        return len(self._queue)


# ──────────────────────────────────────────────
# Output
# ──────────────────────────────────────────────

class StreamSink:
    """Writes single bytes to a binary stream (default: sys.stdout.buffer)."""

    def __init__(self, stream: Optional[BinaryIO] = None):
        if isinstance(stream, io.TextIOBase):
            raise TypeError("StreamSink needs a binary stream, got a text stream")
        self.stream = stream if stream is not None else sys.stdout.buffer

    def write_byte(self, value: int):
        try:
            written = self.stream.write(bytes([value & OUTPUT_MASK]))
        except (OSError, ValueError) as e:
            raise OutputError(f"Write failed: {e}") from e
        if written != 1:
            raise OutputError(f"Write failed: wrote {written} bytes, expected 1")

    def flush(self):
        try:
            self.stream.flush()
        except (OSError, ValueError) as e:
            raise OutputError(f"Flush failed: {e}") from e


class BufferSink:
    """Collects written bytes in memory."""

    def __init__(self):
        self.buffer: bytearray = bytearray()

    def write_byte(self, value: int):
        self.buffer.append(value & OUTPUT_MASK)

    def flush(self):
        pass

    @property
    def output(self) -> bytes:
        """Every byte written so far."""
        return bytes(self.buffer)

    def clear(self):
        self.buffer.clear()


Source = Union[StreamSource, BufferSource]
Sink = Union[StreamSink, BufferSink]


def as_source(obj=None) -> Source:
    """Coerce None, bytes, a binary stream or an existing source to a source.

    Text streams are rejected by StreamSource with TypeError.
    """
    if obj is None:
        return StreamSource()
    if hasattr(obj, "read_byte"):
        return obj
    if isinstance(obj, (bytes, bytearray)):
        return BufferSource(obj)
    return StreamSource(obj)


def as_sink(obj=None) -> Sink:
    """Coerce None, a binary stream or an existing sink to a sink."""
    if obj is None:
        return StreamSink()
    if hasattr(obj, "write_byte"):
        return obj
    return StreamSink(obj)
