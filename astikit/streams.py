"""Stream helpers: cancellable copies, line splitting and an in-memory pipe."""

from __future__ import annotations

import collections
import threading
import time
from concurrent.futures import CancelledError
from typing import Callable, Deque, Optional

_CHUNK_SIZE = 32 * 1024


def _check_cancel(cancel: Optional[threading.Event]) -> None:
    if cancel is not None and cancel.is_set():
        raise CancelledError("operation cancelled")


class CancellableReader:
    """Wraps a reader so that reads fail once ``cancel`` is set."""

    def __init__(self, reader, cancel: Optional[threading.Event] = None) -> None:
        self._reader = reader
        self._cancel = cancel

    def read(self, size: int = -1) -> bytes:
        """Read from the wrapped reader, raising CancelledError if cancelled."""
        _check_cancel(self._cancel)
        return self._reader.read(size)


def copy_stream(dst, src, cancel: Optional[threading.Event] = None) -> int:
    """Copy ``src`` into ``dst`` until exhausted and return the bytes copied.

    Raises CancelledError as soon as ``cancel`` is set before a read.
    """
    reader = CancellableReader(src, cancel)
    total = 0
    while True:
        chunk = reader.read(_CHUNK_SIZE)
        if not chunk:
            return total
        dst.write(chunk)
        total += len(chunk)


class NopCloser:
    """Wraps a writer with a ``close`` that leaves the writer open."""

    def __init__(self, writer) -> None:
        self._writer = writer
        self.closed = False

    def write(self, data: bytes):
        return self._writer.write(data)

    def close(self) -> None:
        """Mark this wrapper closed without closing the wrapped writer."""
        self.closed = True

    def __enter__(self) -> "NopCloser":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False


class WriterAdapter:
    """A writer that hands what it receives to a callback.

    With ``split`` set, data is buffered and the callback receives each piece
    found between separators; the remainder is flushed on close.
    """

    def __init__(
        self,
        callback: Optional[Callable[[bytes], object]] = None,
        split: Optional[bytes] = None,
    ) -> None:
        self._callback = callback
        self._split = bytes(split) if split else b""
        self._buffer = bytearray()

    def write(self, data: bytes) -> int:
        """Process ``data`` and return its length."""
        data = bytes(data)
        if self._split:
            if self._split not in data:
                self._buffer += data
                return len(data)
            items = data.split(self._split)
            first = bytes(self._buffer) + items[0]
            self._buffer.clear()
            self._emit(first)
            for item in items[1:-1]:
                self._emit(item)
            self._buffer += items[-1]
            return len(data)
        self._emit(data)
        return len(data)

    def close(self) -> None:
        """Hand any buffered remainder to the callback."""
        if self._buffer:
            rest = bytes(self._buffer)
            self._buffer.clear()
            self._emit(rest)

    def _emit(self, data: bytes) -> None:
        if self._callback is not None:
            self._callback(data)

    def __enter__(self) -> "WriterAdapter":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False


class Piper:
    """An in-memory pipe whose writes never block.

    Reads block until a chunk is available, the pipe is closed (EOFError) or,
    when ``read_timeout`` seconds are given, the timeout elapses: then
    ``read_timeout_error`` is raised if set, and ``b""`` is returned otherwise.
    Only one reader at a time is supported.
    """

    def __init__(
        self,
        read_timeout: Optional[float] = None,
        read_timeout_error: Optional[BaseException] = None,
    ) -> None:
        self._read_timeout = read_timeout
        self._read_timeout_error = read_timeout_error
        self._chunks: Deque[bytes] = collections.deque()
        self._closed = False
        self._cond = threading.Condition()

    def write(self, data: bytes) -> int:
        """Queue a copy of ``data``; raise EOFError once closed."""
        with self._cond:
            if self._closed:
                raise EOFError("piper is closed")
            chunk = bytes(data)
            self._chunks.append(chunk)
            self._cond.notify_all()
            return len(chunk)

    def read(self) -> bytes:
        """Return the next written chunk."""
        deadline = None
        if self._read_timeout is not None and self._read_timeout > 0:
            deadline = time.monotonic() + self._read_timeout
        with self._cond:
            while True:
                remaining = None
                if deadline is not None:
                    remaining = deadline - time.monotonic()
                    if remaining <= 0:
                        if self._read_timeout_error is not None:
                            raise self._read_timeout_error
                        return b""
                if self._closed:
                    raise EOFError("piper is closed")
                if self._chunks:
                    return self._chunks.popleft()
                self._cond.wait(remaining)

    def close(self) -> None:
        """Close the pipe, waking any pending read. Safe to call twice."""
        with self._cond:
            if self._closed:
                return
            self._closed = True
            self._cond.notify_all()

    def __enter__(self) -> "Piper":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False