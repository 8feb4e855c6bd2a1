"""Named POSIX shared memory segments and variable-size readers and writers."""

from __future__ import annotations

import dataclasses
import sys
import threading
from multiprocessing import shared_memory
from typing import Optional


def _clean_name(name: str) -> str:
    # The public name never carries the leading "/" the system name needs
    return name.lstrip("/")


class SharedMemory:
    """A mapped, named shared memory segment.

    Segments made with :meth:`create` are unlinked when closed; segments
    obtained with :meth:`open` are only unmapped.
    """

    def __init__(self, segment: shared_memory.SharedMemory, name: str, unlink: bool) -> None:
        self._segment: Optional[shared_memory.SharedMemory] = segment
        self._name = name
        self._size = segment.size
        self._unlink = unlink

    @classmethod
    def create(cls, name: str, size: int) -> "SharedMemory":
        """Create a new segment of ``size`` bytes; raise FileExistsError if taken."""
        clean = _clean_name(name)
        segment = shared_memory.SharedMemory(name=clean, create=True, size=size)
        return cls(segment, clean, unlink=True)

    @classmethod
    def open(cls, name: str) -> "SharedMemory":
        """Open an existing segment; raise FileNotFoundError if there is none."""
        clean = _clean_name(name)
        if sys.version_info >= (3, 13):
            segment = shared_memory.SharedMemory(name=clean, create=False, track=False)
        else:
            segment = shared_memory.SharedMemory(name=clean, create=False)
        return cls(segment, clean, unlink=False)

    def close(self) -> None:
        """Unlink the segment if this object created it, then unmap it.

        Safe to call more than once.
        """
        segment = self._segment
        if segment is None:
            return
        if self._unlink:
            segment.unlink()
            self._unlink = False
        segment.close()
        self._segment = None

    def _mapped(self) -> shared_memory.SharedMemory:
        if self._segment is None:
            raise ValueError("shared memory is unmapped")
        return self._segment

    def write_bytes(self, data: bytes) -> None:
        """Copy ``data`` at the start of the segment."""
        segment = self._mapped()
        data = bytes(data)
        if len(data) > self._size:
            raise ValueError(f"{len(data)} bytes do not fit in {self._size} bytes")
        segment.buf[: len(data)] = data

    def read_bytes(self, size: int) -> bytes:
        """Return a copy of the first ``size`` bytes of the segment."""
        segment = self._mapped()
        if size < 0 or size > self._size:
            raise ValueError(f"cannot read {size} bytes from {self._size} bytes")
        return bytes(segment.buf[:size])

    @property
    def name(self) -> str:
        """The segment name, without a leading "/"."""
        return self._name

    @property
    def size(self) -> int:
        """The mapped size in bytes."""
        return self._size

    @property
    def closed(self) -> bool:
        return self._segment is None

    def __enter__(self) -> "SharedMemory":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False


@dataclasses.dataclass(frozen=True)
class ReadOptions:
    """What a reader needs to fetch data written by a writer."""

    name: str
    size: int


class VariableSizeSharedMemoryWriter:
    """Writes data of any size, reallocating the segment when it is too small.

    Segments are named "<prefix>-<size>".
    """

    def __init__(self, prefix: str) -> None:
        self._prefix = prefix
        self._shm: Optional[SharedMemory] = None
        self._lock = threading.Lock()

    def write_bytes(self, data: bytes) -> ReadOptions:
        """Write ``data`` and return the options to read it back."""
        data = bytes(data)
        with self._lock:
            if self._shm is None or len(data) > self._shm.size:
                self._close_shm()
                self._shm = SharedMemory.create(f"{self._prefix}-{len(data)}", len(data))
            self._shm.write_bytes(data)
            return ReadOptions(name=self._shm.name, size=len(data))

    def _close_shm(self) -> None:
        if self._shm is not None:
            self._shm.close()
            self._shm = None

    def close(self) -> None:
        """Release the current segment."""
        with self._lock:
            self._close_shm()

    def __enter__(self) -> "VariableSizeSharedMemoryWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False


class VariableSizeSharedMemoryReader:
    """Reads data written by a :class:`VariableSizeSharedMemoryWriter`."""

    def __init__(self) -> None:
        self._shm: Optional[SharedMemory] = None
        self._lock = threading.Lock()

    def read_bytes(self, options: ReadOptions) -> bytes:
        """Return the bytes described by ``options``, reopening the segment if renamed."""
        with self._lock:
            if self._shm is None or self._shm.name != _clean_name(options.name):
                self._close_shm()
                self._shm = SharedMemory.open(options.name)
            return self._shm.read_bytes(options.size)

    def _close_shm(self) -> None:
        if self._shm is not None:
            self._shm.close()
            self._shm = None

    def close(self) -> None:
        """Release the current segment."""
        with self._lock:
            self._close_shm()

    def __enter__(self) -> "VariableSizeSharedMemoryReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False