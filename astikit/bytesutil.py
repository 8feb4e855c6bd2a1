"""Safe sequential reading and padding of byte strings."""

from __future__ import annotations

import enum
from typing import Union


class BytesIterator:
    """Reads a byte string sequentially, raising IndexError on overruns."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._offset = 0

    def _check(self, end: int) -> None:
        if self._offset < 0 or len(self._data) < end:
            raise IndexError(
                f"slice length is {len(self._data)}, offset {end - 1 if end == self._offset + 1 else end} is invalid"
            )

    def next_byte(self) -> int:
        """Return the next byte as an int."""
        if self._offset < 0 or len(self._data) < self._offset + 1:
            raise IndexError(
                f"slice length is {len(self._data)}, offset {self._offset} is invalid"
            )
        value = self._data[self._offset]
        self._offset += 1
        return value

    def next_bytes(self, n: int) -> bytes:
        """Return a copy of the next ``n`` bytes."""
        return bytes(self.next_bytes_no_copy(n))

    def next_bytes_no_copy(self, n: int) -> memoryview:
        """Return a view on the next ``n`` bytes without copying them."""
        end = self._offset + n
        if self._offset < 0 or n < 0 or len(self._data) < end:
            raise IndexError(f"slice length is {len(self._data)}, offset {end} is invalid")
        view = memoryview(self._data)[self._offset:end]
        self._offset = end
        return view

    def seek(self, n: int) -> None:
        """Move to offset ``n``."""
        self._offset = n

    def skip(self, n: int) -> None:
        """Move ``n`` bytes forward, or backward when negative."""
        self._offset += n

    def has_bytes_left(self) -> bool:
        return self._offset < len(self._data)

    def offset(self) -> int:
        return self._offset

    def dump(self) -> bytes:
        """Return all remaining bytes and move to the end."""
        if not self.has_bytes_left():
            return b""
        rest = self._data[self._offset:]
        self._offset = len(self._data)
        return rest

    def __len__(self) -> int:
        return len(self._data)


class PadOption(enum.Enum):
    """Options for :func:`bytes_pad` and :func:`str_pad`."""

    CUT = "cut"
    LEFT = "left"
    RIGHT = "right"


def _fill_byte(repeat: Union[int, bytes, str]) -> bytes:
    if isinstance(repeat, int):
        return bytes([repeat & 0xFF])
    if isinstance(repeat, (bytes, bytearray)) and len(repeat) == 1:
        return bytes(repeat)
    if isinstance(repeat, str) and len(repeat) == 1:
        return bytes([ord(repeat) & 0xFF])
    raise ValueError(f"invalid pad value {repeat!r}")


def bytes_pad(data: bytes, repeat: Union[int, bytes, str], length: int, *options: PadOption) -> bytes:
    """Pad ``data`` to ``length`` with ``repeat``, on the left by default.

    Longer input is returned unchanged unless ``PadOption.CUT`` is given.
    """
    fill = _fill_byte(repeat)
    cut = False
    direction = PadOption.LEFT
    for option in options:
        if option is PadOption.CUT:
            cut = True
        else:
            direction = option
    data = bytes(data)
    if len(data) >= length:
        return data[:length] if cut else data
    padding = fill * (length - len(data))
    return data + padding if direction is PadOption.RIGHT else padding + data


def str_pad(text: str, repeat: str, length: int, *options: PadOption) -> str:
    """Pad the UTF-8 bytes of ``text`` to ``length`` bytes."""
    padded = bytes_pad(text.encode("utf-8"), repeat, length, *options)
    return padded.decode("utf-8", errors="replace")