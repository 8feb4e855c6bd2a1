"""Bit-level writing and byte decoding helpers."""

from __future__ import annotations

import enum
from typing import Callable, Optional, Tuple, Union

WriteCallback = Callable[[bytes], object]

_UINT_WIDTHS = (8, 16, 32, 64)


class ByteOrder(enum.Enum):
    """Order in which multi-byte integers are written."""

    BIG = "big"
    LITTLE = "little"


class BitsWriter:
    """Writes individual bits into a writer, emitting each byte once it is full.

    The writer only needs a ``write(bytes)`` method. When a write callback is
    set, it receives every emitted byte, one at a time, as a 1-byte ``bytes``.
    """

    def __init__(
        self,
        writer,
        byte_order: Optional[ByteOrder] = ByteOrder.BIG,
        write_callback: Optional[WriteCallback] = None,
    ) -> None:
        self._writer = writer
        self._byte_order = byte_order if byte_order is not None else ByteOrder.BIG
        self._callback = write_callback
        self._cache = 0
        self._cache_len = 0

    def set_write_callback(self, callback: Optional[WriteCallback]) -> None:
        self._callback = callback

    def write(self, value: Union[str, bytes, bytearray, bool]) -> None:
        """Write ``value``.

        A ``str`` such as ``"10010"`` is written bit by bit from left to right,
        any character other than ``"1"`` being a 0 bit. ``bytes`` are written
        whole and a ``bool`` is written as one bit. Integers need an explicit
        width: use :meth:`write_uint` or :meth:`write_n`.
        """
        if isinstance(value, str):
            for char in value:
                self._write_bit(char == "1")
        elif isinstance(value, (bytes, bytearray, memoryview)):
            self._write_byte_slice(bytes(value))
        elif isinstance(value, bool):
            self._write_bit(value)
        else:
            raise TypeError(f"invalid type {type(value).__name__}")

    def write_uint(self, value: int, bits: int) -> None:
        """Write an unsigned integer of 8, 16, 32 or 64 bits in the byte order."""
        if bits not in _UINT_WIDTHS:
            raise ValueError(f"invalid width {bits}, expected one of {_UINT_WIDTHS}")
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"invalid type {type(value).__name__}")
        if not 0 <= value < (1 << bits):
            raise ValueError(f"value {value} does not fit in {bits} bits")
        if bits == 8:
            self._write_full_byte(value)
        elif self._byte_order is ByteOrder.BIG:
            self._write_bits_n(value, bits)
        else:
            for byte in value.to_bytes(bits // 8, "little"):
                self._write_full_byte(byte)

    def write_bytes_n(self, data: bytes, n: int, pad_byte: int) -> None:
        """Write exactly ``n`` bytes: truncate ``data`` or pad it with ``pad_byte``."""
        if n == 0:
            return
        data = bytes(data or b"")
        if len(data) >= n:
            self._write_byte_slice(data[:n])
            return
        self._write_byte_slice(data)
        for _ in range(n - len(data)):
            self._write_full_byte(pad_byte & 0xFF)

    def write_n(self, value: int, n: int) -> None:
        """Write the ``n`` low bits of the unsigned integer ``value``."""
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"invalid type {type(value).__name__}")
        if value < 0:
            raise ValueError(f"value {value} is negative")
        if not 0 <= n <= 64:
            raise ValueError(f"invalid bit count {n}")
        self._write_bits_n(value, n)

    def _emit(self, data: bytes) -> None:
        result = self._writer.write(data)
        if isinstance(result, int) and not isinstance(result, bool) and result < len(data):
            raise OSError(f"short write: {result} of {len(data)} bytes")
        if self._callback is not None:
            for byte in data:
                self._callback(bytes([byte]))

    def _write_byte_slice(self, data: bytes) -> None:
        if not data:
            return
        if self._cache_len:
            for byte in data:
                self._write_full_byte(byte)
        else:
            self._emit(data)

    def _write_full_byte(self, byte: int) -> None:
        if self._cache_len == 0:
            out = byte
        else:
            out = self._cache | (byte >> self._cache_len)
            self._cache = (byte << (8 - self._cache_len)) & 0xFF
        self._emit(bytes([out]))

    def _flush_full_cache(self) -> None:
        self._emit(bytes([self._cache]))
        self._cache = 0
        self._cache_len = 0

    def _write_bit(self, bit: bool) -> None:
        if bit:
            self._cache |= 1 << (7 - self._cache_len)
        self._cache_len += 1
        if self._cache_len == 8:
            self._flush_full_cache()

    def _write_bits_n(self, value: int, n: int) -> None:
        value &= (1 << n) - 1
        while n > 0:
            if self._cache_len == 0:
                if n >= 8:
                    n -= 8
                    self._emit(bytes([(value >> n) & 0xFF]))
                else:
                    self._cache_len = n
                    self._cache = (value << (8 - n)) & 0xFF
                    n = 0
            else:
                free = 8 - self._cache_len
                m = min(n, free)
                if n <= free:
                    self._cache |= (value << (free - m)) & 0xFF
                else:
                    self._cache |= (value >> (n - m)) & 0xFF
                n -= m
                value &= (1 << n) - 1
                self._cache_len += m
                if self._cache_len == 8:
                    self._flush_full_cache()


class BitsWriterBatch:
    """Chains writes on a :class:`BitsWriter`, keeping the first error.

    Once a write has failed, later writes are skipped.
    """

    def __init__(self, writer: BitsWriter) -> None:
        self._writer = writer
        self._err: Optional[BaseException] = None

    def _run(self, fn: Callable[..., None], *args) -> None:
        if self._err is not None:
            return
        try:
            fn(*args)
        except Exception as exc:  # noqa: BLE001 - the first failure is kept
            self._err = exc

    def write(self, value) -> None:
        self._run(self._writer.write, value)

    def write_uint(self, value: int, bits: int) -> None:
        self._run(self._writer.write_uint, value, bits)

    def write_n(self, value: int, n: int) -> None:
        self._run(self._writer.write_n, value, n)

    def write_bytes_n(self, data: bytes, n: int, pad_byte: int) -> None:
        self._run(self._writer.write_bytes_n, data, n, pad_byte)

    def err(self) -> Optional[BaseException]:
        """Return the first error raised, or None."""
        return self._err


_HAMMING84 = bytes(
    [
        0x01, 0xFF, 0xFF, 0x08, 0xFF, 0x0C, 0x04, 0xFF, 0xFF, 0x08, 0x08, 0x08, 0x06, 0xFF, 0xFF, 0x08,
        0xFF, 0x0A, 0x02, 0xFF, 0x06, 0xFF, 0xFF, 0x0F, 0x06, 0xFF, 0xFF, 0x08, 0x06, 0x06, 0x06, 0xFF,
        0xFF, 0x0A, 0x04, 0xFF, 0x04, 0xFF, 0x04, 0x04, 0x00, 0xFF, 0xFF, 0x08, 0xFF, 0x0D, 0x04, 0xFF,
        0x0A, 0x0A, 0xFF, 0x0A, 0xFF, 0x0A, 0x04, 0xFF, 0xFF, 0x0A, 0x03, 0xFF, 0x06, 0xFF, 0xFF, 0x0E,
        0x01, 0x01, 0x01, 0xFF, 0x01, 0xFF, 0xFF, 0x0F, 0x01, 0xFF, 0xFF, 0x08, 0xFF, 0x0D, 0x05, 0xFF,
        0x01, 0xFF, 0xFF, 0x0F, 0xFF, 0x0F, 0x0F, 0x0F, 0xFF, 0x0B, 0x03, 0xFF, 0x06, 0xFF, 0xFF, 0x0F,
        0x01, 0xFF, 0xFF, 0x09, 0xFF, 0x0D, 0x04, 0xFF, 0xFF, 0x0D, 0x03, 0xFF, 0x0D, 0x0D, 0xFF, 0x0D,
        0xFF, 0x0A, 0x03, 0xFF, 0x07, 0xFF, 0xFF, 0x0F, 0x03, 0xFF, 0x03, 0x03, 0xFF, 0x0D, 0x03, 0xFF,
        0xFF, 0x0C, 0x02, 0xFF, 0x0C, 0x0C, 0xFF, 0x0C, 0x00, 0xFF, 0xFF, 0x08, 0xFF, 0x0C, 0x05, 0xFF,
        0x02, 0xFF, 0x02, 0x02, 0xFF, 0x0C, 0x02, 0xFF, 0xFF, 0x0B, 0x02, 0xFF, 0x06, 0xFF, 0xFF, 0x0E,
        0x00, 0xFF, 0xFF, 0x09, 0xFF, 0x0C, 0x04, 0xFF, 0x00, 0x00, 0x00, 0xFF, 0x00, 0xFF, 0xFF, 0x0E,
        0xFF, 0x0A, 0x02, 0xFF, 0x07, 0xFF, 0xFF, 0x0E, 0x00, 0xFF, 0xFF, 0x0E, 0xFF, 0x0E, 0x0E, 0x0E,
        0x01, 0xFF, 0xFF, 0x09, 0xFF, 0x0C, 0x05, 0xFF, 0xFF, 0x0B, 0x05, 0xFF, 0x05, 0xFF, 0x05, 0x05,
        0xFF, 0x0B, 0x02, 0xFF, 0x07, 0xFF, 0xFF, 0x0F, 0x0B, 0x0B, 0xFF, 0x0B, 0xFF, 0x0B, 0x05, 0xFF,
        0xFF, 0x09, 0x09, 0x09, 0x07, 0xFF, 0xFF, 0x09, 0x00, 0xFF, 0xFF, 0x09, 0xFF, 0x0D, 0x05, 0xFF,
        0x07, 0xFF, 0xFF, 0x09, 0x07, 0x07, 0x07, 0xFF, 0xFF, 0x0B, 0x03, 0xFF, 0x07, 0xFF, 0xFF, 0x0E,
    ]
)


def _check_byte(value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"invalid type {type(value).__name__}")
    if not 0 <= value <= 0xFF:
        raise ValueError(f"value {value} is not a byte")


def byte_hamming84_decode(value: int) -> Optional[int]:
    """Decode a Hamming 8/4 byte into its 4-bit value, or None if uncorrectable."""
    _check_byte(value)
    decoded = _HAMMING84[value]
    return None if decoded == 0xFF else decoded


def byte_parity(value: int) -> Tuple[int, bool]:
    """Return the 7 data bits of ``value`` and whether its parity is odd."""
    _check_byte(value)
    return value & 0x7F, bin(value).count("1") % 2 == 1