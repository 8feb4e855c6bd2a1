import io

import pytest

from astikit.binary import (
    BitsWriter,
    BitsWriterBatch,
    ByteOrder,
    byte_hamming84_decode,
    byte_parity,
)


def test_bits_writer():
    buf = io.BytesIO()
    cb_buf = bytearray()
    w = BitsWriter(buf, write_callback=cb_buf.extend)

    w.write("000000")
    assert buf.getvalue() == b""
    w.write(False)
    w.write(True)
    assert buf.getvalue() == bytes([1])
    w.write(bytes([2, 3]))
    assert buf.getvalue() == bytes([1, 2, 3])
    w.write_uint(4, 8)
    assert buf.getvalue() == bytes([1, 2, 3, 4])
    w.write_uint(5, 16)
    assert buf.getvalue() == bytes([1, 2, 3, 4, 0, 5])
    w.write_uint(6, 32)
    assert buf.getvalue() == bytes([1, 2, 3, 4, 0, 5, 0, 0, 0, 6])
    w.write_uint(7, 64)
    expected = bytes([1, 2, 3, 4, 0, 5, 0, 0, 0, 6, 0, 0, 0, 0, 0, 0, 0, 7])
    assert buf.getvalue() == expected
    assert bytes(cb_buf) == expected

    with pytest.raises(TypeError):
        w.write(1)


def test_bits_writer_write_n():
    buf = io.BytesIO()
    w = BitsWriter(buf)
    w.write_n(4, 3)
    w.write_n(4096, 13)
    assert buf.getvalue() == bytes([144, 0])


def test_bits_writer_unaligned_big_endian():
    buf = io.BytesIO()
    w = BitsWriter(buf)
    w.write("1010")
    w.write_uint(0xABCD, 16)
    w.write("0000")
    assert buf.getvalue() == bytes([0xAA, 0xBC, 0xD0])


def test_bits_writer_little_endian():
    buf = io.BytesIO()
    w = BitsWriter(buf, byte_order=ByteOrder.LITTLE)
    w.write_uint(0x0102, 16)
    w.write_uint(0x01020304, 32)
    assert buf.getvalue() == bytes([0x02, 0x01, 0x04, 0x03, 0x02, 0x01])


def test_bits_writer_unaligned_little_endian():
    buf = io.BytesIO()
    w = BitsWriter(buf, byte_order=ByteOrder.LITTLE)
    w.write("1010")
    w.write_uint(0xABCD, 16)
    w.write("0000")
    assert buf.getvalue() == bytes([0xAC, 0xDA, 0xB0])


def test_bits_writer_unaligned_bytes():
    buf = io.BytesIO()
    w = BitsWriter(buf)
    w.write("1111")
    w.write(b"\x00\xff")
    w.write("0000")
    assert buf.getvalue() == bytes([0xF0, 0x0F, 0xF0])


def test_set_write_callback():
    buf = io.BytesIO()
    seen = []
    w = BitsWriter(buf)
    w.write(b"\x01")
    w.set_write_callback(seen.append)
    w.write(b"\x02\x03")
    assert seen == [b"\x02", b"\x03"]
    assert buf.getvalue() == b"\x01\x02\x03"


@pytest.mark.parametrize(
    "value",
    [1, 1.5, None, [1, 0]],
)
def test_bits_writer_invalid_types(value):
    w = BitsWriter(io.BytesIO())
    with pytest.raises(TypeError):
        w.write(value)


def test_write_uint_invalid_width_and_range():
    w = BitsWriter(io.BytesIO())
    with pytest.raises(ValueError):
        w.write_uint(1, 12)
    with pytest.raises(ValueError):
        w.write_uint(256, 8)
    with pytest.raises(ValueError):
        w.write_uint(-1, 16)


def test_write_n_invalid():
    w = BitsWriter(io.BytesIO())
    with pytest.raises(ValueError):
        w.write_n(1, 65)
    with pytest.raises(ValueError):
        w.write_n(-1, 8)
    with pytest.raises(TypeError):
        w.write_n("1", 8)


@pytest.mark.parametrize(
    "data,n,expected",
    [
        (None, 0, b""),
        (bytes([0x00]), 0, b""),
        (None, 3, bytes([0xFF, 0xFF, 0xFF])),
        (b"en", 3, b"en\xff"),
        (b"eng", 3, b"eng"),
        (b"english", 3, b"eng"),
    ],
)
def test_bits_writer_write_bytes_n(data, n, expected):
    buf = io.BytesIO()
    w = BitsWriter(buf)
    w.write_bytes_n(data, n, 0xFF)
    assert buf.getvalue() == expected


class LimitedWriter:
    def __init__(self, limit):
        self.limit = limit

    def write(self, data):
        self.limit -= len(data)
        if self.limit < 0:
            raise EOFError("limit reached")
        return len(data)


def test_bits_writer_batch():
    wr = LimitedWriter(1)
    b = BitsWriterBatch(BitsWriter(wr))

    b.write_uint(0, 8)
    assert b.err() is None
    b.write_uint(1, 8)
    first = b.err()
    assert isinstance(first, EOFError)

    b.write_uint(2, 8)
    b.write("11111111")
    b.write_n(3, 8)
    b.write_bytes_n(b"ab", 2, 0)
    assert b.err() is first
    assert wr.limit == -1


def test_short_write_raises():
    class ShortWriter:
        def write(self, data):
            return len(data) - 1

    w = BitsWriter(ShortWriter())
    with pytest.raises(OSError):
        w.write(b"ab")


@pytest.mark.parametrize(
    "value,expected",
    [
        (0x00, 0x01),
        (0x01, None),
        (0x03, 0x08),
        (0x28, 0x00),
        (0xA0, 0x00),
        (0x5F, 0x0F),
        (0x7B, 0x03),
        (0xFF, 0x0E),
        (0xFE, None),
    ],
)
def test_byte_hamming84_decode(value, expected):
    assert byte_hamming84_decode(value) == expected


def test_byte_hamming84_decode_range():
    results = [byte_hamming84_decode(i) for i in range(256)]
    decoded = {r for r in results if r is not None}
    assert decoded == set(range(16))
    assert None in results


def test_byte_hamming84_decode_invalid():
    with pytest.raises(ValueError):
        byte_hamming84_decode(256)


@pytest.mark.parametrize("bit", range(8))
def test_byte_parity_flips_with_one_bit(bit):
    for value in range(256):
        _, ok = byte_parity(value)
        _, flipped_ok = byte_parity(value ^ (1 << bit))
        assert ok != flipped_ok


def test_byte_parity_data_bits():
    for value in range(256):
        data, _ = byte_parity(value)
        assert data == value & 0x7F