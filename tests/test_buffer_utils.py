"""
Tests for the big-endian integer, hex and comparison helpers
"""

import pytest

from dss_codec.buffer_utils import (
    buffers_equal,
    get_uint32_be,
    put_uint32_be,
    ranges_equal,
    to_hex,
)
from dss_codec.errors import ErrorKind, InsufficientBufferError


def test_get_uint32_be():
    assert get_uint32_be(b"\x00\x00\x00\x07ssh-dss") == 7
    assert get_uint32_be(b"\xff\xff\xff\xff") == 0xFFFFFFFF
    assert get_uint32_be(b"\x01\x00\x00\x01\x00", 1) == 0x100


def test_get_uint32_be_uses_first_four_bytes_only():
    assert get_uint32_be(b"\x00\x00\x00\x28\x58\x49", 0, 6) == 40


@pytest.mark.parametrize("buf,offset,available", [
    (b"", 0, None),
    (b"\x00\x00\x00", 0, None),
    (b"\x00\x00\x00\x00\x00", 2, None),
    (b"\x00\x00\x00\x00\x00\x00\x00\x00", 0, 3),
    # declared space larger than the buffer itself
    (b"\x00\x00", 0, 8),
])
def test_get_uint32_be_insufficient(buf, offset, available):
    with pytest.raises(InsufficientBufferError) as excinfo:
        get_uint32_be(buf, offset, available)
    assert excinfo.value.kind is ErrorKind.INSUFFICIENT_BUFFER


def test_put_uint32_be():
    buf = bytearray(6)
    assert put_uint32_be(0x01020304, buf, 1) == 4
    assert buf == b"\x00\x01\x02\x03\x04\x00"


def test_put_uint32_be_truncates_to_32_bits():
    buf = bytearray(4)
    put_uint32_be(0x100000005, buf)
    assert buf == b"\x00\x00\x00\x05"


def test_put_uint32_be_insufficient():
    with pytest.raises(InsufficientBufferError):
        put_uint32_be(1, bytearray(3))
    with pytest.raises(InsufficientBufferError):
        put_uint32_be(1, bytearray(8), 0, 2)
    with pytest.raises(InsufficientBufferError):
        put_uint32_be(1, bytearray(8), 6)


def test_put_then_get():
    buf = bytearray(8)
    put_uint32_be(0xDEADBEEF, buf, 4)
    assert get_uint32_be(buf, 4) == 0xDEADBEEF


def test_to_hex():
    data = bytes([0x00, 0xFF, 0x0A])
    assert to_hex(data, ":") == "00:ff:0a"
    assert to_hex(data) == "00ff0a"
    assert to_hex(data, "") == "00ff0a"


def test_to_hex_range():
    assert to_hex(b"\x01\x02\x03", "-", 1, 2) == "02-03"
    assert to_hex(b"\xab", ":") == "ab"


def test_to_hex_empty():
    assert to_hex(b"", ":") == ""
    assert to_hex(None, ":") == ""
    assert to_hex(b"\x01\x02", ":", 0, 0) == ""


def test_ranges_equal():
    a = b"\x00\x01\x02\x03"
    b = b"\xff\x01\x02\x03\xff"
    assert ranges_equal(a, 1, b, 1, 3)
    assert not ranges_equal(a, 0, b, 0, 2)
    assert ranges_equal(a, 0, b, 0, 0)


def test_ranges_equal_out_of_bounds():
    a = b"\x01\x02\x03"
    assert not ranges_equal(a, 1, a, 1, 3)
    assert not ranges_equal(a, 0, b"\x01\x02", 0, 3)


def test_buffers_equal():
    assert buffers_equal(b"abc", bytearray(b"abc"))
    assert not buffers_equal(b"abc", b"abd")
    assert not buffers_equal(b"abc", b"abcd")
    assert buffers_equal(b"", b"")
