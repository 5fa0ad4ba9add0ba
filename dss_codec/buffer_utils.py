"""
Byte Buffer Helpers

Big-endian 32-bit integer access over byte ranges, hex formatting for log
and error messages, and byte range comparison.

Functions:
    get_uint32_be(buf, offset=0, available=None):
        Reads an unsigned 32-bit big-endian integer.

    put_uint32_be(value, buf, offset=0, available=None):
        Writes an unsigned 32-bit big-endian integer.

    to_hex(data, sep=None, offset=0, length=None):
        Formats bytes as lowercase hex pairs.

    ranges_equal(a, a_offset, b, b_offset, length):
        Compares two byte ranges.

Note:
    The comparisons here are not constant-time.
"""

from dss_codec.errors import InsufficientBufferError
from dss_codec.math_utils import bytes_to_long, long_to_bytes

UINT32_SIZE = 4
HEX_DIGITS = "0123456789abcdef"


def _available(buf, offset, available):
    remaining = max(len(buf) - offset, 0)
    if available is None:
        return remaining
    return min(available, remaining)


def get_uint32_be(buf, offset=0, available=None):
    """
    Read a 32-bit unsigned integer in big-endian order.

    Only the first 4 bytes at ``offset`` are used when more are available.

    Args:
        buf (bytes): Buffer holding the value
        offset (int): Position of the value in the buffer
        available (int, optional): Number of readable bytes from ``offset``,
            defaults to the rest of the buffer

    Returns:
        int: The value, in the range [0, 2**32)

    Raises:
        InsufficientBufferError: If fewer than 4 bytes are available
    """
    available = _available(buf, offset, available)
    if available < UINT32_SIZE:
        raise InsufficientBufferError(
            "Not enough data for a UINT: required=%d, available=%d" % (UINT32_SIZE, available))
    return bytes_to_long(buf[offset:offset + UINT32_SIZE])


def put_uint32_be(value, buf, offset=0, available=None):
    """
    Write a 32-bit value in network order (MSB first).

    Args:
        value (int): The value, truncated to its low 32 bits
        buf (bytearray): Destination buffer
        offset (int): Position to write the value at
        available (int, optional): Writable space from ``offset``

    Returns:
        int: Number of bytes written (always 4)

    Raises:
        InsufficientBufferError: If fewer than 4 bytes of space are available
    """
    available = _available(buf, offset, available)
    if available < UINT32_SIZE:
        raise InsufficientBufferError(
            "Not enough space for a UINT: required=%d, available=%d" % (UINT32_SIZE, available))
    buf[offset:offset + UINT32_SIZE] = long_to_bytes(value & 0xFFFFFFFF, UINT32_SIZE)
    return UINT32_SIZE


def to_hex(data, sep=None, offset=0, length=None):
    """
    Format bytes as lowercase hex, e.g. ``to_hex(b'\\x00\\xff', ':') == '00:ff'``.

    The separator goes between bytes only. ``None`` or an empty string
    means no separator.
    """
    if data is None:
        return ""
    if length is None:
        length = len(data) - offset
    if length <= 0:
        return ""

    digits = []
    for b in data[offset:offset + length]:
        digits.append(HEX_DIGITS[(b >> 4) & 0x0F] + HEX_DIGITS[b & 0x0F])
    return (sep or "").join(digits)


def ranges_equal(a, a_offset, b, b_offset, length):
    """
    Compare ``length`` bytes of ``a`` starting at ``a_offset`` with ``b``
    starting at ``b_offset``.

    Returns False if either range extends past the end of its buffer.
    Stops at the first differing byte, so this is not timing-safe.
    """
    if len(a) < a_offset + length or len(b) < b_offset + length:
        return False

    for i in range(length):
        if a[a_offset + i] != b[b_offset + i]:
            return False
    return True


def buffers_equal(a, b):
    """Whole-buffer variant of ranges_equal."""
    if len(a) != len(b):
        return False
    return ranges_equal(a, 0, b, 0, len(a))
