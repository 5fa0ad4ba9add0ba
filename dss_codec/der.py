"""
DER Codec for DSA Signatures

This module writes and reads the one ASN.1 structure a DSA signing primitive
exchanges:

    Dss-Sig-Value ::= SEQUENCE {
        r   INTEGER,
        s   INTEGER
    }

Classes:
    DERWriter:
        Scoped buffer builder for DER TLVs.

Functions:
    write_length(n):
        Encodes a definite DER length (short or long form).

    write_integer(value):
        Encodes unsigned big-endian bytes as a DER INTEGER TLV.

    write_sequence(*payloads):
        Wraps already-encoded TLVs in a SEQUENCE.

    parse_sequence_of_two_integers(sequence):
        Extracts the raw value bytes of r and s from a DER signature.

    decode_der_signature(sequence):
        Same as above, returning the values as integers.

Integer values are handled as raw byte strings so that the fixed-width
wire representation survives the round trip unchanged. Nothing here is a
general-purpose ASN.1 parser.
"""

from dss_codec.errors import MalformedEncodingError
from dss_codec.math_utils import bytes_to_long, long_to_bytes

SEQUENCE_TAG = 0x30
INTEGER_TAG = 0x02

# lengths wider than this cannot describe a signature
MAX_LENGTH_BYTES = 4


class DERWriter:
    """
    Incremental DER builder.

    Use as a context manager; the buffer is released when the block exits,
    whether or not an error was raised::

        with DERWriter() as w:
            w.write_integer(r)
            encoded = w.to_bytes()
    """

    def __init__(self):
        self._buffer = bytearray()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False

    @property
    def closed(self):
        return self._buffer is None

    def _ensure_open(self):
        if self._buffer is None:
            raise ValueError("DERWriter is closed")

    def write(self, data):
        """Append a single byte (int) or a byte string."""
        self._ensure_open()
        if isinstance(data, int):
            self._buffer.append(data)
        else:
            self._buffer.extend(data)

    def write_length(self, n):
        self.write(write_length(n))

    def write_integer(self, value, offset=0, length=None):
        """
        Append ``value[offset:offset + length]`` as a DER INTEGER.

        The bytes are taken as an unsigned big-endian number. A 0x00 guard
        byte is inserted when the first byte has its high bit set. Leading
        zero bytes are kept as they are.
        """
        if length is None:
            length = len(value) - offset
        data = bytes(value[offset:offset + length])
        if not data:
            data = b"\x00"

        guard = (data[0] & 0x80) != 0
        self.write(INTEGER_TAG)
        self.write_length(len(data) + 1 if guard else len(data))
        if guard:
            self.write(0x00)
        self.write(data)

    def to_bytes(self):
        self._ensure_open()
        return bytes(self._buffer)

    def close(self):
        self._buffer = None


def write_length(n):
    """
    Encode a definite DER length.

    Args:
        n (int): Length to encode

    Returns:
        bytes: A single byte when ``n < 128``, otherwise ``0x80 | k``
        followed by the ``k`` big-endian bytes of ``n``
    """
    if n < 0:
        raise ValueError("DER length cannot be negative: %d" % n)
    if n < 0x80:
        return bytes([n])

    body = long_to_bytes(n)
    return bytes([0x80 | len(body)]) + body


def write_integer(value):
    with DERWriter() as w:
        w.write_integer(value)
        return w.to_bytes()


def write_sequence(*payloads):
    """
    Wrap encoded TLVs in a DER SEQUENCE.

    Args:
        *payloads (bytes): Encoded TLVs, in order

    Returns:
        bytes: The SEQUENCE TLV
    """
    content = b"".join(payloads)
    with DERWriter() as w:
        w.write(SEQUENCE_TAG)
        w.write_length(len(content))
        w.write(content)
        return w.to_bytes()


def _read_tag(data, offset, expected, what):
    if offset >= len(data):
        raise MalformedEncodingError("Missing %s tag at offset %d" % (what, offset))
    if data[offset] != expected:
        raise MalformedEncodingError(
            "Expected %s tag 0x%02x at offset %d, got 0x%02x" % (what, expected, offset, data[offset]))
    return offset + 1


def _read_length(data, offset, end):
    if offset >= end:
        raise MalformedEncodingError("Missing length at offset %d" % offset)

    first = data[offset]
    offset += 1
    if first < 0x80:
        length = first
    else:
        num_bytes = first & 0x7F
        # 0x80 is the BER indefinite form, not allowed in DER
        if num_bytes == 0 or num_bytes > MAX_LENGTH_BYTES:
            raise MalformedEncodingError("Unsupported length form 0x%02x" % first)
        if offset + num_bytes > end:
            raise MalformedEncodingError("Truncated long form length at offset %d" % offset)
        length = bytes_to_long(data[offset:offset + num_bytes])
        offset += num_bytes

    if offset + length > end:
        raise MalformedEncodingError(
            "Declared length %d exceeds remaining %d bytes" % (length, end - offset))
    return length, offset


def _read_integer(data, offset, end):
    offset = _read_tag(data, offset, INTEGER_TAG, "INTEGER")
    length, offset = _read_length(data, offset, end)
    if length == 0:
        raise MalformedEncodingError("Empty INTEGER at offset %d" % offset)
    return bytes(data[offset:offset + length]), offset + length


def parse_sequence_of_two_integers(sequence):
    """
    Parse a DER-encoded DSA signature.

    Args:
        sequence (bytes): DER-encoded signature

    Returns:
        tuple: (r, s) as the raw INTEGER value bytes, guard bytes included

    Raises:
        MalformedEncodingError: If the data is not exactly a SEQUENCE of two
            INTEGERs
    """
    if sequence is None:
        raise MalformedEncodingError("No DER data")

    offset = _read_tag(sequence, 0, SEQUENCE_TAG, "SEQUENCE")
    length, offset = _read_length(sequence, offset, len(sequence))
    end = offset + length
    if end != len(sequence):
        raise MalformedEncodingError("%d trailing bytes after SEQUENCE" % (len(sequence) - end))

    r, offset = _read_integer(sequence, offset, end)
    s, offset = _read_integer(sequence, offset, end)
    if offset != end:
        raise MalformedEncodingError("Unexpected data after second INTEGER")

    return r, s


def decode_der_signature(sequence):
    """
    Decode a DER-encoded DSA signature into its integer components.

    Returns:
        tuple: (r, s) as non-negative integers
    """
    r, s = parse_sequence_of_two_integers(sequence)
    return bytes_to_long(r), bytes_to_long(s)
