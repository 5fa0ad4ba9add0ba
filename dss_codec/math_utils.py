"""
Big-Endian Integer Utilities

This module provides the integer/byte conversions shared by the buffer
helpers and the DER codec.

Functions:
    bytes_to_long(byte_array):
        Converts a byte string to an integer using big-endian byte order.

    long_to_bytes(n, blocksize=0):
        Converts an integer to a byte string using big-endian byte order.

Note:
    These conversions are not constant-time and should be used with caution
    on secret values.
"""


def bytes_to_long(byte_array):
    """
    Convert a byte string to an integer.

    Args:
        byte_array (bytes): Bytes to convert

    Returns:
        int: Integer representation of the byte array (big-endian)
    """
    return int.from_bytes(byte_array, byteorder='big')


def long_to_bytes(n, blocksize=0):
    """
    Convert a non-negative integer to a byte string.

    Zero is represented by a single zero byte so that the result is never
    empty.

    Args:
        n (int): Integer to convert
        blocksize (int, optional): Minimum size of the resulting byte string

    Returns:
        bytes: Byte representation of the integer (big-endian)
    """
    if n < 0:
        raise ValueError("Negative integers are not supported: %d" % n)

    # Calculate minimum bytes needed to represent the number
    byte_length = max((n.bit_length() + 7) // 8, 1)

    # Use blocksize if it's specified and larger than the calculated length
    if blocksize > 0 and byte_length < blocksize:
        byte_length = blocksize

    return n.to_bytes(byte_length, byteorder='big')
