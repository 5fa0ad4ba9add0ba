"""
Encoded signature envelopes.

Some peers send the signature blob wrapped with its algorithm name::

    uint32 key_type_len | key_type (UTF-8) | uint32 data_len | data

instead of the bare 40 bytes. ``extract_encoded_signature`` makes a
structural guess at whether a blob is wrapped; it never reads past the end
of the buffer, and a ``None`` answer only means "does not look wrapped".
"""

import logging

from dss_codec.buffer_utils import UINT32_SIZE, get_uint32_be, put_uint32_be

logger = logging.getLogger(__name__)


def extract_encoded_signature(sig):
    """
    Try to unwrap an algorithm-prefixed signature.

    Args:
        sig (bytes): The signature as received

    Returns:
        tuple: (key_type, data) if the blob looks encoded, None otherwise
    """
    data_len = 0 if sig is None else len(sig)

    # if it is encoded then we must have at least 2 UINT32 values
    if data_len < 2 * UINT32_SIZE:
        return None

    key_type_len = get_uint32_be(sig, 0, data_len)
    # after the key type we must have data bytes
    if key_type_len >= data_len - UINT32_SIZE:
        return None

    key_type_start = UINT32_SIZE
    key_type_end = key_type_start + key_type_len
    remain_len = data_len - key_type_end
    if remain_len < UINT32_SIZE:
        return None

    data_bytes_len = get_uint32_be(sig, key_type_end, remain_len)
    if data_bytes_len > remain_len - UINT32_SIZE:
        return None

    key_type = bytes(sig[key_type_start:key_type_end]).decode("utf-8", errors="replace")
    data_start = key_type_end + UINT32_SIZE
    data = bytes(sig[data_start:data_start + data_bytes_len])
    logger.debug("Extracted %d signature bytes for key type %s", len(data), key_type)
    return key_type, data


def encode_signature_envelope(key_type, data):
    """
    Wrap signature bytes with their algorithm name.

    Args:
        key_type (str): Algorithm name, e.g. ``ssh-dss``
        data (bytes): Signature bytes

    Returns:
        bytes: The encoded envelope
    """
    name = key_type.encode("utf-8")
    buf = bytearray(2 * UINT32_SIZE + len(name) + len(data))

    offset = put_uint32_be(len(name), buf, 0)
    buf[offset:offset + len(name)] = name
    offset += len(name)
    offset += put_uint32_be(len(data), buf, offset)
    buf[offset:] = data
    return bytes(buf)
