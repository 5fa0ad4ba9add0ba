"""
ssh-dss Signature Transcoding

The SSH wire format carries a DSA signature as 40 bytes: r and s, each an
unsigned big-endian number left-padded to 20 bytes. Signing primitives
produce and expect the DER form instead. This module converts between the
two and drives a signing engine.

Classes:
    SignatureDSA:
        Signs to and verifies from the wire format using an engine that
        speaks DER.

Functions:
    der_to_raw(der):
        DER signature -> 40-byte wire signature.

    raw_to_der(raw):
        40-byte wire signature -> DER signature.

    unwrap_signature(sig, key_type):
        Bare or enveloped signature -> 40 wire bytes.

Engines must provide ``engine_sign() -> bytes`` and
``engine_verify(der) -> bool``; see ``dss_codec.engine``.
"""

import logging
from collections import namedtuple

from dss_codec.buffer_utils import to_hex
from dss_codec.der import DERWriter, parse_sequence_of_two_integers, write_sequence
from dss_codec.envelope import extract_encoded_signature
from dss_codec.errors import (
    KeyTypeMismatchError,
    LengthMismatchError,
    MalformedEncodingError,
    SignatureCodecError,
)

logger = logging.getLogger(__name__)

SSH_DSS = "ssh-dss"
DSA_SIGNATURE_LENGTH = 40
# result must be 40 bytes, so r and s may not exceed 20 bytes each
MAX_SIGNATURE_VALUE_LENGTH = DSA_SIGNATURE_LENGTH // 2

VerificationResult = namedtuple("VerificationResult", ["valid", "error"])


def _normalize_value(value, name):
    """Fit a DER INTEGER value into a 20-byte wire field."""
    if len(value) > MAX_SIGNATURE_VALUE_LENGTH:
        # drop the guard byte
        value = value[1:]
    elif len(value) < MAX_SIGNATURE_VALUE_LENGTH:
        value = bytes(MAX_SIGNATURE_VALUE_LENGTH - len(value)) + value

    if len(value) != MAX_SIGNATURE_VALUE_LENGTH:
        raise MalformedEncodingError(
            "Signature %s value does not fit in %d bytes: %s"
            % (name, MAX_SIGNATURE_VALUE_LENGTH, to_hex(value, ':')))
    return value


def der_to_raw(der):
    """
    Convert a DER signature to the 40-byte wire format.

    Args:
        der (bytes): DER-encoded SEQUENCE { r INTEGER, s INTEGER }

    Returns:
        bytes: r || s, 20 bytes each

    Raises:
        MalformedEncodingError: If the DER is not a sequence of two integers
            or either integer does not fit in 20 bytes
    """
    r, s = parse_sequence_of_two_integers(der)
    return _normalize_value(r, "r") + _normalize_value(s, "s")


def _encode_value(data, offset):
    # in case length > 0x7F the writer switches to the long form
    with DERWriter() as w:
        w.write_integer(data, offset, MAX_SIGNATURE_VALUE_LENGTH)
        return w.to_bytes()


def raw_to_der(raw):
    """
    Convert a 40-byte wire signature to DER.

    Each 20-byte half is encoded as-is, with a guard byte when its high bit
    is set.

    Raises:
        LengthMismatchError: If ``raw`` is not exactly 40 bytes
    """
    if raw is None or len(raw) != DSA_SIGNATURE_LENGTH:
        length = 0 if raw is None else len(raw)
        raise LengthMismatchError(
            "Bad signature length (%d instead of %d)" % (length, DSA_SIGNATURE_LENGTH))

    r_encoding = _encode_value(raw, 0)
    s_encoding = _encode_value(raw, MAX_SIGNATURE_VALUE_LENGTH)
    return write_sequence(r_encoding, s_encoding)


def unwrap_signature(sig, key_type=SSH_DSS):
    """
    Return the 40 wire bytes of a signature that may be wrapped in an
    envelope. Bare 40-byte input is never treated as an envelope.

    Raises:
        KeyTypeMismatchError: If the envelope names another algorithm
        LengthMismatchError: If no 40-byte signature can be obtained
    """
    data = b"" if sig is None else bytes(sig)

    if len(data) != DSA_SIGNATURE_LENGTH:
        # probably some encoded data
        encoding = extract_encoded_signature(data)
        if encoding is not None:
            encoded_type, data = encoding
            if encoded_type != key_type:
                raise KeyTypeMismatchError(encoded_type, key_type)

    if len(data) != DSA_SIGNATURE_LENGTH:
        raise LengthMismatchError(
            "Bad signature length (%d instead of %d) for %s"
            % (len(data), DSA_SIGNATURE_LENGTH, to_hex(data, ':')))
    return data


class SignatureDSA:
    """
    ssh-dss signature codec bound to one engine.

    Args:
        engine: Object with ``engine_sign()`` and ``engine_verify(der)``
        key_type (str): Algorithm name accepted in encoded signatures
    """

    def __init__(self, engine, key_type=SSH_DSS):
        self.engine = engine
        self.key_type = key_type

    def sign(self):
        """
        Sign with the engine and return the 40-byte wire signature.

        Raises:
            MalformedEncodingError: If the engine output cannot be transcoded
        """
        der = self.engine.engine_sign()
        logger.debug("Engine produced %d DER signature bytes", len(der))
        return der_to_raw(der)

    def verify(self, sig):
        """
        Verify a wire signature, bare or wrapped with its key type.

        Args:
            sig (bytes): 40 raw bytes, or an encoded signature envelope

        Returns:
            bool: The engine's verdict

        Raises:
            KeyTypeMismatchError: If the envelope names another algorithm
            LengthMismatchError: If the signature is not 40 bytes
        """
        data = unwrap_signature(sig, self.key_type)
        encoded = raw_to_der(data)
        logger.debug("Verifying DER signature %s", to_hex(encoded))
        return self.engine.engine_verify(encoded)

    def check(self, sig):
        """
        Like ``verify`` but reports codec failures as a value.

        Returns:
            VerificationResult: ``valid`` is the verdict, ``error`` the
            ``ErrorKind`` that rejected the signature or None
        """
        try:
            return VerificationResult(self.verify(sig), None)
        except SignatureCodecError as e:
            logger.warning("Signature rejected (%s): %s", e.kind.value, e)
            return VerificationResult(False, e.kind)
