"""
Signature codec errors.

Every failure the codec reports belongs to one of the categories in
``ErrorKind`` so callers can branch on ``error.kind`` rather than on the
message text. All of them mean the signature under evaluation is rejected.
"""

from enum import Enum


class ErrorKind(Enum):
    LENGTH_MISMATCH = "length-mismatch"
    KEY_TYPE_MISMATCH = "key-type-mismatch"
    MALFORMED_ENCODING = "malformed-encoding"
    INSUFFICIENT_BUFFER = "insufficient-buffer"


class SignatureCodecError(ValueError):
    """Base class for codec failures; ``kind`` names the category."""
    kind = None


class LengthMismatchError(SignatureCodecError):
    """The signature is not exactly 40 bytes after envelope extraction."""
    kind = ErrorKind.LENGTH_MISMATCH


class KeyTypeMismatchError(SignatureCodecError):
    """The envelope names a different algorithm than the one expected."""
    kind = ErrorKind.KEY_TYPE_MISMATCH

    def __init__(self, key_type, expected):
        super().__init__("Mismatched key type: %s (expected %s)" % (key_type, expected))
        self.key_type = key_type
        self.expected = expected


class MalformedEncodingError(SignatureCodecError):
    """DER bytes are not a SEQUENCE of two INTEGERs or do not fit 20 bytes."""
    kind = ErrorKind.MALFORMED_ENCODING


class InsufficientBufferError(SignatureCodecError):
    """A 32-bit read or write does not have 4 bytes available."""
    kind = ErrorKind.INSUFFICIENT_BUFFER


class SignatureEngineError(RuntimeError):
    """The signing engine was misused (missing key, reused after sign/verify)."""
