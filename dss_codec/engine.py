"""
DSA signing engine backed by the ``cryptography`` library.

The engine is the primitive the codec delegates to: it signs the accumulated
message and returns DER, or checks a DER signature against it. One engine
instance covers exactly one sign or one verify call; build a new one for
the next message.
"""

import logging

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes

from dss_codec.errors import SignatureEngineError

logger = logging.getLogger(__name__)

HASH_ALGORITHMS = {
    "sha1": hashes.SHA1,
    "sha224": hashes.SHA224,
    "sha256": hashes.SHA256,
    "sha384": hashes.SHA384,
    "sha512": hashes.SHA512,
}


def hash_algorithm(name):
    """
    Look up a hash algorithm by name.

    Args:
        name (str): One of sha1, sha224, sha256, sha384, sha512

    Returns:
        HashAlgorithm: A fresh ``cryptography`` hash instance
    """
    try:
        return HASH_ALGORITHMS[name.lower()]()
    except KeyError:
        raise ValueError("Unsupported hash algorithm: %s" % name) from None


class DSASignatureEngine:
    """
    Single-use DSA sign/verify engine.

    Args:
        private_key (DSAPrivateKey, optional): Key used by ``engine_sign``
        public_key (DSAPublicKey, optional): Key used by ``engine_verify``,
            derived from ``private_key`` when omitted
        algorithm (HashAlgorithm, optional): Digest, SHA-1 as in ssh-dss
    """

    def __init__(self, private_key=None, public_key=None, algorithm=None):
        if private_key is None and public_key is None:
            raise SignatureEngineError("A private or public key is required")
        if public_key is None:
            public_key = private_key.public_key()

        self.private_key = private_key
        self.public_key = public_key
        self.algorithm = algorithm if algorithm is not None else hashes.SHA1()
        self._data = bytearray()
        self._used = False

    def _ensure_unused(self):
        if self._used:
            raise SignatureEngineError("Signature engine already used; create a new one")

    def update(self, data):
        self._ensure_unused()
        self._data.extend(data)
        return self

    def engine_sign(self):
        """
        Sign the accumulated data.

        Returns:
            bytes: DER-encoded SEQUENCE { r INTEGER, s INTEGER }
        """
        self._ensure_unused()
        if self.private_key is None:
            raise SignatureEngineError("Signing requires a private key")

        self._used = True
        try:
            return self.private_key.sign(bytes(self._data), self.algorithm)
        finally:
            self._data = bytearray()

    def engine_verify(self, signature):
        """
        Check a DER-encoded signature against the accumulated data.

        Returns:
            bool: True if the signature is valid, False otherwise
        """
        self._ensure_unused()

        self._used = True
        try:
            self.public_key.verify(signature, bytes(self._data), self.algorithm)
            return True
        except InvalidSignature:
            logger.debug("DSA signature rejected by %s verification", self.algorithm.name)
            return False
        finally:
            self._data = bytearray()
