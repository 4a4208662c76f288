"""
secp256k1 keys
==============
Thin wrappers around cryptography's EC key objects that enforce the
fixed wire sizes used at the boundary.

SecretKey   32-byte big-endian scalar, 0 < k < n
PublicKey   SEC1 point; 33 bytes compressed (02/03 prefix) or
            65 bytes uncompressed (04 prefix)

Key generation draws from OpenSSL's CSPRNG, which is thread-safe.

Dependencies: cryptography >= 41.0
"""

import logging
from typing import Tuple

from cryptography.exceptions import InternalError
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from .errors import EntropyFailure, InvalidKey

logger = logging.getLogger(__name__)

CURVE = ec.SECP256K1()

# Group order n of secp256k1
CURVE_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141


class SecretKey:
    """A secp256k1 private scalar."""

    SIZE = 32

    def __init__(self, private_key: ec.EllipticCurvePrivateKey):
        if not isinstance(private_key.curve, ec.SECP256K1):
            raise InvalidKey("Secret key must be on secp256k1.")
        self._key = private_key

    @classmethod
    def generate(cls) -> "SecretKey":
        try:
            private_key = ec.generate_private_key(CURVE)
        except InternalError as exc:
            raise EntropyFailure("Secure random source unavailable.") from exc
        return cls(private_key)

    @classmethod
    def from_bytes(cls, data: bytes) -> "SecretKey":
        if len(data) != cls.SIZE:
            raise InvalidKey(f"Secret key must be {cls.SIZE} bytes, got {len(data)}.")
        scalar = int.from_bytes(data, "big")
        if not 0 < scalar < CURVE_ORDER:
            raise InvalidKey("Secret key scalar is out of range.")
        return cls(ec.derive_private_key(scalar, CURVE))

    def to_bytes(self) -> bytes:
        return self._key.private_numbers().private_value.to_bytes(self.SIZE, "big")

    def public_key(self) -> "PublicKey":
        return PublicKey(self._key.public_key())

    def exchange(self, peer: "PublicKey") -> bytes:
        """ECDH: 32-byte x-coordinate of self * peer."""
        return self._key.exchange(ec.ECDH(), peer._key)

    def __eq__(self, other):
        if not isinstance(other, SecretKey):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    def __hash__(self):
        return hash(self.public_key())

    def __repr__(self):
        return "SecretKey(<redacted>)"


class PublicKey:
    """A point on secp256k1."""

    COMPRESSED_SIZE   = 33
    UNCOMPRESSED_SIZE = 65

    def __init__(self, public_key: ec.EllipticCurvePublicKey):
        if not isinstance(public_key.curve, ec.SECP256K1):
            raise InvalidKey("Public key must be on secp256k1.")
        self._key = public_key

    @classmethod
    def from_bytes(cls, data: bytes) -> "PublicKey":
        """Parse a compressed or uncompressed SEC1 point."""
        if len(data) == cls.COMPRESSED_SIZE:
            if data[0] not in (0x02, 0x03):
                raise InvalidKey("Compressed public key must start with 0x02 or 0x03.")
        elif len(data) == cls.UNCOMPRESSED_SIZE:
            if data[0] != 0x04:
                raise InvalidKey("Uncompressed public key must start with 0x04.")
        else:
            raise InvalidKey(
                f"Public key must be {cls.COMPRESSED_SIZE} or "
                f"{cls.UNCOMPRESSED_SIZE} bytes, got {len(data)}."
            )
        try:
            point = ec.EllipticCurvePublicKey.from_encoded_point(CURVE, bytes(data))
        except ValueError as exc:
            raise InvalidKey("Public key is not a point on secp256k1.") from exc
        return cls(point)

    def to_bytes(self, compressed: bool = True) -> bytes:
        fmt = (serialization.PublicFormat.CompressedPoint if compressed
               else serialization.PublicFormat.UncompressedPoint)
        return self._key.public_bytes(serialization.Encoding.X962, fmt)

    def __eq__(self, other):
        if not isinstance(other, PublicKey):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    def __hash__(self):
        return hash(self.to_bytes())

    def __repr__(self):
        return f"PublicKey({self.to_bytes().hex()})"


def generate_keypair() -> Tuple[SecretKey, PublicKey]:
    """Fresh random secret key and its public key."""
    sk = SecretKey.generate()
    logger.debug("Generated secp256k1 key pair")
    return sk, sk.public_key()


def derive_public_key(secret_key: SecretKey) -> PublicKey:
    """Deterministic: the same secret key always yields the same point."""
    return secret_key.public_key()
