"""
Managed-runtime bridge
======================
Host-side adapter in the shape of the mobile app's `Ecies` class
(generateSecretKey, derivePublicKeyFrom, encryptMessage, decryptMessage).

It only forwards: host strings go to the boundary unchanged (its codecs
turn them into bytes, so bad input fails as a BoundaryError), the buffer is
copied into a host value and released before the method returns. No
cryptography happens here.
"""

from typing import Optional

from .boundary import Boundary, default_boundary
from .buffers import BoundaryBuffer


class EciesBridge:
    """Host-facing wrapper over a Boundary."""

    def __init__(self, boundary: Optional[Boundary] = None):
        self._boundary = boundary if boundary is not None else default_boundary()

    def _copy_out(self, buf: BoundaryBuffer) -> bytes:
        try:
            return buf.read()
        finally:
            self._boundary.release(buf)

    def generate_secret_key(self) -> str:
        return self._copy_out(self._boundary.generate_secret_key()).decode("ascii")

    def derive_public_key_from(self, secret: str) -> str:
        return self._copy_out(self._boundary.public_key_from(secret)).decode("ascii")

    def encrypt_message(self, pubkey: str, message: str) -> str:
        return self._copy_out(self._boundary.encrypt(pubkey, message)).decode("ascii")

    def decrypt_bytes(self, secret: str, message: str) -> bytes:
        return self._copy_out(self._boundary.decrypt(secret, message))

    def decrypt_message(self, secret: str, message: str) -> str:
        """Plaintext as a host string. Non-UTF-8 plaintext raises UnicodeDecodeError."""
        return self.decrypt_bytes(secret, message).decode("utf-8")
