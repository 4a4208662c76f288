"""
Envelope AEAD ciphers
=====================
The symmetric half of the envelope. Both ciphers take a 256-bit key from
HKDF, draw a random nonce per message and append a 128-bit tag.

    AES-256-GCM          nonce 16 bytes (default) or 12 bytes
    ChaCha20-Poly1305    nonce 12 bytes; for devices without AES-NI

Bundle format: nonce || ciphertext || tag(16)

cryptography verifies the tag before returning any plaintext and raises
cryptography.exceptions.InvalidTag otherwise; the engine maps that to
AuthenticationFailure.

Dependencies: cryptography >= 41.0
"""

import os
from cryptography.hazmat.primitives.ciphers.aead import AESGCM, ChaCha20Poly1305


class AeadCipher:
    """Random-nonce wrapper around one cryptography AEAD primitive."""

    NAME        = None
    PRIMITIVE   = None
    NONCE_SIZES = ()     # first entry is the default
    KEY_SIZE    = 32
    TAG_SIZE    = 16

    def __init__(self, key: bytes, nonce_size: int = None):
        if len(key) != self.KEY_SIZE:
            raise ValueError(f"{self.NAME} key must be {self.KEY_SIZE} bytes.")
        if nonce_size is None:
            nonce_size = self.NONCE_SIZES[0]
        if nonce_size not in self.NONCE_SIZES:
            raise ValueError(f"{self.NAME} nonce must be one of {self.NONCE_SIZES} bytes.")
        self.nonce_size = nonce_size
        self._aead      = self.PRIMITIVE(key)

    def encrypt(self, plaintext: bytes, aad: bytes = None) -> bytes:
        nonce = os.urandom(self.nonce_size)
        return nonce + self._aead.encrypt(nonce, plaintext, aad)

    def decrypt(self, bundle: bytes, aad: bytes = None) -> bytes:
        if len(bundle) < self.nonce_size + self.TAG_SIZE:
            raise ValueError("Bundle too short.")
        nonce = bundle[:self.nonce_size]
        return self._aead.decrypt(nonce, bundle[self.nonce_size:], aad)


class AESCipher(AeadCipher):
    NAME        = "AES-256-GCM"
    PRIMITIVE   = AESGCM
    NONCE_SIZES = (16, 12)


class ChaChaCipher(AeadCipher):
    NAME        = "ChaCha20-Poly1305"
    PRIMITIVE   = ChaCha20Poly1305
    NONCE_SIZES = (12,)
