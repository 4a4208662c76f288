"""
Envelope configuration
======================
Both sides of a conversation must agree on these settings; nothing in the
envelope records which ones were used.

Defaults:
    cipher              AES-256-GCM
    AES nonce           16 bytes
    ephemeral key       33-byte compressed SEC1 point

Envelope overhead = ephemeral key + nonce + 16-byte tag
    (65 bytes for the defaults)
"""

from .ciphers import AESCipher, ChaChaCipher


class EciesConfig:
    """Immutable set of envelope parameters."""

    AES_256_GCM       = "aes-256-gcm"
    CHACHA20_POLY1305 = "chacha20-poly1305"

    COMPRESSED_KEY_SIZE   = 33
    UNCOMPRESSED_KEY_SIZE = 65
    TAG_SIZE              = AESCipher.TAG_SIZE

    __slots__ = ("_algorithm", "_compressed", "_aes_nonce")

    def __init__(self, symmetric_algorithm: str = AES_256_GCM,
                 ephemeral_key_compressed: bool = True,
                 aes_nonce_length: int = 16):
        if symmetric_algorithm not in (self.AES_256_GCM, self.CHACHA20_POLY1305):
            raise ValueError(f"Unsupported symmetric algorithm: {symmetric_algorithm!r}")
        if aes_nonce_length not in AESCipher.NONCE_SIZES:
            raise ValueError(f"AES nonce length must be one of {AESCipher.NONCE_SIZES}.")
        object.__setattr__(self, "_algorithm", symmetric_algorithm)
        object.__setattr__(self, "_compressed", bool(ephemeral_key_compressed))
        object.__setattr__(self, "_aes_nonce", aes_nonce_length)

    def __setattr__(self, name, value):
        raise AttributeError("EciesConfig is read-only.")

    @property
    def symmetric_algorithm(self) -> str:
        return self._algorithm

    @property
    def ephemeral_key_compressed(self) -> bool:
        return self._compressed

    @property
    def ephemeral_key_size(self) -> int:
        return self.COMPRESSED_KEY_SIZE if self._compressed else self.UNCOMPRESSED_KEY_SIZE

    @property
    def nonce_size(self) -> int:
        if self._algorithm == self.CHACHA20_POLY1305:
            return ChaChaCipher.NONCE_SIZES[0]
        return self._aes_nonce

    @property
    def envelope_overhead(self) -> int:
        return self.ephemeral_key_size + self.nonce_size + self.TAG_SIZE

    def cipher(self, key: bytes):
        """Build the AEAD cipher these settings select, keyed with `key`."""
        if self._algorithm == self.CHACHA20_POLY1305:
            return ChaChaCipher(key)
        return AESCipher(key, nonce_size=self._aes_nonce)

    def __eq__(self, other):
        if not isinstance(other, EciesConfig):
            return NotImplemented
        return (self._algorithm, self._compressed, self._aes_nonce) == \
               (other._algorithm, other._compressed, other._aes_nonce)

    def __hash__(self):
        return hash((self._algorithm, self._compressed, self._aes_nonce))

    def __repr__(self):
        return (f"EciesConfig({self._algorithm}, "
                f"ephemeral_key_compressed={self._compressed}, "
                f"nonce={self.nonce_size}B)")


DEFAULT_CONFIG = EciesConfig()
