"""
ecies_ffi
=========
secp256k1 ECIES key generation and encryption behind a foreign-call
boundary for the mobile app.

Layers:
    engine     keys, ECDH + HKDF-SHA256 + AEAD envelope (pure, stateless)
    boundary   hex/base64 codecs, boundary-owned buffers with explicit release
    bridge     host-runtime adapter that copies results out and releases them

Envelope: ephemeral_pk(33) || nonce(16) || ciphertext || tag(16)
Not wire-compatible with the Rust `ecies` crate; see ecies_ffi.engine.

Dependencies: cryptography >= 41.0
"""

__version__ = "1.0.0"

from .errors   import (
    EciesError, InvalidKey, DecodeError, MalformedEnvelope,
    AuthenticationFailure, EncryptionFailure, EntropyFailure,
    BoundaryError, BufferReleasedError,
)
from .config   import EciesConfig, DEFAULT_CONFIG
from .keys     import SecretKey, PublicKey, generate_keypair, derive_public_key
from .engine   import encrypt, decrypt
from .buffers  import BoundaryBuffer, BufferRegistry
from .boundary import (
    Boundary,
    ecies_generate_secret_key,
    ecies_public_key_from,
    ecies_encrypt,
    ecies_decrypt,
    ecies_release,
)
from .bridge   import EciesBridge

__all__ = [
    "EciesError",
    "InvalidKey",
    "DecodeError",
    "MalformedEnvelope",
    "AuthenticationFailure",
    "EncryptionFailure",
    "EntropyFailure",
    "BoundaryError",
    "BufferReleasedError",
    "EciesConfig",
    "DEFAULT_CONFIG",
    "SecretKey",
    "PublicKey",
    "generate_keypair",
    "derive_public_key",
    "encrypt",
    "decrypt",
    "BoundaryBuffer",
    "BufferRegistry",
    "Boundary",
    "ecies_generate_secret_key",
    "ecies_public_key_from",
    "ecies_encrypt",
    "ecies_decrypt",
    "ecies_release",
    "EciesBridge",
]
