"""
ECIES engine
============
Elliptic Curve Integrated Encryption Scheme over secp256k1.

Encrypt:
    1. Generate a fresh ephemeral key pair
    2. ECDH between the ephemeral secret and the recipient's public key
    3. HKDF-SHA256(ephemeral_pk || shared_x) -> 32-byte symmetric key
    4. AEAD-encrypt the plaintext under a fresh random nonce
    5. Envelope: ephemeral_pk || nonce || ciphertext || tag

Decrypt reverses the steps. The tag is verified before any plaintext is
returned, and a wrong key is reported exactly like a tampered envelope.

Every call is stateless; nothing is cached between calls.

Wire compatibility: envelopes are NOT interchangeable with the Rust
`ecies` crate or eciespy. Those put a 65-byte ephemeral key first, lay
the body out as nonce(16) || tag(16) || ciphertext, and feed HKDF the
uncompressed ephemeral and shared points. Here the default ephemeral key
is the 33-byte compressed point, the tag trails the ciphertext, and HKDF
sees only the ECDH x-coordinate. Host apps must encrypt and decrypt with
this package on both ends.

Dependencies: cryptography >= 41.0
"""

import logging
from typing import Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from .config import DEFAULT_CONFIG, EciesConfig
from .errors import (
    AuthenticationFailure,
    EncryptionFailure,
    InvalidKey,
    MalformedEnvelope,
)
from .keys import PublicKey, SecretKey, generate_keypair

logger = logging.getLogger(__name__)

SYMMETRIC_KEY_SIZE = 32

_AUTH_FAILED = "Envelope authentication failed."


def _as_public_key(public_key: Union[PublicKey, bytes]) -> PublicKey:
    if isinstance(public_key, PublicKey):
        return public_key
    return PublicKey.from_bytes(public_key)


def _as_secret_key(secret_key: Union[SecretKey, bytes]) -> SecretKey:
    if isinstance(secret_key, SecretKey):
        return secret_key
    return SecretKey.from_bytes(secret_key)


def derive_symmetric_key(ephemeral_pk: bytes, shared_x: bytes) -> bytes:
    """HKDF-SHA256 over the ephemeral key encoding and the ECDH x-coordinate."""
    return HKDF(
        algorithm=hashes.SHA256(),
        length=SYMMETRIC_KEY_SIZE,
        salt=None,
        info=b"",
    ).derive(ephemeral_pk + shared_x)


def encrypt(public_key: Union[PublicKey, bytes], plaintext: bytes,
            config: EciesConfig = DEFAULT_CONFIG) -> bytes:
    """
    Encrypt `plaintext` to `public_key`.
    Two calls with the same inputs never return the same envelope.
    Raises InvalidKey, EncryptionFailure (or EntropyFailure from keygen).
    """
    recipient = _as_public_key(public_key)
    ephemeral_sk, ephemeral_pk = generate_keypair()
    ephemeral_bytes = ephemeral_pk.to_bytes(compressed=config.ephemeral_key_compressed)

    try:
        shared_x = ephemeral_sk.exchange(recipient)
        key      = derive_symmetric_key(ephemeral_bytes, shared_x)
        body     = config.cipher(key).encrypt(bytes(plaintext))
    except (ValueError, OverflowError) as exc:
        raise EncryptionFailure(f"{config.symmetric_algorithm} encryption failed.") from exc

    logger.debug(f"Encrypt: pt={len(plaintext)}B envelope={len(ephemeral_bytes) + len(body)}B "
                 f"cipher={config.symmetric_algorithm}")
    return ephemeral_bytes + body


def decrypt(secret_key: Union[SecretKey, bytes], envelope: bytes,
            config: EciesConfig = DEFAULT_CONFIG) -> bytes:
    """
    Decrypt an envelope produced by encrypt() with the same config.
    Raises InvalidKey (bad secret key), MalformedEnvelope (too short),
    AuthenticationFailure (wrong key, tampering, or a bad ephemeral point).
    """
    recipient = _as_secret_key(secret_key)
    envelope  = bytes(envelope)

    if len(envelope) < config.envelope_overhead:
        raise MalformedEnvelope(
            f"Envelope must be at least {config.envelope_overhead} bytes, got {len(envelope)}."
        )

    key_size        = config.ephemeral_key_size
    ephemeral_bytes = envelope[:key_size]
    body            = envelope[key_size:]

    try:
        ephemeral_pk = PublicKey.from_bytes(ephemeral_bytes)
    except InvalidKey:
        raise AuthenticationFailure(_AUTH_FAILED) from None

    shared_x = recipient.exchange(ephemeral_pk)
    key      = derive_symmetric_key(ephemeral_bytes, shared_x)

    try:
        plaintext = config.cipher(key).decrypt(body)
    except InvalidTag:
        raise AuthenticationFailure(_AUTH_FAILED) from None

    logger.debug(f"Decrypt: envelope={len(envelope)}B pt={len(plaintext)}B")
    return plaintext
