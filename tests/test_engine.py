"""
ecies_ffi — engine tests
========================
Run with:  python -m pytest tests/ -v
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from cryptography.exceptions import InvalidTag

from ecies_ffi.ciphers      import AESCipher, ChaChaCipher
from ecies_ffi.config       import EciesConfig, DEFAULT_CONFIG
from ecies_ffi.engine       import encrypt, decrypt
from ecies_ffi.errors       import (
    AuthenticationFailure, InvalidKey, MalformedEnvelope,
)
from ecies_ffi.keys         import (
    CURVE_ORDER, PublicKey, SecretKey, derive_public_key, generate_keypair,
)

MSG = b"hello"

CONFIGS = [
    DEFAULT_CONFIG,
    EciesConfig(ephemeral_key_compressed=False),
    EciesConfig(aes_nonce_length=12),
    EciesConfig(EciesConfig.CHACHA20_POLY1305),
]

# ── keys ─────────────────────────────────────────────────────────────────────
def test_keypair_sizes():
    sk, pk = generate_keypair()
    assert len(sk.to_bytes()) == 32
    assert len(pk.to_bytes()) == 33
    assert pk.to_bytes()[0] in (0x02, 0x03)
    assert len(pk.to_bytes(compressed=False)) == 65

def test_derive_public_key_is_deterministic():
    sk, pk = generate_keypair()
    again = SecretKey.from_bytes(sk.to_bytes())
    assert derive_public_key(again).to_bytes() == pk.to_bytes()
    assert derive_public_key(again).to_bytes() == derive_public_key(again).to_bytes()

def test_known_public_key_for_scalar_one():
    sk = SecretKey.from_bytes((1).to_bytes(32, "big"))
    # secp256k1 base point G, compressed
    assert sk.public_key().to_bytes().hex() == (
        "0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"
    )

@pytest.mark.parametrize("scalar", [0, CURVE_ORDER, CURVE_ORDER + 1, 2 ** 256 - 1])
def test_secret_key_out_of_range(scalar):
    with pytest.raises(InvalidKey):
        SecretKey.from_bytes(scalar.to_bytes(32, "big"))

def test_secret_key_wrong_length():
    with pytest.raises(InvalidKey):
        SecretKey.from_bytes(b"\x01" * 31)

def test_public_key_roundtrip_both_encodings():
    _, pk = generate_keypair()
    assert PublicKey.from_bytes(pk.to_bytes()) == pk
    assert PublicKey.from_bytes(pk.to_bytes(compressed=False)) == pk

def test_public_key_off_curve():
    # x >= p is not a field element
    with pytest.raises(InvalidKey):
        PublicKey.from_bytes(b"\x02" + b"\xff" * 32)

@pytest.mark.parametrize("data", [b"", b"\x02" * 32, b"\x05" + b"\x01" * 32, b"\x02" + b"\x01" * 64])
def test_public_key_bad_structure(data):
    with pytest.raises(InvalidKey):
        PublicKey.from_bytes(data)

def test_secret_key_repr_hides_material():
    sk, _ = generate_keypair()
    assert sk.to_bytes().hex() not in repr(sk)

# ── round trip ───────────────────────────────────────────────────────────────
@pytest.mark.parametrize("config", CONFIGS, ids=repr)
@pytest.mark.parametrize("plaintext", [b"", MSG, bytes(range(256)), os.urandom(1024 * 1024)],
                         ids=["empty", "hello", "all-bytes", "1MiB"])
def test_roundtrip(config, plaintext):
    sk, pk = generate_keypair()
    envelope = encrypt(pk, plaintext, config)
    assert len(envelope) == config.envelope_overhead + len(plaintext)
    assert decrypt(sk, envelope, config) == plaintext

def test_roundtrip_with_raw_key_bytes():
    sk, pk = generate_keypair()
    envelope = encrypt(pk.to_bytes(), MSG)
    assert decrypt(sk.to_bytes(), envelope) == MSG

def test_envelope_layout():
    sk, pk = generate_keypair()
    envelope = encrypt(pk, MSG)
    ephemeral = PublicKey.from_bytes(envelope[:33])
    assert ephemeral != pk
    assert len(envelope) == 33 + 16 + len(MSG) + 16

def test_encrypt_is_not_deterministic():
    _, pk = generate_keypair()
    a = encrypt(pk, MSG)
    b = encrypt(pk, MSG)
    assert a != b
    assert a[:33] != b[:33]        # fresh ephemeral key
    assert a[33:49] != b[33:49]    # fresh nonce

# ── rejection ────────────────────────────────────────────────────────────────
@pytest.mark.parametrize("config", CONFIGS, ids=repr)
def test_every_single_byte_flip_is_rejected(config):
    sk, pk = generate_keypair()
    envelope = encrypt(pk, MSG, config)
    for i in range(len(envelope)):
        tampered = bytearray(envelope)
        tampered[i] ^= 0x01
        with pytest.raises(AuthenticationFailure):
            decrypt(sk, bytes(tampered), config)

def test_full_byte_flip_in_ephemeral_prefix():
    sk, pk = generate_keypair()
    tampered = bytearray(encrypt(pk, MSG))
    tampered[0] ^= 0xFF
    with pytest.raises(AuthenticationFailure):
        decrypt(sk, bytes(tampered))

def test_cross_key_rejection():
    _, pk = generate_keypair()
    other_sk, _ = generate_keypair()
    envelope = encrypt(pk, MSG)
    with pytest.raises(AuthenticationFailure):
        decrypt(other_sk, envelope)

def test_wrong_key_and_tamper_look_the_same():
    sk, pk = generate_keypair()
    other_sk, _ = generate_keypair()
    envelope = encrypt(pk, MSG)
    tampered = envelope[:-1] + bytes([envelope[-1] ^ 0x80])

    with pytest.raises(AuthenticationFailure) as wrong_key:
        decrypt(other_sk, envelope)
    with pytest.raises(AuthenticationFailure) as tamper:
        decrypt(sk, tampered)
    assert str(wrong_key.value) == str(tamper.value)
    assert wrong_key.value.__cause__ is None and tamper.value.__cause__ is None

@pytest.mark.parametrize("length", [0, 1, 33, 33 + 16, 33 + 16 + 15])
def test_short_envelope(length):
    sk, pk = generate_keypair()
    envelope = encrypt(pk, MSG)[:length]
    with pytest.raises(MalformedEnvelope):
        decrypt(sk, envelope)

def test_mismatched_config_fails():
    sk, pk = generate_keypair()
    envelope = encrypt(pk, MSG, EciesConfig(EciesConfig.CHACHA20_POLY1305))
    with pytest.raises(AuthenticationFailure):
        decrypt(sk, envelope, DEFAULT_CONFIG)

def test_encrypt_rejects_bad_public_key():
    with pytest.raises(InvalidKey):
        encrypt(b"\x02" + b"\xff" * 32, MSG)

# ── config ───────────────────────────────────────────────────────────────────
def test_config_is_read_only():
    with pytest.raises(AttributeError):
        DEFAULT_CONFIG.aes_nonce_length = 12

def test_config_validation():
    with pytest.raises(ValueError):
        EciesConfig("aes-128-cbc")
    with pytest.raises(ValueError):
        EciesConfig(aes_nonce_length=8)

def test_config_sizes():
    assert DEFAULT_CONFIG.envelope_overhead == 65
    assert EciesConfig(ephemeral_key_compressed=False).envelope_overhead == 97
    assert EciesConfig(EciesConfig.CHACHA20_POLY1305).nonce_size == 12

# ── AEAD ciphers ─────────────────────────────────────────────────────────────
@pytest.mark.parametrize("cipher_cls", [AESCipher, ChaChaCipher])
def test_cipher_tamper_detected(cipher_cls):
    c  = cipher_cls(os.urandom(32))
    ct = bytearray(c.encrypt(MSG))
    ct[-1] ^= 0xFF
    with pytest.raises(InvalidTag):
        c.decrypt(bytes(ct))

@pytest.mark.parametrize("cipher_cls", [AESCipher, ChaChaCipher])
def test_cipher_rejects_short_key(cipher_cls):
    with pytest.raises(ValueError):
        cipher_cls(b"\x00" * 16)

def test_cipher_default_nonce_sizes():
    key = os.urandom(32)
    assert AESCipher(key).nonce_size == 16
    assert AESCipher(key, nonce_size=12).nonce_size == 12
    assert ChaChaCipher(key).nonce_size == 12
    with pytest.raises(ValueError):
        ChaChaCipher(key, nonce_size=16)
    assert len(AESCipher(key).encrypt(MSG)) == 16 + len(MSG) + 16
