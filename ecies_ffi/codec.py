"""
Boundary text encodings
=======================
One encoding per value kind:

    secret key   64 lowercase hex characters
    public key   66 lowercase hex characters (compressed point)
    ciphertext   standard base64 with padding (not URL-safe)

Decoders accept `str` or ASCII `bytes`. A single trailing NUL is dropped
from `bytes` input so C strings can be passed straight through.
Uppercase hex is accepted; output is always lowercase.
"""

import base64
import binascii
from typing import Union

from .errors import DecodeError
from .keys import PublicKey, SecretKey

Text = Union[str, bytes, bytearray, memoryview]


def _to_ascii(text: Text, what: str) -> bytes:
    if isinstance(text, str):
        try:
            return text.encode("ascii")
        except UnicodeEncodeError:
            raise DecodeError(f"{what} contains non-ASCII characters.") from None
    if not isinstance(text, (bytes, bytearray, memoryview)):
        raise DecodeError(f"{what} must be text or bytes, got {type(text).__name__}.")
    data = bytes(text)
    if data.endswith(b"\x00"):
        data = data[:-1]
    try:
        data.decode("ascii")
    except UnicodeDecodeError:
        raise DecodeError(f"{what} contains non-ASCII bytes.") from None
    return data


def _unhex(text: Text, size: int, what: str) -> bytes:
    data = _to_ascii(text, what)
    if len(data) % 2:
        raise DecodeError(f"{what} hex has odd length {len(data)}.")
    try:
        raw = binascii.unhexlify(data)
    except binascii.Error:
        raise DecodeError(f"{what} is not valid hex.") from None
    if len(raw) != size:
        raise DecodeError(f"{what} must decode to {size} bytes, got {len(raw)}.")
    return raw


# -- keys ---------------------------------------------------------------------

def encode_secret_key(secret_key: SecretKey) -> str:
    return secret_key.to_bytes().hex()


def decode_secret_key(text: Text) -> SecretKey:
    """Raises DecodeError for bad hex, InvalidKey for an out-of-range scalar."""
    return SecretKey.from_bytes(_unhex(text, SecretKey.SIZE, "Secret key"))


def encode_public_key(public_key: PublicKey) -> str:
    return public_key.to_bytes(compressed=True).hex()


def decode_public_key(text: Text) -> PublicKey:
    """Raises DecodeError for bad hex, InvalidKey for a point not on the curve."""
    return PublicKey.from_bytes(_unhex(text, PublicKey.COMPRESSED_SIZE, "Public key"))


# -- messages -----------------------------------------------------------------

def encode_message(message: Union[str, bytes, bytearray, memoryview]) -> bytes:
    """Plaintext bytes for a message; `str` is UTF-8 encoded, bytes pass through."""
    if isinstance(message, str):
        try:
            return message.encode("utf-8")
        except UnicodeEncodeError:
            raise DecodeError("Message is not encodable as UTF-8.") from None
    if not isinstance(message, (bytes, bytearray, memoryview)):
        raise DecodeError(f"Message must be text or bytes, got {type(message).__name__}.")
    return bytes(message)


# -- ciphertext ---------------------------------------------------------------

def encode_ciphertext(envelope: bytes) -> str:
    return base64.b64encode(envelope).decode("ascii")


def decode_ciphertext(text: Text) -> bytes:
    data = _to_ascii(text, "Ciphertext")
    try:
        return base64.b64decode(data, validate=True)
    except binascii.Error:
        raise DecodeError("Ciphertext is not valid base64.") from None
