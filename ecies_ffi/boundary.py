"""
Foreign-call boundary
=====================
The four entry points a host runtime calls, plus the paired release.

    ecies_generate_secret_key()                 -> hex secret key (64)
    ecies_public_key_from(secret_hex)           -> hex public key (66)
    ecies_encrypt(public_hex, message)          -> base64 envelope
    ecies_decrypt(secret_hex, ciphertext_b64)   -> raw plaintext bytes
    ecies_release(buffer_or_handle)

Inputs are read-only and owned by the caller. Each successful call
returns a new BoundaryBuffer that the caller must release once.

Any internal failure becomes one opaque BoundaryError, so a caller cannot
tell a wrong key from a tampered ciphertext. Build a Boundary with
detailed_errors=True to let the specific EciesError subclass through
instead.

The copy-on-read helpers (generate_secret_key, public_key_from, encrypt,
decrypt) return plain str/bytes and release the buffer themselves.
"""

import logging
from typing import Callable, Optional, Union

from . import codec, engine
from .buffers import BoundaryBuffer, BufferRegistry
from .config import DEFAULT_CONFIG, EciesConfig
from .errors import BoundaryError, EciesError
from .keys import generate_keypair

logger = logging.getLogger(__name__)


class Boundary:
    """Boundary adapter bound to one buffer registry and one envelope config."""

    def __init__(self, detailed_errors: bool = False,
                 config: EciesConfig = DEFAULT_CONFIG,
                 registry: Optional[BufferRegistry] = None):
        self.detailed_errors = detailed_errors
        self.config          = config
        self.registry        = registry if registry is not None else BufferRegistry()

    def _call(self, name: str, fn: Callable[[], bytes]) -> BoundaryBuffer:
        try:
            payload = fn()
        except EciesError as exc:
            logger.debug(f"{name} failed: {type(exc).__name__}")
            if self.detailed_errors:
                raise
            raise BoundaryError(f"{name} failed.") from None
        return self.registry.allocate(payload)

    # -- entry points ---------------------------------------------------------

    def generate_secret_key(self) -> BoundaryBuffer:
        def op():
            secret_key, _ = generate_keypair()
            return codec.encode_secret_key(secret_key).encode("ascii")
        return self._call("ecies_generate_secret_key", op)

    def public_key_from(self, secret_hex: codec.Text) -> BoundaryBuffer:
        def op():
            secret_key = codec.decode_secret_key(secret_hex)
            return codec.encode_public_key(secret_key.public_key()).encode("ascii")
        return self._call("ecies_public_key_from", op)

    def encrypt(self, public_hex: codec.Text, message: Union[bytes, str]) -> BoundaryBuffer:
        def op():
            public_key = codec.decode_public_key(public_hex)
            plaintext  = codec.encode_message(message)
            envelope   = engine.encrypt(public_key, plaintext, self.config)
            return codec.encode_ciphertext(envelope).encode("ascii")
        return self._call("ecies_encrypt", op)

    def decrypt(self, secret_hex: codec.Text, ciphertext_b64: codec.Text) -> BoundaryBuffer:
        def op():
            secret_key = codec.decode_secret_key(secret_hex)
            envelope   = codec.decode_ciphertext(ciphertext_b64)
            return engine.decrypt(secret_key, envelope, self.config)
        return self._call("ecies_decrypt", op)

    def release(self, target: Union[BoundaryBuffer, int]):
        self.registry.release(target)

    # -- copy-on-read ---------------------------------------------------------

    def _take(self, buf: BoundaryBuffer) -> bytes:
        try:
            return buf.read()
        finally:
            self.registry.release(buf)

    def generate_secret_key_text(self) -> str:
        return self._take(self.generate_secret_key()).decode("ascii")

    def public_key_from_text(self, secret_hex: codec.Text) -> str:
        return self._take(self.public_key_from(secret_hex)).decode("ascii")

    def encrypt_text(self, public_hex: codec.Text, message: Union[bytes, str]) -> str:
        return self._take(self.encrypt(public_hex, message)).decode("ascii")

    def decrypt_bytes(self, secret_hex: codec.Text, ciphertext_b64: codec.Text) -> bytes:
        return self._take(self.decrypt(secret_hex, ciphertext_b64))


_default = Boundary()


def default_boundary() -> Boundary:
    return _default


def ecies_generate_secret_key() -> BoundaryBuffer:
    return _default.generate_secret_key()


def ecies_public_key_from(secret_hex: codec.Text) -> BoundaryBuffer:
    return _default.public_key_from(secret_hex)


def ecies_encrypt(public_hex: codec.Text, message: Union[bytes, str]) -> BoundaryBuffer:
    return _default.encrypt(public_hex, message)


def ecies_decrypt(secret_hex: codec.Text, ciphertext_b64: codec.Text) -> BoundaryBuffer:
    return _default.decrypt(secret_hex, ciphertext_b64)


def ecies_release(target: Union[BoundaryBuffer, int]):
    _default.release(target)


def generate_secret_key() -> str:
    return _default.generate_secret_key_text()


def public_key_from(secret_hex: codec.Text) -> str:
    return _default.public_key_from_text(secret_hex)


def encrypt(public_hex: codec.Text, message: Union[bytes, str]) -> str:
    return _default.encrypt_text(public_hex, message)


def decrypt(secret_hex: codec.Text, ciphertext_b64: codec.Text) -> bytes:
    return _default.decrypt_bytes(secret_hex, ciphertext_b64)
