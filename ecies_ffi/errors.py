"""
Error kinds
===========
Every failure the engine can produce has its own class so callers inside
the process can tell them apart. The boundary collapses them into a single
BoundaryError unless it was built with detailed_errors=True.
"""


class EciesError(Exception):
    """Base class for all ECIES failures."""


class InvalidKey(EciesError):
    """Key material is malformed, off-curve, or out of range."""


class DecodeError(EciesError):
    """Hex or base64 text does not decode to the expected bytes."""


class MalformedEnvelope(EciesError):
    """Ciphertext envelope is too short to hold its fixed-size parts."""


class AuthenticationFailure(EciesError):
    """Tag verification failed. Raised for wrong keys and tampering alike."""


class EncryptionFailure(EciesError):
    """The key derivation or the symmetric cipher rejected its input."""


class EntropyFailure(EciesError):
    """The secure random source could not produce key material."""


class BoundaryError(Exception):
    """Opaque failure of a boundary call. Carries no detail on purpose."""


class BufferReleasedError(Exception):
    """A boundary buffer was read or released after it was already released."""
