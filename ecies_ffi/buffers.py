"""
Boundary-owned buffers
======================
Every value returned across the boundary lives in a NUL-terminated
ctypes buffer. The contract:

  * The buffer is filled completely before it is handed out; a failed
    call never returns one.
  * From hand-off until release the caller owns it. This layer never
    writes to it again.
  * The caller releases it exactly once, either through the buffer
    itself or through the registry by handle. Release zeroes the
    memory. A second release or a read after release raises
    BufferReleasedError.

Handles come from a counter and are never reused, unlike addresses,
which the allocator hands out again once a buffer is freed. `address`
is for reading only; releases always go through the handle.

Live buffers are kept by the registry, so an unreleased buffer stays
allocated until the caller releases it.
"""

import ctypes
import itertools
import logging
import threading
from typing import Dict, Union

from .errors import BufferReleasedError

logger = logging.getLogger(__name__)


class BoundaryBuffer:
    """A filled, NUL-terminated buffer of `size` logical bytes."""

    def __init__(self, payload: bytes, handle: int, registry: "BufferRegistry"):
        self._size     = len(payload)
        # One extra byte for the NUL terminator.
        self._buf      = ctypes.create_string_buffer(bytes(payload), self._size + 1)
        self._address  = ctypes.addressof(self._buf)
        self._handle   = handle
        self._registry = registry

    @property
    def handle(self) -> int:
        """Opaque release token, unique for the registry's lifetime."""
        return self._handle

    @property
    def address(self) -> int:
        """Pointer to the first byte, valid until release."""
        self._check_live()
        return self._address

    @property
    def size(self) -> int:
        """Logical length, excluding the terminator."""
        return self._size

    @property
    def released(self) -> bool:
        return self._buf is None

    def read(self) -> bytes:
        """Copy of the logical contents. Never reads past `size`."""
        self._check_live()
        return ctypes.string_at(self._address, self._size)

    def read_text(self) -> str:
        """Contents as text; only valid for hex/base64 buffers."""
        return self.read().decode("ascii")

    def release(self):
        self._registry.release(self)

    def _check_live(self):
        if self._buf is None:
            raise BufferReleasedError("Boundary buffer was already released.")

    def _wipe(self):
        ctypes.memset(self._address, 0, self._size + 1)
        self._buf = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if not self.released:
            self.release()

    def __len__(self):
        return self._size

    def __repr__(self):
        state = "released" if self.released else f"0x{self._address:x}"
        return f"BoundaryBuffer(#{self._handle}, {self._size}B, {state})"


class BufferRegistry:
    """Tracks every buffer handed out and not yet released."""

    def __init__(self):
        self._live: Dict[int, BoundaryBuffer] = {}
        self._handles = itertools.count(1)
        self._lock = threading.Lock()

    def allocate(self, payload: bytes) -> BoundaryBuffer:
        with self._lock:
            buf = BoundaryBuffer(payload, next(self._handles), self)
            self._live[buf.handle] = buf
        logger.debug(f"Allocated boundary buffer #{buf.handle} {buf.size}B")
        return buf

    def release(self, target: Union[BoundaryBuffer, int]):
        """Release by buffer or by handle. Unknown or repeat releases raise."""
        handle = target.handle if isinstance(target, BoundaryBuffer) else target
        with self._lock:
            buf = self._live.pop(handle, None)
        if buf is None:
            raise BufferReleasedError(
                f"No live boundary buffer #{handle}; already released or never allocated."
            )
        buf._wipe()
        logger.debug(f"Released boundary buffer #{handle} {buf.size}B")

    def get(self, handle: int) -> BoundaryBuffer:
        with self._lock:
            buf = self._live.get(handle)
        if buf is None:
            raise BufferReleasedError(f"No live boundary buffer #{handle}.")
        return buf

    @property
    def live_count(self) -> int:
        with self._lock:
            return len(self._live)
