"""
Interchangeable SipHash compute backends and the process-wide selector.

Two backends implement the same ``compute`` contract:

- ``PortableBackend`` runs on Python integers through :class:`~sipdigest.state.State`,
  masking to 64 bits after every step.
- ``NativeBackend`` runs on numpy ``uint64`` scalars, which wrap at 64 bits in
  machine arithmetic.

The backend is chosen once, when this module is imported, from the
``SIPDIGEST_IMPL`` environment variable. ``native`` (the default) tries the numpy
backend and falls back to the portable one if it cannot load; ``embedded`` or
``portable`` skip the native backend entirely.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from .chunker import chunk, split_tail
from .errors import NativeBackendUnavailable
from .state import State, check_rounds, initialize, message_to_bytes
from .words import bytes_to_long

logger = logging.getLogger(__name__)

ENV_VAR = "SIPDIGEST_IMPL"
NATIVE = "native"
PORTABLE = "portable"
_PORTABLE_ALIASES = ("embedded", PORTABLE)

# SipHash-2-4 of the empty message under key 00 01 .. 0f.
_SELF_CHECK_KEY = bytes(range(16))
_SELF_CHECK_DIGEST = 0x726FDB47DD0E0E31


def _last_block(tail: bytes, length: int) -> int:
    return bytes_to_long(tail.ljust(7, b"\x00") + bytes((length & 0xFF,)))


class Backend:
    name = "abstract"
    native = False

    def compute(self, key: bytes, message: bytes, c: int, d: int) -> int:
        return self.compute_from_state(initialize(key), message, c, d)

    def compute_from_state(self, state: State, message: bytes, c: int, d: int) -> int:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name}>"


class PortableBackend(Backend):
    name = PORTABLE

    def compute_from_state(self, state: State, message: bytes, c: int, d: int) -> int:
        blocks, tail = chunk(message)
        for block in blocks:
            state = state.apply_block(block, c)
        state = state.apply_last_block(tail, len(message), c)
        return state.finalize(d)


def _load_numpy():
    import numpy  # type: ignore

    return numpy


class NativeBackend(Backend):
    """
    SipHash on numpy ``uint64`` scalars.

    Construction fails with ``NativeBackendUnavailable`` when numpy is missing or
    when the platform's arithmetic does not reproduce the reference digest.
    """

    name = NATIVE
    native = True

    def __init__(self):
        try:
            np = _load_numpy()
        except ImportError as exc:
            raise NativeBackendUnavailable("numpy is not installed") from exc

        self._np = np
        u64 = np.uint64
        self._shifts = {s: (u64(s), u64(64 - s)) for s in (13, 16, 17, 21, 32)}
        self._ff = u64(0xFF)

        try:
            digest = self.compute(_SELF_CHECK_KEY, b"", 2, 4)
        except Exception as exc:
            raise NativeBackendUnavailable(f"native self-check failed: {exc}") from exc
        if digest != _SELF_CHECK_DIGEST:
            raise NativeBackendUnavailable(
                f"native self-check mismatch: got {digest:#018x}"
            )

    def _rotl(self, x, shift):
        left, right = self._shifts[shift]
        return (x << left) | (x >> right)

    def _half_round(self, a, b, c, d, s, t):
        a += b
        c += d
        b = self._rotl(b, s) ^ a
        d = self._rotl(d, t) ^ c
        a = self._rotl(a, 32)
        return a, b, c, d

    def _rounds(self, v0, v1, v2, v3, n):
        for _ in range(n):
            v0, v1, v2, v3 = self._half_round(v0, v1, v2, v3, 13, 16)
            v2, v1, v0, v3 = self._half_round(v2, v1, v0, v3, 17, 21)
        return v0, v1, v2, v3

    def compute_from_state(self, state: State, message: bytes, c: int, d: int) -> int:
        np = self._np
        u64 = np.uint64
        body, tail = split_tail(message)
        v0, v1, v2, v3 = (u64(word) for word in state.words())

        with np.errstate(over="ignore"):
            if body:
                for m in np.frombuffer(body, dtype="<u8").astype(u64):
                    v3 ^= m
                    v0, v1, v2, v3 = self._rounds(v0, v1, v2, v3, c)
                    v0 ^= m

            m = u64(_last_block(tail, len(body) + len(tail)))
            v3 ^= m
            v0, v1, v2, v3 = self._rounds(v0, v1, v2, v3, c)
            v0 ^= m

            v2 ^= self._ff
            v0, v1, v2, v3 = self._rounds(v0, v1, v2, v3, d)

        return int(v0 ^ v1 ^ v2 ^ v3)


_ACTIVE: Optional[Backend] = None


def _configured_impl() -> str:
    raw = os.environ.get(ENV_VAR, NATIVE).strip().lower()
    if raw in _PORTABLE_ALIASES:
        return PORTABLE
    if raw != NATIVE:
        logger.warning("Unknown %s value %r, using %s", ENV_VAR, raw, NATIVE)
    return NATIVE


def select_backend(impl: Optional[str] = None) -> Backend:
    """
    Choose the process-wide backend.

    Called once on import. ``impl`` overrides the environment; pass ``"native"``
    or ``"portable"``. A native backend that fails to load is replaced by the
    portable one.
    """
    global _ACTIVE

    choice = _configured_impl() if impl is None else impl.lower()
    if choice in _PORTABLE_ALIASES:
        backend: Backend = PortableBackend()
    elif choice == NATIVE:
        try:
            backend = NativeBackend()
        except NativeBackendUnavailable as exc:
            logger.warning("Native SipHash backend unavailable (%s), using portable", exc)
            backend = PortableBackend()
    else:
        raise ValueError(f"Unsupported backend: {impl}")

    logger.debug("Using %s SipHash backend", backend.name)
    _ACTIVE = backend
    return backend


def reset_backend() -> None:
    """Forget the selected backend; the next lookup selects again from the environment."""
    global _ACTIVE
    _ACTIVE = None


def active_backend() -> Backend:
    if _ACTIVE is None:
        return select_backend()
    return _ACTIVE


def is_native_backend_active() -> bool:
    return active_backend().native


def compute(key: bytes, message: bytes, c: int = 2, d: int = 4) -> int:
    """
    Run the active backend on a raw key and return the 64-bit digest.

    Arguments are validated the same way as in ``siphash``; no output formatting
    is applied.
    """
    data = message_to_bytes(message)
    check_rounds(c, d)
    return active_backend().compute(key, data, c, d)


select_backend()


__all__ = [
    "Backend",
    "PortableBackend",
    "NativeBackend",
    "select_backend",
    "reset_backend",
    "active_backend",
    "is_native_backend_active",
    "compute",
    "ENV_VAR",
]
