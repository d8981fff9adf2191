from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

from .backends import active_backend
from .errors import SipHashError
from .formatting import check_format, format_digest
from .state import State, check_rounds, message_to_bytes

KeyOrState = Union[bytes, bytearray, memoryview, State]
Digest = Union[int, str]


def initialize_state(key: bytes) -> State:
    """
    Derive a reusable ``State`` from a 16-byte key.

    The result can be passed anywhere a key is accepted and yields identical
    digests, without repeating the key derivation.
    """
    return State.initialize(key)


def _as_state(key_or_state: KeyOrState) -> State:
    if isinstance(key_or_state, State):
        return key_or_state
    return State.initialize(key_or_state)


def siphash(
    key_or_state: KeyOrState,
    message: bytes,
    c: int = 2,
    d: int = 4,
    *,
    output: str = "int",
    case: str = "upper",
    padding: bool = True,
) -> Digest:
    """
    Hash a message with SipHash-c-d.

    Args:
        key_or_state: 16-byte key, or a State from ``initialize_state``
        message: Bytes-like input
        c: Compression rounds per block (default: 2)
        d: Finalization rounds (default: 4)
        output: ``"int"`` for the raw 64-bit digest or ``"hex"`` for text
        case: ``"upper"`` or ``"lower"`` hex digits
        padding: Left-pad hex output with zeros to 16 characters

    Returns:
        The digest as an int, or as a str when ``output="hex"``.

    Raises:
        InvalidKeyLength: If the key is not exactly 16 bytes
        InvalidRoundConfiguration: If c or d is not a positive integer
        InvalidInputType: If the key or message is not bytes-like
        InvalidOutputFormat: If output or case is not recognized
    """
    state = _as_state(key_or_state)
    data = message_to_bytes(message)
    check_rounds(c, d)
    check_format(output, case)

    digest = active_backend().compute_from_state(state, data, c, d)
    return format_digest(digest, output, case, padding)


def siphash_r(
    message: bytes, key_or_state: KeyOrState, c: int = 2, d: int = 4, **options
) -> Digest:
    """``siphash`` with the message first, for pipeline-style calls."""
    return siphash(key_or_state, message, c, d, **options)


def siphash_many(
    key_or_state: KeyOrState, messages: Iterable[bytes], c: int = 2, d: int = 4, **options
) -> List[Digest]:
    state = _as_state(key_or_state)
    return [siphash(state, message, c, d, **options) for message in messages]


@dataclass(frozen=True)
class HashResult:
    value: Optional[Digest] = None
    error: Optional[SipHashError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Digest:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


def try_siphash(key_or_state: KeyOrState, message: bytes, c: int = 2, d: int = 4, **options) -> HashResult:
    """
    Like ``siphash`` but reports caller errors in the returned ``HashResult``
    instead of raising them.
    """
    try:
        return HashResult(value=siphash(key_or_state, message, c, d, **options))
    except SipHashError as exc:
        return HashResult(error=exc)


__all__ = [
    "siphash",
    "siphash_r",
    "siphash_many",
    "try_siphash",
    "initialize_state",
    "HashResult",
]
