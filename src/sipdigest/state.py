from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Tuple, Union

from .errors import InvalidInputType, InvalidKeyLength, InvalidRoundConfiguration
from .words import add64, bytes_to_long, rotl64, xor64

KEY_SIZE = 16
BLOCK_SIZE = 8

# "somepseudorandomlygeneratedbytes"
_INITIAL_V0 = 0x736F6D6570736575
_INITIAL_V1 = 0x646F72616E646F6D
_INITIAL_V2 = 0x6C7967656E657261
_INITIAL_V3 = 0x7465646279746573


def key_to_bytes(key) -> bytes:
    if not isinstance(key, (bytes, bytearray, memoryview)):
        raise InvalidInputType(f"key must be bytes-like, got {type(key)!r}")
    key_bytes = bytes(key)
    if len(key_bytes) != KEY_SIZE:
        raise InvalidKeyLength(len(key_bytes))
    return key_bytes


def message_to_bytes(message) -> bytes:
    if not isinstance(message, (bytes, bytearray, memoryview)):
        raise InvalidInputType(f"message must be bytes-like, got {type(message)!r}")
    return bytes(message)


def check_rounds(c, d) -> None:
    """Reject round counts that are not positive integers (bools included)."""
    for name, value in (("c", c), ("d", d)):
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise InvalidRoundConfiguration(name, value)


@dataclass(frozen=True)
class State:
    """
    The four-word SipHash state.

    Instances are immutable: every transformation returns a new ``State``, so an
    initialized state can be kept around and shared between threads to skip key
    derivation on later calls with the same key.
    """

    v0: int
    v1: int
    v2: int
    v3: int

    @classmethod
    def initialize(cls, key: bytes) -> "State":
        """
        Derive the initial state from a 16-byte key.

        The key is split into two little-endian words k0 and k1 which are XOR'd
        against the SipHash magic constants.

        Raises:
            InvalidKeyLength: If the key is not exactly 16 bytes
            InvalidInputType: If the key is not bytes-like
        """
        k0, k1 = struct.unpack("<QQ", key_to_bytes(key))
        return cls(
            _INITIAL_V0 ^ k0,
            _INITIAL_V1 ^ k1,
            _INITIAL_V2 ^ k0,
            _INITIAL_V3 ^ k1,
        )

    def words(self) -> Tuple[int, int, int, int]:
        return self.v0, self.v1, self.v2, self.v3

    def compress(self) -> "State":
        """Run a single SipRound."""
        v0, v1, v2, v3 = self.v0, self.v1, self.v2, self.v3

        v0 = add64(v0, v1)
        v2 = add64(v2, v3)
        v1 = rotl64(v1, 13)
        v3 = rotl64(v3, 16)

        v1 = xor64(v1, v0)
        v3 = xor64(v3, v2)
        v0 = rotl64(v0, 32)

        v2 = add64(v2, v1)
        v0 = add64(v0, v3)
        v1 = rotl64(v1, 17)
        v3 = rotl64(v3, 21)

        v1 = xor64(v1, v2)
        v3 = xor64(v3, v0)
        v2 = rotl64(v2, 32)

        return State(v0, v1, v2, v3)

    def compress_n(self, n: int) -> "State":
        state = self
        for _ in range(n):
            state = state.compress()
        return state

    def apply_block(self, block: Union[bytes, int], c: int) -> "State":
        """
        Mix one 8-byte block into the state using ``c`` compression rounds.

        ``block`` may be the raw bytes or the already decoded little-endian word.
        """
        m = block if isinstance(block, int) else bytes_to_long(block)
        state = State(self.v0, self.v1, self.v2, self.v3 ^ m).compress_n(c)
        return State(state.v0 ^ m, state.v1, state.v2, state.v3)

    def apply_last_block(self, tail: bytes, length: int, c: int) -> "State":
        """
        Mix in the final block: the 0-7 leftover bytes padded with zeros to 7
        bytes, followed by the message length modulo 256.
        """
        if len(tail) >= BLOCK_SIZE:
            raise ValueError(f"last block holds at most 7 bytes, got {len(tail)}")
        block = bytes(tail).ljust(BLOCK_SIZE - 1, b"\x00") + bytes((length & 0xFF,))
        return self.apply_block(block, c)

    def finalize(self, d: int) -> int:
        state = State(self.v0, self.v1, self.v2 ^ 0xFF, self.v3).compress_n(d)
        return state.v0 ^ state.v1 ^ state.v2 ^ state.v3


def initialize(key: bytes) -> State:
    return State.initialize(key)


__all__ = [
    "State",
    "initialize",
    "key_to_bytes",
    "message_to_bytes",
    "check_rounds",
    "KEY_SIZE",
    "BLOCK_SIZE",
]
