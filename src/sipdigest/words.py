from __future__ import annotations

MASK_64 = 0xFFFFFFFFFFFFFFFF


def apply_mask64(value: int) -> int:
    """Drop every bit above the 64th."""
    return value & MASK_64


def add64(a: int, b: int) -> int:
    return (a + b) & MASK_64


def xor64(a: int, b: int) -> int:
    return (a ^ b) & MASK_64


def rotl64(x: int, shift: int) -> int:
    """
    Rotate a 64-bit value left by ``shift`` bits (0 < shift < 64).

    Bits pushed off the top come back in at the bottom.
    """
    return ((x << shift) & MASK_64) | (x >> (64 - shift))


def bytes_to_long(data: bytes) -> int:
    """Decode bytes as an unsigned little-endian integer."""
    return int.from_bytes(data, byteorder="little", signed=False)


__all__ = ["MASK_64", "apply_mask64", "add64", "xor64", "rotl64", "bytes_to_long"]
