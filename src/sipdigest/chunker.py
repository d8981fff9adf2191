from __future__ import annotations

from typing import List, Tuple


def split_tail(message: bytes, size: int = 8) -> Tuple[bytes, bytes]:
    """Split a message into its full-block body and the 0..size-1 byte tail."""
    data = bytes(message)
    cut = len(data) - (len(data) % size)
    return data[:cut], data[cut:]


def chunk(message: bytes, size: int = 8) -> Tuple[List[bytes], bytes]:
    """
    Split a message into ordered full blocks plus the trailing partial block.

    The tail is ``b""`` when the message length is a multiple of ``size``.

    Args:
        message: Bytes-like input
        size: Block size in bytes (default: 8)

    Returns:
        A ``(blocks, tail)`` tuple.
    """
    body, tail = split_tail(message, size)
    blocks = [body[idx : idx + size] for idx in range(0, len(body), size)]
    return blocks, tail


__all__ = ["chunk", "split_tail"]
