from __future__ import annotations


class SipHashError(Exception):
    """Base class for every error raised by sipdigest."""


class InvalidKeyLength(SipHashError, ValueError):
    def __init__(self, length: int):
        super().__init__(f"SipHash key must be exactly 16 bytes, got {length}")
        self.length = length


class InvalidRoundConfiguration(SipHashError, ValueError):
    def __init__(self, name: str, value):
        super().__init__(f"{name} must be a positive integer, got {value!r}")
        self.name = name
        self.value = value


class InvalidInputType(SipHashError, TypeError):
    pass


class InvalidOutputFormat(SipHashError, ValueError):
    pass


class NativeBackendUnavailable(SipHashError, RuntimeError):
    """Raised while loading the native backend; the selector falls back on it."""


__all__ = [
    "SipHashError",
    "InvalidKeyLength",
    "InvalidRoundConfiguration",
    "InvalidInputType",
    "InvalidOutputFormat",
    "NativeBackendUnavailable",
]
