"""
Keyed SipHash-c-d digests with a numpy fast path and a pure-Python fallback.
"""

import logging

from .backends import compute, is_native_backend_active, select_backend
from .digest import (
    HashResult,
    initialize_state,
    siphash,
    siphash_many,
    siphash_r,
    try_siphash,
)
from .errors import (
    InvalidInputType,
    InvalidKeyLength,
    InvalidOutputFormat,
    InvalidRoundConfiguration,
    SipHashError,
)
from .state import State
from .vectorized import (
    hash_arrow_array,
    hash_pandas_series,
    hash_polars_series,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "siphash",
    "siphash_r",
    "siphash_many",
    "try_siphash",
    "initialize_state",
    "compute",
    "is_native_backend_active",
    "select_backend",
    "HashResult",
    "State",
    "SipHashError",
    "InvalidKeyLength",
    "InvalidRoundConfiguration",
    "InvalidInputType",
    "InvalidOutputFormat",
    "hash_arrow_array",
    "hash_pandas_series",
    "hash_polars_series",
]
