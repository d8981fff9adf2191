from __future__ import annotations

from typing import Any

from .digest import initialize_state, siphash
from .errors import InvalidInputType


def _to_bytes(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    raise InvalidInputType(f"Unsupported value for column hashing: {type(value)!r}")


def hash_pandas_series(series: Any, key: bytes, c: int = 2, d: int = 4):
    """
    Hash a pandas Series of bytes or str values into a uint64 Series.

    str values are hashed as their UTF-8 encoding.
    """
    try:
        import pandas as pd  # type: ignore
    except ModuleNotFoundError as exc:  # pragma: no cover - optional dependency
        raise ImportError(
            "Install pandas to use hash_pandas_series: pip install pandas"
        ) from exc

    state = initialize_state(key)
    hashes = [siphash(state, _to_bytes(val), c, d) for val in series]
    return pd.Series(hashes, index=getattr(series, "index", None), dtype="uint64")


def hash_arrow_array(array: Any, key: bytes, c: int = 2, d: int = 4):
    """
    Hash a pyarrow Array (or values coercible to one) into a uint64 Array.

    Binary values are hashed as-is, string values as UTF-8.
    """
    try:
        import pyarrow as pa  # type: ignore
    except ModuleNotFoundError as exc:  # pragma: no cover - optional dependency
        raise ImportError(
            "Install pyarrow to use hash_arrow_array: pip install pyarrow"
        ) from exc

    arr = array if hasattr(array, "to_pylist") else pa.array(array)
    state = initialize_state(key)
    hashes = [
        siphash(state, _to_bytes(val.as_py() if hasattr(val, "as_py") else val), c, d)
        for val in arr
    ]
    return pa.array(hashes, type=pa.uint64())


def hash_polars_series(series: Any, key: bytes, c: int = 2, d: int = 4):
    """
    Hash a polars Series of Binary or Utf8 values into a UInt64 Series.

    Strings are hashed as UTF-8.
    """
    try:
        import polars as pl  # type: ignore
    except ModuleNotFoundError as exc:  # pragma: no cover - optional dependency
        raise ImportError(
            "Install polars to use hash_polars_series: pip install polars"
        ) from exc

    ser = series if hasattr(series, "dtype") else pl.Series(series)
    state = initialize_state(key)
    hashes = [siphash(state, _to_bytes(val), c, d) for val in ser]
    name = getattr(ser, "name", None) or "hash"
    return pl.Series(name=name, values=hashes, dtype=pl.UInt64)


__all__ = ["hash_arrow_array", "hash_pandas_series", "hash_polars_series"]
