from __future__ import annotations

from typing import Union

from .errors import InvalidOutputFormat

OUTPUT_FORMATS = ("int", "hex")
CASES = ("upper", "lower")


def to_hex(num: int) -> str:
    """Render a number as upper-case base-16 text without padding."""
    return format(num, "X")


def to_case(text: str, case: str) -> str:
    if case == "upper":
        return text.upper()
    if case == "lower":
        return text.lower()
    raise InvalidOutputFormat(f"case must be one of {CASES}, got {case!r}")


def pad_left(text: str, width: int = 16) -> str:
    return text.rjust(width, "0")


def check_format(output: str, case: str) -> None:
    if output not in OUTPUT_FORMATS:
        raise InvalidOutputFormat(f"output must be one of {OUTPUT_FORMATS}, got {output!r}")
    if case not in CASES:
        raise InvalidOutputFormat(f"case must be one of {CASES}, got {case!r}")


def format_digest(
    num: int, output: str = "int", case: str = "upper", padding: bool = True
) -> Union[int, str]:
    """
    Render a 64-bit digest.

    ``case`` and ``padding`` are ignored unless ``output`` is ``"hex"``.
    """
    check_format(output, case)
    if output == "int":
        return num
    text = to_case(to_hex(num), case)
    return pad_left(text) if padding else text


__all__ = ["format_digest", "check_format", "to_hex", "to_case", "pad_left"]
