"""
Decimal number parsing with a configurable radix character.

Shared by the file reader (strict parsing of coordinate fields) and the
numeric input fields of the GUI (validation while typing).
"""
from __future__ import annotations

import math
import re

# Optional sign, digits with at most one radix point, optional exponent.
# The radix point is always '.' here; callers translate their separator first.
_FLOAT_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def _normalize(text: str, decimal_separator: str) -> str | None:
    """Swap the configured radix character for '.'; None if another radix is present."""
    if decimal_separator != "." and "." in text:
        return None
    return text.replace(decimal_separator, ".")


def parse_decimal(text: str, decimal_separator: str = ".") -> float:
    """
    Parse a floating point literal that uses `decimal_separator` as radix point.

    Surrounding whitespace is ignored. Thousands separators, currency symbols,
    'inf' and 'nan' are rejected.

    Raises:
        ValueError: If `text` is not a finite decimal literal.
    """
    normalized = _normalize(text.strip(), decimal_separator)
    if normalized is None or not _FLOAT_RE.fullmatch(normalized):
        raise ValueError(f"Not a decimal number: {text!r}")
    value = float(normalized)
    if not math.isfinite(value):
        raise ValueError(f"Number out of range: {text!r}")
    return value


def is_valid_numeric_input(text: str, allow_negative: bool = True, decimal_separator: str = ".") -> bool:
    """
    Check whether `text` is acceptable content of a numeric input field.

    Empty text, a lone minus and a lone radix point are accepted because they
    are reachable states while the user is typing.
    """
    if not allow_negative and text.startswith("-"):
        return False
    if text in ("", "-", decimal_separator, "-" + decimal_separator):
        return True
    try:
        parse_decimal(text, decimal_separator)
    except ValueError:
        return False
    return True


def format_decimal(value: float, decimal_separator: str = ".") -> str:
    """Shortest round-trip representation of `value` using `decimal_separator`."""
    return repr(float(value)).replace(".", decimal_separator)
