"""
Boundary coercion for loosely typed numeric input.

Weight and reps reach the core as numbers, numeric strings (backend
numeric columns are serialized as text), or nothing at all. Everything
is funnelled through parse_flexible_number so the calculation modules
only ever see finite floats or None.
"""

from __future__ import annotations

import math
import re
from typing import Literal

NumberKind = Literal["number", "numeric_string", "invalid"]

# Leading decimal literal, the way a lenient float parse reads "185.0kg"
_LEADING_FLOAT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def is_finite_number(value: object) -> bool:
    """True for an int or float (not bool) that converts to a finite float."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints beyond float range
        return False


def _parse_numeric_string(text: str) -> float | None:
    match = _LEADING_FLOAT.match(text.strip())
    if match is None:
        return None
    value = float(match.group(0))
    return value if math.isfinite(value) else None


def classify_flexible_number(value: object) -> NumberKind:
    """
    Classify a raw input value.

    Returns:
        "number" for a finite int/float (bools excluded),
        "numeric_string" for a string with a finite leading decimal literal,
        "invalid" for everything else.
    """
    if isinstance(value, bool):
        return "invalid"
    if isinstance(value, (int, float)):
        return "number" if is_finite_number(value) else "invalid"
    if isinstance(value, str):
        return "numeric_string" if _parse_numeric_string(value) is not None else "invalid"
    return "invalid"


def parse_flexible_number(value: object) -> float | None:
    """
    Coerce a number or numeric string to a finite float.

    Args:
        value: Raw input (int, float, str, None, ...)

    Returns:
        Finite float, or None when the value is missing or unparseable
    """
    kind = classify_flexible_number(value)
    if kind == "number":
        return float(value)  # type: ignore[arg-type]
    if kind == "numeric_string":
        return _parse_numeric_string(value)  # type: ignore[arg-type]
    return None


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity (2.5 → 3, -2.5 → -2)."""
    return math.floor(value + 0.5)
