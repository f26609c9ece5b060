"""
Set-to-set performance comparison.

Classifies a freshly logged set against the same set from the previous
workout so the logger can show "beat / matched / below" feedback.

Decision order:
  1. same weight and same reps        → matched
  2. same weight                      → more reps wins
  3. same reps                        → more weight wins
  4. both differ                      → compare Epley e1RM (±E1RM_TOLERANCE)
"""

from __future__ import annotations

import math
from collections.abc import Mapping

from .coercion import is_finite_number, parse_flexible_number
from .config import E1RM_TOLERANCE, EPLEY_DIVISOR, REP_TOLERANCE, WEIGHT_TOLERANCE
from .models import LoggedSet, SetPerformanceResult


def _field(set_like: object, name: str) -> object:
    if isinstance(set_like, Mapping):
        return set_like.get(name)
    return getattr(set_like, name, None)


def to_comparable_set(set_like: object) -> LoggedSet | None:
    """
    Coerce a set-like value into a comparable LoggedSet.

    Accepts a LoggedSet, a mapping with "weight"/"reps" keys, or any object
    exposing those attributes. A set is comparable only when both fields
    parse to finite numbers with weight >= 0 and reps > 0.

    Returns:
        LoggedSet with float fields, or None if the set is incomplete
    """
    if set_like is None:
        return None

    weight = parse_flexible_number(_field(set_like, "weight"))
    reps = parse_flexible_number(_field(set_like, "reps"))

    if weight is None or reps is None or weight < 0 or reps <= 0:
        return None

    return LoggedSet(weight=weight, reps=reps)


def _approximately_equal(a: float, b: float, tolerance: float) -> bool:
    return abs(a - b) <= tolerance


def calculate_e1rm(weight: float, reps: float) -> float | None:
    """
    Estimated one-rep max via the Epley formula.

    e1RM = weight × (1 + reps / 30)

    Args:
        weight: Load lifted (any unit, >= 0)
        reps: Repetitions performed (> 0)

    Returns:
        Estimated 1RM in the same unit as weight, or None for invalid input
    """
    if not is_finite_number(weight) or not is_finite_number(reps) or weight < 0 or reps <= 0:
        return None

    estimate = weight * (1 + reps / EPLEY_DIVISOR)
    # finite inputs near float max can still overflow
    return estimate if math.isfinite(estimate) else None


def compare_set_performance(current: object, previous: object) -> SetPerformanceResult:
    """
    Compare the current set against the previous one.

    Args:
        current: Set being logged now (LoggedSet, mapping, or attribute object)
        previous: Same set from the previous session

    Returns:
        "beat", "matched", "below", or "unknown" when either set is incomplete
    """
    current_set = to_comparable_set(current)
    previous_set = to_comparable_set(previous)

    if current_set is None or previous_set is None:
        return "unknown"

    same_weight = _approximately_equal(current_set.weight, previous_set.weight, WEIGHT_TOLERANCE)
    same_reps = _approximately_equal(current_set.reps, previous_set.reps, REP_TOLERANCE)

    if same_weight and same_reps:
        return "matched"

    if same_weight:
        return "beat" if current_set.reps > previous_set.reps else "below"

    if same_reps:
        return "beat" if current_set.weight > previous_set.weight else "below"

    current_e1rm = calculate_e1rm(current_set.weight, current_set.reps)
    previous_e1rm = calculate_e1rm(previous_set.weight, previous_set.reps)

    if current_e1rm is None or previous_e1rm is None:
        return "unknown"

    if current_e1rm > previous_e1rm + E1RM_TOLERANCE:
        return "beat"
    if current_e1rm < previous_e1rm - E1RM_TOLERANCE:
        return "below"
    return "matched"


def format_number(value: float) -> str:
    """Render integral values without a decimal point, others to one decimal."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.1f}"


def format_set_performance_target(set_like: object) -> str:
    """
    Format a previous set as an inline target label, e.g. "62.5 × 10".

    Returns:
        Label string, or "" when the set is not comparable
    """
    comparable = to_comparable_set(set_like)
    if comparable is None:
        return ""

    return f"{format_number(comparable.weight)} × {format_number(comparable.reps)}"
