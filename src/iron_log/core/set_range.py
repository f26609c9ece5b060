"""
Set-range metadata carried inside an exercise's free-text notes.

A split exercise stores one target set count in its own column; an
optional (min, max) range rides along in the notes field as a single
tagged line:

    Pause reps on the first set
    [set-range]{"min":2,"max":4}

Only these functions know the tag format. Everything else sees a
SetRangeNotes value and the untagged base notes.
"""

from __future__ import annotations

import json

from .coercion import is_finite_number, round_half_up
from .config import DEFAULT_TARGET_SETS, SET_COUNT_MAX, SET_COUNT_MIN, SET_RANGE_TAG
from .models import SetRange, SetRangeNotes


def _clamp_set_count(value: object, fallback: int) -> int:
    """Round and clamp into [SET_COUNT_MIN, SET_COUNT_MAX]; non-finite → fallback."""
    if not is_finite_number(value):
        return fallback
    return max(SET_COUNT_MIN, min(SET_COUNT_MAX, round_half_up(value)))  # type: ignore[arg-type]


def normalize_set_range(min_sets: float, target_sets: float, max_sets: float) -> SetRange:
    """
    Clamp and order a raw (min, target, max) triple.

    Target falls back to DEFAULT_TARGET_SETS when non-finite; min and max
    fall back to the clamped target. Min and max are swapped if reversed
    and the target is pulled inside them.

    Returns:
        SetRange with 1 <= min <= target <= max <= 10
    """
    safe_target = _clamp_set_count(target_sets, DEFAULT_TARGET_SETS)
    safe_min = _clamp_set_count(min_sets, safe_target)
    safe_max = _clamp_set_count(max_sets, safe_target)

    ordered_min = min(safe_min, safe_max)
    ordered_max = max(safe_min, safe_max)
    ordered_target = max(ordered_min, min(ordered_max, safe_target))

    return SetRange(min_sets=ordered_min, target_sets=ordered_target, max_sets=ordered_max)


def _is_tagged(line: str) -> bool:
    return line.lstrip().startswith(SET_RANGE_TAG)


def _strip_tagged_lines(notes: str | None) -> str | None:
    """Drop every tagged line; None when nothing human-written remains."""
    if not notes:
        return None

    lines = [line.rstrip() for line in notes.split("\n")]
    joined = "\n".join(line for line in lines if not _is_tagged(line)).strip()
    return joined or None


def _decode_payload(line: str) -> tuple[float | None, float | None]:
    """Read (min, max) from a tagged line; (None, None) if malformed."""
    raw = line.lstrip()[len(SET_RANGE_TAG):].strip()
    try:
        payload = json.loads(raw)
    except (ValueError, RecursionError):
        return None, None

    if not isinstance(payload, dict):
        return None, None

    parsed_min = payload.get("min")
    parsed_max = payload.get("max")
    return (
        parsed_min if is_finite_number(parsed_min) else None,
        parsed_max if is_finite_number(parsed_max) else None,
    )


def parse_set_range_notes(notes: str | None, target_sets: float) -> SetRangeNotes:
    """
    Decode the set range embedded in a notes field.

    Missing or malformed metadata falls back to target_sets for both
    bounds; only the first tagged line is decoded.

    Args:
        notes: Raw notes column (may be None)
        target_sets: Target set count stored alongside the notes

    Returns:
        SetRangeNotes with the normalized range and the untagged notes
    """
    normalized_target = _clamp_set_count(target_sets, DEFAULT_TARGET_SETS)
    min_sets: float = normalized_target
    max_sets: float = normalized_target

    if notes:
        tagged = next((line for line in notes.split("\n") if _is_tagged(line)), None)
        if tagged is not None:
            parsed_min, parsed_max = _decode_payload(tagged)
            if parsed_min is not None:
                min_sets = parsed_min
            if parsed_max is not None:
                max_sets = parsed_max

    normalized = normalize_set_range(min_sets, normalized_target, max_sets)
    return SetRangeNotes(
        min_sets=normalized.min_sets,
        target_sets=normalized.target_sets,
        max_sets=normalized.max_sets,
        base_notes=_strip_tagged_lines(notes),
    )


def serialize_set_range_notes(
    existing_notes: str | None,
    min_sets: float,
    target_sets: float,
    max_sets: float,
) -> str | None:
    """
    Write a set range back into a notes field.

    Any previous tagged line is replaced. When the range collapses to a
    single value no metadata is written and the base notes come back
    unchanged.

    Returns:
        Notes text to store, or None if there is nothing to store
    """
    normalized = normalize_set_range(min_sets, target_sets, max_sets)
    base_notes = _strip_tagged_lines(existing_notes)

    if normalized.is_single_value:
        return base_notes

    payload = json.dumps(
        {"min": normalized.min_sets, "max": normalized.max_sets},
        separators=(",", ":"),
    )
    metadata = f"{SET_RANGE_TAG}{payload}"

    if not base_notes:
        return metadata
    return f"{base_notes}\n{metadata}"
