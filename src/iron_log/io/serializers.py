"""
JSON serialization for iron-log records.

Handles conversion between dataclasses and JSON-compatible dicts, plus
parsing of the short set notation accepted on the command line.
"""

import re
from datetime import datetime
from typing import Any

from ..core.models import LoggedSet, PlanMode, PlanSchedule, VolumeLandmark, VolumeSet
from ..core.schedule import normalize_weekday, normalize_weekday_order


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def validate_date(date_str: str) -> str:
    """
    Validate and normalize date string to ISO format.

    Args:
        date_str: Date string to validate

    Returns:
        Normalized YYYY-MM-DD string

    Raises:
        ValidationError: If date format is invalid
    """
    if not isinstance(date_str, str) or not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValidationError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValidationError(f"Invalid date: {date_str}") from e

    return date_str


def validate_plan_mode(mode: str) -> PlanMode:
    """
    Validate plan mode.

    Raises:
        ValidationError: If mode is not "fixed" or "flex"
    """
    if mode not in ("fixed", "flex"):
        raise ValidationError(f"Invalid plan mode: {mode!r}. Must be 'fixed' or 'flex'")
    return mode  # type: ignore


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# =============================================================================
# Plan schedules
# =============================================================================


def plan_schedule_to_dict(schedule: PlanSchedule) -> dict[str, Any]:
    """
    Convert PlanSchedule to JSON-compatible dict.

    Args:
        schedule: PlanSchedule to convert

    Returns:
        Dict representation
    """
    d: dict[str, Any] = {
        "split_id": schedule.split_id,
        "start_date": schedule.start_date,
        "mode": schedule.mode,
        "weekdays": list(schedule.weekdays),
    }
    if schedule.anchor_day is not None:
        d["anchor_day"] = schedule.anchor_day
    return d


def dict_to_plan_schedule(data: dict[str, Any]) -> PlanSchedule:
    """
    Convert dict to PlanSchedule, normalizing weekdays and anchor.

    Weekdays are wrapped onto 0..6 and de-duplicated. anchor_day is wrapped
    onto 0..6 when it is an integer; otherwise it defaults to the first
    weekday (fixed mode), 0 (flex mode), or 1 when there are no weekdays.

    Args:
        data: Dict representation

    Returns:
        PlanSchedule instance

    Raises:
        ValidationError: If required fields are missing or invalid, or a
            fixed schedule has no weekdays
    """
    if not isinstance(data, dict):
        raise ValidationError("Plan schedule must be a JSON object")

    for key in ("split_id", "start_date", "mode", "weekdays"):
        if not data.get(key) and data.get(key) != []:
            raise ValidationError(f"Plan schedule missing field: {key}")

    raw_weekdays = data["weekdays"]
    if not isinstance(raw_weekdays, list) or not all(_is_int(d) for d in raw_weekdays):
        raise ValidationError("weekdays must be a list of integers")

    mode = validate_plan_mode(data["mode"])
    weekdays = normalize_weekday_order(raw_weekdays)
    if mode == "fixed" and not weekdays:
        raise ValidationError("A fixed plan schedule needs at least one weekday")

    raw_anchor = data.get("anchor_day")
    if _is_int(raw_anchor):
        anchor_day = normalize_weekday(raw_anchor)
    elif mode == "flex":
        anchor_day = 0
    else:
        anchor_day = weekdays[0] if weekdays else 1

    return PlanSchedule(
        split_id=str(data["split_id"]),
        start_date=str(data["start_date"]),
        mode=mode,
        weekdays=weekdays,
        anchor_day=anchor_day,
    )


# =============================================================================
# Volume landmarks and logged sets
# =============================================================================


def volume_landmark_to_dict(landmark: VolumeLandmark) -> dict[str, Any]:
    """Convert VolumeLandmark to JSON-compatible dict."""
    return {
        "muscle_group": landmark.muscle_group,
        "mv": landmark.mv,
        "mev": landmark.mev,
        "mav_low": landmark.mav_low,
        "mav_high": landmark.mav_high,
        "mrv": landmark.mrv,
    }


def dict_to_volume_set(data: dict[str, Any]) -> VolumeSet:
    """
    Convert dict to VolumeSet.

    Raises:
        ValidationError: If date or muscle_group is missing or invalid, or
            completed is not a boolean
    """
    if not isinstance(data, dict):
        raise ValidationError("Set record must be a JSON object")
    if "date" not in data or not data.get("muscle_group"):
        raise ValidationError("Set record needs 'date' and 'muscle_group'")
    validate_date(data["date"])

    completed = data.get("completed", True)
    if not isinstance(completed, bool):
        raise ValidationError(f"completed must be true or false, got {completed!r}")

    return VolumeSet(
        date=data["date"],
        muscle_group=str(data["muscle_group"]),
        secondary_muscle_group=data.get("secondary_muscle_group") or None,
        completed=completed,
    )


def parse_set_string(set_str: str) -> LoggedSet:
    """
    Parse a weight × reps set.

    Accepted formats:
        "185x8", "185 x 8", "62.5×10"   weight × reps
        "185 8"                          space-separated
        "185x"                           reps not logged yet

    Args:
        set_str: Set string to parse

    Returns:
        LoggedSet with float fields (reps None when omitted)

    Raises:
        ValidationError: If format is invalid
    """
    text = (set_str or "").strip()
    m = re.fullmatch(r"(\d+(?:\.\d+)?)\s*(?:[xX×]\s*|\s+)(\d+(?:\.\d+)?)?", text)
    if m is None:
        raise ValidationError(
            f"Invalid set format: '{set_str}'. Use weight x reps (e.g. 185x8 or 62.5x10)."
        )
    reps = m.group(2)
    return LoggedSet(weight=float(m.group(1)), reps=float(reps) if reps is not None else None)
