"""
Weekly schedule generation for training splits.

Two plan modes:
  fixed: train on a fixed set of weekdays derived from an anchor weekday
         and a frequency (FIXED_WEEKDAY_OFFSETS).
  flex:  ignore weekdays; the next split day follows the last completed one.

Weekdays are numbered 0=Sunday .. 6=Saturday throughout.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, datetime, timedelta

from .config import DAYS_IN_WEEK, FIXED_WEEKDAY_OFFSETS, LATE_START_HOUR
from .models import PlanSchedule, SplitDay


def normalize_weekday(day: int) -> int:
    """Wrap any integer onto 0..6 (negatives count back from Saturday)."""
    return day % DAYS_IN_WEEK


def sunday_weekday(day: date) -> int:
    """Weekday of a date with 0=Sunday (datetime uses 0=Monday)."""
    return (day.weekday() + 1) % DAYS_IN_WEEK


def build_fixed_weekdays(anchor_day: int, days_per_week: int) -> list[int]:
    """
    Expand an anchor weekday and a frequency into training weekdays.

    The anchor is wrapped onto 0..6 and the frequency clamped to 1..7.
    The result starts at the anchor and walks forward through the week
    (wrapping past Saturday), so it always holds days_per_week distinct
    weekdays.

    Args:
        anchor_day: First training weekday (0=Sunday)
        days_per_week: Training sessions per week

    Returns:
        List of weekday indices in training order

    Examples:
        build_fixed_weekdays(1, 3) → [1, 3, 5]
        build_fixed_weekdays(5, 4) → [5, 6, 1, 2]
    """
    anchor = normalize_weekday(anchor_day)
    frequency = max(1, min(DAYS_IN_WEEK, days_per_week))
    return [(anchor + offset) % DAYS_IN_WEEK for offset in FIXED_WEEKDAY_OFFSETS[frequency]]


def default_weekdays(days_per_week: int) -> list[int]:
    """Suggested weekdays for a new fixed plan (Monday-based)."""
    if days_per_week <= 3:
        return [1, 3, 5]
    if days_per_week == 4:
        return [1, 2, 4, 5]
    if days_per_week == 5:
        return [1, 2, 3, 5, 6]
    return [1, 2, 3, 4, 5, 6]


def normalize_weekday_order(weekdays: Iterable[int]) -> list[int]:
    """Wrap weekdays onto 0..6 and drop repeats, keeping first occurrences."""
    seen: set[int] = set()
    ordered: list[int] = []
    for day in weekdays:
        normalized = normalize_weekday(day)
        if normalized in seen:
            continue
        seen.add(normalized)
        ordered.append(normalized)
    return ordered


def default_start_date(now: datetime | None = None) -> str:
    """Today's ISO date, or tomorrow's when it is already evening."""
    if now is None:
        now = datetime.now()
    start = now + timedelta(days=1) if now.hour >= LATE_START_HOUR else now
    return start.strftime("%Y-%m-%d")


def planned_day_for_date(
    day: date,
    split_days: Sequence[SplitDay],
    schedule: PlanSchedule,
    completed_since_start: int,
) -> SplitDay | None:
    """
    Pick the split day planned for a calendar date.

    Fixed mode: the date's weekday must be in schedule.weekdays; its
    position there selects the split day (cycled).
    Flex mode: (anchor_day + completed_since_start) selects the split day.

    Args:
        day: Calendar date
        split_days: Split days in split order
        schedule: Plan schedule
        completed_since_start: Workouts completed since schedule.start_date

    Returns:
        SplitDay, or None for a rest day or an empty split
    """
    if not split_days:
        return None

    if schedule.mode == "fixed":
        weekday = sunday_weekday(day)
        if weekday not in schedule.weekdays:
            return None
        return split_days[schedule.weekdays.index(weekday) % len(split_days)]

    offset = schedule.anchor_day or 0
    return split_days[(offset + completed_since_start) % len(split_days)]
