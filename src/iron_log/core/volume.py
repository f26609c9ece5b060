"""
Weekly volume landmarks (MEV / MAV / MRV).

Classifies a muscle group's completed weekly sets into one of five zones:

    below_mev        sets <  mev
    mev_mav          mev <= sets <  mav_low
    mav              mav_low <= sets <= mav_high
    approaching_mrv  mav_high <  sets <= mrv
    above_mrv        sets >  mrv

Boundary values belong to the lower-intensity zone's upper bound.
The classifier assumes mev <= mav_low <= mav_high <= mrv; landmarks are
checked with validate_landmark when they are loaded, not here.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date, datetime, timedelta
from typing import Final

from .config import PRIMARY_MUSCLE_SET_CREDIT, SECONDARY_MUSCLE_SET_CREDIT
from .models import MuscleVolume, VolumeLandmark, VolumeRecommendation, VolumeSet, VolumeStatus

VOLUME_STATUS_MESSAGES: Final[dict[str, str]] = {
    "below_mev": (
        "Below minimum effective volume ({sets}/{mev} sets). "
        "Add more sets to stimulate growth."
    ),
    "mev_mav": "In maintenance range. Consider adding sets to optimize hypertrophy.",
    "mav": "Optimal volume range! Keep consistent for best results.",
    "approaching_mrv": (
        "High volume zone. Monitor fatigue and consider a deload if recovery suffers."
    ),
    "above_mrv": (
        "Exceeding recoverable volume. "
        "Reduce sets or take a deload week to prevent overtraining."
    ),
}


def _threshold(landmark: object, name: str) -> float:
    if isinstance(landmark, Mapping):
        return landmark[name]
    return getattr(landmark, name)


def _format_sets(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def classify_weekly_volume(weekly_sets: float, landmark: object) -> VolumeStatus:
    """
    Classify a weekly set count against a landmark.

    Args:
        weekly_sets: Completed sets this week (secondary work counts half)
        landmark: VolumeLandmark or mapping with mev/mav_low/mav_high/mrv

    Returns:
        VolumeStatus
    """
    if weekly_sets < _threshold(landmark, "mev"):
        return "below_mev"
    if weekly_sets < _threshold(landmark, "mav_low"):
        return "mev_mav"
    if weekly_sets <= _threshold(landmark, "mav_high"):
        return "mav"
    if weekly_sets <= _threshold(landmark, "mrv"):
        return "approaching_mrv"
    return "above_mrv"


def get_volume_recommendation(weekly_sets: float, landmark: object) -> VolumeRecommendation:
    """
    Classify weekly volume and attach the advisory message.

    Args:
        weekly_sets: Completed sets this week
        landmark: VolumeLandmark or mapping with mev/mav_low/mav_high/mrv

    Returns:
        VolumeRecommendation(status, message)
    """
    status = classify_weekly_volume(weekly_sets, landmark)
    message = VOLUME_STATUS_MESSAGES[status].format(
        sets=_format_sets(weekly_sets),
        mev=_format_sets(_threshold(landmark, "mev")),
    )
    return VolumeRecommendation(status=status, message=message)


def validate_landmark(landmark: VolumeLandmark) -> VolumeLandmark:
    """
    Check landmark ordering.

    Raises:
        ValueError: If mev <= mav_low <= mav_high <= mrv does not hold,
            or any threshold is negative
    """
    values = (landmark.mev, landmark.mav_low, landmark.mav_high, landmark.mrv)
    if min(values) < 0 or landmark.mv < 0:
        raise ValueError(f"{landmark.muscle_group}: landmarks must be non-negative")
    if not (landmark.mev <= landmark.mav_low <= landmark.mav_high <= landmark.mrv):
        raise ValueError(
            f"{landmark.muscle_group}: expected mev <= mav_low <= mav_high <= mrv, "
            f"got {landmark.mev}, {landmark.mav_low}, {landmark.mav_high}, {landmark.mrv}"
        )
    return landmark


def week_bounds(day: date) -> tuple[date, date]:
    """Sunday-to-Saturday week containing day."""
    start = day - timedelta(days=(day.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


def calculate_weekly_volume(
    sets: Iterable[VolumeSet],
    week_of: date,
) -> dict[str, float]:
    """
    Count completed sets per muscle group for one week.

    The primary muscle group earns a full set, the secondary one half a
    set. Incomplete sets and sets outside the Sunday-start week are skipped.

    Args:
        sets: Logged sets with their muscle groups
        week_of: Any date inside the week to count

    Returns:
        Dict of muscle_group → weekly set count, in first-seen order
    """
    start, end = week_bounds(week_of)
    volume: dict[str, float] = {}

    for s in sets:
        if not s.completed:
            continue
        set_day = datetime.strptime(s.date, "%Y-%m-%d").date()
        if not start <= set_day <= end:
            continue

        volume[s.muscle_group] = volume.get(s.muscle_group, 0.0) + PRIMARY_MUSCLE_SET_CREDIT
        if s.secondary_muscle_group:
            volume[s.secondary_muscle_group] = (
                volume.get(s.secondary_muscle_group, 0.0) + SECONDARY_MUSCLE_SET_CREDIT
            )

    return volume


def build_muscle_volumes(
    weekly_volume: Mapping[str, float],
    landmarks: Mapping[str, VolumeLandmark],
) -> list[MuscleVolume]:
    """
    Attach landmarks and statuses to weekly volume counts.

    Muscle groups without a landmark are reported as below_mev.
    """
    result: list[MuscleVolume] = []
    for muscle_group, weekly_sets in weekly_volume.items():
        landmark = landmarks.get(muscle_group)
        status: VolumeStatus = (
            classify_weekly_volume(weekly_sets, landmark) if landmark is not None else "below_mev"
        )
        result.append(
            MuscleVolume(
                muscle_group=muscle_group,
                weekly_sets=weekly_sets,
                status=status,
                landmark=landmark,
            )
        )
    return result
