"""
Calculation core for iron-log.

Pure functions only: no I/O and no shared state, so every operation can
be called from anywhere without coordination.
"""

from .coercion import classify_flexible_number, parse_flexible_number
from .nutrition import calculate_macro_targets
from .performance import calculate_e1rm, compare_set_performance, format_set_performance_target
from .program_designer import build_guided_template, recommend_program_template
from .schedule import build_fixed_weekdays, planned_day_for_date
from .set_range import normalize_set_range, parse_set_range_notes, serialize_set_range_notes
from .volume import calculate_weekly_volume, get_volume_recommendation

__all__ = [
    "build_fixed_weekdays",
    "build_guided_template",
    "calculate_e1rm",
    "calculate_macro_targets",
    "calculate_weekly_volume",
    "classify_flexible_number",
    "compare_set_performance",
    "format_set_performance_target",
    "get_volume_recommendation",
    "normalize_set_range",
    "parse_flexible_number",
    "parse_set_range_notes",
    "planned_day_for_date",
    "recommend_program_template",
    "serialize_set_range_notes",
]
