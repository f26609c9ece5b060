"""
Configuration constants for the iron-log training and nutrition model.

All adjustable parameters are centralized here for easy tuning.
"""

from typing import Final

# =============================================================================
# SET PERFORMANCE COMPARISON
# =============================================================================

WEIGHT_TOLERANCE: Final[float] = 0.01  # Weights closer than this are "equal"
REP_TOLERANCE: Final[float] = 0.01  # Reps closer than this are "equal"
E1RM_TOLERANCE: Final[float] = 0.25  # e1RM band treated as a match
EPLEY_DIVISOR: Final[float] = 30.0  # e1RM = w × (1 + reps / 30)

# =============================================================================
# SET RANGE METADATA (stored inside the exercise notes field)
# =============================================================================

SET_RANGE_TAG: Final[str] = "[set-range]"
SET_COUNT_MIN: Final[int] = 1
SET_COUNT_MAX: Final[int] = 10
DEFAULT_TARGET_SETS: Final[int] = 3

# =============================================================================
# VOLUME ANALYSIS
# =============================================================================

PRIMARY_MUSCLE_SET_CREDIT: Final[float] = 1.0
SECONDARY_MUSCLE_SET_CREDIT: Final[float] = 0.5

MUSCLE_GROUP_LABELS: Final[dict[str, str]] = {
    "chest": "Chest",
    "back": "Back",
    "shoulders": "Shoulders (General)",
    "side_delts": "Side Delts",
    "rear_delts": "Rear Delts",
    "front_delts": "Front Delts",
    "biceps": "Biceps",
    "triceps": "Triceps",
    "quads": "Quadriceps",
    "hamstrings": "Hamstrings",
    "glutes": "Glutes",
    "calves": "Calves",
    "core": "Core/Abs",
    "traps": "Traps",
}

# =============================================================================
# SCHEDULING
# =============================================================================

DAYS_IN_WEEK: Final[int] = 7

# Weekday offsets from the anchor for a fixed-rhythm plan, keyed by frequency
FIXED_WEEKDAY_OFFSETS: Final[dict[int, tuple[int, ...]]] = {
    1: (0,),
    2: (0, 3),
    3: (0, 2, 4),
    4: (0, 1, 3, 4),
    5: (0, 1, 2, 4, 5),
    6: (0, 1, 2, 3, 4, 5),
    7: (0, 1, 2, 3, 4, 5, 6),
}

# After this hour a new plan starts tomorrow rather than today
LATE_START_HOUR: Final[int] = 20

# =============================================================================
# NUTRITION TARGETS
# =============================================================================

ACTIVITY_MULTIPLIERS: Final[dict[str, float]] = {
    "sedentary": 1.2,
    "lightly_active": 1.375,
    "moderately_active": 1.55,
    "very_active": 1.725,
    "extra_active": 1.9,
}

GOAL_CALORIE_ADJUSTMENTS: Final[dict[str, float]] = {
    "cut": -0.18,
    "maintain": 0.0,
    "lean_bulk": 0.08,
    "bulk": 0.15,
}

PROTEIN_G_PER_KG_CUT: Final[float] = 2.2
PROTEIN_G_PER_KG_DEFAULT: Final[float] = 1.8
FAT_FLOOR_G_PER_KG: Final[float] = 0.7
FAT_CALORIE_FRACTION_CUT: Final[float] = 0.22
FAT_CALORIE_FRACTION_DEFAULT: Final[float] = 0.25

KCAL_PER_G_PROTEIN: Final[int] = 4
KCAL_PER_G_CARB: Final[int] = 4
KCAL_PER_G_FAT: Final[int] = 9

CALORIE_ROUNDING: Final[int] = 25
MACRO_ROUNDING: Final[int] = 5

KG_PER_LB: Final[float] = 0.453592
CM_PER_INCH: Final[float] = 2.54

# =============================================================================
# PROGRAM DESIGNER
# =============================================================================

# Template ranking
DAY_MATCH_BASE_SCORE: Final[int] = 40  # Minus DAY_DISTANCE_PENALTY per day off
DAY_DISTANCE_PENALTY: Final[int] = 10
EXACT_DAYS_BONUS: Final[int] = 20
EVIDENCE_BONUS: Final[int] = 15
FOCUS_MATCH_BONUS: Final[int] = 35  # Specialization matches the requested focus
FOCUS_CONFLICT_PENALTY: Final[int] = 20  # Specialization on the opposite half
FOCUS_NAME_BONUS: Final[int] = 8  # Name mentions the requested half
UNWANTED_SPECIALIZATION_PENALTY: Final[int] = 25  # Specialization with no focus asked
BEGINNER_HIGH_FREQUENCY_PENALTY: Final[int] = 8  # Beginner on > 5 days
SHORT_SESSION_HIGH_FREQUENCY_PENALTY: Final[int] = 6  # Short sessions on > 4 days

# Guided set adjustments
GUIDED_SETS_MIN: Final[int] = 1
GUIDED_SETS_MAX: Final[int] = 6
