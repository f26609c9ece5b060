"""
Data models for iron-log.

Value types exchanged between the calculation core, the storage layer and
the CLI. None of them own state beyond the call that builds them.
"""

from dataclasses import dataclass, field
from typing import Literal

from .config import SET_COUNT_MAX, SET_COUNT_MIN

SetPerformanceResult = Literal["beat", "matched", "below", "unknown"]
VolumeStatus = Literal["below_mev", "mev_mav", "mav", "approaching_mrv", "above_mrv"]
PlanMode = Literal["fixed", "flex"]
Sex = Literal["male", "female"]
ActivityLevel = Literal[
    "sedentary", "lightly_active", "moderately_active", "very_active", "extra_active"
]
NutritionGoal = Literal["cut", "maintain", "lean_bulk", "bulk"]
UnitSystem = Literal["metric", "imperial"]
ProgramFocus = Literal["no_focus", "upper_focus", "lower_focus"]
EquipmentProfile = Literal["full_gym", "limited_gym", "minimal"]
SessionLength = Literal["short", "moderate", "long"]
ExperienceLevel = Literal["beginner", "intermediate", "advanced"]

# Weight / reps as they arrive from forms or the backend: numbers,
# numeric strings, or nothing at all.
FlexibleNumber = int | float | str | None


@dataclass
class LoggedSet:
    """
    A single weight × reps observation.

    Fields are kept raw; comparability is decided by the performance
    helpers, not at construction time.
    """

    weight: FlexibleNumber = None
    reps: FlexibleNumber = None


@dataclass(frozen=True)
class SetRange:
    """A normalized (min, target, max) working-set range."""

    min_sets: int
    target_sets: int
    max_sets: int

    def __post_init__(self) -> None:
        """Validate ordering and bounds."""
        if not (
            SET_COUNT_MIN <= self.min_sets <= self.target_sets <= self.max_sets <= SET_COUNT_MAX
        ):
            raise ValueError(
                f"set range must satisfy {SET_COUNT_MIN} <= min <= target <= max <= "
                f"{SET_COUNT_MAX}, got ({self.min_sets}, {self.target_sets}, {self.max_sets})"
            )

    @property
    def is_single_value(self) -> bool:
        """True when the range collapses to a plain target."""
        return self.min_sets == self.target_sets == self.max_sets


@dataclass(frozen=True)
class SetRangeNotes:
    """Set range decoded from a notes field plus the human-written remainder."""

    min_sets: int
    target_sets: int
    max_sets: int
    base_notes: str | None

    @property
    def set_range(self) -> SetRange:
        return SetRange(self.min_sets, self.target_sets, self.max_sets)


@dataclass(frozen=True)
class VolumeLandmark:
    """
    Weekly set landmarks for one muscle group.

    mv (maintenance volume) is stored for display only; classification
    uses the four ascending thresholds mev <= mav_low <= mav_high <= mrv.
    """

    muscle_group: str
    mev: float
    mav_low: float
    mav_high: float
    mrv: float
    mv: float = 0.0


@dataclass(frozen=True)
class VolumeRecommendation:
    """Status of a weekly set count plus its advisory message."""

    status: VolumeStatus
    message: str


@dataclass(frozen=True)
class VolumeSet:
    """A logged set reduced to what weekly volume counting needs."""

    date: str  # ISO date of the parent workout
    muscle_group: str
    secondary_muscle_group: str | None = None
    completed: bool = True


@dataclass(frozen=True)
class MuscleVolume:
    """Weekly volume for one muscle group against its landmark."""

    muscle_group: str
    weekly_sets: float
    status: VolumeStatus
    landmark: VolumeLandmark | None = None


@dataclass
class SplitDay:
    """One day of a training split, in split order."""

    day_id: str
    day_name: str
    exercises: list[str] = field(default_factory=list)


@dataclass
class PlanSchedule:
    """
    How a split is laid out over the calendar.

    fixed: trains on the listed weekdays (0=Sunday..6=Saturday); the n-th
           listed weekday runs split day n (cycled).
    flex:  runs split days back to back regardless of weekday, offset by
           anchor_day.
    """

    split_id: str
    start_date: str
    mode: PlanMode
    weekdays: list[int] = field(default_factory=list)
    anchor_day: int | None = None


@dataclass
class NutritionAnswers:
    """Inputs to the macro target calculator (always metric)."""

    sex: Sex
    age: int
    height_cm: float
    weight_kg: float
    activity: ActivityLevel
    goal: NutritionGoal
    unit_system: UnitSystem = "metric"

    def __post_init__(self) -> None:
        """Validate body measurements."""
        if self.age <= 0:
            raise ValueError("age must be positive")
        if self.height_cm <= 0:
            raise ValueError("height_cm must be positive")
        if self.weight_kg <= 0:
            raise ValueError("weight_kg must be positive")


@dataclass(frozen=True)
class MacroTargets:
    """Daily calorie and macro targets (kcal and grams)."""

    calories: int
    protein: int
    carbs: int
    fat: int
    tdee: int
    bmr: int


@dataclass(frozen=True)
class TemplateExercise:
    """One prescribed exercise inside a split template day."""

    name: str
    sets: int
    reps_min: int
    reps_max: int


@dataclass(frozen=True)
class TemplateDay:
    """One day of a split template."""

    day_name: str
    muscle_groups: tuple[str, ...] = ()
    exercises: tuple[TemplateExercise, ...] = ()


@dataclass(frozen=True)
class SplitTemplate:
    """
    A ready-made training split.

    evidence_label is set for templates backed by the research summary;
    the program designer prefers those.
    """

    name: str
    description: str
    days_per_week: int
    days: tuple[TemplateDay, ...] = ()
    evidence_label: str | None = None

    def __post_init__(self) -> None:
        """Validate frequency."""
        if not 1 <= self.days_per_week <= 7:
            raise ValueError(f"days_per_week must be 1-7, got {self.days_per_week}")


@dataclass(frozen=True)
class ProgramDesignAnswers:
    """Answers to the program designer questionnaire."""

    days_per_week: int
    focus: ProgramFocus = "no_focus"
    equipment: EquipmentProfile = "full_gym"
    session_length: SessionLength = "moderate"
    experience: ExperienceLevel = "intermediate"
