"""
Daily calorie and macro targets.

  BMR      Mifflin-St Jeor
             male:   10·W + 6.25·H − 5·A + 5
             female: 10·W + 6.25·H − 5·A − 161
  TDEE     BMR × activity multiplier
  Calories TDEE × (1 + goal adjustment), nearest 25 kcal
  Protein  2.2 g/kg on a cut, 1.8 g/kg otherwise
  Fat      max(0.7 g/kg, 22 % (cut) / 25 % of calories), nearest 5 g
  Carbs    remaining calories / 4, floored at 0, nearest 5 g
"""

from __future__ import annotations

from .coercion import round_half_up
from .config import (
    ACTIVITY_MULTIPLIERS,
    CALORIE_ROUNDING,
    CM_PER_INCH,
    FAT_CALORIE_FRACTION_CUT,
    FAT_CALORIE_FRACTION_DEFAULT,
    FAT_FLOOR_G_PER_KG,
    GOAL_CALORIE_ADJUSTMENTS,
    KCAL_PER_G_CARB,
    KCAL_PER_G_FAT,
    KCAL_PER_G_PROTEIN,
    KG_PER_LB,
    MACRO_ROUNDING,
    PROTEIN_G_PER_KG_CUT,
    PROTEIN_G_PER_KG_DEFAULT,
)
from .models import MacroTargets, NutritionAnswers, NutritionGoal, Sex


def round_to(value: float, nearest: int) -> int:
    return round_half_up(value / nearest) * nearest


def calculate_bmr(sex: Sex, weight_kg: float, height_cm: float, age: int) -> float:
    """Mifflin-St Jeor basal metabolic rate (kcal/day)."""
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    return base + 5 if sex == "male" else base - 161


def calculate_protein(weight_kg: float, goal: NutritionGoal) -> int:
    g_per_kg = PROTEIN_G_PER_KG_CUT if goal == "cut" else PROTEIN_G_PER_KG_DEFAULT
    return round_to(weight_kg * g_per_kg, MACRO_ROUNDING)


def calculate_fat(weight_kg: float, target_calories: float, goal: NutritionGoal) -> int:
    floor_grams = weight_kg * FAT_FLOOR_G_PER_KG
    fraction = FAT_CALORIE_FRACTION_CUT if goal == "cut" else FAT_CALORIE_FRACTION_DEFAULT
    from_calories = target_calories * fraction / KCAL_PER_G_FAT
    return round_to(max(floor_grams, from_calories), MACRO_ROUNDING)


def calculate_carbs(target_calories: float, protein_g: float, fat_g: float) -> int:
    remaining = target_calories - protein_g * KCAL_PER_G_PROTEIN - fat_g * KCAL_PER_G_FAT
    return round_to(max(remaining / KCAL_PER_G_CARB, 0), MACRO_ROUNDING)


def calculate_macro_targets(answers: NutritionAnswers) -> MacroTargets:
    """
    Compute daily targets from the nutrition wizard answers.

    Args:
        answers: Metric body measurements, activity level and goal

    Returns:
        MacroTargets with calories, protein, carbs, fat, tdee and bmr
    """
    bmr = calculate_bmr(answers.sex, answers.weight_kg, answers.height_cm, answers.age)
    tdee = bmr * ACTIVITY_MULTIPLIERS[answers.activity]
    adjustment = GOAL_CALORIE_ADJUSTMENTS[answers.goal]
    target_calories = round_to(tdee * (1 + adjustment), CALORIE_ROUNDING)

    protein = calculate_protein(answers.weight_kg, answers.goal)
    fat = calculate_fat(answers.weight_kg, target_calories, answers.goal)
    carbs = calculate_carbs(target_calories, protein, fat)

    return MacroTargets(
        calories=target_calories,
        protein=protein,
        carbs=carbs,
        fat=fat,
        tdee=round_to(tdee, CALORIE_ROUNDING),
        bmr=round_to(bmr, CALORIE_ROUNDING),
    )


# ── Unit conversion ─────────────────────────────────────────────────────────

def lbs_to_kg(lbs: float) -> float:
    return lbs * KG_PER_LB


def kg_to_lbs(kg: float) -> float:
    return kg / KG_PER_LB


def feet_inches_to_cm(feet: float, inches: float) -> float:
    return (feet * 12 + inches) * CM_PER_INCH


def cm_to_feet_inches(cm: float) -> tuple[int, int]:
    """Split a height into whole feet and rounded inches."""
    feet, inches = divmod(round_half_up(cm / CM_PER_INCH), 12)
    return feet, inches
