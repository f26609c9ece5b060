"""Nutrition commands: macros."""

import json
from typing import Annotated, Optional

import typer

from ...core.config import ACTIVITY_MULTIPLIERS, GOAL_CALORIE_ADJUSTMENTS
from ...core.models import NutritionAnswers
from ...core.nutrition import calculate_macro_targets, feet_inches_to_cm, lbs_to_kg
from .. import views
from ..app import JsonOption, app


@app.command()
def macros(
    sex: Annotated[str, typer.Option("--sex", help="male or female")],
    age: Annotated[int, typer.Option("--age", help="Age in years")],
    weight: Annotated[float, typer.Option("--weight", help="Bodyweight (kg, or lb with --imperial)")],
    height: Annotated[
        Optional[float],
        typer.Option("--height", help="Height in cm (metric)"),
    ] = None,
    feet: Annotated[Optional[int], typer.Option("--feet", help="Height feet (imperial)")] = None,
    inches: Annotated[float, typer.Option("--inches", help="Height inches (imperial)")] = 0.0,
    activity: Annotated[
        str,
        typer.Option("--activity", "-a", help=", ".join(ACTIVITY_MULTIPLIERS)),
    ] = "moderately_active",
    goal: Annotated[
        str,
        typer.Option("--goal", "-g", help=", ".join(GOAL_CALORIE_ADJUSTMENTS)),
    ] = "maintain",
    imperial: Annotated[bool, typer.Option("--imperial", help="Weight in lb, height in ft/in")] = False,
    json_out: JsonOption = False,
) -> None:
    """
    Calculate daily calorie and macro targets.
    """
    if sex not in ("male", "female"):
        views.print_error("--sex must be 'male' or 'female'")
        raise typer.Exit(1)
    if activity not in ACTIVITY_MULTIPLIERS:
        views.print_error(f"Unknown activity level: {activity}")
        raise typer.Exit(1)
    if goal not in GOAL_CALORIE_ADJUSTMENTS:
        views.print_error(f"Unknown goal: {goal}")
        raise typer.Exit(1)

    if imperial:
        if feet is None:
            views.print_error("--feet is required with --imperial")
            raise typer.Exit(1)
        weight_kg = lbs_to_kg(weight)
        height_cm = feet_inches_to_cm(feet, inches)
    else:
        if height is None:
            views.print_error("--height is required")
            raise typer.Exit(1)
        weight_kg = weight
        height_cm = height

    try:
        answers = NutritionAnswers(
            sex=sex,  # type: ignore[arg-type]
            age=age,
            height_cm=height_cm,
            weight_kg=weight_kg,
            activity=activity,  # type: ignore[arg-type]
            goal=goal,  # type: ignore[arg-type]
            unit_system="imperial" if imperial else "metric",
        )
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    targets = calculate_macro_targets(answers)

    if json_out:
        print(json.dumps({
            "calories": targets.calories,
            "protein": targets.protein,
            "carbs": targets.carbs,
            "fat": targets.fat,
            "tdee": targets.tdee,
            "bmr": targets.bmr,
        }, indent=2))
        return

    views.console.print(views.format_macro_table(targets))
