"""Program designer commands: recommend."""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer

from ...core.config_loader import load_split_templates
from ...core.models import ProgramDesignAnswers, SplitTemplate
from ...core.program_designer import (
    EXPERIENCE_LABELS,
    FOCUS_LABELS,
    SESSION_LABELS,
    build_guided_template,
    rank_program_templates,
)
from .. import views
from ..app import JsonOption, app

EQUIPMENT_PROFILES = ("full_gym", "limited_gym", "minimal")


def _template_to_dict(template: SplitTemplate) -> dict:
    return {
        "name": template.name,
        "description": template.description,
        "days_per_week": template.days_per_week,
        "days": [
            {
                "day_name": day.day_name,
                "muscle_groups": list(day.muscle_groups),
                "exercises": [
                    {
                        "name": e.name,
                        "sets": e.sets,
                        "reps_min": e.reps_min,
                        "reps_max": e.reps_max,
                    }
                    for e in day.exercises
                ],
            }
            for day in template.days
        ],
    }


@app.command()
def recommend(
    days_per_week: Annotated[int, typer.Option("--days", "-d", help="Training days per week (1-7)")] = 4,
    focus: Annotated[str, typer.Option("--focus", "-f", help=", ".join(FOCUS_LABELS))] = "no_focus",
    equipment: Annotated[
        str,
        typer.Option("--equipment", "-e", help=", ".join(EQUIPMENT_PROFILES)),
    ] = "full_gym",
    session_length: Annotated[
        str,
        typer.Option("--session", "-s", help=", ".join(SESSION_LABELS)),
    ] = "moderate",
    experience: Annotated[
        str,
        typer.Option("--experience", "-x", help=", ".join(EXPERIENCE_LABELS)),
    ] = "intermediate",
    templates_path: Annotated[
        Optional[Path],
        typer.Option("--templates", "-t", help="YAML file adding or replacing split templates"),
    ] = None,
    json_out: JsonOption = False,
) -> None:
    """
    Recommend a split template and tailor its set counts.
    """
    choices = (
        ("--focus", focus, FOCUS_LABELS),
        ("--equipment", equipment, EQUIPMENT_PROFILES),
        ("--session", session_length, SESSION_LABELS),
        ("--experience", experience, EXPERIENCE_LABELS),
    )
    for flag, value, allowed in choices:
        if value not in allowed:
            views.print_error(f"{flag} must be one of: {', '.join(allowed)}")
            raise typer.Exit(1)
    if not 1 <= days_per_week <= 7:
        views.print_error("--days must be between 1 and 7")
        raise typer.Exit(1)

    answers = ProgramDesignAnswers(
        days_per_week=days_per_week,
        focus=focus,  # type: ignore[arg-type]
        equipment=equipment,  # type: ignore[arg-type]
        session_length=session_length,  # type: ignore[arg-type]
        experience=experience,  # type: ignore[arg-type]
    )

    ranked = rank_program_templates(load_split_templates(templates_path), answers)
    if not ranked:
        views.print_error("No split templates available")
        raise typer.Exit(1)

    base, score = ranked[0]
    guided = build_guided_template(base, answers)

    if json_out:
        print(json.dumps({
            "base_template": base.name,
            "score": score,
            "template": _template_to_dict(guided),
        }, indent=2))
        return

    views.print_template(guided)
    views.print_info(f"Based on {base.name} (score {score})")
