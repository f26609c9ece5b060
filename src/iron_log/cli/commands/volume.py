"""Volume commands: classify, week."""

import json
from datetime import datetime
from pathlib import Path
from typing import Annotated, Optional

import typer

from ...core.config_loader import load_volume_landmarks
from ...core.models import VolumeLandmark
from ...core.volume import (
    build_muscle_volumes,
    calculate_weekly_volume,
    get_volume_recommendation,
    validate_landmark,
)
from ...io.serializers import ValidationError, dict_to_volume_set, validate_date
from .. import views
from ..app import JsonOption, volume_app

LandmarksOption = Annotated[
    Optional[Path],
    typer.Option("--landmarks", "-l", help="YAML file overriding the bundled landmarks"),
]


def _load_sets(log_path: Path) -> list:
    """Read a JSONL set log, one set record per line."""
    sets = []
    with open(log_path, "r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue
            try:
                sets.append(dict_to_volume_set(json.loads(line)))
            except json.JSONDecodeError as e:
                raise ValidationError(f"{log_path}:{line_no}: invalid JSON ({e.msg})") from e
            except ValidationError as e:
                raise ValidationError(f"{log_path}:{line_no}: {e}") from e
    return sets


@volume_app.command("classify")
def classify(
    muscle_group: Annotated[str, typer.Argument(help="Muscle group, e.g. chest")],
    weekly_sets: Annotated[float, typer.Argument(help="Completed sets this week")],
    landmarks_path: LandmarksOption = None,
    mev: Annotated[Optional[float], typer.Option("--mev")] = None,
    mav_low: Annotated[Optional[float], typer.Option("--mav-low")] = None,
    mav_high: Annotated[Optional[float], typer.Option("--mav-high")] = None,
    mrv: Annotated[Optional[float], typer.Option("--mrv")] = None,
    json_out: JsonOption = False,
) -> None:
    """
    Classify one muscle group's weekly sets against its landmark.

    Pass all of --mev/--mav-low/--mav-high/--mrv to use ad-hoc thresholds.
    """
    explicit = (mev, mav_low, mav_high, mrv)
    if any(v is not None for v in explicit):
        if any(v is None for v in explicit):
            views.print_error("Give all of --mev, --mav-low, --mav-high and --mrv, or none")
            raise typer.Exit(1)
        try:
            landmark = validate_landmark(
                VolumeLandmark(muscle_group, mev, mav_low, mav_high, mrv)  # type: ignore[arg-type]
            )
        except ValueError as e:
            views.print_error(str(e))
            raise typer.Exit(1)
    else:
        landmark = load_volume_landmarks(landmarks_path).get(muscle_group)
        if landmark is None:
            views.print_error(f"No landmark for muscle group: {muscle_group}")
            raise typer.Exit(1)

    recommendation = get_volume_recommendation(weekly_sets, landmark)

    if json_out:
        print(json.dumps({
            "muscle_group": muscle_group,
            "weekly_sets": weekly_sets,
            "status": recommendation.status,
            "message": recommendation.message,
        }, indent=2))
        return

    views.print_recommendation(
        muscle_group, weekly_sets, recommendation.status, recommendation.message
    )


@volume_app.command("week")
def week(
    log_path: Annotated[Path, typer.Argument(help="JSONL log of sets (date, muscle_group, ...)")],
    week_of: Annotated[
        Optional[str],
        typer.Option("--week-of", "-w", help="Any date in the week (YYYY-MM-DD), default today"),
    ] = None,
    landmarks_path: LandmarksOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Total one week's completed sets per muscle group and classify them.
    """
    if not log_path.exists():
        views.print_error(f"Set log not found: {log_path}")
        raise typer.Exit(1)

    try:
        day = datetime.strptime(validate_date(week_of), "%Y-%m-%d").date() if week_of else datetime.now().date()
        sets = _load_sets(log_path)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    weekly = calculate_weekly_volume(sets, day)
    volumes = build_muscle_volumes(weekly, load_volume_landmarks(landmarks_path))

    if json_out:
        print(json.dumps({
            "week_of": day.isoformat(),
            "muscles": [
                {"muscle_group": v.muscle_group, "weekly_sets": v.weekly_sets, "status": v.status}
                for v in volumes
            ],
        }, indent=2))
        return

    views.print_volume(volumes)
