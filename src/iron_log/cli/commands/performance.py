"""Performance commands: compare, e1rm."""

import json
from typing import Annotated

import typer

from ...core.performance import (
    calculate_e1rm,
    compare_set_performance,
    format_number,
    format_set_performance_target,
)
from ...io.serializers import ValidationError, parse_set_string
from .. import views
from ..app import JsonOption, app


@app.command()
def compare(
    current: Annotated[str, typer.Argument(help="Set just logged, e.g. 185x9")],
    previous: Annotated[str, typer.Argument(help="Same set last session, e.g. 185x8")],
    json_out: JsonOption = False,
) -> None:
    """
    Compare a set against the same set from last session.
    """
    try:
        current_set = parse_set_string(current)
        previous_set = parse_set_string(previous)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    result = compare_set_performance(current_set, previous_set)
    target = format_set_performance_target(previous_set)

    if json_out:
        current_e1rm = (
            calculate_e1rm(current_set.weight, current_set.reps)
            if current_set.reps is not None
            else None
        )
        print(json.dumps({
            "result": result,
            "previous": target or None,
            "current_e1rm": round(current_e1rm, 2) if current_e1rm is not None else None,
        }, indent=2))
        return

    views.print_comparison(result, target)


@app.command()
def e1rm(
    weight: Annotated[float, typer.Argument(help="Load lifted")],
    reps: Annotated[float, typer.Argument(help="Reps performed")],
    json_out: JsonOption = False,
) -> None:
    """
    Estimate one-rep max with the Epley formula.
    """
    estimate = calculate_e1rm(weight, reps)
    if estimate is None:
        views.print_error("Weight must be >= 0 and reps > 0")
        raise typer.Exit(1)

    if json_out:
        print(json.dumps({"weight": weight, "reps": reps, "e1rm": round(estimate, 2)}, indent=2))
        return

    views.console.print(
        f"{format_number(weight)} × {format_number(reps)} → e1RM [bold]{estimate:.1f}[/bold]"
    )
