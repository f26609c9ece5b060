"""Set-range commands: parse, serialize."""

import json
from typing import Annotated, Optional

import typer

from ...core.set_range import parse_set_range_notes, serialize_set_range_notes
from .. import views
from ..app import JsonOption, set_range_app


@set_range_app.command("parse")
def parse(
    notes: Annotated[str, typer.Argument(help="Notes text as stored (use \\n for new lines)")],
    target_sets: Annotated[int, typer.Option("--target", "-t", help="Stored target set count")] = 3,
    json_out: JsonOption = False,
) -> None:
    """
    Decode the set range embedded in a notes field.
    """
    parsed = parse_set_range_notes(notes.replace("\\n", "\n"), target_sets)

    if json_out:
        print(json.dumps({
            "min_sets": parsed.min_sets,
            "target_sets": parsed.target_sets,
            "max_sets": parsed.max_sets,
            "base_notes": parsed.base_notes,
        }, indent=2))
        return

    views.print_set_range(parsed)


@set_range_app.command("serialize")
def serialize(
    min_sets: Annotated[int, typer.Option("--min", help="Minimum sets")],
    target_sets: Annotated[int, typer.Option("--target", "-t", help="Target sets")],
    max_sets: Annotated[int, typer.Option("--max", help="Maximum sets")],
    notes: Annotated[
        Optional[str],
        typer.Option("--notes", "-n", help="Existing notes text (use \\n for new lines)"),
    ] = None,
) -> None:
    """
    Write a set range into a notes field and print the result.
    """
    existing = notes.replace("\\n", "\n") if notes is not None else None
    result = serialize_set_range_notes(existing, min_sets, target_sets, max_sets)
    print(result if result is not None else "")
