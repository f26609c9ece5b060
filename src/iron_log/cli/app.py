"""Shared Typer app objects, shared option types, and store utility."""

from pathlib import Path
from typing import Annotated, Optional

import typer

from ..io.schedule_store import ScheduleStore, get_default_schedules_path

# Shared --json option type used across commands
JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]

# Shared --schedules-path option type for schedule commands
SchedulesPathOption = Annotated[
    Optional[Path],
    typer.Option("--schedules-path", "-p", help="Path to schedules JSON file"),
]

app = typer.Typer(
    name="iron-log",
    help="Training split and nutrition tracker: set comparison, set ranges, volume landmarks, schedules.",
    no_args_is_help=True,
)

set_range_app = typer.Typer(help="Encode / decode set ranges stored in exercise notes.")
volume_app = typer.Typer(help="Weekly volume against MEV / MAV / MRV landmarks.")
schedule_app = typer.Typer(help="Fixed and flex weekly training schedules.")

app.add_typer(set_range_app, name="set-range")
app.add_typer(volume_app, name="volume")
app.add_typer(schedule_app, name="schedule")


def get_store(schedules_path: Path | None) -> ScheduleStore:
    """Get schedule store from path or default location."""
    if schedules_path is None:
        schedules_path = get_default_schedules_path()
    return ScheduleStore(schedules_path)
