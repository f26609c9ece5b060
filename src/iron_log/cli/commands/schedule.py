"""Schedule commands: build, save, show, today."""

import json
from datetime import datetime
from typing import Annotated, Optional

import typer

from ...core.models import PlanSchedule, SplitDay
from ...core.schedule import (
    build_fixed_weekdays,
    default_start_date,
    default_weekdays,
    normalize_weekday_order,
    planned_day_for_date,
)
from ...io.serializers import ValidationError, plan_schedule_to_dict, validate_date
from .. import views
from ..app import JsonOption, SchedulesPathOption, get_store, schedule_app

UserOption = Annotated[str, typer.Option("--user", "-u", help="User ID")]
SplitDaysOption = Annotated[
    Optional[str],
    typer.Option("--days", help="Comma-separated split day names in order, e.g. Push,Pull,Legs"),
]


def _split_days(days: str | None) -> list[SplitDay]:
    if not days:
        return []
    names = [n.strip() for n in days.split(",") if n.strip()]
    return [SplitDay(day_id=str(i), day_name=name) for i, name in enumerate(names, 1)]


def _parse_weekdays(raw: str) -> list[int]:
    try:
        return normalize_weekday_order(int(p) for p in raw.split(",") if p.strip())
    except ValueError as e:
        raise ValidationError(f"Invalid weekdays: {raw!r}. Use e.g. 1,3,5 (0=Sunday)") from e


@schedule_app.command("build")
def build(
    anchor_day: Annotated[int, typer.Argument(help="First training weekday (0=Sunday .. 6=Saturday)")],
    days_per_week: Annotated[int, typer.Argument(help="Training days per week (1-7)")],
    json_out: JsonOption = False,
) -> None:
    """
    Show the fixed weekdays for an anchor day and frequency.
    """
    weekdays = build_fixed_weekdays(anchor_day, days_per_week)

    if json_out:
        print(json.dumps({"weekdays": weekdays}))
        return

    views.print_weekdays(weekdays)


@schedule_app.command("save")
def save(
    split_id: Annotated[str, typer.Argument(help="Split ID")],
    user_id: UserOption = "local",
    mode: Annotated[str, typer.Option("--mode", "-m", help="fixed or flex")] = "fixed",
    days_per_week: Annotated[int, typer.Option("--per-week", help="Training days per week")] = 3,
    anchor_day: Annotated[
        Optional[int],
        typer.Option("--anchor", "-a", help="First training weekday (0=Sunday)"),
    ] = None,
    weekdays: Annotated[
        Optional[str],
        typer.Option("--weekdays", help="Explicit weekdays, e.g. 1,3,5 (overrides --anchor)"),
    ] = None,
    start_date: Annotated[
        Optional[str],
        typer.Option("--start-date", help="Plan start (YYYY-MM-DD), default today"),
    ] = None,
    schedules_path: SchedulesPathOption = None,
) -> None:
    """
    Store a plan schedule for a split.

    Fixed mode takes --weekdays, or --anchor with --per-week, or falls
    back to the default weekdays for --per-week.
    """
    if mode not in ("fixed", "flex"):
        views.print_error(f"Invalid mode: {mode}. Use 'fixed' or 'flex'")
        raise typer.Exit(1)

    try:
        start = validate_date(start_date) if start_date else default_start_date()
        if mode == "flex":
            days: list[int] = []
        elif weekdays:
            days = _parse_weekdays(weekdays)
        elif anchor_day is not None:
            days = build_fixed_weekdays(anchor_day, days_per_week)
        else:
            days = default_weekdays(days_per_week)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if mode == "fixed" and not days:
        views.print_error("A fixed schedule needs at least one weekday")
        raise typer.Exit(1)

    if anchor_day is not None:
        anchor = anchor_day % 7
    else:
        anchor = days[0] if days else 0

    schedule = PlanSchedule(
        split_id=split_id,
        start_date=start,
        mode=mode,  # type: ignore[arg-type]
        weekdays=days,
        anchor_day=anchor,
    )
    store = get_store(schedules_path)
    store.save(user_id, schedule)
    views.print_success(f"Saved {mode} schedule for '{split_id}' to {store.schedules_path}")
    if days:
        views.print_weekdays(days)


@schedule_app.command("show")
def show(
    split_id: Annotated[str, typer.Argument(help="Split ID")],
    user_id: UserOption = "local",
    days: SplitDaysOption = None,
    weeks: Annotated[int, typer.Option("--weeks", "-w", help="Weeks to list")] = 1,
    schedules_path: SchedulesPathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show a stored plan schedule.
    """
    store = get_store(schedules_path)
    schedule = store.load(user_id, split_id)
    if schedule is None:
        views.print_error(f"No schedule stored for '{split_id}'")
        views.print_info("Run 'schedule save' first.")
        raise typer.Exit(1)

    if json_out:
        print(json.dumps(plan_schedule_to_dict(schedule), indent=2))
        return

    views.print_schedule(schedule, _split_days(days), weeks=max(1, weeks))


@schedule_app.command("today")
def today(
    split_id: Annotated[str, typer.Argument(help="Split ID")],
    days: SplitDaysOption = None,
    user_id: UserOption = "local",
    on_date: Annotated[
        Optional[str],
        typer.Option("--date", "-d", help="Date to check (YYYY-MM-DD), default today"),
    ] = None,
    completed: Annotated[
        int,
        typer.Option("--completed", "-c", help="Workouts completed since the plan started (flex)"),
    ] = 0,
    schedules_path: SchedulesPathOption = None,
) -> None:
    """
    Show which split day is planned for a date.
    """
    store = get_store(schedules_path)
    schedule = store.load(user_id, split_id)
    if schedule is None:
        views.print_error(f"No schedule stored for '{split_id}'")
        raise typer.Exit(1)

    split_days = _split_days(days)
    if not split_days:
        views.print_error("Pass the split day names with --days")
        raise typer.Exit(1)

    try:
        day = (
            datetime.strptime(validate_date(on_date), "%Y-%m-%d").date()
            if on_date
            else datetime.now().date()
        )
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    planned = planned_day_for_date(day, split_days, schedule, max(0, completed))
    if planned is None:
        views.print_info(f"{day.isoformat()}: rest day")
        return
    views.console.print(f"{day.isoformat()}: [bold]{planned.day_name}[/bold]")
