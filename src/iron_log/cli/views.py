"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of comparison, volume, schedule and
nutrition results.
"""

from datetime import date, timedelta

from rich.console import Console
from rich.table import Table

from ..core.config import MUSCLE_GROUP_LABELS
from ..core.models import (
    MacroTargets,
    MuscleVolume,
    PlanSchedule,
    SetPerformanceResult,
    SetRangeNotes,
    SplitDay,
    SplitTemplate,
)
from ..core.performance import format_number
from ..core.program_designer import total_sets
from ..core.schedule import planned_day_for_date, sunday_weekday

console = Console()

WEEKDAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

RESULT_STYLES: dict[str, str] = {
    "beat": "bold green",
    "matched": "cyan",
    "below": "red",
    "unknown": "dim",
}

STATUS_STYLES: dict[str, str] = {
    "below_mev": "red",
    "mev_mav": "yellow",
    "mav": "green",
    "approaching_mrv": "magenta",
    "above_mrv": "bold red",
}


def weekday_label(day: int) -> str:
    return WEEKDAY_NAMES[day % 7]


def muscle_label(muscle_group: str) -> str:
    return MUSCLE_GROUP_LABELS.get(muscle_group, muscle_group.replace("_", " ").title())


def print_comparison(result: SetPerformanceResult, target_label: str) -> None:
    """Print a set comparison verdict with the previous set as context."""
    style = RESULT_STYLES[result]
    suffix = f"  (previous: {target_label})" if target_label else ""
    console.print(f"[{style}]{result}[/{style}]{suffix}")


def print_set_range(parsed: SetRangeNotes) -> None:
    """Print a decoded set range and its base notes."""
    console.print(
        f"Sets: [bold]{parsed.min_sets}[/bold]–[bold]{parsed.max_sets}[/bold]"
        f" (target {parsed.target_sets})"
    )
    if parsed.base_notes:
        console.print(f"Notes: {parsed.base_notes}")


def format_volume_table(volumes: list[MuscleVolume]) -> Table:
    """
    Create a Rich table of weekly volume against landmarks.

    Args:
        volumes: Per-muscle weekly volume

    Returns:
        Rich Table object
    """
    table = Table(title="Weekly Volume")

    table.add_column("Muscle", style="cyan")
    table.add_column("Sets", justify="right", style="bold")
    table.add_column("MEV", justify="right")
    table.add_column("MAV", justify="right")
    table.add_column("MRV", justify="right")
    table.add_column("Status")

    for v in volumes:
        lm = v.landmark
        style = STATUS_STYLES[v.status]
        table.add_row(
            muscle_label(v.muscle_group),
            format_number(v.weekly_sets),
            format_number(lm.mev) if lm else "-",
            f"{format_number(lm.mav_low)}–{format_number(lm.mav_high)}" if lm else "-",
            format_number(lm.mrv) if lm else "-",
            f"[{style}]{v.status}[/{style}]",
        )

    return table


def print_volume(volumes: list[MuscleVolume]) -> None:
    """Print weekly volume table, or a note when nothing was logged."""
    if not volumes:
        console.print("[yellow]No completed sets this week.[/yellow]")
        return
    console.print(format_volume_table(volumes))


def print_recommendation(muscle_group: str, weekly_sets: float, status: str, message: str) -> None:
    style = STATUS_STYLES[status]
    console.print(
        f"{muscle_label(muscle_group)}: {format_number(weekly_sets)} sets → "
        f"[{style}]{status}[/{style}]"
    )
    console.print(f"  {message}")


def print_weekdays(weekdays: list[int]) -> None:
    console.print("Training days: " + ", ".join(weekday_label(d) for d in weekdays))


def print_schedule(schedule: PlanSchedule, split_days: list[SplitDay], weeks: int = 1) -> None:
    """
    Print a schedule and the upcoming training days.

    Args:
        schedule: Stored plan schedule
        split_days: Split days in split order (may be empty)
        weeks: How many weeks from start_date to list (fixed mode)
    """
    console.print(f"[bold]{schedule.split_id}[/bold]: {schedule.mode} plan from {schedule.start_date}")
    if schedule.mode == "flex":
        console.print(f"Next day index offset: {schedule.anchor_day or 0}")
        return

    print_weekdays(schedule.weekdays)
    if not split_days:
        return

    table = Table(title="Upcoming")
    table.add_column("Date", style="cyan")
    table.add_column("Day")
    table.add_column("Session", style="bold")

    start = date.fromisoformat(schedule.start_date)
    for offset in range(7 * weeks):
        day = start + timedelta(days=offset)
        planned = planned_day_for_date(day, split_days, schedule, 0)
        if planned is None:
            continue
        table.add_row(day.isoformat(), weekday_label(sunday_weekday(day)), planned.day_name)

    console.print(table)


def print_template(template: SplitTemplate) -> None:
    """Print a split template, one table per day."""
    console.print(f"[bold]{template.name}[/bold]")
    if template.description:
        console.print(template.description)

    for day in template.days:
        table = Table(title=f"{day.day_name} ({total_sets(day)} sets)")
        table.add_column("Exercise", style="cyan")
        table.add_column("Sets", justify="right", style="bold")
        table.add_column("Reps", justify="right")
        for exercise in day.exercises:
            table.add_row(
                exercise.name,
                str(exercise.sets),
                f"{exercise.reps_min}–{exercise.reps_max}",
            )
        console.print(table)


def format_macro_table(targets: MacroTargets) -> Table:
    """Create a Rich table of daily nutrition targets."""
    table = Table(title="Daily Targets")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="bold")

    table.add_row("Calories", f"{targets.calories} kcal")
    table.add_row("Protein", f"{targets.protein} g")
    table.add_row("Carbs", f"{targets.carbs} g")
    table.add_row("Fat", f"{targets.fat} g")
    table.add_row("TDEE", f"{targets.tdee} kcal")
    table.add_row("BMR", f"{targets.bmr} kcal")
    return table


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")
