"""Command-line interface for the habit and sleep tracker.

Built with Typer for commands and Rich for output.
"""

import logging
from datetime import date
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..utils import format_hour
from .config import get_config
from .db import get_db

# Create the main app
app = typer.Typer(
    name="dailyrhythm",
    help="Track your habits and sleep.",
    no_args_is_help=True,
)

# Create sub-apps for command groups
habit_app = typer.Typer(help="Create habits and mark daily completions.")
app.add_typer(habit_app, name="habit")

sleep_app = typer.Typer(help="Log sleep and view sleep graphs.")
app.add_typer(sleep_app, name="sleep")

# Rich console for pretty output
console = Console()


# ============================================================================
# Helper Functions
# ============================================================================


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[dim]{message}[/dim]")


def fail(message: str) -> None:
    """Print an error and exit with status 1."""
    print_error(message)
    raise typer.Exit(1)


def validation_message(error: ValidationError) -> str:
    """Flatten a pydantic error into one line."""
    parts = []
    for item in error.errors():
        location = ".".join(str(loc) for loc in item["loc"])
        parts.append(f"{location}: {item['msg']}" if location else item["msg"])
    return "; ".join(parts)


def parse_day(value: Optional[str]) -> Optional[date]:
    """Parse a YYYY-MM-DD option value."""
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        fail(f"Invalid date: {value}. Use YYYY-MM-DD")


@app.callback()
def main_callback() -> None:
    """Track your habits and sleep."""
    logging.basicConfig(
        level=get_config().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ============================================================================
# Habit Commands
# ============================================================================


@habit_app.command("add")
def habit_add(
    name: str = typer.Argument(..., help="Habit name"),
    category: str = typer.Option("General", "--category", "-c", help="Category"),
    icon: str = typer.Option("check", "--icon", "-i", help="Icon name"),
    color: str = typer.Option("#22c55e", "--color", help="Hex colour, e.g. #22c55e"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="Description"),
) -> None:
    """Create a new habit."""
    from .habits import HabitCreate, HabitManager

    try:
        data = HabitCreate(
            name=name,
            category=category,
            icon=icon,
            color=color,
            description=description,
        )
    except ValidationError as e:
        fail(validation_message(e))

    habit = HabitManager(get_db()).create_habit(data)
    print_success(f"Added habit: {habit.name}")
    print_info(f"ID: {habit.id}")


@habit_app.command("list")
def habit_list() -> None:
    """List habits with today's status and current streak."""
    from .habits import HabitManager

    summaries = HabitManager(get_db()).get_summaries()

    if not summaries:
        print_info("No habits yet. Add one with 'dailyrhythm habit add'.")
        return

    table = Table(title="Habits", show_header=True, header_style="bold magenta")
    table.add_column("ID", style="dim", max_width=8)
    table.add_column("Name", style="cyan")
    table.add_column("Category", style="green")
    table.add_column("Today", justify="center")
    table.add_column("Streak", justify="right")
    table.add_column("Best", justify="right")

    for summary in summaries:
        table.add_row(
            summary.id[:8],
            f"[{summary.color}]●[/] {summary.name}",
            summary.category,
            "[green]Done[/green]" if summary.completed_today else "-",
            f"{summary.current_streak} days",
            str(summary.longest_streak),
        )

    console.print(table)


@habit_app.command("show")
def habit_show(
    habit_id: str = typer.Argument(..., help="Habit ID"),
    as_json: bool = typer.Option(False, "--json", help="Print as JSON"),
) -> None:
    """Show a habit and its completion history."""
    from .habits import HabitManager, HabitResponse

    manager = HabitManager(get_db())
    habit = manager.get_habit(habit_id)
    if not habit:
        fail(f"Habit not found: {habit_id}")

    if as_json:
        console.print_json(HabitResponse.model_validate(habit).model_dump_json())
        return

    summary = manager.summarize(habit)
    content = [
        f"[bold]{habit.name}[/bold] ({habit.category}, {habit.icon})",
        habit.description or "[dim]No description[/dim]",
        "",
        f"Current Streak: {summary.current_streak} days",
        f"Longest Streak: {summary.longest_streak} days",
        f"Total Completions: {summary.total_completions}",
    ]
    console.print(Panel("\n".join(content), title=f"[{habit.color}]Habit[/]"))


@habit_app.command("edit")
def habit_edit(
    habit_id: str = typer.Argument(..., help="Habit ID"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="New name"),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="New category"),
    icon: Optional[str] = typer.Option(None, "--icon", "-i", help="New icon"),
    color: Optional[str] = typer.Option(None, "--color", help="New hex colour"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="New description"),
) -> None:
    """Edit a habit."""
    from .habits import HabitManager, HabitUpdate

    fields = {
        "name": name,
        "category": category,
        "icon": icon,
        "color": color,
        "description": description,
    }
    try:
        data = HabitUpdate(**{k: v for k, v in fields.items() if v is not None})
    except ValidationError as e:
        fail(validation_message(e))

    try:
        habit = HabitManager(get_db()).update_habit(habit_id, data)
    except ValueError as e:
        fail(str(e))

    print_success(f"Updated habit: {habit.name}")


@habit_app.command("delete")
def habit_delete(
    habit_id: str = typer.Argument(..., help="Habit ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a habit and all its completions."""
    from .habits import HabitManager

    if not yes and not typer.confirm("Delete this habit and its history?"):
        print_info("Cancelled.")
        raise typer.Exit(0)

    if not HabitManager(get_db()).delete_habit(habit_id):
        fail(f"Habit not found: {habit_id}")

    print_success("Habit deleted")


@habit_app.command("done")
def habit_done(
    habit_id: str = typer.Argument(..., help="Habit ID"),
    date_str: Optional[str] = typer.Option(None, "--date", "-d", help="Date (YYYY-MM-DD)"),
) -> None:
    """Toggle a habit's completion for today (or --date)."""
    from .habits import HabitManager

    day = parse_day(date_str) or date.today()
    manager = HabitManager(get_db())

    try:
        completed = manager.toggle_completion(habit_id, day)
    except ValueError as e:
        fail(str(e))

    streak = manager.get_streak(habit_id)
    if completed:
        console.print(Panel(
            f"Marked {day.isoformat()} as done\n\nCurrent Streak: {streak} days",
            title="[green]Habit Completed[/green]",
        ))
    else:
        console.print(Panel(
            f"Unmarked {day.isoformat()}\n\nCurrent Streak: {streak} days",
            title="[yellow]Completion Removed[/yellow]",
        ))


@habit_app.command("grid")
def habit_grid(
    habit_id: str = typer.Argument(..., help="Habit ID"),
    dark: bool = typer.Option(False, "--dark", help="Use dark-theme colours"),
) -> None:
    """Show a heat grid of recent days."""
    from .habits import HabitManager

    try:
        grid = HabitManager(get_db()).get_grid(habit_id, dark=dark)
    except ValueError as e:
        fail(str(e))

    text = Text()
    for row in grid.cells:
        for cell in row:
            text.append("■", style=grid.color if cell.completed else grid.muted_color)
        text.append("\n")

    console.print(Panel(
        text,
        title=f"{grid.start_date.isoformat()} to {grid.end_date.isoformat()}",
        subtitle=f"{grid.completed_count} days completed",
    ))


# ============================================================================
# Sleep Commands
# ============================================================================


@sleep_app.command("log")
def sleep_log(
    start: str = typer.Argument(..., help="Start (ISO date-time, e.g. 2025-01-01T22:00)"),
    end: str = typer.Argument(..., help="End (ISO date-time)"),
) -> None:
    """Log a sleep session. Times without an offset are read as UTC."""
    from .sleep import SleepEntryCreate, SleepManager

    try:
        data = SleepEntryCreate(start=start, end=end)
    except ValidationError as e:
        fail(validation_message(e))

    entry = SleepManager(get_db()).log_sleep(data)
    print_success(f"Logged {entry.hours:.1f} hours of sleep")
    print_info(f"ID: {entry.id}")


@sleep_app.command("list")
def sleep_list(
    from_str: Optional[str] = typer.Option(None, "--from", help="First day (YYYY-MM-DD)"),
    to_str: Optional[str] = typer.Option(None, "--to", help="Last day (YYYY-MM-DD)"),
    as_json: bool = typer.Option(False, "--json", help="Print as JSON"),
) -> None:
    """List sleep entries."""
    from .sleep import SleepEntryResponse, SleepManager

    manager = SleepManager(get_db())
    entries = manager.list_entries(parse_day(from_str), parse_day(to_str))

    if as_json:
        console.print_json(data=[
            SleepEntryResponse.model_validate(entry).model_dump(mode="json")
            for entry in entries
        ])
        return

    if not entries:
        print_info("No sleep entries")
        return

    table = Table(title="Sleep Entries")
    table.add_column("ID", style="dim", max_width=8)
    table.add_column("Day")
    table.add_column("Start")
    table.add_column("End")
    table.add_column("Hours", justify="right")

    for entry in entries:
        table.add_row(
            entry.id[:8],
            entry.start.strftime("%A"),
            entry.start.strftime("%Y-%m-%d %H:%M"),
            entry.end.strftime("%Y-%m-%d %H:%M"),
            f"{entry.hours:.1f}",
        )

    console.print(table)

    summary = manager.get_summary(entries)
    console.print(
        f"Average: {summary.average_hours:.1f} hours  "
        f"Last: {summary.last_hours:.1f} hours  "
        f"Quality: {summary.quality}"
    )


@sleep_app.command("delete")
def sleep_delete(
    entry_id: str = typer.Argument(..., help="Sleep entry ID"),
) -> None:
    """Delete a sleep entry."""
    from .sleep import SleepManager

    if not SleepManager(get_db()).delete_entry(entry_id):
        fail(f"Sleep entry not found: {entry_id}")

    print_success("Sleep entry deleted")


@sleep_app.command("graph")
def sleep_graph(
    from_str: Optional[str] = typer.Option(None, "--from", help="First day (YYYY-MM-DD)"),
    to_str: Optional[str] = typer.Option(None, "--to", help="Last day (YYYY-MM-DD)"),
    show_empty: bool = typer.Option(False, "--all", help="Include days without sleep"),
) -> None:
    """Show merged sleep intervals per day."""
    from .sleep import SleepManager

    try:
        graph = SleepManager(get_db()).get_graph(parse_day(from_str), parse_day(to_str))
    except ValueError as e:
        fail(str(e))

    table = Table(
        title=f"Sleep {graph.start_date.isoformat()} to {graph.end_date.isoformat()}",
        caption=f"Average: {graph.average_sleep:.1f} hours/day",
    )
    table.add_column("Date")
    table.add_column("Intervals")
    table.add_column("Total", justify="right")

    for day in graph.days:
        if not day.has_data and not show_empty:
            continue
        spans = ", ".join(
            f"{format_hour(i.start)} - {format_hour(i.end)}" for i in day.intervals
        )
        table.add_row(day.date.isoformat(), spans or "-", f"{day.total_sleep:.1f}")

    console.print(table)


# ============================================================================
# Dashboard
# ============================================================================


@app.command()
def dashboard() -> None:
    """Show habit and sleep overview."""
    from .stats import Dashboard

    stats = Dashboard(get_db()).get_stats()

    last_sleep = (
        f"{stats.last_sleep_hours:.1f} hours" if stats.last_sleep_hours is not None else "No data"
    )
    content = [
        f"[bold]Habits:[/bold] {stats.total_habits} "
        f"({stats.active_streaks} with active streaks)",
        f"[bold]Completed Today:[/bold] {stats.completed_today} "
        f"({stats.completion_rate_today:.0f}%)",
        f"[bold]Best Current Streak:[/bold] {stats.best_current_streak} days",
        "",
        f"[bold]Average Sleep (7 days):[/bold] {stats.average_sleep:.1f} hours",
        f"[bold]Sleep Quality:[/bold] {stats.sleep_quality}",
        f"[bold]Last Sleep:[/bold] {last_sleep}",
    ]
    console.print(Panel("\n".join(content), title="[blue]Dashboard[/blue]"))


@app.command()
def version() -> None:
    """Show version information."""
    from . import __version__

    console.print(f"dailyrhythm version {__version__}")


# ============================================================================
# Main Entry Point
# ============================================================================


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
