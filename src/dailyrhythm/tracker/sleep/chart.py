"""Sleep graph data built from aggregated intervals."""

from calendar import monthrange
from datetime import date, timedelta
from typing import Optional

from ...utils import calculate_average, format_hour
from .intervals import Interval
from .schemas import SleepChartDay


def default_graph_range(today: Optional[date] = None) -> tuple[date, date]:
    """First day of the previous month through the last day of this month."""
    today = today or date.today()
    previous = date(today.year, today.month, 1) - timedelta(days=1)
    _, last_day = monthrange(today.year, today.month)
    return date(previous.year, previous.month, 1), date(today.year, today.month, last_day)


def build_chart(
    aggregated: dict[date, list[Interval]],
    start_day: date,
    end_day: date,
) -> list[SleepChartDay]:
    """One chart row per day in the inclusive range.

    The start/end times shown for a day come from its first interval.
    """
    if end_day < start_day:
        raise ValueError(f"Graph range ends before it starts: {start_day} > {end_day}")

    rows = []
    day = start_day
    while day <= end_day:
        intervals = aggregated.get(day, [])
        rows.append(SleepChartDay(
            date=day,
            intervals=intervals,
            total_sleep=sum(i.hours for i in intervals),
            has_data=bool(intervals),
            start_time=format_hour(intervals[0].start) if intervals else "N/A",
            end_time=format_hour(intervals[0].end) if intervals else "N/A",
        ))
        day += timedelta(days=1)
    return rows


def average_sleep(chart: list[SleepChartDay]) -> float:
    """Mean hours slept across the days that have data."""
    totals = [row.total_sleep for row in chart if row.has_data]
    if not totals:
        return 0.0
    return calculate_average(totals)


def sleep_quality(hours: float) -> str:
    """Rate an average night: Great (8h+), Good (7h+), Fair (6h+) or Poor."""
    if hours >= 8:
        return "Great"
    if hours >= 7:
        return "Good"
    if hours >= 6:
        return "Fair"
    return "Poor"
