"""Sleep logging and interval aggregation."""

from .chart import average_sleep, build_chart, default_graph_range, sleep_quality
from .intervals import (
    DayInterval,
    Interval,
    SleepSession,
    aggregate,
    merge_intervals,
    transform_sleep_data,
)
from .manager import SleepManager
from .models import SleepEntry
from .schemas import (
    SleepChartDay,
    SleepEntryCreate,
    SleepEntryResponse,
    SleepGraph,
    SleepSummary,
)

__all__ = [
    "average_sleep",
    "build_chart",
    "default_graph_range",
    "sleep_quality",
    "DayInterval",
    "Interval",
    "SleepSession",
    "aggregate",
    "merge_intervals",
    "transform_sleep_data",
    "SleepManager",
    "SleepEntry",
    "SleepChartDay",
    "SleepEntryCreate",
    "SleepEntryResponse",
    "SleepGraph",
    "SleepSummary",
]
