"""Aggregations over classified days (counts, monthly summaries, day tables)."""

from rotacal.evaluation.aggregates import (
    DAY_COLUMNS,
    MONTH_SUMMARY_COLUMNS,
    day_dataframe,
    monthly_summary_dataframe,
)
from rotacal.evaluation.counts import (
    DEFAULT_WINDOW_DAYS,
    StatusCounts,
    count_in_month,
    count_in_range,
    count_on_duty_in_window,
    month_bounds,
)

__all__ = [
    "DEFAULT_WINDOW_DAYS",
    "StatusCounts",
    "count_in_range",
    "count_on_duty_in_window",
    "count_in_month",
    "month_bounds",
    "DAY_COLUMNS",
    "MONTH_SUMMARY_COLUMNS",
    "day_dataframe",
    "monthly_summary_dataframe",
]
