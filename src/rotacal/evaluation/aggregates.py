"""DataFrame views of classified days for tables and CSV exports."""

from __future__ import annotations

import pandas as pd

from rotacal.evaluation.counts import count_in_month
from rotacal.scheduling.rotation.engine import iter_classified_days
from rotacal.scheduling.rotation.models import DateLike, ScheduleConfig

__all__ = [
    "DAY_COLUMNS",
    "MONTH_SUMMARY_COLUMNS",
    "day_dataframe",
    "monthly_summary_dataframe",
]

DAY_COLUMNS = [
    "date",
    "status",
    "day_in_cycle",
    "is_first_day_of_block",
    "is_last_day_of_block",
]

MONTH_SUMMARY_COLUMNS = [
    "month",
    "on_duty",
    "off_duty",
    "transit",
    "undefined",
    "days",
]


def day_dataframe(config: ScheduleConfig, start: DateLike, end: DateLike) -> pd.DataFrame:
    """One row per date in ``[start, end]`` with its status and block flags.

    ``day_in_cycle`` is nullable (``Int64``) because pre-anchor dates have no cycle offset.
    """
    rows = [
        {
            "date": day,
            "status": classification.status.value,
            "day_in_cycle": classification.day_in_cycle,
            "is_first_day_of_block": classification.is_first_day_of_block,
            "is_last_day_of_block": classification.is_last_day_of_block,
        }
        for day, classification in iter_classified_days(config, start, end)
    ]
    df = pd.DataFrame(rows, columns=DAY_COLUMNS)
    df["day_in_cycle"] = df["day_in_cycle"].astype("Int64")
    return df


def monthly_summary_dataframe(config: ScheduleConfig, year: int) -> pd.DataFrame:
    """Per-month status counts for a calendar year."""
    rows = []
    for month in range(1, 13):
        counts = count_in_month(config, year, month)
        rows.append({"month": month, **counts.to_dict(), "days": counts.total})
    return pd.DataFrame(rows, columns=MONTH_SUMMARY_COLUMNS)
