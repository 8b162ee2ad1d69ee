# SPDX-License-Identifier: MIT

import math
from typing import Optional

import pendulum

from piecework import time
from piecework.model.entry import Entry


def week_bounds(reference_date: pendulum.Date) -> tuple[str, str]:
    """
    Get the Sunday-to-Saturday week containing the reference date.

    Returns:
        Tuple of (start, end) as inclusive 'YYYY-MM-DD' strings
    """
    return (
        time.date_to_str(time.start_of_week(reference_date)),
        time.date_to_str(time.end_of_week(reference_date)),
    )


def month_bounds(reference_date: pendulum.Date) -> tuple[str, str]:
    """
    Get the first and last day of the month containing the reference date.

    Returns:
        Tuple of (start, end) as inclusive 'YYYY-MM-DD' strings
    """
    return (
        time.date_to_str(time.start_of_month(reference_date)),
        time.date_to_str(time.end_of_month(reference_date)),
    )


def _in_range(entries: list[Entry], start: str, end: str) -> list[Entry]:
    # 'YYYY-MM-DD' sorts the same way the calendar does
    return [entry for entry in entries if start <= entry.get("date", "") <= end]


def _sum_earnings(entries: list[Entry]) -> float:
    return sum((entry.get("earnings") or 0 for entry in entries), 0.0)


def total_earnings(entries: list[Entry]) -> float:
    return _sum_earnings(entries)


def weekly_earnings(
    entries: list[Entry], reference_date: Optional[pendulum.Date] = None
) -> float:
    if reference_date is None:
        reference_date = time.today_local()
    return _sum_earnings(_in_range(entries, *week_bounds(reference_date)))


def monthly_earnings(
    entries: list[Entry], reference_date: Optional[pendulum.Date] = None
) -> float:
    if reference_date is None:
        reference_date = time.today_local()
    return _sum_earnings(_in_range(entries, *month_bounds(reference_date)))


def earnings_for_period(
    entries: list[Entry],
    days: int,
    reference_date: Optional[pendulum.Date] = None,
) -> float:
    """Earnings for entries dated at most `days` days before the reference date."""
    if reference_date is None:
        reference_date = time.today_local()
    cutoff = time.date_to_str(reference_date.subtract(days=days))
    return _sum_earnings(
        [entry for entry in entries if entry.get("date", "") >= cutoff]
    )


def daily_average(entries: list[Entry]) -> int:
    """Mean unit count per entry, rounded half up to a whole number."""
    if not entries:
        return 0
    total_units = sum(entry.get("unit_count") or 0 for entry in entries)
    return math.floor(total_units / len(entries) + 0.5)


def entries_for_month(
    entries: list[Entry], month_reference: pendulum.Date
) -> list[Entry]:
    return _in_range(entries, *month_bounds(month_reference))


def distinct_months_count(entries: list[Entry]) -> int:
    return len(
        {
            entry["date"][:7]
            for entry in entries
            if time.is_calendar_date_str(entry.get("date"))
        }
    )
