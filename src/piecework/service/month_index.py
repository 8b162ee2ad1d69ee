# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from piecework import time
from piecework.model.entry import Entry
from piecework.model.month import MonthKey


def month_of(date: pendulum.Date) -> MonthKey:
    return MonthKey(date.year, date.month)


def first_day(month: MonthKey) -> pendulum.Date:
    return pendulum.date(month.year, month.month, 1)


def parse_month(month_str: str) -> MonthKey:
    """Parse 'YYYY-MM'. Raises ValueError on anything else."""
    year_str, _, month_part = month_str.partition("-")
    if len(year_str) != 4 or len(month_part) != 2:
        raise ValueError(f"not a YYYY-MM month: {month_str!r}")
    month = MonthKey(int(year_str), int(month_part))
    if not 1 <= month.month <= 12:
        raise ValueError(f"month out of range: {month_str!r}")
    return month


def available_months(entries: list[Entry]) -> list[MonthKey]:
    """Distinct months that have at least one entry, newest first."""
    months = {
        MonthKey(int(entry["date"][:4]), int(entry["date"][5:7]))
        for entry in entries
        if time.is_calendar_date_str(entry.get("date"))
    }
    return sorted(months, reverse=True)


def shift_month(month: MonthKey, direction: int) -> MonthKey:
    shifted = first_day(month).add(months=direction)
    return month_of(shifted)


def can_go_previous(months: list[MonthKey], current: MonthKey) -> bool:
    """True if some month with entries lies before `current`."""
    if not months:
        return False
    return min(months) < current


def can_go_next(months: list[MonthKey], current: MonthKey) -> bool:
    """True if some month with entries lies after `current`."""
    if not months:
        return False
    return max(months) > current


def next_available_month(
    months: list[MonthKey], current: MonthKey
) -> Optional[MonthKey]:
    """
    Cycle to the next month in the (newest first) list of available months.

    Starts from the newest month when `current` has no entries. Returns None
    when there is nothing to cycle through.
    """
    if len(months) <= 1:
        return None
    if current not in months:
        return months[0]
    return months[(months.index(current) + 1) % len(months)]
