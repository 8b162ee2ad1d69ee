# SPDX-License-Identifier: MIT

import pendulum

from piecework import time
from piecework.model.entry import Entry
from piecework.model.summary import Summary
from piecework.service import statistics
from piecework.service.streak import work_streak


def week_label(reference_date: pendulum.Date, today: pendulum.Date) -> str:
    week_start = time.start_of_week(reference_date)
    if week_start <= today <= time.end_of_week(reference_date):
        return "This Week"
    return f"Week of {week_start.format('MMM D')}"


def month_label(reference_date: pendulum.Date, today: pendulum.Date) -> str:
    if (reference_date.year, reference_date.month) == (today.year, today.month):
        return "This Month"
    return reference_date.format("MMM YYYY")


def build_summary(
    entries: list[Entry],
    reference_date: pendulum.Date,
    today: pendulum.Date,
) -> Summary:
    """
    Recompute every dashboard figure from the full entry list.

    Weekly and monthly figures follow the reference (viewed) date, the daily
    average only covers the viewed month and the streak always covers all
    entries.
    """
    month_entries = statistics.entries_for_month(entries, reference_date)
    return {
        "total_earnings": statistics.total_earnings(entries),
        "months_count": statistics.distinct_months_count(entries),
        "weekly_earnings": statistics.weekly_earnings(entries, reference_date),
        "weekly_label": week_label(reference_date, today),
        "monthly_earnings": statistics.monthly_earnings(entries, reference_date),
        "monthly_label": month_label(reference_date, today),
        "daily_average": statistics.daily_average(month_entries),
        "work_streak": work_streak(entries),
    }
