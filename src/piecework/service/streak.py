# SPDX-License-Identifier: MIT

from piecework import time
from piecework.model.entry import Entry


def work_streak(entries: list[Entry]) -> int:
    """
    Count consecutive calendar days with an entry, ending at the most recent
    logged day.

    The most recent day does not have to be today. Several entries on the same
    day count as one day.
    """
    dates = sorted(
        {
            entry["date"]
            for entry in entries
            if time.is_calendar_date_str(entry.get("date"))
        },
        reverse=True,
    )
    if not dates:
        return 0

    streak = 1
    anchor = time.date_from_str(dates[0])
    for date in dates[1:]:
        expected = time.date_to_str(time.previous_day(anchor))
        if date != expected:
            break
        streak += 1
        anchor = time.date_from_str(date)

    return streak
