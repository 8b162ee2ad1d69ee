# SPDX-License-Identifier: MIT

import re
from typing import cast

import pendulum

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def today_local() -> pendulum.Date:
    return pendulum.today("local").date()


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_to_millis(datetime: pendulum.DateTime) -> int:
    return int(datetime.timestamp() * 1000)


def is_date_str(value: object) -> bool:
    """Check the canonical 'YYYY-MM-DD' shape. Does not check the calendar."""
    return isinstance(value, str) and DATE_PATTERN.match(value) is not None


def date_to_str(date: pendulum.Date) -> str:
    return date.format("YYYY-MM-DD")


def date_from_str(date_str: str) -> pendulum.Date:
    """Parse a 'YYYY-MM-DD' string as a plain calendar day."""
    return cast(pendulum.Date, pendulum.parse(date_str, exact=True))


def date_to_display_str(date: pendulum.Date) -> str:
    return date.format("YYYY-MM-DD ddd")


def start_of_week(date: pendulum.Date) -> pendulum.Date:
    """Sunday on or before the given date."""
    # isoweekday: Monday=1 .. Sunday=7, so Sunday maps to an offset of 0
    return date.subtract(days=date.isoweekday() % 7)


def end_of_week(date: pendulum.Date) -> pendulum.Date:
    """Saturday on or after the given date."""
    return start_of_week(date).add(days=6)


def start_of_month(date: pendulum.Date) -> pendulum.Date:
    return date.start_of("month")


def end_of_month(date: pendulum.Date) -> pendulum.Date:
    return date.end_of("month")


def previous_day(date: pendulum.Date) -> pendulum.Date:
    return date.subtract(days=1)


def is_calendar_date_str(value: object) -> bool:
    """'YYYY-MM-DD' shape and an actual day of the calendar."""
    if not is_date_str(value):
        return False
    try:
        date_from_str(cast(str, value))
    except ValueError:
        return False
    return True
