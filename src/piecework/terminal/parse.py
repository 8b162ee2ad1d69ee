# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from piecework.model.month import MonthKey
from piecework.service.month_index import parse_month as parse_month_key
from piecework.time import date_from_str, is_calendar_date_str


def parse_date(date_param: Optional[str], today: pendulum.Date) -> pendulum.Date:
    """
    Parse a CLI date argument relative to `today`.

    Accepts YYYY-MM-DD, today/t, yesterday/y and a signed day offset
    ("-1", "3"). No argument means today.
    """
    if date_param is None:
        return today

    date = date_param.strip()

    if re.match(r"^\d{4}-\d{2}-\d{2}$", date):
        if not is_calendar_date_str(date):
            raise typer.BadParameter(f"Not a calendar date: {date}")
        return date_from_str(date)

    # Numeric input for relative days (e.g., "1", "-1", "365")
    if re.match(r"^-?\d+$", date):
        try:
            return today.add(days=int(date))
        except (OverflowError, ValueError):
            raise typer.BadParameter(f"Day offset out of range: {date}")

    if date == "today" or date == "t":
        return today
    if date == "yesterday" or date == "y":
        return today.subtract(days=1)
    raise typer.BadParameter("Incorrect date format")


def parse_month(month_param: Optional[str], today: pendulum.Date) -> MonthKey:
    if month_param is None:
        return MonthKey(today.year, today.month)
    try:
        return parse_month_key(month_param.strip())
    except ValueError as e:
        raise typer.BadParameter(str(e))
