# SPDX-License-Identifier: MIT

from typing import TypedDict


class Summary(TypedDict):
    total_earnings: float
    months_count: int
    weekly_earnings: float
    weekly_label: str
    monthly_earnings: float
    monthly_label: str
    daily_average: int
    work_streak: int
