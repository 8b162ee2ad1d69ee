# SPDX-License-Identifier: MIT

from typing import NamedTuple


class MonthKey(NamedTuple):
    year: int
    month: int  # 1-12

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"
