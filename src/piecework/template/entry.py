# SPDX-License-Identifier: MIT

from typing import Union

from piecework.model.entry import Entry


def get_entry_template(
    date: str, unit_count: Union[int, float], earnings: float
) -> Entry:
    return {
        "date": date,
        "unit_count": unit_count,
        "earnings": earnings,
    }
