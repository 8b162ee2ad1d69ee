# SPDX-License-Identifier: MIT

from piecework.model.settings import Settings

DEFAULT_RATE_PER_UNIT = 0.20
DEFAULT_CURRENCY = "PHP"


def get_settings_template() -> Settings:
    return {
        "rate_per_unit": DEFAULT_RATE_PER_UNIT,
        "currency": DEFAULT_CURRENCY,
        "theme": "light",
        "date_format": "YYYY-MM-DD",
        "user_name": None,
    }
