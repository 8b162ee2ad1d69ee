# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict


class Settings(TypedDict):
    rate_per_unit: float
    currency: str  # ISO 4217 code, e.g. "PHP"
    theme: str
    date_format: str
    user_name: Optional[str]


class SettingsUpdate(TypedDict, total=False):
    rate_per_unit: float
    currency: str
    theme: str
    date_format: str
    user_name: Optional[str]


SETTINGS_FIELDS = frozenset(Settings.__annotations__)

SETTINGS_WIRE_NAMES = {
    "rate_per_unit": "ratePerUnit",
    "currency": "currency",
    "theme": "theme",
    "date_format": "dateFormat",
    "user_name": "userName",
}
