# SPDX-License-Identifier: MIT

import math
from typing import Any, Optional, TypedDict

from piecework.model.settings import Settings
from piecework.template.settings import DEFAULT_CURRENCY, DEFAULT_RATE_PER_UNIT

MAX_UNIT_COUNT = 999999
BASELINE_UNITS = 500

CURRENCY_SYMBOLS = {
    "PHP": "₱",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
}


class RateInfo(TypedDict):
    per_unit: float
    baseline: str
    currency: str
    symbol: str


def coerce_number(value: Any) -> Optional[float]:
    """
    Loose numeric coercion for raw user input.

    Numbers pass through, strings are parsed after stripping whitespace (an
    empty string counts as zero), anything else is not a number.
    Returns None for values that are not a number, including NaN.
    """
    number: float
    if isinstance(value, bool):
        number = float(value)
    elif isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        stripped = value.strip()
        if stripped == "":
            return 0.0
        try:
            number = float(stripped)
        except ValueError:
            return None
    else:
        return None

    if math.isnan(number):
        return None
    return number


def round_half_up(value: float, digits: int = 0) -> float:
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def currency_symbol(currency: str) -> str:
    return CURRENCY_SYMBOLS.get(currency, f"{currency} ")


class RateModel:
    def __init__(
        self,
        rate_per_unit: float = DEFAULT_RATE_PER_UNIT,
        currency: str = DEFAULT_CURRENCY,
    ) -> None:
        self.rate_per_unit = rate_per_unit
        self.currency = currency

    @classmethod
    def from_settings(cls, settings: Settings) -> "RateModel":
        return cls(settings["rate_per_unit"], settings["currency"])

    @property
    def symbol(self) -> str:
        return currency_symbol(self.currency)

    def is_valid_count(self, value: Any) -> bool:
        number = coerce_number(value)
        return number is not None and 0 <= number <= MAX_UNIT_COUNT

    def sanitize_count(self, value: Any) -> int:
        """Normalize raw input to a non-negative whole count. Never raises."""
        number = coerce_number(value)
        if number is None or number < 0 or math.isinf(number):
            return 0
        return math.floor(number)

    def earnings(self, unit_count: Any) -> float:
        """Amount earned for a count, rounded to cents. Invalid counts earn 0."""
        number = coerce_number(unit_count)
        if number is None or not 0 <= number <= MAX_UNIT_COUNT:
            return 0.0
        return round_half_up(number * self.rate_per_unit, 2)

    def format_amount(self, amount: Any) -> str:
        if isinstance(amount, bool) or not isinstance(amount, (int, float)):
            return f"{self.symbol}0.00"
        if math.isnan(amount):
            return f"{self.symbol}0.00"
        return f"{self.symbol}{amount:.2f}"

    def update_rate(self, rate: Any) -> None:
        """Change the per-unit rate. Anything but a positive number is ignored."""
        if isinstance(rate, bool) or not isinstance(rate, (int, float)):
            return
        if rate > 0:
            self.rate_per_unit = float(rate)

    def rate_info(self) -> RateInfo:
        return {
            "per_unit": self.rate_per_unit,
            "baseline": f"{BASELINE_UNITS} units = "
            f"{self.format_amount(self.earnings(BASELINE_UNITS))}",
            "currency": self.currency,
            "symbol": self.symbol,
        }
