# SPDX-License-Identifier: MIT

import pytest

from piecework.model.settings import Settings
from piecework.service.rate import MAX_UNIT_COUNT, RateModel, coerce_number, round_half_up


@pytest.fixture
def rate_model() -> RateModel:
    return RateModel()


def test_earnings_at_default_rate(rate_model: RateModel) -> None:
    assert rate_model.earnings(500) == 100.00
    assert rate_model.earnings(0) == 0.00
    assert rate_model.earnings(1) == 0.20


def test_earnings_fail_closed_on_invalid_counts(rate_model: RateModel) -> None:
    assert rate_model.earnings(-5) == 0
    assert rate_model.earnings("abc") == 0
    assert rate_model.earnings(MAX_UNIT_COUNT + 1) == 0
    assert rate_model.earnings(None) == 0


def test_earnings_accepts_numeric_strings(rate_model: RateModel) -> None:
    assert rate_model.earnings("250") == 50.00


def test_earnings_round_to_cents() -> None:
    rate_model = RateModel(rate_per_unit=0.125)
    # 3 * 0.125 = 0.375 rounds half up to 0.38
    assert rate_model.earnings(3) == 0.38
    assert rate_model.earnings(1) == 0.13


def test_round_half_up() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(167.0) == 167


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0, True),
        (999999, True),
        ("42", True),
        (" 7 ", True),
        ("", True),
        (-1, False),
        (1000000, False),
        ("abc", False),
        (None, False),
        (float("nan"), False),
    ],
)
def test_is_valid_count(rate_model: RateModel, value: object, expected: bool) -> None:
    assert rate_model.is_valid_count(value) is expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("abc", 0),
        ("12.9", 12),
        (-3, 0),
        (12.9, 12),
        ("1000000", 1000000),
        (None, 0),
        ("", 0),
        (float("inf"), 0),
    ],
)
def test_sanitize_count(rate_model: RateModel, value: object, expected: int) -> None:
    assert rate_model.sanitize_count(value) == expected


def test_sanitize_then_validate_rejects_out_of_range(rate_model: RateModel) -> None:
    sanitized = rate_model.sanitize_count("1000000")
    assert not rate_model.is_valid_count(sanitized)


def test_format_amount(rate_model: RateModel) -> None:
    assert rate_model.format_amount(100) == "₱100.00"
    assert rate_model.format_amount(0.2) == "₱0.20"
    assert rate_model.format_amount("12") == "₱0.00"
    assert rate_model.format_amount(None) == "₱0.00"
    assert rate_model.format_amount(float("nan")) == "₱0.00"


def test_format_amount_uses_currency_symbol() -> None:
    assert RateModel(currency="USD").format_amount(3.5) == "$3.50"
    assert RateModel(currency="CHF").format_amount(3.5) == "CHF 3.50"


def test_update_rate_ignores_non_positive_values(rate_model: RateModel) -> None:
    rate_model.update_rate(0)
    rate_model.update_rate(-1)
    rate_model.update_rate("0.5")
    assert rate_model.rate_per_unit == 0.20

    rate_model.update_rate(0.25)
    assert rate_model.rate_per_unit == 0.25
    assert rate_model.earnings(500) == 125.00


def test_rate_info(rate_model: RateModel) -> None:
    info = rate_model.rate_info()
    assert info["per_unit"] == 0.20
    assert info["currency"] == "PHP"
    assert info["symbol"] == "₱"
    assert info["baseline"] == "500 units = ₱100.00"


def test_from_settings() -> None:
    settings: Settings = {
        "rate_per_unit": 0.5,
        "currency": "EUR",
        "theme": "dark",
        "date_format": "YYYY-MM-DD",
        "user_name": None,
    }
    rate_model = RateModel.from_settings(settings)
    assert rate_model.earnings(10) == 5.00
    assert rate_model.format_amount(5) == "€5.00"


def test_coerce_number() -> None:
    assert coerce_number("3.5") == 3.5
    assert coerce_number("") == 0.0
    assert coerce_number("nan") is None
    assert coerce_number([1]) is None
