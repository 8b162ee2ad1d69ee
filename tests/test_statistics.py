# SPDX-License-Identifier: MIT

import pendulum
import pytest

from piecework.service import statistics

from conftest import make_entry

REFERENCE = pendulum.date(2024, 3, 15)


def test_total_earnings() -> None:
    entries = [make_entry("2024-01-05", 500), make_entry("2024-03-15", 100)]
    assert statistics.total_earnings(entries) == pytest.approx(120.0)
    assert statistics.total_earnings([]) == 0


def test_monthly_earnings_excludes_other_months() -> None:
    entries = [
        make_entry("2024-03-01", 100),
        make_entry("2024-03-15", 300),
        make_entry("2024-02-28", 500),
    ]
    assert statistics.monthly_earnings(entries, REFERENCE) == pytest.approx(80.0)


def test_weekly_earnings_runs_sunday_to_saturday() -> None:
    entries = [
        make_entry("2024-03-09", 100),
        make_entry("2024-03-10", 100),
        make_entry("2024-03-16", 100),
        make_entry("2024-03-17", 100),
    ]
    assert statistics.week_bounds(REFERENCE) == ("2024-03-10", "2024-03-16")
    assert statistics.weekly_earnings(entries, REFERENCE) == pytest.approx(40.0)


def test_week_bounds_on_sunday_and_saturday() -> None:
    assert statistics.week_bounds(pendulum.date(2024, 3, 10)) == (
        "2024-03-10",
        "2024-03-16",
    )
    assert statistics.week_bounds(pendulum.date(2024, 3, 16)) == (
        "2024-03-10",
        "2024-03-16",
    )


def test_month_bounds_handles_leap_february() -> None:
    assert statistics.month_bounds(pendulum.date(2024, 2, 10)) == (
        "2024-02-01",
        "2024-02-29",
    )


def test_earnings_for_period() -> None:
    entries = [
        make_entry("2024-03-07", 100),
        make_entry("2024-03-08", 100),
        make_entry("2024-03-15", 100),
    ]
    assert statistics.earnings_for_period(entries, 7, REFERENCE) == pytest.approx(40.0)


def test_daily_average_rounds_half_up() -> None:
    entries = [
        make_entry("2024-03-01", 100),
        make_entry("2024-03-02", 200),
        make_entry("2024-03-03", 201),
    ]
    assert statistics.daily_average(entries) == 167
    pair = [make_entry("2024-03-01", 1), make_entry("2024-03-02", 2)]
    assert statistics.daily_average(pair) == 2
    assert statistics.daily_average([]) == 0


def test_distinct_months_count() -> None:
    entries = [
        make_entry("2024-01-05"),
        make_entry("2024-01-20"),
        make_entry("2024-02-01"),
    ]
    assert statistics.distinct_months_count(entries) == 2
    assert statistics.distinct_months_count([]) == 0


def test_entries_for_month() -> None:
    entries = [make_entry("2024-02-29"), make_entry("2024-03-01")]
    selected = statistics.entries_for_month(entries, REFERENCE)
    assert [entry["date"] for entry in selected] == ["2024-03-01"]


def test_empty_entries_give_zero_everywhere() -> None:
    assert statistics.weekly_earnings([], REFERENCE) == 0
    assert statistics.monthly_earnings([], REFERENCE) == 0
    assert statistics.earnings_for_period([], 30, REFERENCE) == 0


def test_distinct_months_ignores_impossible_dates() -> None:
    entries = [
        make_entry("2024-13-01"),
        make_entry("2024-00-10"),
        make_entry("2024-03-15"),
    ]
    assert statistics.distinct_months_count(entries) == 1
