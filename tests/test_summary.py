# SPDX-License-Identifier: MIT

import pendulum
import pytest

from piecework.service.summary import build_summary, month_label, week_label

from conftest import make_entry

TODAY = pendulum.date(2024, 3, 15)


def test_labels_for_current_period() -> None:
    assert week_label(TODAY, TODAY) == "This Week"
    assert month_label(TODAY, TODAY) == "This Month"


def test_labels_for_past_period() -> None:
    reference = pendulum.date(2024, 2, 1)
    assert week_label(reference, TODAY) == "Week of Jan 28"
    assert month_label(reference, TODAY) == "Feb 2024"


def test_build_summary_for_current_month() -> None:
    entries = [
        make_entry("2024-03-15", 100),
        make_entry("2024-03-14", 200),
        make_entry("2024-03-01", 201),
        make_entry("2024-02-10", 500),
    ]

    summary = build_summary(entries, TODAY, TODAY)

    assert summary["total_earnings"] == pytest.approx(200.2)
    assert summary["months_count"] == 2
    assert summary["weekly_earnings"] == pytest.approx(60.0)
    assert summary["monthly_earnings"] == pytest.approx(100.2)
    assert summary["daily_average"] == 167
    assert summary["work_streak"] == 2
    assert summary["weekly_label"] == "This Week"
    assert summary["monthly_label"] == "This Month"


def test_build_summary_for_viewed_past_month() -> None:
    entries = [make_entry("2024-03-15", 100), make_entry("2024-02-10", 500)]

    summary = build_summary(entries, pendulum.date(2024, 2, 1), TODAY)

    assert summary["monthly_earnings"] == pytest.approx(100.0)
    assert summary["monthly_label"] == "Feb 2024"
    assert summary["daily_average"] == 500
    assert summary["weekly_earnings"] == 0
    assert summary["total_earnings"] == pytest.approx(120.0)
    assert summary["work_streak"] == 1


def test_build_summary_empty() -> None:
    summary = build_summary([], TODAY, TODAY)
    assert summary["total_earnings"] == 0
    assert summary["months_count"] == 0
    assert summary["daily_average"] == 0
    assert summary["work_streak"] == 0
