"""Tests for date parser with relative dates."""

import pytest
from datetime import date, timedelta

from fincontrol.utils.date_parser import format_date, parse_date, parse_iso_date, today_in_timezone

TODAY = date(2024, 6, 10)


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2024-01-15", today=TODAY) == date(2024, 1, 15)
    assert parse_date("January 15, 2024", today=TODAY) == date(2024, 1, 15)


def test_parse_today_yesterday_tomorrow():
    assert parse_date("today", today=TODAY) == TODAY
    assert parse_date("Yesterday", today=TODAY) == TODAY - timedelta(days=1)
    assert parse_date("tomorrow", today=TODAY) == TODAY + timedelta(days=1)


def test_parse_day_offsets():
    assert parse_date("in 5 days", today=TODAY) == date(2024, 6, 15)
    assert parse_date("in 1 day", today=TODAY) == date(2024, 6, 11)
    assert parse_date("3 days ago", today=TODAY) == date(2024, 6, 7)


def test_parse_month_and_year_boundaries():
    assert parse_date("last month", today=TODAY) == date(2024, 5, 1)
    assert parse_date("this month", today=TODAY) == date(2024, 6, 1)
    assert parse_date("next month", today=TODAY) == date(2024, 7, 1)
    assert parse_date("last year", today=TODAY) == date(2023, 1, 1)
    assert parse_date("next year", today=TODAY) == date(2025, 1, 1)
    assert parse_date("last month", today=date(2024, 1, 20)) == date(2023, 12, 1)


def test_parse_invalid_date():
    with pytest.raises(ValueError):
        parse_date("not a date", today=TODAY)


def test_parse_out_of_range_offsets():
    last_day = date(9999, 12, 31)
    assert parse_date("2024-01-15", today=last_day) == date(2024, 1, 15)
    assert parse_date("yesterday", today=last_day) == date(9999, 12, 30)
    with pytest.raises(ValueError, match="out of range"):
        parse_date("tomorrow", today=last_day)
    with pytest.raises(ValueError, match="out of range"):
        parse_date("in 99999999 days", today=TODAY)


def test_parse_iso_date_is_strict():
    assert parse_iso_date("2024-02-29") == date(2024, 2, 29)
    for value in ["2024-6-1", "2024/06/01", "10/06/2024", "2023-02-29", ""]:
        with pytest.raises(ValueError):
            parse_iso_date(value)


def test_format_date():
    assert format_date(date(2024, 6, 1)) == "2024-06-01"
    assert format_date(None) == ""


def test_today_in_timezone():
    assert isinstance(today_in_timezone(), date)
    assert isinstance(today_in_timezone("America/Sao_Paulo"), date)
    with pytest.raises(ValueError, match="Unknown timezone"):
        today_in_timezone("Mars/Olympus_Mons")
