"""Tests for date helpers."""

from __future__ import annotations

from datetime import date
from unittest.mock import patch

import pytest

from todolist_cli.utils.dates import (
    NOT_SET,
    days_until,
    format_due_date,
    format_relative_due,
    parse_due_date,
)

TODAY = date(2026, 10, 19)


@pytest.fixture(autouse=True)
def fixed_today():
    with patch("todolist_cli.utils.dates.today", return_value=TODAY):
        yield


class TestParseDueDate:
    def test_configured_format(self):
        assert parse_due_date("21/10/2026") == date(2026, 10, 21)

    def test_iso_format(self):
        assert parse_due_date("2026-10-21") == date(2026, 10, 21)

    def test_custom_format(self):
        assert parse_due_date("10-21-2026", "%m-%d-%Y") == date(2026, 10, 21)

    def test_keywords(self):
        assert parse_due_date("today") == TODAY
        assert parse_due_date("Tomorrow") == date(2026, 10, 20)

    @pytest.mark.parametrize("text", [None, "", "  ", "31/02/2026", "next week", "21.10.2026"])
    def test_unparseable_is_unset(self, text):
        assert parse_due_date(text) is None


class TestFormatting:
    def test_format_due_date(self):
        assert format_due_date(date(2026, 1, 5)) == "05/01/2026"
        assert format_due_date(date(2026, 1, 5), "%Y-%m-%d") == "2026-01-05"

    def test_format_unset(self):
        assert format_due_date(None) == NOT_SET

    def test_days_until(self):
        assert days_until(date(2026, 10, 22)) == 3
        assert days_until(date(2026, 10, 22), date(2026, 10, 23)) == -1

    @pytest.mark.parametrize(
        ("due", "expected"),
        [
            (date(2026, 10, 19), "today"),
            (date(2026, 10, 20), "tomorrow"),
            (date(2026, 10, 18), "yesterday"),
            (date(2026, 10, 25), "in 6d"),
            (date(2026, 10, 9), "10d ago"),
            (None, ""),
        ],
    )
    def test_format_relative_due(self, due, expected):
        assert format_relative_due(due) == expected
