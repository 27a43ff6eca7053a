"""Tests for cron expression building, parsing and scheduling."""

from datetime import datetime

import pytest

from webtools.errors import InvalidCronExpressionError
from webtools.models.cron_expression import (
    PRESETS,
    CronFields,
    build_expression,
    describe,
    expand_field,
    next_runs,
    parse_expression,
    summarize,
)


class TestBuildAndParse:
    """Test cases for building and parsing expressions."""

    def test_default_fields(self):
        assert CronFields().expression() == "0 0 * * *"

    @pytest.mark.parametrize("preset", PRESETS, ids=lambda p: p.name)
    def test_presets_round_trip(self, preset):
        assert parse_expression(preset.cron).expression() == preset.cron

    def test_partial_day_selection(self):
        fields = CronFields(minute="30", hour="9")
        assert build_expression(fields, selected_days=[5, 1, 3]) == "30 9 * * 1,3,5"

    def test_full_day_selection_keeps_field(self):
        assert build_expression(CronFields(), selected_days=range(7)) == "0 0 * * *"

    def test_day_and_month_selection_both_apply(self):
        expression = build_expression(CronFields(), selected_days=[1], selected_months=[12, 6])
        assert expression == "0 0 * 6,12 1"

    @pytest.mark.parametrize(
        "expression",
        ["* * * *", "* * * * * *", "60 * * * *", "* 24 * * *", "* * 0 * *", "* * * 13 *",
         "* * * * 8", "*/0 * * * *", "5-1 * * * *", "a * * * *", "1,,2 * * * *",
         "*  * * * *"],
    )
    def test_invalid_expressions(self, expression):
        with pytest.raises(InvalidCronExpressionError):
            parse_expression(expression)

    def test_expand_field_forms(self):
        assert expand_field("*/15", "minute", 0, 59) == {0, 15, 30, 45}
        assert expand_field("1-5", "day_of_week", 0, 7) == {1, 2, 3, 4, 5}
        assert expand_field("10-20/5", "minute", 0, 59) == {10, 15, 20}
        assert expand_field("50/5", "minute", 0, 59) == {50, 55}
        assert expand_field("1,3,3", "hour", 0, 23) == {1, 3}


class TestDescribe:
    """Test cases for human readable descriptions."""

    @pytest.mark.parametrize(
        "expression,expected",
        [
            ("* * * * *", "Runs every minute"),
            ("*/5 * * * *", "Runs every 5 minutes"),
            ("0 */6 * * *", "Runs every 6 hours"),
            ("0 * * * *", "Runs at minute 0 of every hour"),
            ("0 6 * * *", "Runs daily at 06:00"),
            ("0 0 * * 0", "Runs weekly on Sunday at 00:00"),
            ("30 9 * * 1,5", "Runs weekly on Monday, Friday at 09:30"),
            ("0 0 1 * *", "Runs monthly on day 1 at 00:00"),
            ("0 0 1 1 *", "Runs yearly in month 1 on day 1 at 00:00"),
        ],
    )
    def test_descriptions(self, expression, expected):
        assert describe(expression) == expected

    def test_invalid(self):
        assert describe("not a cron") == "Invalid cron expression format"


class TestNextRuns:
    """Test cases for upcoming run times."""

    def test_monthly(self):
        runs = next_runs("0 0 1 * *", datetime(2024, 1, 1), count=2)
        assert runs == [datetime(2024, 2, 1), datetime(2024, 3, 1)]

    def test_weekdays_skip_weekend(self):
        runs = next_runs("30 9 * * 1-5", datetime(2024, 1, 5, 10, 0), count=2)
        assert runs == [datetime(2024, 1, 8, 9, 30), datetime(2024, 1, 9, 9, 30)]

    def test_same_day_later_minutes(self):
        runs = next_runs("*/20 * * * *", datetime(2024, 1, 1, 0, 5), count=3)
        assert runs == [
            datetime(2024, 1, 1, 0, 20),
            datetime(2024, 1, 1, 0, 40),
            datetime(2024, 1, 1, 1, 0),
        ]

    def test_day_of_month_or_day_of_week(self):
        runs = next_runs("0 0 13 * 5", datetime(2024, 1, 1), count=4)
        assert runs == [
            datetime(2024, 1, 5),
            datetime(2024, 1, 12),
            datetime(2024, 1, 13),
            datetime(2024, 1, 19),
        ]

    def test_stepped_day_of_month_must_also_match_weekday(self):
        """A ``*/2`` day field is unrestricted, so both day fields apply."""
        runs = next_runs("0 0 */2 * 1", datetime(2024, 1, 1), count=3)
        assert runs == [
            datetime(2024, 1, 15),
            datetime(2024, 1, 29),
            datetime(2024, 2, 5),
        ]
        assert all(run.isoweekday() == 1 and run.day % 2 == 1 for run in runs)

    def test_seven_is_sunday(self):
        runs = next_runs("0 12 * * 7", datetime(2024, 1, 1), count=1)
        assert runs == [datetime(2024, 1, 7, 12, 0)]

    def test_leap_day(self):
        runs = next_runs("0 0 29 2 *", datetime(2024, 3, 1), count=1)
        assert runs == [datetime(2028, 2, 29)]

    def test_impossible_date_returns_nothing(self):
        assert next_runs("0 0 31 2 *", datetime(2024, 1, 1), count=1) == []

    def test_zero_count(self):
        assert next_runs("* * * * *", datetime(2024, 1, 1), count=0) == []


class TestSummarize:
    """Test cases for the combined summary."""

    def test_valid_summary(self):
        summary = summarize("0 6 * * *", datetime(2024, 1, 1, 7, 0), count=1)
        assert summary.is_valid
        assert summary.description == "Runs daily at 06:00"
        assert summary.next_runs == [datetime(2024, 1, 2, 6, 0)]
        assert summary.error is None

    def test_invalid_summary_does_not_raise(self):
        summary = summarize("99 * * * *")
        assert not summary.is_valid
        assert summary.description == "Invalid cron expression format"
        assert summary.error
        assert summary.next_runs == []
