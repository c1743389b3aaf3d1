"""Tests for next occurrence calculation."""

import logging
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pytest

from cronchik import (
    HOURLY,
    WEEKLY,
    CronSchedule,
    OccurrenceNotFoundError,
    SearchConfig,
    next_occurrence,
    parse_cron_from_time,
    parse_cron_from_time_now,
)


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


class TestNextOccurrence:
    """Test rollover of each field."""

    def test_next_minute(self):
        """Test scheduling on the next minute."""
        schedule = CronSchedule.parse("1 * * * *")
        assert len(schedule.minutes) == 1
        assert schedule.next_time_from(utc(2019, 1, 1)) == utc(2019, 1, 1, 0, 1)

    def test_overflow_minute(self):
        """Test a passed minute moves to the next hour."""
        schedule = CronSchedule.parse("1 * * * *")
        assert schedule.next_time_from(utc(2019, 1, 1, 0, 1)) == utc(2019, 1, 1, 1, 1)

    def test_overflow_hour(self):
        """Test a passed hour moves to the next day."""
        schedule = CronSchedule.parse("1 1 * * *")
        assert schedule.next_time_from(utc(2019, 1, 1, 1, 1)) == utc(2019, 1, 2, 1, 1)

    def test_next_hour_and_minute(self):
        """Test scheduling later the same day."""
        schedule = CronSchedule.parse("1 1 * * *")
        assert schedule.next_time_from(utc(2019, 1, 1)) == utc(2019, 1, 1, 1, 1)

    def test_next_day(self):
        """Test scheduling later the same month."""
        schedule = CronSchedule.parse("0 20 10 * *")
        assert schedule.next_time_from(utc(2019, 1, 1)) == utc(2019, 1, 10, 20, 0)

    def test_overflow_day(self):
        """Test a passed day moves to the next month."""
        schedule = CronSchedule.parse("0 20 10 * *")
        assert schedule.next_time_from(utc(2019, 1, 21)) == utc(2019, 2, 10, 20, 0)

    def test_next_month(self):
        """Test scheduling later the same year."""
        schedule = CronSchedule.parse("0 20 10 12 *")
        assert schedule.next_time_from(utc(2019, 1, 1)) == utc(2019, 12, 10, 20, 0)

    def test_overflow_month(self):
        """Test a passed month moves to the next year."""
        schedule = CronSchedule.parse("02 20 12 10 *")
        assert schedule.next_time_from(utc(2019, 12, 1)) == utc(2020, 10, 12, 20, 2)

    def test_next_day_of_week(self):
        """Test scheduling on a weekday later this week."""
        schedule = CronSchedule.parse("0 20 * * SAT")
        assert schedule.next_time_from(utc(2019, 1, 1)) == utc(2019, 1, 5, 20, 0)

    @pytest.mark.parametrize(
        "weekday, expected",
        [
            ("SUN", date(2019, 2, 3)),
            ("FRI", date(2019, 2, 1)),
            ("SAT", date(2019, 2, 2)),
            ("MON", date(2019, 2, 4)),
        ],
    )
    def test_overflow_day_of_week(self, weekday, expected):
        """Test weekdays across the end of the month."""
        schedule = CronSchedule.parse(f"0 20 * * {weekday}")
        result = schedule.next_time_from(utc(2019, 1, 31))

        assert result.date() == expected
        assert result.time() == time(20, 0)

    def test_day_of_week_mid_week_month_end(self):
        """Test a weekday a few days ahead in the next month."""
        # 2019-04-29 is a Monday, April has 30 days
        schedule = CronSchedule.parse("0 0 * * THU")
        assert schedule.next_time_from(utc(2019, 4, 29)) == utc(2019, 5, 2)

    def test_day_of_week_across_year_end(self):
        """Test a weekday in the following year."""
        # 2019-12-30 is a Monday
        schedule = CronSchedule.parse("0 0 * * FRI")
        assert schedule.next_time_from(utc(2019, 12, 30)) == utc(2020, 1, 3)

    def test_day_of_month_and_week_combined(self):
        """Test both day fields must match."""
        schedule = CronSchedule.parse("0 0 13 * FRI")
        assert schedule.next_time_from(utc(2024, 1, 1)) == utc(2024, 9, 13)

    def test_skips_short_months(self):
        """Test day 31 skips months without it."""
        schedule = CronSchedule.parse("0 0 31 * *")
        assert schedule.next_time_from(utc(2019, 4, 1)) == utc(2019, 5, 31)
        assert schedule.next_time_from(utc(2019, 5, 31)) == utc(2019, 7, 31)

    def test_leap_day(self):
        """Test February 29th waits for a leap year."""
        schedule = CronSchedule.parse("0 0 29 2 *")
        assert schedule.next_time_from(utc(2019, 1, 1)) == utc(2020, 2, 29)
        assert schedule.next_time_from(utc(2096, 3, 1)) == utc(2104, 2, 29)

    def test_strictly_after(self):
        """Test a matching start time is not returned."""
        schedule = CronSchedule.parse("30 9 * * *")
        assert schedule.next_time_from(utc(2024, 6, 15, 9, 30)) == utc(2024, 6, 16, 9, 30)

    def test_sub_minute_start(self):
        """Test seconds of the start time are dropped."""
        schedule = CronSchedule.parse("* * * * *")
        start = utc(2024, 6, 15, 9, 30, 59, 999999)
        assert schedule.next_time_from(start) == utc(2024, 6, 15, 9, 31)

    def test_pass_100_iterations(self):
        """Test repeated calculation stays on schedule."""
        expected = datetime.fromtimestamp(1_590_274_800, tz=timezone.utc)
        current = datetime.fromtimestamp(1_573_239_864, tz=timezone.utc)
        schedule = CronSchedule.parse("0 23 */2 * *")

        for _ in range(101):
            current = schedule.next_time_from(current)

        assert current == expected

    def test_results_match(self):
        """Test every result matches the schedule."""
        schedule = CronSchedule.parse("*/7 9-17 1-10 * MON-FRI")
        current = utc(2024, 1, 1)
        for _ in range(200):
            following = schedule.next_time_from(current)
            assert following > current
            assert schedule.matches(following)
            current = following


class TestRepeatedSchedules:
    """Test intervals between consecutive results."""

    def test_weekly(self):
        """Test the weekly schedule advances by seven days."""
        schedule = CronSchedule.parse(WEEKLY)
        current = schedule.next_time_from(utc(2019, 1, 1))
        assert current == utc(2019, 1, 6)

        for _ in range(60):
            following = schedule.next_time_from(current)
            assert following - current == timedelta(days=7)
            current = following

    def test_hourly(self):
        """Test the hourly schedule advances by one hour."""
        schedule = CronSchedule.parse(HOURLY)
        current = schedule.next_time_from(utc(2019, 1, 1))
        assert current == utc(2019, 1, 1, 1, 0)

        for _ in range(22):
            following = schedule.next_time_from(current)
            assert following - current == timedelta(hours=1)
            assert following.date() == current.date()
            current = following


class TestTimezones:
    """Test handling of offsets."""

    def test_offset_preserved(self):
        """Test the result keeps the start offset."""
        tz = timezone(timedelta(hours=5, minutes=30))
        schedule = CronSchedule.parse("0 9 * * *")
        result = schedule.next_time_from(datetime(2024, 3, 1, 10, 0, tzinfo=tz))

        assert result == datetime(2024, 3, 2, 9, 0, tzinfo=tz)
        assert result.utcoffset() == timedelta(hours=5, minutes=30)

    def test_zoneinfo_becomes_fixed_offset(self):
        """Test named zones are evaluated at the start offset."""
        try:
            berlin = ZoneInfo("Europe/Berlin")
        except ZoneInfoNotFoundError:
            pytest.skip("time zone database not available")

        start = datetime(2024, 1, 15, 12, 0, tzinfo=berlin)
        schedule = CronSchedule.parse("0 0 1 * *")
        result = schedule.next_time_from(start)

        assert result.utcoffset() == timedelta(hours=1)
        assert (result.year, result.month, result.day, result.hour) == (2024, 2, 1, 0)

    def test_naive_stays_naive(self):
        """Test naive datetimes are returned naive."""
        schedule = CronSchedule.parse("30 9 * * *")
        result = schedule.next_time_from(datetime(2024, 6, 15, 8, 0))

        assert result == datetime(2024, 6, 15, 9, 30)
        assert result.tzinfo is None


class TestSearchLimits:
    """Test schedules that never match."""

    def test_impossible_date(self):
        """Test February 30th is reported."""
        schedule = CronSchedule.parse("0 0 30 2 *")

        with pytest.raises(OccurrenceNotFoundError) as exc_info:
            schedule.next_time_from(utc(2024, 1, 1))

        assert exc_info.value.expression == "0 0 30 FEB *"
        assert exc_info.value.max_years == 50

    def test_exhausted_search_is_logged(self, caplog):
        """Test a warning is logged before giving up."""
        schedule = CronSchedule.parse("0 0 31 4 *")

        with caplog.at_level(logging.WARNING, logger="cronchik.search"):
            with pytest.raises(OccurrenceNotFoundError):
                schedule.next_time_from(utc(2024, 1, 1), SearchConfig(max_years=1))

        assert "No occurrence of '0 0 31 APR *' within 1 years" in caplog.text

    def test_end_of_calendar(self):
        """Test running past the last representable year."""
        schedule = CronSchedule.parse("0 0 1 1 *")

        with pytest.raises(OccurrenceNotFoundError):
            schedule.next_time_from(utc(9999, 6, 1))

        with pytest.raises(OccurrenceNotFoundError):
            schedule.next_time_from(datetime.max)

    def test_custom_horizon(self):
        """Test the search horizon is configurable."""
        schedule = CronSchedule.parse("0 0 29 2 *")
        config = SearchConfig(max_years=2)

        with pytest.raises(OccurrenceNotFoundError):
            next_occurrence(schedule, utc(2097, 1, 1), config)

        assert next_occurrence(schedule, utc(2019, 1, 1), config) == utc(2020, 2, 29)

    def test_rare_weekday_leap_day(self):
        """Test leap days on a given weekday are found with the default horizon."""
        # Next Monday 29th February after 2044 is in 2072
        schedule = CronSchedule.parse("0 0 29 2 MON")
        assert schedule.next_time_from(utc(2044, 3, 1)) == utc(2072, 2, 29)


class TestHelpers:
    """Test convenience entry points."""

    def test_parse_cron_from_time(self):
        """Test parse and calculate in one call."""
        assert parse_cron_from_time("1 * * * *", utc(2019, 1, 1)) == utc(2019, 1, 1, 0, 1)

    def test_parse_cron_from_time_now(self):
        """Test calculation from the current time."""
        result = parse_cron_from_time_now("* * * * *")
        now = datetime.now(timezone.utc)

        assert result.tzinfo is not None
        assert timedelta(0) < result - now <= timedelta(minutes=1)

    def test_next_time_from_now(self):
        """Test method form from the current time."""
        schedule = CronSchedule.parse("0 * * * *")
        result = schedule.next_time_from_now()
        now = datetime.now(timezone.utc)

        assert result.minute == 0
        assert timedelta(0) < result - now <= timedelta(hours=1)
