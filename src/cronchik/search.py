"""Next occurrence calculation.

The search keeps a single candidate time and moves it forward field by
field (month, day of month, day of week, hour, minute), jumping straight
to the next allowed value of the first field that does not match. Day of
month and day of week must both match.
"""

import calendar
import logging
from datetime import date, datetime, timedelta, timezone

from cronchik.config import SearchConfig
from cronchik.exceptions import OccurrenceNotFoundError

logger = logging.getLogger("cronchik.search")


def cron_weekday(dt: datetime | date) -> int:
    """Day of week with Sunday as 0."""
    # Python: Mon=0, ..., Sun=6
    return (dt.weekday() + 1) % 7


def next_occurrence(
    schedule: "CronSchedule",
    after: datetime,
    config: SearchConfig | None = None,
) -> datetime:
    """Calculate the first time after `after` matching the schedule.

    Args:
        schedule: Parsed cron schedule
        after: Starting datetime, naive or timezone aware
        config: Search limits (defaults to SearchConfig())

    Returns:
        Next matching datetime, strictly after `after`. Aware inputs keep
        their UTC offset.

    Raises:
        OccurrenceNotFoundError: If nothing matches within config.max_years
            or before the last representable datetime
    """
    if config is None:
        config = SearchConfig()

    offset = after.utcoffset()
    tz = timezone(offset) if offset is not None else None

    def at(day: date, hour: int = 0, minute: int = 0) -> datetime:
        return datetime(day.year, day.month, day.day, hour, minute, tzinfo=tz)

    def not_found():
        logger.warning(
            "No occurrence of '%s' within %d years from %s",
            schedule, config.max_years, after,
        )
        raise OccurrenceNotFoundError(str(schedule), after, config.max_years)

    try:
        start = after.replace(tzinfo=tz) if tz is not None else after
        candidate = start.replace(second=0, microsecond=0) + timedelta(minutes=1)

        months = schedule.months
        days_of_month = schedule.days_of_month
        days_of_week = schedule.days_of_week
        hours = schedule.hours
        minutes = schedule.minutes

        while True:
            if candidate.year - after.year > config.max_years:
                not_found()

            year = candidate.year
            month = candidate.month

            if month not in months:
                upcoming = months.next_after(month)
                if upcoming is not None:
                    candidate = at(date(year, upcoming, 1))
                else:
                    candidate = at(date(year + 1, 1, 1))
                continue

            day = candidate.day
            if day not in days_of_month:
                upcoming = days_of_month.next_after(day)
                if upcoming is not None and upcoming <= calendar.monthrange(year, month)[1]:
                    candidate = at(date(year, month, upcoming))
                elif month < 12:
                    candidate = at(date(year, month + 1, 1))
                else:
                    candidate = at(date(year + 1, 1, 1))
                continue

            weekday = cron_weekday(candidate)
            if weekday not in days_of_week:
                upcoming = days_of_week.next_after(weekday)
                if upcoming is not None:
                    # Later this week, possibly in the next month
                    candidate = at(candidate.date() + timedelta(days=upcoming - weekday))
                else:
                    # Nothing left this week, start over from Sunday
                    candidate = at(candidate.date() + timedelta(days=7 - weekday))
                continue

            hour = candidate.hour
            if hour not in hours:
                upcoming = hours.next_after(hour)
                if upcoming is not None:
                    candidate = at(candidate.date(), upcoming)
                else:
                    candidate = at(candidate.date() + timedelta(days=1))
                continue

            minute = candidate.minute
            if minute not in minutes:
                upcoming = minutes.next_after(minute)
                if upcoming is not None:
                    candidate = at(candidate.date(), hour, upcoming)
                else:
                    candidate = at(candidate.date(), hour) + timedelta(hours=1)
                continue

            return candidate
    except (OverflowError, ValueError):
        # Ran past datetime.max
        not_found()
