"""Cron schedule parser and evaluator.

Supports standard cron syntax:
    - Minute (0-59)
    - Hour (0-23)
    - Day of month (1-31)
    - Month (1-12 or JAN-DEC)
    - Day of week (0-6 or SUN-SAT, where 0 is Sunday)

Special characters:
    - * (any value)
    - , (value list separator)
    - - (range of values)
    - / (step values)

Examples:
    "*/5 * * * *" - Every 5 minutes
    "0 */2 * * *" - Every 2 hours
    "0 9 * * MON-FRI" - 9 AM on weekdays
    "0 0 1 * *" - First day of every month at midnight

Day of month and day of week are combined with AND: "0 0 13 * FRI" runs
only on Friday the 13th.
"""

import logging
from datetime import datetime, timezone

from cronchik.config import SearchConfig
from cronchik.exceptions import Incomplete, InvalidCharAt, ParseError, Unsupported
from cronchik.formatter import format_schedule
from cronchik.parser import FIELDS, FieldSet, parse_field
from cronchik.search import cron_weekday, next_occurrence

logger = logging.getLogger("cronchik.schedule")


def _decode(text: bytes) -> str:
    try:
        return bytes(text).decode("ascii")
    except UnicodeDecodeError as e:
        raise InvalidCharAt(text[e.start], e.start) from None


class CronSchedule:
    """Parsed, immutable cron schedule.

    Use CronSchedule.parse() to create one. Each field is exposed as an
    ordered, duplicate-free FieldSet.

    Example:
        schedule = CronSchedule.parse("5 * * * *")
        str(schedule)  # "5 * * * *"
        schedule.next_time_from(datetime(2024, 1, 1, tzinfo=timezone.utc))
    """

    __slots__ = ("_minute", "_hour", "_day_m", "_month", "_day_w")

    def __init__(
        self,
        minute: FieldSet,
        hour: FieldSet,
        day_m: FieldSet,
        month: FieldSet,
        day_w: FieldSet,
    ):
        object.__setattr__(self, "_minute", minute)
        object.__setattr__(self, "_hour", hour)
        object.__setattr__(self, "_day_m", day_m)
        object.__setattr__(self, "_month", month)
        object.__setattr__(self, "_day_w", day_w)

    @classmethod
    def parse(cls, text: str | bytes) -> "CronSchedule":
        """Parse a five field cron expression.

        Args:
            text: Cron expression (minute hour day-of-month month day-of-week)

        Returns:
            Parsed schedule

        Raises:
            InvalidCharAt: If bytes input contains a non-ASCII byte
            InvalidExpr: If a field is malformed
            Incomplete: If fewer than 5 fields are given
            Unsupported: If more than 5 fields are given
        """
        try:
            if isinstance(text, (bytes, bytearray, memoryview)):
                text = _decode(text)

            parts = text.split()
            fields = []
            for idx, domain in enumerate(FIELDS):
                if idx >= len(parts):
                    raise Incomplete()
                fields.append(parse_field(parts[idx], domain))

            if len(parts) > len(FIELDS):
                raise Unsupported()
        except ParseError as e:
            logger.debug("Rejected cron expression %r: %s", text, e)
            raise

        return cls(*fields)

    @property
    def minutes(self) -> FieldSet:
        """Ordered minutes to run at."""
        return self._minute

    @property
    def hours(self) -> FieldSet:
        """Ordered hours to run at."""
        return self._hour

    @property
    def days_of_month(self) -> FieldSet:
        """Ordered days of month to run at."""
        return self._day_m

    @property
    def months(self) -> FieldSet:
        """Ordered months to run at."""
        return self._month

    @property
    def days_of_week(self) -> FieldSet:
        """Ordered days of week to run at."""
        return self._day_w

    def matches(self, dt: datetime) -> bool:
        """Check if datetime matches every field of the schedule."""
        return (
            dt.minute in self._minute
            and dt.hour in self._hour
            and dt.day in self._day_m
            and dt.month in self._month
            and cron_weekday(dt) in self._day_w
        )

    def next_time_from(self, time: datetime, config: SearchConfig | None = None) -> datetime:
        """Return the next matching time after `time`, keeping its UTC offset."""
        return next_occurrence(self, time, config)

    def next_time_from_now(self, config: SearchConfig | None = None) -> datetime:
        """Return the next matching time after the current UTC time."""
        return next_occurrence(self, datetime.now(timezone.utc), config)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def _key(self) -> tuple:
        return (self._minute, self._hour, self._day_m, self._month, self._day_w)

    def __eq__(self, other) -> bool:
        if not isinstance(other, CronSchedule):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        return format_schedule(self)

    __repr__ = __str__


def parse(text: str | bytes) -> CronSchedule:
    """Parse a cron expression. See CronSchedule.parse()."""
    return CronSchedule.parse(text)


def parse_cron_from_time(cron: str, time: datetime) -> datetime:
    """Parse `cron` and return its next run time after `time`.

    Raises:
        ParseError: If `cron` is invalid
    """
    return CronSchedule.parse(cron).next_time_from(time)


def parse_cron_from_time_now(cron: str) -> datetime:
    """Parse `cron` and return its next run time after now, in UTC.

    Raises:
        ParseError: If `cron` is invalid
    """
    return parse_cron_from_time(cron, datetime.now(timezone.utc))
