"""cronchik - Simple cron expression parser.

Syntax:
    <minutes> <hours> <days of month> <months> <days of week>

    - minute is an integer in range 0-59
    - hour is an integer in range 0-23
    - day of month is an integer in range 1-31
    - month is an integer in range 1-12 or a name like JAN or DEC
    - day of week is an integer in range 0-6 or a name like SUN or SAT

Basic usage:
    from datetime import datetime, timezone
    from cronchik import CronSchedule

    schedule = CronSchedule.parse("5 * * * *")
    print(schedule)  # 5 * * * *

    next_run = schedule.next_time_from(datetime.now(timezone.utc))

Serialization:
    from cronchik import serde

    text = serde.dumps({"schedule": schedule})
"""

__version__ = "0.1.0"

from cronchik.schedule import (
    CronSchedule,
    parse,
    parse_cron_from_time,
    parse_cron_from_time_now,
)
from cronchik.search import next_occurrence
from cronchik.formatter import format_field, format_schedule
from cronchik.parser import FieldDomain, FieldSet, parse_field
from cronchik.types import Minute, Hour, DayOfMonth, Month, Day
from cronchik.config import SearchConfig
from cronchik.exceptions import (
    CronError,
    ParseError,
    InvalidCharAt,
    InvalidExpr,
    InvalidExprKind,
    Incomplete,
    Unsupported,
    OccurrenceNotFoundError,
)

# Run once a year at midnight of January 1st.
YEARLY = "0 0 1 1 *"
# Run once a month at midnight of the first day.
MONTHLY = "0 0 1 * *"
# Run once a week at midnight of Sunday.
WEEKLY = "0 0 * * 0"
# Run once a day at midnight.
DAILY = "0 0 * * *"
# Run once an hour.
HOURLY = "0 * * * *"

__all__ = [
    # Schedule
    "CronSchedule",
    "parse",
    "next_occurrence",
    "parse_cron_from_time",
    "parse_cron_from_time_now",
    # Fields
    "FieldDomain",
    "FieldSet",
    "parse_field",
    "format_field",
    "format_schedule",
    "Minute",
    "Hour",
    "DayOfMonth",
    "Month",
    "Day",
    # Configuration
    "SearchConfig",
    # Constants
    "YEARLY",
    "MONTHLY",
    "WEEKLY",
    "DAILY",
    "HOURLY",
    # Exceptions
    "CronError",
    "ParseError",
    "InvalidCharAt",
    "InvalidExpr",
    "InvalidExprKind",
    "Incomplete",
    "Unsupported",
    "OccurrenceNotFoundError",
]
