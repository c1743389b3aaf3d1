"""JSON serialization of cron schedules.

A schedule is stored as its canonical expression string:

    dumps(CronSchedule.parse("0 9 * * 1-5"))  # '"0 9 * * MON-FRI"'
    loads('"0 9 * * MON-FRI"')
"""

import json
from typing import Any

from cronchik.exceptions import ParseError
from cronchik.schedule import CronSchedule


class ScheduleEncoder(json.JSONEncoder):
    """JSON encoder writing CronSchedule objects as expression strings."""

    def default(self, o: Any) -> Any:
        if isinstance(o, CronSchedule):
            return str(o)
        return super().default(o)


def dumps(obj: Any, **kwargs) -> str:
    """Serialize obj, which may contain CronSchedule objects, to JSON."""
    kwargs.setdefault("cls", ScheduleEncoder)
    return json.dumps(obj, **kwargs)


def loads(data: str | bytes) -> CronSchedule:
    """Deserialize a JSON string document into a CronSchedule.

    Raises:
        json.JSONDecodeError: If data is not JSON, not a string, or not a
            valid cron expression
    """
    if isinstance(data, (bytes, bytearray)):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise json.JSONDecodeError(f"Not a valid cron: {e}", "", e.start) from e

    value = json.loads(data)
    if not isinstance(value, str):
        raise json.JSONDecodeError("Not a valid cron: expected a cron expression string", data, 0)

    try:
        return CronSchedule.parse(value)
    except ParseError as e:
        raise json.JSONDecodeError(f"Not a valid cron: {e}", data, 0) from e
