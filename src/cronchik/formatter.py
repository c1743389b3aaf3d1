"""Canonical text form of parsed cron fields."""

from cronchik.parser import FieldSet


def _runs(values) -> list[tuple[int, int]]:
    """Split sorted values into maximal runs of consecutive integers."""
    runs: list[tuple[int, int]] = []
    for value in values:
        if runs and runs[-1][1] + 1 == value:
            runs[-1] = (runs[-1][0], value)
        else:
            runs.append((value, value))
    return runs


def format_field(field_set: FieldSet) -> str:
    """Format one field as "*" or comma separated values and ranges.

    Args:
        field_set: Parsed field values

    Returns:
        Field text, e.g. "*", "5", "1-5,10" or "MAR-MAY"
    """
    if field_set.is_full:
        return "*"

    render = field_set.domain.render
    parts = []
    for start, end in _runs(field_set):
        if start == end:
            parts.append(render(start))
        else:
            parts.append(f"{render(start)}-{render(end)}")

    return ",".join(parts)


def format_schedule(schedule: "CronSchedule") -> str:
    """Format a schedule as five space separated fields."""
    return " ".join(
        format_field(field_set)
        for field_set in (
            schedule.minutes,
            schedule.hours,
            schedule.days_of_month,
            schedule.months,
            schedule.days_of_week,
        )
    )
