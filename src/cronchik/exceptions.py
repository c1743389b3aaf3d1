"""Custom exceptions for cronchik."""

from datetime import datetime
from enum import Enum


class InvalidExprKind(Enum):
    """Grammar rule violated by a single field."""

    INVALID_WILD_CARD = "InvalidWildCard"
    INVALID_STEP_RANGE = "InvalidStepRange"
    INVALID_STEP_VALUE = "InvalidStepValue"
    INVALID_ENTRY_RANGE = "InvalidEntryRange"
    INVALID_ENTRY_VALUE = "InvalidEntryValue"
    INVALID_RANGE = "InvalidRange"
    INVALID_RANGE_REV = "InvalidRangeRev"
    # Values pushed past the field capacity. Internal error, not user input.
    PARSER_OVERFLOW = "ParserOverflow"

    def __str__(self) -> str:
        return self.value


class CronError(Exception):
    pass


class ParseError(CronError, ValueError):
    """Base class for cron expression parse failures."""
    pass


class InvalidCharAt(ParseError):
    """Raised when raw input contains a byte outside of the cron alphabet."""

    def __init__(self, char: int, position: int):
        self.char = char
        self.position = position
        super().__init__(f"Invalid character '{char:x}' at position {position}")


class InvalidExpr(ParseError):
    """Raised when one field of the expression is malformed."""

    def __init__(self, field_name: str, kind: InvalidExprKind):
        self.field_name = field_name
        self.kind = kind
        super().__init__(f"{field_name}: {kind}")


class Incomplete(ParseError):
    """Raised when fewer than five fields are supplied."""

    def __init__(self):
        super().__init__("Incomplete cron expression")


class Unsupported(ParseError):
    """Raised when more than five fields are supplied."""

    def __init__(self):
        super().__init__("Cron expression includes unsupported field (year)")


class OccurrenceNotFoundError(CronError):
    """Raised when no matching time exists within the search horizon."""

    def __init__(self, expression: str, start: datetime, max_years: int):
        self.expression = expression
        self.start = start
        self.max_years = max_years
        super().__init__(
            f"Could not find next run time for cron expression '{expression}' "
            f"within {max_years} years from {start}"
        )
