"""Value types for the five cron fields.

Allowed values:
    - Minute (0-59)
    - Hour (0-23)
    - Day of month (1-31)
    - Month (1-12 or JAN-DEC)
    - Day of week (0-6 or SUN-SAT, where 0 is Sunday)

Textual names are case insensitive.
"""

from enum import IntEnum
from typing import ClassVar


class FieldValue(int):
    """Integer validated against the bounds of one cron field."""

    MIN: ClassVar[int]
    MAX: ClassVar[int]
    NAME: ClassVar[str]

    def __new__(cls, num: int):
        if not cls.MIN <= num <= cls.MAX:
            raise ValueError(f"{cls.NAME} value {num} out of range [{cls.MIN}, {cls.MAX}]")
        return super().__new__(cls, num)

    @classmethod
    def from_num(cls, num: int):
        """Create instance from numeric, or None if out of range."""
        if cls.MIN <= num <= cls.MAX:
            return cls(num)
        return None

    @classmethod
    def from_expr(cls, text: str) -> "FieldSet":
        """Parse a single field expression into an ordered set of values."""
        from cronchik.parser import domain_for, parse_field

        return parse_field(text, domain_for(cls))

    def __str__(self) -> str:
        return int.__repr__(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"


class Minute(FieldValue):
    """Minute of the hour."""

    MIN = 0
    MAX = 59
    NAME = "Minute"


class Hour(FieldValue):
    """Hour of the day."""

    MIN = 0
    MAX = 23
    NAME = "Hour"


class DayOfMonth(FieldValue):
    """Day of the month."""

    MIN = 1
    MAX = 31
    NAME = "Day of Month"


class _NamedValue(IntEnum):
    """Closed set of field values with 3-letter textual names."""

    @classmethod
    def from_num(cls, num: int):
        """Create instance from numeric, or None if out of range."""
        try:
            return cls(num)
        except ValueError:
            return None

    @classmethod
    def from_textual_repr(cls, text: str | bytes):
        """Look up a value by its 3-letter name, ignoring case."""
        if isinstance(text, (bytes, bytearray)):
            if not text.isascii():
                return None
            text = text.decode("ascii")

        if len(text) != 3 or not text.isascii():
            return None

        text = text.upper()
        for member in cls:
            if member.to_textual_repr() == text:
                return member
        return None

    @classmethod
    def from_bytes(cls, text: bytes):
        """Parse a raw token made of digits or a 3-letter name."""
        if text.isdigit() and text.isascii():
            return cls.from_num(int(text))
        return cls.from_textual_repr(text)

    @classmethod
    def from_expr(cls, text: str) -> "FieldSet":
        """Parse a single field expression into an ordered set of values."""
        from cronchik.parser import domain_for, parse_field

        return parse_field(text, domain_for(cls))

    def to_textual_repr(self) -> str:
        """Return the canonical 3-letter name."""
        return self.name[:3]


class Day(_NamedValue):
    """Day of the week."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6


class Month(_NamedValue):
    """Month of the year."""

    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12
