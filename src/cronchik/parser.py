"""Field grammar shared by all five cron fields.

Each comma separated token of a field is one of:
    - * (every value, only allowed alone)
    - base/step, where base is * or a single value
    - from-to (inclusive range)
    - a single value (number, or 3-letter name for month and day of week)

Examples:
    "*/15" - 0, 15, 30, 45 in the minute field
    "1-5,10" - 1, 2, 3, 4, 5, 10
    "MON-FRI" - 1, 2, 3, 4, 5 in the day of week field
"""

from bisect import bisect_left, bisect_right
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Mapping

from cronchik.exceptions import InvalidExpr, InvalidExprKind
from cronchik.types import Day, DayOfMonth, Hour, Minute, Month

EXPR_SPLIT = ","


@dataclass(frozen=True)
class FieldDomain:
    """Bounds and aliases of one cron field.

    Attributes:
        name: Field name used in error messages
        min_value: Smallest allowed value
        max_value: Largest allowed value
        value_type: Callable converting a validated integer to a field value
        aliases: Upper-case 3-letter names mapped to their values
    """

    name: str
    min_value: int
    max_value: int
    value_type: Callable[[int], Any]
    aliases: Mapping[str, int] = field(default_factory=dict, hash=False)

    @property
    def capacity(self) -> int:
        """Number of distinct values in the domain."""
        return self.max_value - self.min_value + 1

    def parse_value(
        self,
        text: str,
        invalid_value: InvalidExprKind,
        invalid_range: InvalidExprKind,
    ) -> int:
        """Parse a single value token.

        Args:
            text: Token text
            invalid_value: Error kind when the token is not a number or name
            invalid_range: Error kind when the number is outside the domain

        Returns:
            Validated integer value

        Raises:
            InvalidExpr: If the token is invalid
        """
        if text.isascii() and text.isdigit():
            num = self._digits_to_int(text)
            if num is not None and self.min_value <= num <= self.max_value:
                return num
            raise InvalidExpr(self.name, invalid_range)

        if self.aliases and len(text) == 3 and text.isascii():
            num = self.aliases.get(text.upper())
            if num is not None:
                return num

        raise InvalidExpr(self.name, invalid_value)

    def _digits_to_int(self, text: str) -> int | None:
        """Convert ASCII digits, or None if longer than any value of the domain."""
        if len(text.lstrip("0")) > len(str(self.max_value)):
            return None
        return int(text)

    def parse_step(self, text: str) -> int:
        """Parse the step part of a base/step token."""
        if not (text.isascii() and text.isdigit()):
            raise InvalidExpr(self.name, InvalidExprKind.INVALID_STEP_VALUE)

        step = self._digits_to_int(text)
        if step is None or step == 0 or step > self.max_value:
            raise InvalidExpr(self.name, InvalidExprKind.INVALID_STEP_RANGE)
        return step

    def render(self, value: int) -> str:
        """Format a single value, using its name where the field has names."""
        if self.aliases:
            return self.value_type(value).to_textual_repr()
        return str(int(value))


def _aliases(value_type) -> dict[str, int]:
    return {member.to_textual_repr(): member.value for member in value_type}


MINUTE = FieldDomain(Minute.NAME, Minute.MIN, Minute.MAX, Minute)
HOUR = FieldDomain(Hour.NAME, Hour.MIN, Hour.MAX, Hour)
DAY_OF_MONTH = FieldDomain(DayOfMonth.NAME, DayOfMonth.MIN, DayOfMonth.MAX, DayOfMonth)
MONTH = FieldDomain("Month", 1, 12, Month, _aliases(Month))
DAY_OF_WEEK = FieldDomain("Day of Week", 0, 6, Day, _aliases(Day))

# Field order of a cron expression
FIELDS = (MINUTE, HOUR, DAY_OF_MONTH, MONTH, DAY_OF_WEEK)

_DOMAINS_BY_TYPE = {domain.value_type: domain for domain in FIELDS}


def domain_for(value_type) -> FieldDomain:
    """Return the domain whose values are instances of value_type."""
    return _DOMAINS_BY_TYPE[value_type]


class FieldSet(Sequence):
    """Ordered, duplicate-free values of one field.

    Sized at most to the domain; a full set means every value and is
    displayed as "*".
    """

    __slots__ = ("_domain", "_values")

    def __init__(self, domain: FieldDomain, values: Sequence[int]):
        if not values:
            raise ValueError(f"{domain.name} field must contain at least one value")
        self._domain = domain
        self._values = tuple(domain.value_type(value) for value in values)

    @property
    def domain(self) -> FieldDomain:
        return self._domain

    @property
    def capacity(self) -> int:
        return self._domain.capacity

    @property
    def is_full(self) -> bool:
        """True if the set covers the whole domain."""
        return len(self._values) == self._domain.capacity

    def next_after(self, value: int):
        """Return the smallest value greater than value, or None."""
        idx = bisect_right(self._values, value)
        if idx < len(self._values):
            return self._values[idx]
        return None

    def __getitem__(self, index):
        return self._values[index]

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator:
        return iter(self._values)

    def __contains__(self, value) -> bool:
        idx = bisect_left(self._values, value)
        return idx < len(self._values) and self._values[idx] == value

    def __eq__(self, other) -> bool:
        if isinstance(other, FieldSet):
            return self._domain == other._domain and self._values == other._values
        if isinstance(other, Sequence) and not isinstance(other, str):
            return list(self._values) == list(other)
        return NotImplemented

    def __hash__(self) -> int:
        # Consistent with equality against plain tuples of the same values
        return hash(self._values)

    def __repr__(self) -> str:
        return f"FieldSet({self._domain.name!r}, {[int(value) for value in self._values]})"


class _Accumulator:
    """Collects parsed values of one field, keeping them sorted and unique."""

    def __init__(self, domain: FieldDomain):
        self.domain = domain
        self.values: list[int] = []
        self._seen: set[int] = set()

    def push(self, num: int) -> None:
        if num in self._seen:
            return
        if len(self.values) >= self.domain.capacity:
            raise InvalidExpr(self.domain.name, InvalidExprKind.PARSER_OVERFLOW)
        self._seen.add(num)
        self.values.append(num)

    def extend(self, nums) -> None:
        for num in nums:
            self.push(num)
        self.values.sort()


def parse_field(text: str, domain: FieldDomain) -> FieldSet:
    """Parse one cron field into an ordered set of values.

    Args:
        text: Field text (e.g., "*/5", "1-10", "1,3,5", "MON-FRI")
        domain: Domain of the field

    Returns:
        FieldSet with at least one value

    Raises:
        InvalidExpr: If the field violates the grammar
    """
    result = _Accumulator(domain)
    tokens = text.split(EXPR_SPLIT)

    for token in tokens:
        if token == "*":
            if len(tokens) > 1:
                raise InvalidExpr(domain.name, InvalidExprKind.INVALID_WILD_CARD)

            result.extend(range(domain.min_value, domain.max_value + 1))
            continue

        step_parts = token.split("/")
        if len(step_parts) == 2:
            # Step values: */5 or 10/2
            base, step = step_parts
            if base == "*":
                start = domain.min_value
            else:
                start = domain.parse_value(
                    base,
                    InvalidExprKind.INVALID_ENTRY_VALUE,
                    InvalidExprKind.INVALID_ENTRY_RANGE,
                )

            result.extend(range(start, domain.max_value + 1, domain.parse_step(step)))
            continue

        range_parts = token.split("-")
        if len(range_parts) == 2:
            # Range: 1-5
            start = domain.parse_value(
                range_parts[0], InvalidExprKind.INVALID_RANGE, InvalidExprKind.INVALID_RANGE
            )
            end = domain.parse_value(
                range_parts[1], InvalidExprKind.INVALID_RANGE, InvalidExprKind.INVALID_RANGE
            )

            if start > end:
                raise InvalidExpr(domain.name, InvalidExprKind.INVALID_RANGE_REV)

            result.extend(range(start, end + 1))
            continue

        # Single value
        result.extend([
            domain.parse_value(
                token,
                InvalidExprKind.INVALID_ENTRY_VALUE,
                InvalidExprKind.INVALID_ENTRY_RANGE,
            )
        ])

    return FieldSet(domain, result.values)
