import os
from dataclasses import dataclass


@dataclass
class SearchConfig:
    """Limits of the next occurrence search.

    Args:
        max_years: How many years past the start instant to search before
            giving up. Leap-day schedules restricted to one weekday repeat
            up to 40 years apart.
    """
    max_years: int = 50

    def __post_init__(self):
        """Validate search configuration."""
        if self.max_years < 1:
            raise ValueError("max_years must be at least 1")

    @classmethod
    def from_env(cls, prefix: str = "CRONCHIK_") -> "SearchConfig":
        """Load configuration from environment variables."""
        value = os.getenv(f"{prefix}MAX_YEARS")
        if value is None:
            return cls()
        return cls(max_years=int(value))
