from datetime import UTC, datetime
from typing import Protocol


class Clock(Protocol):
    """Source of the current instant for retention checks and timestamps."""

    def now(self) -> datetime:
        """Return the current time as an aware UTC datetime."""
        ...


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(UTC)
