from dataclasses import dataclass
from datetime import date, timedelta


@dataclass(frozen=True, order=True)
class DayKey:
    """
    Identifier of one logical day.

    Wraps the calendar date the logical day started on. How an instant maps
    to a key depends on the configured day start hour and timezone; see
    `fluidtrack.utils.time.compute_day_key`.
    """
    day: date

    @classmethod
    def parse(cls, value: str) -> "DayKey":
        return cls(date.fromisoformat(value))

    def shift(self, days: int) -> "DayKey":
        return DayKey(self.day + timedelta(days=days))

    @property
    def label(self) -> str:
        """Short display label, e.g. 'Sat, Oct 18'."""
        return f"{self.day:%a}, {self.day:%b} {self.day.day}"

    def __str__(self) -> str:
        return self.day.isoformat()
