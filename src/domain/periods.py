"""Reporting periods and the date windows they cover."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Literal, Optional

TimePeriod = Literal["7days", "30days", "month"]

PERIODS: tuple[str, ...] = ("7days", "30days", "month")
DEFAULT_PERIOD = "30days"


@dataclass(frozen=True)
class DateWindow:
    """An inclusive range of calendar days."""

    start: date
    end: date

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def previous(self) -> "DateWindow":
        """The window of equal length ending the day before this one starts."""
        end = self.start - timedelta(days=1)
        return DateWindow(start=end - timedelta(days=self.days - 1), end=end)

    def dates(self) -> list[date]:
        return [self.start + timedelta(days=i) for i in range(self.days)]

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


def validate_period(period: Optional[str]) -> str:
    """Return *period* (or the default when empty), rejecting unknown values."""
    if not period:
        return DEFAULT_PERIOD
    if period not in PERIODS:
        raise ValueError(f"Unknown period '{period}'. Expected one of: {', '.join(PERIODS)}")
    return period


def resolve_period(period: str, today: Optional[date] = None) -> DateWindow:
    """Map a period name to the window it covers, ending *today* inclusive."""
    today = today or date.today()
    period = validate_period(period)
    if period == "7days":
        return DateWindow(start=today - timedelta(days=6), end=today)
    if period == "month":
        return DateWindow(start=today.replace(day=1), end=today)
    return DateWindow(start=today - timedelta(days=29), end=today)


def percent_change(current: float, previous: float) -> float:
    """Percent change from *previous* to *current*; 0 when there is no baseline."""
    if not previous:
        return 0.0
    return round((current - previous) / previous * 100, 1)
