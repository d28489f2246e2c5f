"""Trailing reporting window in shop-local calendar days.

A window of N days ending at a reference instant covers the N local
calendar days up to and including the reference day:

    now = 2024-03-10 15:00 (local), days = 7
    days:   03-04 03-05 03-06 03-07 03-08 03-09 03-10
    cutoff: 2024-03-04 00:00 local

Sales are bucketed by the same local date, so every in-window sale lands
in exactly one day of the series.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date as date_type
from datetime import datetime, time, timedelta, tzinfo


def local_date(instant: datetime, tz: tzinfo) -> date_type:
    """Calendar date of ``instant`` in the shop timezone.

    Naive datetimes are taken to already be shop-local.
    """
    if instant.tzinfo is None:
        return instant.date()
    return instant.astimezone(tz).date()


@dataclass(frozen=True)
class ReportingWindow:
    """Trailing window of local calendar days.

    Attributes:
        start: First local day (inclusive).
        end: Reference local day (inclusive).
        cutoff: Local midnight at the start of ``start``.
        tz: Shop timezone.
    """

    start: date_type
    end: date_type
    cutoff: datetime
    tz: tzinfo

    @classmethod
    def ending_at(cls, now: datetime, days: int, tz: tzinfo) -> ReportingWindow:
        """Build the ``days``-long window ending on the local day of ``now``.

        Args:
            now: Reference instant.
            days: Window length in days, at least 1.
            tz: Shop timezone.

        Returns:
            The reporting window.

        Raises:
            ValueError: If ``days`` is less than 1.
        """
        if days < 1:
            raise ValueError(f"days must be >= 1, got {days}")
        end = local_date(now, tz)
        start = end - timedelta(days=days - 1)
        cutoff = datetime.combine(start, time.min, tzinfo=tz)
        return cls(start=start, end=end, cutoff=cutoff, tz=tz)

    @property
    def days(self) -> list[date_type]:
        """Every local day in the window, oldest first."""
        length = (self.end - self.start).days + 1
        return [self.start + timedelta(days=offset) for offset in range(length)]

    def contains(self, instant: datetime) -> bool:
        """Return True if ``instant`` falls on a day inside the window."""
        return self.start <= local_date(instant, self.tz) <= self.end
