"""Calendar arithmetic on year-and-month values."""

from __future__ import annotations

import datetime as _dt
import re
from dataclasses import dataclass

_THIRTY_ONE_DAY_MONTHS = frozenset({1, 3, 5, 7, 8, 10, 12})
_THIRTY_DAY_MONTHS = frozenset({4, 6, 9, 11})
_MONTHS_PER_YEAR = 12
_YEAR_MONTH_PATTERN = re.compile(r"^\s*(-?\d+)-(\d{1,2})\s*$")


def _is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


@dataclass(frozen=True, order=True)
class YearAndMonth:
    """A calendar month in a specific year, ordered chronologically."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"Invalid month {self.month}, expected 1 to 12")

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    @classmethod
    def parse(cls, text: str) -> YearAndMonth:
        """Parse a value of the form ``YYYY-MM``, e.g. ``2025-05``."""
        match = _YEAR_MONTH_PATTERN.match(text)
        if match is None:
            raise ValueError(f"Invalid year and month {text!r}, expected YYYY-MM")
        return cls(int(match.group(1)), int(match.group(2)))

    def last_day_of_month(self) -> int:
        """The last day of this month, taking leap years into account."""
        if self.month in _THIRTY_ONE_DAY_MONTHS:
            return 31
        if self.month in _THIRTY_DAY_MONTHS:
            return 30
        return 29 if _is_leap_year(self.year) else 28

    def to_date_end_of_month(self) -> _dt.date:
        """The date of the last day of this month."""
        return _dt.date(self.year, self.month, self.last_day_of_month())

    @classmethod
    def current(cls) -> YearAndMonth:
        """The month of today's local date."""
        today = _dt.date.today()
        return cls(today.year, today.month)

    @classmethod
    def last(cls) -> YearAndMonth:
        """The month before the current one."""
        return cls.current().one_month_earlier()

    def one_month_earlier(self) -> YearAndMonth:
        """The previous month; January wraps to December of the previous year."""
        if self.month == 1:
            return YearAndMonth(self.year - 1, 12)
        return YearAndMonth(self.year, self.month - 1)

    def elapsed_months_since(self, start: YearAndMonth) -> int:
        """Number of months from ``start`` to this month.

        Raises ValueError if ``start`` comes after this month.
        """
        if start > self:
            raise ValueError("Expected start <= end month")
        start_months = start.year * _MONTHS_PER_YEAR + start.month
        end_months = self.year * _MONTHS_PER_YEAR + self.month
        return end_months - start_months