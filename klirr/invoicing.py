"""Invoice numbering and working-day calculations."""

from __future__ import annotations

import datetime as _dt
from collections.abc import Iterable

from klirr.calendar import YearAndMonth

_WORKING_WEEKDAYS = frozenset(range(5))  # Monday to Friday


class TargetMonthInMonthsOffError(Exception):
    """The target month is recorded as a month off."""

    def __init__(self, target_month: YearAndMonth) -> None:
        super().__init__(
            f"Target month {target_month} must not be in the record of months off"
        )
        self.target_month = target_month


def calculate_invoice_number(
    offset: int,
    offset_month: YearAndMonth,
    target_month: YearAndMonth,
    is_expenses: bool,
    months_off: Iterable[YearAndMonth],
) -> int:
    """Compute the invoice number for ``target_month``.

    Starts from ``offset`` issued in ``offset_month``, adds one per elapsed
    month, subtracts months off strictly after ``offset_month`` up to and
    including ``target_month``, and adds one more for expense invoices so they
    always follow the service invoice of the same month.

    Raises ValueError if ``offset_month`` is itself a month off or if
    ``target_month`` comes before ``offset_month``.
    """
    months_off_set = set(months_off)
    if offset_month in months_off_set:
        raise ValueError(
            "Should have validated ProtoInvoiceInfo before calling this function"
        )
    elapsed = target_month.elapsed_months_since(offset_month)
    skipped = sum(1 for month in months_off_set if offset_month < month <= target_month)
    invoice_number = offset + elapsed - skipped
    if is_expenses:
        invoice_number += 1
    return invoice_number


def working_days_in_month(
    target_month: YearAndMonth, months_off: Iterable[YearAndMonth]
) -> int:
    """Count the weekdays (Monday to Friday) in ``target_month``.

    Raises TargetMonthInMonthsOffError if the month is recorded as off.
    """
    if target_month in set(months_off):
        raise TargetMonthInMonthsOffError(target_month)
    last_day = target_month.last_day_of_month()
    return sum(
        1
        for day in range(1, last_day + 1)
        if _dt.date(target_month.year, target_month.month, day).weekday()
        in _WORKING_WEEKDAYS
    )