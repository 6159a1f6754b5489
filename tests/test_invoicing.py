import pytest

from klirr.calendar import YearAndMonth
from klirr.invoicing import (
    TargetMonthInMonthsOffError,
    calculate_invoice_number,
    working_days_in_month,
)

JAN_2025 = YearAndMonth(2025, 1)
APR_2025 = YearAndMonth(2025, 4)
MAY_2025 = YearAndMonth(2025, 5)
JUNE_2025 = YearAndMonth(2025, 6)
JULY_2025 = YearAndMonth(2025, 7)
AUG_2025 = YearAndMonth(2025, 8)
SEPT_2025 = YearAndMonth(2025, 9)
DEC_2025 = YearAndMonth(2025, 12)
JULY_2026 = YearAndMonth(2026, 7)
AUG_2026 = YearAndMonth(2026, 8)
JAN_2028 = YearAndMonth(2028, 1)

CASES = [
    # offset_month, target_month, months_off, services_delta, expenses_delta
    (JUNE_2025, JUNE_2025, [], 0, 1),
    (JUNE_2025, SEPT_2025, [], 3, 4),
    (JUNE_2025, JUNE_2025, [APR_2025, MAY_2025], 0, 1),
    (JUNE_2025, JUNE_2025, [JULY_2026, AUG_2026], 0, 1),
    (APR_2025, JULY_2025, [MAY_2025, JUNE_2025, JULY_2025], 0, 1),
    (APR_2025, AUG_2025, [MAY_2025, JUNE_2025, JULY_2025], 1, 2),
    (APR_2025, DEC_2025, [JAN_2025, MAY_2025, JULY_2025, SEPT_2025, JAN_2028], 5, 6),
]


@pytest.mark.parametrize("offset", range(10))
@pytest.mark.parametrize(
    "offset_month, target_month, months_off, services_delta, expenses_delta", CASES
)
def test_services_invoice_number(
    offset, offset_month, target_month, months_off, services_delta, expenses_delta
):
    result = calculate_invoice_number(
        offset, offset_month, target_month, False, months_off
    )
    assert result == offset + services_delta


@pytest.mark.parametrize("offset", range(10))
@pytest.mark.parametrize(
    "offset_month, target_month, months_off, services_delta, expenses_delta", CASES
)
def test_expenses_invoice_number(
    offset, offset_month, target_month, months_off, services_delta, expenses_delta
):
    result = calculate_invoice_number(
        offset, offset_month, target_month, True, months_off
    )
    assert result == offset + expenses_delta


def test_documented_example():
    result = calculate_invoice_number(
        100,
        YearAndMonth(2024, 1),
        YearAndMonth(2024, 8),
        True,
        [YearAndMonth(2024, 3), YearAndMonth(2024, 4)],
    )
    assert result == 106


def test_calculate_invoice_number_rejects_offset_month_in_months_off():
    with pytest.raises(ValueError, match="Should have validated ProtoInvoiceInfo"):
        calculate_invoice_number(237, MAY_2025, DEC_2025, True, [MAY_2025])


def test_calculate_invoice_number_rejects_target_before_offset():
    with pytest.raises(ValueError):
        calculate_invoice_number(1, MAY_2025, APR_2025, False, [])


def test_working_days_january_2024():
    assert working_days_in_month(YearAndMonth(2024, 1), []) == 23


def test_working_days_december_2025():
    assert working_days_in_month(DEC_2025, []) == 23


def test_working_days_target_month_in_months_off():
    target = YearAndMonth(2024, 1)
    with pytest.raises(TargetMonthInMonthsOffError) as info:
        working_days_in_month(target, [target])
    assert info.value.target_month == target