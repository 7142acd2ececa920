"""Payment calendar: period dates, labels and chart x-positions.

Semi-monthly and bi-weekly periods step a fixed 15 / 14 days from the first
payment date rather than following true calendar alignment.
"""

import calendar
from datetime import date, timedelta
from decimal import Decimal

from mortgage_analyzer.models.loan import PaymentFrequency

SEMI_MONTHLY_STEP_DAYS = 15
BI_WEEKLY_STEP_DAYS = 14


def add_months(d: date, n: int) -> date:
    """Shift by n calendar months keeping the day number.

    A day past the end of the target month rolls into the next month
    (Jan 31 + 1 month = Mar 3 in a common year).
    """
    m = d.month - 1 + n
    y = d.year + m // 12
    m = m % 12 + 1
    return date(y, m, 1) + timedelta(days=d.day - 1)


def period_date(start: date, frequency: PaymentFrequency, period: int) -> date:
    """Due date of a 1-based period."""
    steps = period - 1
    if frequency == PaymentFrequency.MONTHLY:
        return add_months(start, steps)
    if frequency == PaymentFrequency.SEMI_MONTHLY:
        return start + timedelta(days=SEMI_MONTHLY_STEP_DAYS * steps)
    return start + timedelta(days=BI_WEEKLY_STEP_DAYS * steps)


def date_label(d: date) -> str:
    """e.g. 'Nov 1, 2026'."""
    return f"{calendar.month_abbr[d.month]} {d.day}, {d.year}"


def year_fraction(d: date) -> Decimal:
    """Calendar position in years: year + month/12 + day/365 (month 0-based)."""
    return Decimal(d.year) + Decimal(d.month - 1) / 12 + Decimal(d.day) / 365


def period_position(
    period: int,
    periods_per_year: int,
    frequency: PaymentFrequency,
    start: date | None,
) -> tuple[str, Decimal]:
    """(label, year_fraction) for a period, date-derived when a start date is known."""
    if start is None:
        return f"P{period}", Decimal(period) / periods_per_year
    d = period_date(start, frequency, period)
    return date_label(d), year_fraction(d)
