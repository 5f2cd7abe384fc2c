"""Calendar helpers shared by the dividend calculators."""

import calendar
from datetime import date, datetime

from app.services.dividends.exceptions import InvalidDividendDataError


def parse_pay_date(value: date | str) -> date:
    """Return value as a date, raising InvalidDividendDataError if it cannot be parsed."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError as e:
            raise InvalidDividendDataError(f"Invalid pay date: {value!r}", field="pay_date") from e
    raise InvalidDividendDataError(f"Unsupported pay date type: {type(value).__name__}", field="pay_date")


def quarter_of(d: date) -> int:
    """Calendar quarter (1-4) of a date: ceil(month / 3)."""
    return (d.month + 2) // 3


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move (year, month) by delta months, rolling over year boundaries."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_index(year: int, month: int) -> int:
    """Absolute month number, handy for month differences."""
    return year * 12 + (month - 1)


def add_months(d: date, months: int) -> date:
    """Add calendar months to a date, clamping the day to the target month's length."""
    year, month = shift_month(d.year, d.month, months)
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(d.day, last_day))
