"""Dense trailing income series for charts.

Series always have a fixed length: every month (or day) of the window gets
a slot, and every account known to the window gets a row in every month,
zero-filled where it received nothing.
"""

import logging
from collections.abc import Iterable
from datetime import date, timedelta
from decimal import Decimal

from app.services.dividends.aggregation import paid_only, validated_amount
from app.services.dividends.dates import parse_pay_date, shift_month
from app.services.dividends.exceptions import InvalidDividendDataError
from app.services.dividends.types import (
    AccountIncome,
    AccountRef,
    DailyIncome,
    DividendRecord,
    TrailingMonth,
    TrailingSeries,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def month_window(today: date, n: int) -> list[tuple[int, int]]:
    """The n (year, month) pairs ending at today's month, oldest first."""
    if n <= 0:
        return []
    return [shift_month(today.year, today.month, offset) for offset in range(-(n - 1), 1)]


def day_window(today: date, n: int) -> list[date]:
    """The n consecutive dates ending today, oldest first."""
    if n <= 0:
        return []
    return [today - timedelta(days=offset) for offset in range(n - 1, -1, -1)]


def build_trailing_income(
    records: Iterable[DividendRecord], today: date, months: int = 12
) -> TrailingSeries:
    """Paid income per month and account over the trailing window.

    Only accounts that received income somewhere in the window are listed;
    they appear in every month with zeros where nothing was paid.
    """
    window = month_window(today, months)
    if not window:
        return TrailingSeries(months=[], accounts=[])

    start_year, start_month = window[0]
    start = date(start_year, start_month, 1)

    income: dict[tuple[int, int], dict[str, Decimal]] = {slot: {} for slot in window}
    names: dict[str, str | None] = {}

    for record in paid_only(records):
        pay_date = parse_pay_date(record.pay_date)
        if pay_date < start or pay_date > today:
            continue
        if not record.account_id:
            raise InvalidDividendDataError(
                f"Dividend for {record.ticker} has no account", field="account_id"
            )

        amount = validated_amount(record)
        by_account = income[(pay_date.year, pay_date.month)]
        by_account[record.account_id] = by_account.get(record.account_id, ZERO) + amount
        names.setdefault(record.account_id, record.account_name)

    active = {
        account_id
        for by_account in income.values()
        for account_id, amount in by_account.items()
        if amount > 0
    }
    accounts = sorted(
        (AccountRef(account_id=a, account_name=names[a]) for a in active),
        key=lambda ref: (ref.account_name or "", ref.account_id),
    )

    series = []
    for year, month in window:
        by_account = income[(year, month)]
        rows = [
            AccountIncome(
                account_id=ref.account_id,
                account_name=ref.account_name,
                income=by_account.get(ref.account_id, ZERO),
            )
            for ref in accounts
        ]
        series.append(
            TrailingMonth(
                year=year,
                month=month,
                total=sum((row.income for row in rows), ZERO),
                by_account=rows,
            )
        )

    logger.debug(f"Built {len(series)}-month trailing series across {len(accounts)} accounts")
    return TrailingSeries(months=series, accounts=accounts)


def build_daily_income(
    records: Iterable[DividendRecord], today: date, days: int
) -> list[DailyIncome]:
    """Paid income per day for the last `days` days, zero-filled."""
    window = day_window(today, days)
    totals = {d: ZERO for d in window}

    for record in paid_only(records):
        pay_date = parse_pay_date(record.pay_date)
        if pay_date in totals:
            totals[pay_date] += validated_amount(record)

    return [DailyIncome(date=d, total=totals[d]) for d in window]
