"""Grouping and summation of dividend records by calendar period.

Every aggregation returns buckets oldest-first. When a caller asks for the
most recent N buckets, the N largest period keys are selected and then
returned in ascending order.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from app.constants import DividendStatus
from app.services.dividends.dates import add_months, parse_pay_date, quarter_of
from app.services.dividends.exceptions import InvalidDividendDataError
from app.services.dividends.types import AggregatedPeriod, DividendRecord


@dataclass(frozen=True, order=True)
class PeriodKey:
    """Sort key of a bucket. Unused sub-periods are 0."""

    year: int
    quarter: int = 0
    month: int = 0


KeyFunc = Callable[[date], PeriodKey]


def year_key(d: date) -> PeriodKey:
    return PeriodKey(d.year)


def quarter_key(d: date) -> PeriodKey:
    return PeriodKey(d.year, quarter=quarter_of(d))


def month_key(d: date) -> PeriodKey:
    return PeriodKey(d.year, month=d.month)


def is_realized(status: DividendStatus) -> bool:
    """Whether a dividend in this status counts as received income."""
    if status is DividendStatus.PAID:
        return True
    if status is DividendStatus.SCHEDULED or status is DividendStatus.PROJECTED:
        return False
    raise InvalidDividendDataError(f"Unknown dividend status: {status!r}", field="status")


def status_of(record: DividendRecord) -> DividendStatus:
    try:
        return DividendStatus(record.status)
    except ValueError as e:
        raise InvalidDividendDataError(
            f"Unknown dividend status: {record.status!r}", field="status"
        ) from e


def paid_only(records: Iterable[DividendRecord]) -> list[DividendRecord]:
    """Keep only paid records."""
    return [r for r in records if is_realized(status_of(r))]


def validated_amount(record: DividendRecord) -> Decimal:
    """Total amount of a record as Decimal; negative totals are rejected."""
    amount = Decimal(str(record.total_amount))
    if amount < 0:
        raise InvalidDividendDataError(
            f"Negative dividend total for {record.ticker}: {amount}", field="total_amount"
        )
    return amount


def aggregate(
    records: Iterable[DividendRecord],
    key_fn: KeyFunc,
    count: int | None = None,
) -> list[AggregatedPeriod]:
    """Group records into calendar buckets.

    Args:
        records: Dividend records to sum (callers filter by status beforehand)
        key_fn: Maps a pay date to its bucket key (year_key, quarter_key, month_key)
        count: If set, keep only the most recent `count` buckets

    Returns:
        Buckets in ascending chronological order. Each bucket's total equals
        the sum of its per-ticker amounts.
    """
    buckets: dict[PeriodKey, AggregatedPeriod] = {}

    for record in records:
        pay_date = parse_pay_date(record.pay_date)
        amount = validated_amount(record)
        key = key_fn(pay_date)

        period = buckets.get(key)
        if period is None:
            period = AggregatedPeriod(
                year=key.year,
                quarter=key.quarter or None,
                month=key.month or None,
            )
            buckets[key] = period

        ticker = record.ticker.strip().upper()
        period.per_ticker[ticker] = period.per_ticker.get(ticker, Decimal("0")) + amount
        period.total += amount

    keys = sorted(buckets)
    if count is not None:
        keys = keys[-count:] if count > 0 else []

    return [buckets[k] for k in keys]


def aggregate_by_quarter(
    records: Iterable[DividendRecord], count: int | None = 8
) -> list[AggregatedPeriod]:
    """Most recent `count` quarters, oldest first."""
    return aggregate(records, quarter_key, count)


def aggregate_by_year(
    records: Iterable[DividendRecord], count: int | None = 5
) -> list[AggregatedPeriod]:
    """Most recent `count` years, oldest first."""
    return aggregate(records, year_key, count)


def aggregate_by_month(
    records: Iterable[DividendRecord], count: int | None = None
) -> list[AggregatedPeriod]:
    return aggregate(records, month_key, count)


def period_total(records: Iterable[DividendRecord], year: int, quarter: int | None = None) -> Decimal:
    """Sum of records paid in a year, or in one quarter of it."""
    total = Decimal("0")
    for record in records:
        pay_date = parse_pay_date(record.pay_date)
        if pay_date.year != year:
            continue
        if quarter is not None and quarter_of(pay_date) != quarter:
            continue
        total += validated_amount(record)
    return total


def ytd_income(records: Iterable[DividendRecord], today: date) -> Decimal:
    """Paid income since January 1st of today's year."""
    return sum(
        (
            validated_amount(r)
            for r in paid_only(records)
            if parse_pay_date(r.pay_date).year == today.year
        ),
        Decimal("0"),
    )


def all_time_income(records: Iterable[DividendRecord]) -> Decimal:
    return sum((validated_amount(r) for r in paid_only(records)), Decimal("0"))


def annualized_income(records: Iterable[DividendRecord], today: date) -> Decimal:
    """Paid income over the year ending today (inclusive of the same day last year)."""
    one_year_ago = add_months(today, -12)
    return sum(
        (
            validated_amount(r)
            for r in paid_only(records)
            if parse_pay_date(r.pay_date) >= one_year_ago
        ),
        Decimal("0"),
    )
