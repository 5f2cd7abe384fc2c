"""Period-over-period growth and compound annual growth rate."""

from collections.abc import Iterable, Mapping
from decimal import Decimal

from app.services.dividends.aggregation import period_total
from app.services.dividends.types import AggregatedPeriod, DividendRecord, GrowthComparison

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def compare_periods(current: Decimal, previous: Decimal) -> GrowthComparison:
    """Growth from previous to current.

    A zero previous amount yields 0% growth rather than a division error.
    """
    current = Decimal(current)
    previous = Decimal(previous)
    growth_amount = current - previous
    growth_percent = ZERO if previous == 0 else growth_amount / previous * HUNDRED
    return GrowthComparison(
        current_amount=current,
        previous_amount=previous,
        growth_amount=growth_amount,
        growth_percent=growth_percent,
    )


def quarter_over_quarter_growth(
    records: Iterable[DividendRecord], year: int, quarter: int
) -> GrowthComparison:
    """Compare a quarter with the same quarter one year earlier."""
    records = list(records)
    return compare_periods(
        period_total(records, year, quarter),
        period_total(records, year - 1, quarter),
    )


def year_over_year_growth(records: Iterable[DividendRecord], year: int) -> GrowthComparison:
    records = list(records)
    return compare_periods(period_total(records, year), period_total(records, year - 1))


def compound_annual_growth_rate(
    yearly: Iterable[AggregatedPeriod] | Mapping[int, Decimal],
) -> Decimal:
    """CAGR in percent across a yearly series.

    Only years with a positive total can be endpoints. Zero years between
    the endpoints still count toward the span. Returns 0 when fewer than two
    positive years exist.
    """
    if isinstance(yearly, Mapping):
        totals = {int(year): Decimal(total) for year, total in yearly.items()}
    else:
        totals = {period.year: period.total for period in yearly}

    positive_years = sorted(year for year, total in totals.items() if total > 0)
    if len(positive_years) < 2:
        return ZERO

    first_year, last_year = positive_years[0], positive_years[-1]
    years = last_year - first_year
    first_total = totals[first_year]
    if years == 0 or first_total == 0:
        return ZERO

    ratio = totals[last_year] / first_total
    return (ratio ** (Decimal(1) / Decimal(years)) - 1) * HUNDRED
