"""Response schemas for income summaries, aggregates, growth and series."""

import datetime as dt

from app.constants import DividendStatus
from app.schemas.common import AnalyticsModel
from app.schemas.valuation import PortfolioValuation


class IncomeSummary(AnalyticsModel):
    ytd_income: float
    all_time_income: float
    annualized_income: float
    monthly_average: float
    paid_count: int
    valuation: PortfolioValuation | None = None


class AggregatedPeriod(AnalyticsModel):
    """One calendar bucket; total equals the sum of per_ticker."""

    label: str
    year: int
    quarter: int | None = None
    month: int | None = None
    per_ticker: dict[str, float]
    total: float


class GrowthComparison(AnalyticsModel):
    current_amount: float
    previous_amount: float
    growth_amount: float
    growth_percent: float


class GrowthMetrics(AnalyticsModel):
    quarter_over_quarter: GrowthComparison
    year_over_year: GrowthComparison
    cagr: float


class AccountRef(AnalyticsModel):
    account_id: str
    account_name: str | None


class AccountIncome(AnalyticsModel):
    account_id: str
    account_name: str | None
    income: float


class TrailingMonth(AnalyticsModel):
    year: int
    month: int
    total: float
    by_account: list[AccountIncome]


class TrailingSeries(AnalyticsModel):
    """Fixed-length month series; every listed account appears in every month."""

    months: list[TrailingMonth]
    accounts: list[AccountRef]
    total: float


class DailyIncome(AnalyticsModel):
    date: dt.date
    total: float


class CalendarDividend(AnalyticsModel):
    ticker: str
    account_id: str | None
    account_name: str | None
    amount_per_share: float
    total_amount: float
    pay_date: dt.date
    status: DividendStatus


class CalendarDay(AnalyticsModel):
    date: dt.date
    dividends: list[CalendarDividend]
