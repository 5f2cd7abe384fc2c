"""Income figures behind the dashboard: summaries, aggregates, growth and series."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from app.config import settings
from app.services.dividend_service import DividendService
from app.services.dividends import (
    aggregate_by_month,
    aggregate_by_quarter,
    aggregate_by_year,
    all_time_income,
    annualized_income,
    build_daily_income,
    build_dividend_calendar,
    build_trailing_income,
    compound_annual_growth_rate,
    paid_only,
    quarter_of,
    quarter_over_quarter_growth,
    year_over_year_growth,
    ytd_income,
)
from app.services.dividends.types import (
    AggregatedPeriod,
    CalendarDay,
    DailyIncome,
    DividendRecord,
    GrowthComparison,
    TrailingSeries,
)
from app.services.portfolio import PortfolioValuationService
from app.services.portfolio.valuation_types import PortfolioValuation
from app.services.repositories import DividendFilter, PortfolioRepository


@dataclass
class IncomeSummary:
    """Headline income numbers, plus the portfolio value when scoped to one portfolio."""

    ytd_income: Decimal
    all_time_income: Decimal
    annualized_income: Decimal
    monthly_average: Decimal
    paid_count: int
    valuation: PortfolioValuation | None = None


@dataclass
class GrowthMetrics:
    quarter_over_quarter: GrowthComparison
    year_over_year: GrowthComparison
    cagr: Decimal


class DashboardService:
    """Composes repositories and the income calculators per request."""

    def __init__(self, db: Session) -> None:
        self._db = db
        self.portfolio_repo = PortfolioRepository(db)
        self.dividend_service = DividendService(db)
        self.valuation_service = PortfolioValuationService(db)

    def _paid_records(self, user_id: str, portfolio_id: str | None) -> list[DividendRecord]:
        if portfolio_id is not None:
            self.portfolio_repo.get_for_user(portfolio_id, user_id)
        records = self.dividend_service.list_records(
            user_id, DividendFilter(portfolio_id=portfolio_id)
        )
        return paid_only(records)

    def get_summary(
        self, user_id: str, portfolio_id: str | None = None, today: date | None = None
    ) -> IncomeSummary:
        today = today or date.today()
        paid = self._paid_records(user_id, portfolio_id)
        annualized = annualized_income(paid, today)

        valuation = None
        if portfolio_id is not None:
            valuation = self.valuation_service.snapshot_portfolio(portfolio_id, today)

        return IncomeSummary(
            ytd_income=ytd_income(paid, today),
            all_time_income=all_time_income(paid),
            annualized_income=annualized,
            monthly_average=annualized / 12,
            paid_count=len(paid),
            valuation=valuation,
        )

    def get_trailing_income(
        self,
        user_id: str,
        portfolio_id: str | None = None,
        months: int | None = None,
        today: date | None = None,
    ) -> TrailingSeries:
        today = today or date.today()
        paid = self._paid_records(user_id, portfolio_id)
        return build_trailing_income(paid, today, months or settings.ttm_months)

    def get_daily_income(
        self, user_id: str, days: int, portfolio_id: str | None = None, today: date | None = None
    ) -> list[DailyIncome]:
        today = today or date.today()
        return build_daily_income(self._paid_records(user_id, portfolio_id), today, days)

    def get_quarterly(
        self, user_id: str, portfolio_id: str | None = None, count: int | None = None
    ) -> list[AggregatedPeriod]:
        count = settings.default_quarter_count if count is None else count
        return aggregate_by_quarter(self._paid_records(user_id, portfolio_id), count)

    def get_yearly(
        self, user_id: str, portfolio_id: str | None = None, count: int | None = None
    ) -> list[AggregatedPeriod]:
        count = settings.default_year_count if count is None else count
        return aggregate_by_year(self._paid_records(user_id, portfolio_id), count)

    def get_monthly(
        self, user_id: str, portfolio_id: str | None = None, count: int | None = None
    ) -> list[AggregatedPeriod]:
        return aggregate_by_month(self._paid_records(user_id, portfolio_id), count)

    def get_growth(
        self, user_id: str, portfolio_id: str | None = None, today: date | None = None
    ) -> GrowthMetrics:
        """Current quarter and year against the same periods a year earlier, plus CAGR."""
        today = today or date.today()
        paid = self._paid_records(user_id, portfolio_id)
        return GrowthMetrics(
            quarter_over_quarter=quarter_over_quarter_growth(paid, today.year, quarter_of(today)),
            year_over_year=year_over_year_growth(paid, today.year),
            cagr=compound_annual_growth_rate(aggregate_by_year(paid, count=None)),
        )

    def get_calendar(
        self, user_id: str, year: int, month: int, portfolio_id: str | None = None
    ) -> list[CalendarDay]:
        """All dividends of a month (any status), grouped by pay date."""
        if portfolio_id is not None:
            self.portfolio_repo.get_for_user(portfolio_id, user_id)
        records = self.dividend_service.list_records(user_id, DividendFilter(portfolio_id=portfolio_id))
        return build_dividend_calendar(records, year, month)
