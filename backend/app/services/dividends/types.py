"""Value objects for dividend aggregation, projection and income series."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum

from app.constants import DividendStatus


class Cadence(str, Enum):
    """Inferred payment frequency of a holding's dividends."""

    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUAL = "annual"
    IRREGULAR = "irregular"


@dataclass
class DividendRecord:
    """A dividend row as consumed by the calculators.

    pay_date may be an ISO string straight from the caller; it is parsed
    (and validated) when the record is bucketed.
    """

    ticker: str
    total_amount: Decimal
    pay_date: date | str
    status: DividendStatus = DividendStatus.PAID
    amount_per_share: Decimal = Decimal("0")
    account_id: str | None = None
    account_name: str | None = None


@dataclass
class AggregatedPeriod:
    """Dividend totals for one calendar bucket (year, quarter or month)."""

    year: int
    quarter: int | None = None
    month: int | None = None
    per_ticker: dict[str, Decimal] = field(default_factory=dict)
    total: Decimal = Decimal("0")

    @property
    def label(self) -> str:
        if self.quarter is not None:
            return f"Q{self.quarter} {self.year}"
        if self.month is not None:
            return f"{self.year}-{self.month:02d}"
        return str(self.year)


@dataclass
class GrowthComparison:
    """Change between two aggregated periods."""

    current_amount: Decimal
    previous_amount: Decimal
    growth_amount: Decimal
    growth_percent: Decimal


@dataclass
class HoldingProjection:
    """Projected income for one (account, ticker) holding."""

    holding_key: str
    ticker: str
    account_id: str | None
    account_name: str | None
    cadence: Cadence
    next_pay_date: date
    next_pay_amount: Decimal
    projected_annual: Decimal
    pct_of_total: Decimal = Decimal("0")


@dataclass
class ExcludedHolding:
    """A holding left out of the projection, with the reason shown to the user."""

    ticker: str
    account_id: str | None
    account_name: str | None
    reason: str


@dataclass
class ProjectionResult:
    """Included and excluded holdings of a projection run."""

    holding_projections: list[HoldingProjection] = field(default_factory=list)
    excluded: list[ExcludedHolding] = field(default_factory=list)

    @property
    def projected_annual(self) -> Decimal:
        return sum((p.projected_annual for p in self.holding_projections), Decimal("0"))


@dataclass
class ProjectionDetail:
    """One holding's contribution to a chart month."""

    ticker: str
    account_name: str | None
    amount: Decimal
    status: DividendStatus


@dataclass
class ProjectionChartMonth:
    """A month of the actual-vs-projected income chart.

    actual is None for future months.
    """

    year: int
    month: int
    is_past: bool
    actual: Decimal | None
    projected: Decimal = Decimal("0")
    detail: list[ProjectionDetail] = field(default_factory=list)


@dataclass
class MonthlyProjection:
    """Projected income for one future month."""

    year: int
    month: int
    projected_income: Decimal = Decimal("0")


@dataclass
class CalendarDay:
    """Dividends falling on one pay date."""

    date: date
    dividends: list[DividendRecord]


@dataclass
class AccountRef:
    """An account known to a trailing series."""

    account_id: str
    account_name: str | None


@dataclass
class AccountIncome:
    """Income of one account within one period."""

    account_id: str
    account_name: str | None
    income: Decimal


@dataclass
class TrailingMonth:
    """One slot of a trailing income series."""

    year: int
    month: int
    total: Decimal
    by_account: list[AccountIncome]


@dataclass
class TrailingSeries:
    """Dense month series plus the accounts that appear in it."""

    months: list[TrailingMonth]
    accounts: list[AccountRef]

    @property
    def total(self) -> Decimal:
        return sum((m.total for m in self.months), Decimal("0"))


@dataclass
class DailyIncome:
    """Income received on one calendar day."""

    date: date
    total: Decimal


@dataclass
class ProjectionSummary:
    """Everything the projections page needs in one object."""

    result: ProjectionResult
    ttm_income: Decimal
    trend: Decimal
    trend_pct: Decimal
    chart_data: list[ProjectionChartMonth]

    @property
    def projected_annual(self) -> Decimal:
        return self.result.projected_annual
