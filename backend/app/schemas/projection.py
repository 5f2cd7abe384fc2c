"""Response schemas for income projections."""

import datetime as dt

from app.constants import DividendStatus
from app.schemas.common import AnalyticsModel
from app.services.dividends.types import Cadence


class HoldingProjection(AnalyticsModel):
    holding_key: str
    ticker: str
    account_id: str | None
    account_name: str | None
    cadence: Cadence
    next_pay_date: dt.date
    next_pay_amount: float
    projected_annual: float
    pct_of_total: float


class ExcludedHolding(AnalyticsModel):
    """A holding left out of the projection and why."""

    ticker: str
    account_id: str | None
    account_name: str | None
    reason: str


class ProjectionDetail(AnalyticsModel):
    ticker: str
    account_name: str | None
    amount: float
    status: DividendStatus


class ProjectionChartMonth(AnalyticsModel):
    year: int
    month: int
    is_past: bool
    actual: float | None
    projected: float
    detail: list[ProjectionDetail]


class ProjectionResponse(AnalyticsModel):
    holding_projections: list[HoldingProjection]
    excluded: list[ExcludedHolding]
    ttm_income: float
    projected_annual: float
    trend: float
    trend_pct: float
    chart_data: list[ProjectionChartMonth]


class MonthlyProjection(AnalyticsModel):
    year: int
    month: int
    projected_income: float
