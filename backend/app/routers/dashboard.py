"""Dashboard API router - realized income figures."""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies.auth import get_current_user_id
from app.schemas.common import DataResponse
from app.schemas.dashboard import (
    AggregatedPeriod,
    CalendarDay,
    DailyIncome,
    GrowthMetrics,
    IncomeSummary,
    TrailingSeries,
)
from app.services.dashboard_service import DashboardService


router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/summary", response_model=DataResponse[IncomeSummary])
async def get_dashboard_summary(
    portfolio_id: str | None = Query(None, description="Filter by portfolio ID"),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """
    Get headline income figures.

    Returns:
        - Year-to-date, all-time and trailing-year paid income
        - Monthly average over the trailing year
        - Portfolio valuation when portfolio_id is given
    """
    summary = DashboardService(db).get_summary(user_id, portfolio_id)
    return {"data": IncomeSummary.model_validate(summary)}


@router.get("/ttm", response_model=DataResponse[TrailingSeries])
async def get_trailing_income(
    portfolio_id: str | None = Query(None, description="Filter by portfolio ID"),
    months: int = Query(12, ge=1, le=120, description="Length of the trailing window"),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Paid income per month and account, zero-filled, ending this month."""
    series = DashboardService(db).get_trailing_income(user_id, portfolio_id, months)
    return {"data": TrailingSeries.model_validate(series)}


@router.get("/daily-income", response_model=DataResponse[list[DailyIncome]])
async def get_daily_income(
    days: int = Query(30, ge=1, le=366, description="Number of days ending today"),
    portfolio_id: str | None = Query(None, description="Filter by portfolio ID"),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    series = DashboardService(db).get_daily_income(user_id, days, portfolio_id)
    return {"data": [DailyIncome.model_validate(d) for d in series]}


@router.get("/aggregates/quarterly", response_model=DataResponse[list[AggregatedPeriod]])
async def get_quarterly_aggregates(
    count: int | None = Query(None, ge=1, le=100, description="Most recent quarters to return"),
    portfolio_id: str | None = Query(None, description="Filter by portfolio ID"),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Paid income per quarter and ticker, oldest first."""
    periods = DashboardService(db).get_quarterly(user_id, portfolio_id, count)
    return {"data": [AggregatedPeriod.model_validate(p) for p in periods]}


@router.get("/aggregates/yearly", response_model=DataResponse[list[AggregatedPeriod]])
async def get_yearly_aggregates(
    count: int | None = Query(None, ge=1, le=100, description="Most recent years to return"),
    portfolio_id: str | None = Query(None, description="Filter by portfolio ID"),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    periods = DashboardService(db).get_yearly(user_id, portfolio_id, count)
    return {"data": [AggregatedPeriod.model_validate(p) for p in periods]}


@router.get("/aggregates/monthly", response_model=DataResponse[list[AggregatedPeriod]])
async def get_monthly_aggregates(
    count: int | None = Query(None, ge=1, le=600, description="Most recent months to return"),
    portfolio_id: str | None = Query(None, description="Filter by portfolio ID"),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    periods = DashboardService(db).get_monthly(user_id, portfolio_id, count)
    return {"data": [AggregatedPeriod.model_validate(p) for p in periods]}


@router.get("/growth", response_model=DataResponse[GrowthMetrics])
async def get_growth(
    portfolio_id: str | None = Query(None, description="Filter by portfolio ID"),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Quarter and year growth against a year earlier, plus CAGR over all years."""
    metrics = DashboardService(db).get_growth(user_id, portfolio_id)
    return {"data": GrowthMetrics.model_validate(metrics)}


@router.get("/calendar", response_model=DataResponse[list[CalendarDay]])
async def get_dividend_calendar(
    year: int | None = Query(None, ge=1900, le=2200),
    month: int | None = Query(None, ge=1, le=12),
    portfolio_id: str | None = Query(None, description="Filter by portfolio ID"),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Dividends of a month grouped by pay date (defaults to the current month)."""
    today = date.today()
    days = DashboardService(db).get_calendar(
        user_id, year or today.year, month or today.month, portfolio_id
    )
    return {"data": [CalendarDay.model_validate(d) for d in days]}
