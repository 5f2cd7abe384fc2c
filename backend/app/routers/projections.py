"""Projections API router - forward-looking income estimates."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies.auth import get_current_user_id
from app.schemas.common import DataResponse
from app.schemas.projection import (
    ExcludedHolding,
    HoldingProjection,
    MonthlyProjection,
    ProjectionChartMonth,
    ProjectionResponse,
)
from app.services.projection_service import ProjectionService

router = APIRouter(prefix="/api/projections", tags=["projections"])


@router.get("", response_model=DataResponse[ProjectionResponse])
async def get_projections(
    portfolio_id: str | None = Query(None, description="Filter by portfolio ID"),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """
    Project each holding's next payment and annual income.

    Holdings with fewer than two paid dividends, or whose latest payment
    gap matches no cadence, are listed under `excluded` with the reason.
    """
    summary = ProjectionService(db).build_projections(user_id, portfolio_id)
    response = ProjectionResponse(
        holding_projections=[
            HoldingProjection.model_validate(p) for p in summary.result.holding_projections
        ],
        excluded=[ExcludedHolding.model_validate(e) for e in summary.result.excluded],
        ttm_income=summary.ttm_income,
        projected_annual=summary.projected_annual,
        trend=summary.trend,
        trend_pct=summary.trend_pct,
        chart_data=[ProjectionChartMonth.model_validate(m) for m in summary.chart_data],
    )
    return {"data": response}


@router.get("/monthly", response_model=DataResponse[list[MonthlyProjection]])
async def get_monthly_projection(
    portfolio_id: str | None = Query(None, description="Filter by portfolio ID"),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Projected income for each of the coming months."""
    months = ProjectionService(db).monthly_projection(user_id, portfolio_id)
    return {"data": [MonthlyProjection.model_validate(m) for m in months]}
