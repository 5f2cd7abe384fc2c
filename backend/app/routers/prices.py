"""Price history API router.

Prices are shared across users; fetching them from a market data provider
happens outside this service, which only stores and serves closes.
"""

from datetime import date, timedelta

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies.auth import get_current_user_id
from app.schemas.price import Price, PriceCreate
from app.services.repositories import PriceRepository

router = APIRouter(prefix="/api/prices", tags=["prices"])


@router.post("", response_model=list[Price], status_code=status.HTTP_201_CREATED)
async def upsert_prices(
    prices: list[PriceCreate],
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Store closing prices; an existing close for the same ticker and day is replaced."""
    repo = PriceRepository(db)
    rows = [repo.upsert_price(p.ticker, p.date, p.close_price) for p in prices]
    db.commit()
    for row in rows:
        db.refresh(row)
    return rows


@router.get("/{ticker}/latest", response_model=Price)
async def get_latest_price(
    ticker: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return PriceRepository(db).get_latest_price(ticker.upper())


@router.get("/{ticker}/history", response_model=list[Price])
async def get_price_history(
    ticker: str,
    days: int = Query(30, ge=1, le=3650, description="Number of days to look back"),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Closes of a ticker over the last `days` days, oldest first."""
    end_date = date.today()
    start_date = end_date - timedelta(days=days - 1)
    return PriceRepository(db).find_price_history(ticker.upper(), start_date, end_date)
