"""Dividends API router."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.constants import DividendStatus
from app.database import get_db
from app.dependencies.auth import get_current_user_id
from app.schemas.common import PaginatedResponse
from app.schemas.dividend import Dividend as DividendSchema
from app.schemas.dividend import DividendCreate, DividendUpdate
from app.services.dividend_service import DividendService
from app.services.repositories import DividendFilter, DividendRepository

router = APIRouter(prefix="/api/dividends", tags=["dividends"])


@router.get("", response_model=PaginatedResponse[DividendSchema])
async def list_dividends(
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(50, ge=1, le=500, description="Maximum records to return"),
    portfolio_id: str | None = Query(None, description="Filter by portfolio ID"),
    account_id: str | None = Query(None, description="Filter by account ID"),
    ticker: str | None = Query(None, description="Filter by ticker"),
    dividend_status: DividendStatus | None = Query(None, alias="status"),
    start_date: date | None = Query(None, description="Earliest pay date (inclusive)"),
    end_date: date | None = Query(None, description="Latest pay date (inclusive)"),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """
    Get paginated dividends of the current user, ordered by pay date.

    Returns:
        Paginated response with items, total count, and has_more flag
    """
    dividends = DividendService(db).list_dividends(
        user_id,
        DividendFilter(
            portfolio_id=portfolio_id,
            account_id=account_id,
            ticker=ticker,
            status=dividend_status,
            start_date=start_date,
            end_date=end_date,
        ),
    )
    total = len(dividends)
    page = list(dividends[skip : skip + limit])

    return PaginatedResponse[DividendSchema](
        items=[DividendSchema.model_validate(d) for d in page],
        total=total,
        skip=skip,
        limit=limit,
        has_more=(skip + len(page)) < total,
    )


@router.get("/{dividend_id}", response_model=DividendSchema)
async def get_dividend(
    dividend_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return DividendRepository(db).get_for_user(dividend_id, user_id)


@router.post("", response_model=DividendSchema, status_code=status.HTTP_201_CREATED)
async def create_dividend(
    dividend: DividendCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Record a dividend. Its total is amount per share times shares held."""
    db_dividend = DividendService(db).create_dividend(user_id, **dividend.model_dump())
    db.commit()
    db.refresh(db_dividend)
    return db_dividend


@router.put("/{dividend_id}", response_model=DividendSchema)
async def update_dividend(
    dividend_id: str,
    dividend_update: DividendUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Edit a dividend; changing amount per share or ticker recomputes its total."""
    db_dividend = DividendService(db).update_dividend(
        user_id, dividend_id, **dividend_update.model_dump(exclude_unset=True)
    )
    db.commit()
    db.refresh(db_dividend)
    return db_dividend


@router.delete("/{dividend_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_dividend(
    dividend_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    DividendService(db).delete_dividend(user_id, dividend_id)
    db.commit()
    return None
