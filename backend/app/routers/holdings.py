"""Holdings (lots) API router."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies.auth import get_current_user_id
from app.schemas.holding import Holding as HoldingSchema
from app.schemas.holding import HoldingCreate, HoldingUpdate
from app.services.holding_service import HoldingService
from app.services.repositories import AccountRepository, HoldingRepository, PortfolioRepository

router = APIRouter(prefix="/api/holdings", tags=["holdings"])


@router.get("", response_model=list[HoldingSchema])
async def list_holdings(
    account_id: str | None = Query(None, description="Filter by account ID"),
    portfolio_id: str | None = Query(None, description="Filter by portfolio ID"),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """List the user's lots, optionally narrowed to one account or portfolio."""
    repo = HoldingRepository(db)
    if account_id is not None:
        AccountRepository(db).get_for_user(account_id, user_id)
        return repo.get_current_holdings(account_id=account_id)
    if portfolio_id is not None:
        PortfolioRepository(db).get_for_user(portfolio_id, user_id)
        return repo.get_current_holdings(portfolio_id=portfolio_id)
    return repo.find_by_user(user_id)


@router.get("/{holding_id}", response_model=HoldingSchema)
async def get_holding(
    holding_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return HoldingRepository(db).get_for_user(holding_id, user_id)


@router.post("", response_model=HoldingSchema, status_code=status.HTTP_201_CREATED)
async def create_holding(
    holding: HoldingCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """
    Add a lot.

    Totals of scheduled/projected dividends for the same account and ticker
    are recomputed with the new share count.
    """
    db_holding = HoldingService(db).create_holding(user_id, **holding.model_dump())
    db.commit()
    db.refresh(db_holding)
    return db_holding


@router.put("/{holding_id}", response_model=HoldingSchema)
async def update_holding(
    holding_id: str,
    holding_update: HoldingUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    db_holding = HoldingService(db).update_holding(
        user_id, holding_id, **holding_update.model_dump(exclude_unset=True)
    )
    db.commit()
    db.refresh(db_holding)
    return db_holding


@router.delete("/{holding_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_holding(
    holding_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    HoldingService(db).delete_holding(user_id, holding_id)
    db.commit()
    return None
