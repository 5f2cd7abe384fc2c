"""Portfolios API router."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.constants import ValueHistoryRange
from app.database import get_db
from app.dependencies.auth import get_current_user_id
from app.schemas.common import DataResponse
from app.schemas.holding import Position
from app.schemas.portfolio import Portfolio as PortfolioSchema
from app.schemas.portfolio import PortfolioCreate, PortfolioUpdate, PortfolioWithAccountCount
from app.schemas.valuation import PortfolioValuation, PortfolioValuePoint, ValueSnapshot
from app.services.portfolio import PortfolioValuationService
from app.services.repositories import AccountRepository, DuplicateError, PortfolioRepository

router = APIRouter(prefix="/api/portfolios", tags=["portfolios"])


@router.get("", response_model=list[PortfolioWithAccountCount])
async def list_portfolios(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Get the current user's portfolios with account counts."""
    account_repo = AccountRepository(db)
    return [
        PortfolioWithAccountCount(
            id=portfolio.id,
            user_id=portfolio.user_id,
            name=portfolio.name,
            description=portfolio.description,
            created_at=portfolio.created_at,
            updated_at=portfolio.updated_at,
            account_count=len(account_repo.find_by_portfolio(portfolio.id)),
        )
        for portfolio in PortfolioRepository(db).find_by_user(user_id)
    ]


@router.post("", response_model=PortfolioSchema, status_code=status.HTTP_201_CREATED)
async def create_portfolio(
    portfolio: PortfolioCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Create a portfolio. Names are unique per user."""
    db_portfolio = PortfolioRepository(db).create(user_id, portfolio.name, portfolio.description)
    db.commit()
    db.refresh(db_portfolio)
    return db_portfolio


@router.get("/{portfolio_id}", response_model=PortfolioSchema)
async def get_portfolio(
    portfolio_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return PortfolioRepository(db).get_for_user(portfolio_id, user_id)


@router.put("/{portfolio_id}", response_model=PortfolioSchema)
async def update_portfolio(
    portfolio_id: str,
    portfolio_update: PortfolioUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Update an existing portfolio (must belong to user)."""
    repo = PortfolioRepository(db)
    db_portfolio = repo.get_for_user(portfolio_id, user_id)

    update_data = portfolio_update.model_dump(exclude_unset=True)
    if update_data.get("name") is None:
        update_data.pop("name", None)

    new_name = update_data.get("name")
    if new_name is not None and new_name != db_portfolio.name:
        if repo.find_by_user_and_name(user_id, new_name) is not None:
            raise DuplicateError("Portfolio", "name", new_name)

    repo.update(db_portfolio, **update_data)
    db.commit()
    db.refresh(db_portfolio)
    return db_portfolio


@router.delete("/{portfolio_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_portfolio(
    portfolio_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Delete a portfolio with its accounts, lots, dividends and value history."""
    repo = PortfolioRepository(db)
    repo.delete(repo.get_for_user(portfolio_id, user_id))
    db.commit()
    return None


@router.get("/{portfolio_id}/value", response_model=DataResponse[PortfolioValuation])
async def get_portfolio_value(
    portfolio_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """
    Value the portfolio at the latest prices.

    Tickers without a recent price are valued at cost basis and the
    valuation is flagged partial.
    """
    PortfolioRepository(db).get_for_user(portfolio_id, user_id)
    valuation = PortfolioValuationService(db).snapshot_portfolio(portfolio_id)
    return {"data": PortfolioValuation.model_validate(valuation)}


@router.post(
    "/{portfolio_id}/snapshots",
    response_model=DataResponse[ValueSnapshot],
    status_code=status.HTTP_201_CREATED,
)
async def save_portfolio_snapshot(
    portfolio_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Store today's valuation, replacing one already stored for today."""
    PortfolioRepository(db).get_for_user(portfolio_id, user_id)
    row = PortfolioValuationService(db).save_snapshot(portfolio_id)
    db.commit()
    return {"data": ValueSnapshot.model_validate(row)}


@router.get("/{portfolio_id}/value-history", response_model=DataResponse[list[PortfolioValuePoint]])
async def get_value_history(
    portfolio_id: str,
    value_range: ValueHistoryRange = Query(
        ValueHistoryRange.ALL, alias="range", description="Lookback: 1m, 3m, 6m, 1y or all"
    ),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Stored daily valuations, oldest first."""
    PortfolioRepository(db).get_for_user(portfolio_id, user_id)
    points = PortfolioValuationService(db).get_value_history(portfolio_id, value_range)
    return {"data": [PortfolioValuePoint.model_validate(p) for p in points]}


@router.get(
    "/{portfolio_id}/value-history/reconstructed",
    response_model=DataResponse[list[PortfolioValuePoint]],
)
async def get_reconstructed_value_history(
    portfolio_id: str,
    days: int = Query(30, ge=1, le=3650, description="Number of days to look back"),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """
    Value today's lots against historical closes.

    Days on which any held ticker has no close are left out.
    """
    PortfolioRepository(db).get_for_user(portfolio_id, user_id)
    points = PortfolioValuationService(db).reconstruct_value_history(portfolio_id, days)
    return {"data": [PortfolioValuePoint.model_validate(p) for p in points]}


@router.get("/{portfolio_id}/positions", response_model=DataResponse[list[Position]])
async def get_positions(
    portfolio_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Lots rolled up per ticker with share-weighted average cost."""
    PortfolioRepository(db).get_for_user(portfolio_id, user_id)
    positions = PortfolioValuationService(db).get_positions(portfolio_id)
    return {"data": [Position.model_validate(p) for p in positions]}
