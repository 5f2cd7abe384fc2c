"""Accounts API router."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies.auth import get_current_user_id
from app.schemas.account import Account as AccountSchema
from app.schemas.account import AccountCreate, AccountUpdate
from app.services.repositories import AccountRepository, PortfolioRepository

router = APIRouter(prefix="/api/accounts", tags=["accounts"])


@router.get("", response_model=list[AccountSchema])
async def list_accounts(
    portfolio_id: str | None = Query(None, description="Filter by portfolio ID"),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """
    Get accounts for the current user.

    Query Parameters:
        - portfolio_id: Filter by specific portfolio (must belong to user)
    """
    repo = AccountRepository(db)
    if portfolio_id is None:
        return repo.find_by_user(user_id)

    PortfolioRepository(db).get_for_user(portfolio_id, user_id)
    return repo.find_by_portfolio(portfolio_id)


@router.get("/{account_id}", response_model=AccountSchema)
async def get_account(
    account_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Get a specific account by ID (must belong to user)."""
    return AccountRepository(db).get_for_user(account_id, user_id)


@router.post("", response_model=AccountSchema, status_code=status.HTTP_201_CREATED)
async def create_account(
    account: AccountCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Create a new account in one of the user's portfolios."""
    PortfolioRepository(db).get_for_user(account.portfolio_id, user_id)
    db_account = AccountRepository(db).create(account.portfolio_id, account.name, account.description)
    db.commit()
    db.refresh(db_account)
    return db_account


@router.put("/{account_id}", response_model=AccountSchema)
async def update_account(
    account_id: str,
    account_update: AccountUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Update an existing account (must belong to user)."""
    repo = AccountRepository(db)
    db_account = repo.get_for_user(account_id, user_id)

    update_data = account_update.model_dump(exclude_unset=True)
    if update_data.get("name") is None:
        update_data.pop("name", None)

    repo.update(db_account, **update_data)
    db.commit()
    db.refresh(db_account)
    return db_account


@router.delete("/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_account(
    account_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Delete an account with its lots and dividends (must belong to user)."""
    repo = AccountRepository(db)
    repo.delete(repo.get_for_user(account_id, user_id))
    db.commit()
    return None
