"""Holding (lot) data access layer.

An account may hold several lots of one ticker; most callers want the lots
of a portfolio or account, or the summed shares of an (account, ticker).
"""

import logging
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models import Account, Holding, Portfolio
from app.services.repositories.exceptions import NotFoundError

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


class HoldingRepository:
    """Centralized holding data access.

    Naming conventions:
    - find_* : Query that may return None or empty list
    - get_* : Query that raises NotFoundError if missing
    - create_* / update_* / delete : Writes (flushed, committed by the caller)
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def find_by_id(self, holding_id: str) -> Holding | None:
        """Find holding by primary key."""
        return self._db.query(Holding).filter(Holding.id == holding_id).first()

    def get_for_user(self, holding_id: str, user_id: str) -> Holding:
        """Get a lot whose account belongs to one of the user's portfolios.

        Raises:
            NotFoundError: If the lot does not exist or belongs to someone else
        """
        holding = (
            self._db.query(Holding)
            .join(Holding.account)
            .join(Account.portfolio)
            .filter(Holding.id == holding_id, Portfolio.user_id == user_id)
            .first()
        )
        if holding is None:
            raise NotFoundError("Holding", holding_id)
        return holding

    def find_by_account(self, account_id: str) -> "Sequence[Holding]":
        """Find all lots in an account."""
        return (
            self._db.query(Holding)
            .filter(Holding.account_id == account_id)
            .order_by(Holding.ticker, Holding.purchase_date)
            .all()
        )

    def find_by_portfolio(self, portfolio_id: str) -> "Sequence[Holding]":
        """Find all lots across the accounts of a portfolio."""
        return (
            self._db.query(Holding)
            .join(Holding.account)
            .filter(Account.portfolio_id == portfolio_id)
            .order_by(Holding.ticker, Holding.purchase_date)
            .all()
        )

    def find_by_user(self, user_id: str) -> "Sequence[Holding]":
        """Find all lots the user holds in any portfolio."""
        return (
            self._db.query(Holding)
            .join(Holding.account)
            .join(Account.portfolio)
            .filter(Portfolio.user_id == user_id)
            .order_by(Holding.ticker, Holding.purchase_date)
            .all()
        )

    def get_current_holdings(
        self, portfolio_id: str | None = None, account_id: str | None = None
    ) -> "Sequence[Holding]":
        """Lots of one portfolio or one account.

        Exactly one of portfolio_id and account_id must be given.
        """
        if (portfolio_id is None) == (account_id is None):
            raise ValueError("Pass exactly one of portfolio_id or account_id")
        if portfolio_id is not None:
            return self.find_by_portfolio(portfolio_id)
        return self.find_by_account(account_id)

    def total_shares(self, account_id: str, ticker: str) -> Decimal:
        """Sum of shares over all lots of a ticker in an account (0 if none)."""
        total = (
            self._db.query(func.sum(Holding.shares))
            .filter(Holding.account_id == account_id, Holding.ticker == ticker)
            .scalar()
        )
        return Decimal(total) if total is not None else Decimal("0")

    def shares_by_account_ticker(self, account_ids: list[str]) -> dict[tuple[str, str], Decimal]:
        """Summed shares per (account_id, ticker) for the given accounts."""
        if not account_ids:
            return {}

        rows = (
            self._db.query(Holding.account_id, Holding.ticker, func.sum(Holding.shares))
            .filter(Holding.account_id.in_(account_ids))
            .group_by(Holding.account_id, Holding.ticker)
            .all()
        )
        return {(account_id, ticker): Decimal(shares) for account_id, ticker, shares in rows}

    def create(
        self,
        account_id: str,
        ticker: str,
        shares: Decimal,
        avg_cost_basis: Decimal,
        purchase_date: date,
    ) -> Holding:
        holding = Holding(
            account_id=account_id,
            ticker=ticker,
            shares=shares,
            avg_cost_basis=avg_cost_basis,
            purchase_date=purchase_date,
        )
        self._db.add(holding)
        self._db.flush()
        logger.debug(f"Created lot of {shares} {ticker} in account {account_id}")
        return holding

    def update(self, holding: Holding, **fields) -> Holding:
        for field, value in fields.items():
            setattr(holding, field, value)
        self._db.flush()
        return holding

    def delete(self, holding: Holding) -> None:
        self._db.delete(holding)
        self._db.flush()
