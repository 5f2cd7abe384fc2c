"""Holding (lot) management.

Every lot write is followed by a recompute of the forward-looking dividend
totals of the affected (account, ticker) pairs.
"""

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from app.models import Holding
from app.services.dividend_service import DividendService
from app.services.dividends.exceptions import InvalidDividendDataError
from app.services.repositories import AccountRepository, HoldingRepository

logger = logging.getLogger(__name__)


def _validate_lot(shares: Decimal | None, avg_cost_basis: Decimal | None) -> None:
    if shares is not None and shares <= 0:
        raise InvalidDividendDataError("Shares must be greater than zero", field="shares")
    if avg_cost_basis is not None and avg_cost_basis < 0:
        raise InvalidDividendDataError("Cost basis cannot be negative", field="avg_cost_basis")


class HoldingService:
    """Create, edit and delete lots while keeping dividend totals consistent."""

    def __init__(self, db: Session) -> None:
        self._db = db
        self.account_repo = AccountRepository(db)
        self.holding_repo = HoldingRepository(db)
        self.dividend_service = DividendService(db)

    def create_holding(
        self,
        user_id: str,
        account_id: str,
        ticker: str,
        shares: Decimal,
        avg_cost_basis: Decimal,
        purchase_date: date,
    ) -> Holding:
        """Add a lot to one of the user's accounts.

        Raises:
            NotFoundError: If the account is not the user's
            InvalidDividendDataError: If shares <= 0 or cost basis < 0
        """
        _validate_lot(shares, avg_cost_basis)
        self.account_repo.get_for_user(account_id, user_id)

        holding = self.holding_repo.create(
            account_id=account_id,
            ticker=ticker.strip().upper(),
            shares=shares,
            avg_cost_basis=avg_cost_basis,
            purchase_date=purchase_date,
        )
        self.dividend_service.recompute_for_holding(holding.account_id, holding.ticker)
        return holding

    def update_holding(self, user_id: str, holding_id: str, **fields) -> Holding:
        """Edit a lot. Moving it to another ticker or account refreshes both sides."""
        holding = self.holding_repo.get_for_user(holding_id, user_id)
        _validate_lot(fields.get("shares"), fields.get("avg_cost_basis"))

        if fields.get("ticker") is not None:
            fields["ticker"] = fields["ticker"].strip().upper()
        if fields.get("account_id") is not None:
            self.account_repo.get_for_user(fields["account_id"], user_id)

        previous = (holding.account_id, holding.ticker)
        self.holding_repo.update(holding, **{k: v for k, v in fields.items() if v is not None})

        self.dividend_service.recompute_for_holding(holding.account_id, holding.ticker)
        if previous != (holding.account_id, holding.ticker):
            self.dividend_service.recompute_for_holding(*previous)
        return holding

    def delete_holding(self, user_id: str, holding_id: str) -> None:
        holding = self.holding_repo.get_for_user(holding_id, user_id)
        account_id, ticker = holding.account_id, holding.ticker
        self.holding_repo.delete(holding)
        self.dividend_service.recompute_for_holding(account_id, ticker)
        logger.info(f"Deleted lot {holding_id} of {ticker} in account {account_id}")
