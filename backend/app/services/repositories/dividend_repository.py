"""Dividend data access layer."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session, joinedload

from app.constants import DividendStatus
from app.models import Account, Dividend, Portfolio
from app.services.repositories.exceptions import NotFoundError

if TYPE_CHECKING:
    from collections.abc import Sequence


@dataclass
class DividendFilter:
    """Optional narrowing of a user's dividend list. Unset fields match everything."""

    portfolio_id: str | None = None
    account_id: str | None = None
    ticker: str | None = None
    status: DividendStatus | None = None
    start_date: date | None = None
    end_date: date | None = None


class DividendRepository:
    """Centralized dividend data access.

    Naming conventions:
    - find_* / list_* : Query that may return None or empty list
    - get_* : Query that raises NotFoundError if missing
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def find_by_id(self, dividend_id: str) -> Dividend | None:
        return self._db.query(Dividend).filter(Dividend.id == dividend_id).first()

    def get_for_user(self, dividend_id: str, user_id: str) -> Dividend:
        """Get a dividend whose account belongs to the user.

        Raises:
            NotFoundError: If the dividend does not exist or belongs to someone else
        """
        dividend = (
            self._db.query(Dividend)
            .join(Dividend.account)
            .join(Account.portfolio)
            .filter(Dividend.id == dividend_id, Portfolio.user_id == user_id)
            .first()
        )
        if dividend is None:
            raise NotFoundError("Dividend", dividend_id)
        return dividend

    def list_paid_dividends_for_holding(self, account_id: str, ticker: str) -> "Sequence[Dividend]":
        """Paid dividends of one (account, ticker), oldest first."""
        return (
            self._db.query(Dividend)
            .filter(
                Dividend.account_id == account_id,
                Dividend.ticker == ticker,
                Dividend.status == DividendStatus.PAID,
            )
            .order_by(Dividend.pay_date)
            .all()
        )

    def list_by_account_and_ticker(self, account_id: str, ticker: str) -> "Sequence[Dividend]":
        """All dividends of one (account, ticker), any status."""
        return (
            self._db.query(Dividend)
            .filter(Dividend.account_id == account_id, Dividend.ticker == ticker)
            .order_by(Dividend.pay_date)
            .all()
        )

    def list_dividends(
        self, user_id: str, dividend_filter: DividendFilter | None = None
    ) -> "Sequence[Dividend]":
        """Dividends in the user's portfolios, narrowed by the filter, ordered by pay date."""
        dividend_filter = dividend_filter or DividendFilter()

        query = (
            self._db.query(Dividend)
            .join(Dividend.account)
            .join(Account.portfolio)
            .options(joinedload(Dividend.account))
            .filter(Portfolio.user_id == user_id)
        )

        if dividend_filter.portfolio_id is not None:
            query = query.filter(Account.portfolio_id == dividend_filter.portfolio_id)
        if dividend_filter.account_id is not None:
            query = query.filter(Dividend.account_id == dividend_filter.account_id)
        if dividend_filter.ticker is not None:
            query = query.filter(Dividend.ticker == dividend_filter.ticker.upper())
        if dividend_filter.status is not None:
            query = query.filter(Dividend.status == dividend_filter.status)
        if dividend_filter.start_date is not None:
            query = query.filter(Dividend.pay_date >= dividend_filter.start_date)
        if dividend_filter.end_date is not None:
            query = query.filter(Dividend.pay_date <= dividend_filter.end_date)

        return query.order_by(Dividend.pay_date, Dividend.ticker).all()

    def create(
        self,
        account_id: str,
        ticker: str,
        amount_per_share: Decimal,
        total_amount: Decimal,
        pay_date: date,
        status: DividendStatus = DividendStatus.SCHEDULED,
        projected_per_share: Decimal | None = None,
        projected_payout: Decimal | None = None,
    ) -> Dividend:
        dividend = Dividend(
            account_id=account_id,
            ticker=ticker,
            amount_per_share=amount_per_share,
            total_amount=total_amount,
            pay_date=pay_date,
            status=status,
            projected_per_share=projected_per_share,
            projected_payout=projected_payout,
        )
        self._db.add(dividend)
        self._db.flush()
        return dividend

    def update(self, dividend: Dividend, **fields) -> Dividend:
        for field, value in fields.items():
            setattr(dividend, field, value)
        self._db.flush()
        return dividend

    def delete(self, dividend: Dividend) -> None:
        self._db.delete(dividend)
        self._db.flush()
