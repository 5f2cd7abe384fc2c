"""Dividend record management.

A dividend's total amount is derived, never entered: amount per share times
the shares of that ticker held in the account. It is recomputed when the
amount per share or ticker of the dividend changes, and for forward-looking
(scheduled/projected) dividends whenever a lot of that ticker changes.
Paid dividends keep the total of the shares held when they were recorded.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from app.constants import DividendStatus
from app.models import Dividend
from app.services.dividends.exceptions import InvalidDividendDataError
from app.services.dividends.types import DividendRecord
from app.services.repositories import (
    AccountRepository,
    DividendFilter,
    DividendRepository,
    HoldingRepository,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

logger = logging.getLogger(__name__)

# Fields whose change invalidates total_amount
TOTAL_AMOUNT_INPUTS = frozenset({"amount_per_share", "ticker", "account_id"})


def to_record(dividend: Dividend) -> DividendRecord:
    """Plain calculator input from an ORM dividend row."""
    return DividendRecord(
        ticker=dividend.ticker,
        total_amount=dividend.total_amount,
        pay_date=dividend.pay_date,
        status=dividend.status,
        amount_per_share=dividend.amount_per_share,
        account_id=dividend.account_id,
        account_name=dividend.account.name if dividend.account is not None else None,
    )


def to_records(dividends: "Iterable[Dividend]") -> list[DividendRecord]:
    return [to_record(d) for d in dividends]


class DividendService:
    """Create, edit and list dividends with derived totals."""

    def __init__(self, db: Session) -> None:
        self._db = db
        self.account_repo = AccountRepository(db)
        self.dividend_repo = DividendRepository(db)
        self.holding_repo = HoldingRepository(db)

    def list_dividends(
        self, user_id: str, dividend_filter: DividendFilter | None = None
    ) -> "Sequence[Dividend]":
        return self.dividend_repo.list_dividends(user_id, dividend_filter)

    def list_records(
        self, user_id: str, dividend_filter: DividendFilter | None = None
    ) -> list[DividendRecord]:
        """The user's dividends as calculator input."""
        return to_records(self.dividend_repo.list_dividends(user_id, dividend_filter))

    def recompute_total_amount(self, dividend: Dividend) -> Dividend:
        """Set total_amount from the shares currently held for (account, ticker)."""
        shares = self.holding_repo.total_shares(dividend.account_id, dividend.ticker)
        dividend.total_amount = Decimal(dividend.amount_per_share) * shares
        self._db.flush()
        return dividend

    def create_dividend(
        self,
        user_id: str,
        account_id: str,
        ticker: str,
        amount_per_share: Decimal,
        pay_date: date,
        status: DividendStatus = DividendStatus.SCHEDULED,
        projected_per_share: Decimal | None = None,
        projected_payout: Decimal | None = None,
    ) -> Dividend:
        """Record a dividend in one of the user's accounts.

        Raises:
            NotFoundError: If the account is not the user's
            InvalidDividendDataError: If amount_per_share is negative
        """
        if amount_per_share < 0:
            raise InvalidDividendDataError(
                f"Negative amount per share for {ticker}", field="amount_per_share"
            )
        self.account_repo.get_for_user(account_id, user_id)

        dividend = self.dividend_repo.create(
            account_id=account_id,
            ticker=ticker.strip().upper(),
            amount_per_share=amount_per_share,
            total_amount=Decimal("0"),
            pay_date=pay_date,
            status=status,
            projected_per_share=projected_per_share,
            projected_payout=projected_payout,
        )
        self.recompute_total_amount(dividend)
        logger.info(
            f"Recorded {status.value} dividend {dividend.ticker} {pay_date} "
            f"total={dividend.total_amount}"
        )
        return dividend

    def update_dividend(self, user_id: str, dividend_id: str, **fields) -> Dividend:
        """Apply edits; the total is recomputed when one of its inputs changed.

        Raises:
            NotFoundError: If the dividend (or a new account) is not the user's
        """
        dividend = self.dividend_repo.get_for_user(dividend_id, user_id)

        if fields.get("amount_per_share") is not None and fields["amount_per_share"] < 0:
            raise InvalidDividendDataError(
                f"Negative amount per share for {dividend.ticker}", field="amount_per_share"
            )
        if "ticker" in fields and fields["ticker"] is not None:
            fields["ticker"] = fields["ticker"].strip().upper()
        if fields.get("account_id") is not None:
            self.account_repo.get_for_user(fields["account_id"], user_id)

        changed = {
            name
            for name, value in fields.items()
            if value is not None and getattr(dividend, name) != value
        }
        self.dividend_repo.update(dividend, **{k: v for k, v in fields.items() if v is not None})

        if changed & TOTAL_AMOUNT_INPUTS:
            self.recompute_total_amount(dividend)
        return dividend

    def delete_dividend(self, user_id: str, dividend_id: str) -> None:
        dividend = self.dividend_repo.get_for_user(dividend_id, user_id)
        self.dividend_repo.delete(dividend)

    def recompute_for_holding(self, account_id: str, ticker: str) -> int:
        """Refresh totals of forward-looking dividends after a lot of the ticker changed.

        Returns:
            Number of dividends recomputed
        """
        recomputed = 0
        for dividend in self.dividend_repo.list_by_account_and_ticker(account_id, ticker):
            if dividend.status is DividendStatus.PAID:
                continue
            self.recompute_total_amount(dividend)
            recomputed += 1

        if recomputed:
            logger.info(f"Recomputed {recomputed} dividend totals for {ticker} in account {account_id}")
        return recomputed
