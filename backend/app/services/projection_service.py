"""Forward income projections for a user or one of their portfolios."""

import logging
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from app.config import settings
from app.services.dividend_service import DividendService
from app.services.dividends import (
    build_projection_response,
    holding_key,
    project_monthly_income,
)
from app.services.dividends.types import DividendRecord, MonthlyProjection, ProjectionSummary
from app.services.repositories import (
    AccountRepository,
    DividendFilter,
    HoldingRepository,
    PortfolioRepository,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from app.models import Account

logger = logging.getLogger(__name__)


class ProjectionService:
    """Loads dividends and lots, then runs the projection calculators."""

    def __init__(self, db: Session) -> None:
        self._db = db
        self.account_repo = AccountRepository(db)
        self.holding_repo = HoldingRepository(db)
        self.portfolio_repo = PortfolioRepository(db)
        self.dividend_service = DividendService(db)

    def _load_records(self, user_id: str, portfolio_id: str | None) -> list[DividendRecord]:
        if portfolio_id is not None:
            self.portfolio_repo.get_for_user(portfolio_id, user_id)
        return self.dividend_service.list_records(user_id, DividendFilter(portfolio_id=portfolio_id))

    def _accounts(self, user_id: str, portfolio_id: str | None) -> "Sequence[Account]":
        if portfolio_id is not None:
            return self.account_repo.find_by_portfolio(portfolio_id)
        return self.account_repo.find_by_user(user_id)

    def current_shares(
        self, accounts: "Sequence[Account]", records: list[DividendRecord]
    ) -> dict[str, Decimal]:
        """Shares held today per holding_key.

        Holdings that received dividends but have no lots left map to zero.
        """
        lots = self.holding_repo.shares_by_account_ticker([a.id for a in accounts])
        shares = {holding_key(account_id, ticker): total for (account_id, ticker), total in lots.items()}
        for record in records:
            shares.setdefault(holding_key(record.account_id, record.ticker), Decimal("0"))
        return shares

    def build_projections(
        self, user_id: str, portfolio_id: str | None = None, today: date | None = None
    ) -> ProjectionSummary:
        today = today or date.today()
        records = self._load_records(user_id, portfolio_id)
        accounts = self._accounts(user_id, portfolio_id)

        summary = build_projection_response(
            records,
            self.current_shares(accounts, records),
            today,
            ttm_months=settings.ttm_months,
        )

        # Lots without dividends come back without an account name
        names = {a.id: a.name for a in accounts}
        for excluded in summary.result.excluded:
            if excluded.account_name is None and excluded.account_id in names:
                excluded.account_name = names[excluded.account_id]

        logger.debug(
            f"Projected {len(summary.result.holding_projections)} holdings, "
            f"excluded {len(summary.result.excluded)} for user {user_id}"
        )
        return summary

    def monthly_projection(
        self, user_id: str, portfolio_id: str | None = None, today: date | None = None
    ) -> list[MonthlyProjection]:
        today = today or date.today()
        records = self._load_records(user_id, portfolio_id)
        accounts = self._accounts(user_id, portfolio_id)
        return project_monthly_income(
            records,
            today,
            settings.projection_months_forward,
            shares_by_holding=self.current_shares(accounts, records),
        )
