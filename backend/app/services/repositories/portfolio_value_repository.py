"""Portfolio value history data access layer."""

import logging
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from app.models import PortfolioValueHistory

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


class PortfolioValueRepository:
    """Stored daily valuations, one row per (portfolio, date)."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def find_by_portfolio_and_date(
        self, portfolio_id: str, value_date: date
    ) -> PortfolioValueHistory | None:
        return (
            self._db.query(PortfolioValueHistory)
            .filter(
                PortfolioValueHistory.portfolio_id == portfolio_id,
                PortfolioValueHistory.date == value_date,
            )
            .first()
        )

    def find_history(
        self, portfolio_id: str, start_date: date | None = None
    ) -> "Sequence[PortfolioValueHistory]":
        """Stored valuations of a portfolio, oldest first."""
        query = self._db.query(PortfolioValueHistory).filter(
            PortfolioValueHistory.portfolio_id == portfolio_id
        )
        if start_date is not None:
            query = query.filter(PortfolioValueHistory.date >= start_date)
        return query.order_by(PortfolioValueHistory.date).all()

    def upsert(
        self,
        portfolio_id: str,
        value_date: date,
        total_value: Decimal,
        cost_basis: Decimal,
        is_partial: bool,
    ) -> PortfolioValueHistory:
        """Create the valuation for (portfolio, date) or overwrite the existing one."""
        row = self.find_by_portfolio_and_date(portfolio_id, value_date)
        if row is None:
            row = PortfolioValueHistory(portfolio_id=portfolio_id, date=value_date)
            self._db.add(row)
            logger.debug(f"Inserting value snapshot for portfolio {portfolio_id} on {value_date}")

        row.total_value = total_value
        row.cost_basis = cost_basis
        row.is_partial = is_partial
        self._db.flush()
        return row
