"""Portfolio data access layer."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from app.models import Portfolio
from app.services.repositories.exceptions import DuplicateError, NotFoundError

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


class PortfolioRepository:
    """Centralized portfolio data access.

    Naming conventions:
    - find_* : Query that may return None or empty list
    - get_* : Query that raises NotFoundError if missing
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def find_by_id(self, portfolio_id: str) -> Portfolio | None:
        """Find portfolio by primary key."""
        return self._db.query(Portfolio).filter(Portfolio.id == portfolio_id).first()

    def find_by_user(self, user_id: str) -> "Sequence[Portfolio]":
        """Find all portfolios owned by a user, oldest first."""
        return (
            self._db.query(Portfolio)
            .filter(Portfolio.user_id == user_id)
            .order_by(Portfolio.created_at, Portfolio.name)
            .all()
        )

    def get_for_user(self, portfolio_id: str, user_id: str) -> Portfolio:
        """Get a portfolio owned by the user.

        Raises:
            NotFoundError: If the portfolio does not exist or belongs to someone else
        """
        portfolio = (
            self._db.query(Portfolio)
            .filter(Portfolio.id == portfolio_id, Portfolio.user_id == user_id)
            .first()
        )
        if portfolio is None:
            raise NotFoundError("Portfolio", portfolio_id)
        return portfolio

    def find_by_user_and_name(self, user_id: str, name: str) -> Portfolio | None:
        return (
            self._db.query(Portfolio)
            .filter(Portfolio.user_id == user_id, Portfolio.name == name)
            .first()
        )

    def create(self, user_id: str, name: str, description: str | None = None) -> Portfolio:
        """Create a portfolio.

        Raises:
            DuplicateError: If the user already has a portfolio with this name
        """
        if self.find_by_user_and_name(user_id, name) is not None:
            raise DuplicateError("Portfolio", "name", name)
        portfolio = Portfolio(user_id=user_id, name=name, description=description)
        self._db.add(portfolio)
        self._db.flush()
        logger.debug(f"Created portfolio {portfolio.id} for user {user_id}")
        return portfolio

    def update(self, portfolio: Portfolio, **fields) -> Portfolio:
        for field, value in fields.items():
            setattr(portfolio, field, value)
        self._db.flush()
        return portfolio

    def delete(self, portfolio: Portfolio) -> None:
        self._db.delete(portfolio)
        self._db.flush()
