"""SQLAlchemy ORM models."""

from app.models.account import Account
from app.models.dividend import Dividend
from app.models.holding import Holding
from app.models.portfolio import Portfolio
from app.models.portfolio_value_history import PortfolioValueHistory
from app.models.price_history import PriceHistory

__all__ = [
    "Account",
    "Dividend",
    "Holding",
    "Portfolio",
    "PortfolioValueHistory",
    "PriceHistory",
]
