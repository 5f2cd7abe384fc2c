"""Repository layer - data access abstraction.

Repositories handle all database queries, providing a clean interface
for services. Services should use repositories for data access rather
than directly querying SQLAlchemy models.

Dependency direction: Routers -> Services -> Repositories -> Models
"""

from .account_repository import AccountRepository
from .dividend_repository import DividendFilter, DividendRepository
from .exceptions import DuplicateError, NotFoundError, RepositoryError
from .holding_repository import HoldingRepository
from .portfolio_repository import PortfolioRepository
from .portfolio_value_repository import PortfolioValueRepository
from .price_repository import PriceRepository

__all__ = [
    "AccountRepository",
    "DividendFilter",
    "DividendRepository",
    "DuplicateError",
    "HoldingRepository",
    "NotFoundError",
    "PortfolioRepository",
    "PortfolioValueRepository",
    "PriceRepository",
    "RepositoryError",
]
