"""Pydantic schemas for API validation."""

from app.schemas.account import Account, AccountCreate, AccountUpdate
from app.schemas.common import (
    AnalyticsModel,
    DataResponse,
    ErrorDetail,
    ErrorResponse,
    PaginatedResponse,
)
from app.schemas.dividend import Dividend, DividendCreate, DividendUpdate
from app.schemas.holding import Holding, HoldingCreate, HoldingUpdate, Position
from app.schemas.portfolio import (
    Portfolio,
    PortfolioCreate,
    PortfolioUpdate,
    PortfolioWithAccountCount,
)
from app.schemas.price import Price, PriceCreate

__all__ = [
    "Account",
    "AccountCreate",
    "AccountUpdate",
    "AnalyticsModel",
    "DataResponse",
    "Dividend",
    "DividendCreate",
    "DividendUpdate",
    "ErrorDetail",
    "ErrorResponse",
    "Holding",
    "HoldingCreate",
    "HoldingUpdate",
    "PaginatedResponse",
    "Portfolio",
    "PortfolioCreate",
    "PortfolioUpdate",
    "PortfolioWithAccountCount",
    "Position",
    "Price",
    "PriceCreate",
]
