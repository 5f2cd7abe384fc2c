"""Response schemas for portfolio valuation and value history."""

import datetime as dt

from app.schemas.common import AnalyticsModel


class PortfolioValuation(AnalyticsModel):
    """Live valuation. is_partial marks tickers valued at cost basis."""

    total_value: float
    cost_basis: float
    unrealized_gain: float
    is_partial: bool
    missing_tickers: list[str]


class PortfolioValuePoint(AnalyticsModel):
    date: dt.date
    total_value: float
    cost_basis: float
    is_partial: bool


class ValueSnapshot(AnalyticsModel):
    """A stored daily valuation."""

    id: str
    portfolio_id: str
    date: dt.date
    total_value: float
    cost_basis: float
    is_partial: bool
