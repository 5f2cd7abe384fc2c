"""Value objects for portfolio valuation."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal


@dataclass
class HoldingPosition:
    """The slice of a lot the valuation needs. ORM Holding rows fit as well."""

    ticker: str
    shares: Decimal
    avg_cost_basis: Decimal


@dataclass
class PortfolioValuation:
    """Point-in-time value of a set of lots.

    is_partial is True when any held ticker had no usable price and was
    valued at cost basis instead.
    """

    total_value: Decimal
    cost_basis: Decimal
    is_partial: bool
    missing_tickers: list[str] = field(default_factory=list)

    @property
    def unrealized_gain(self) -> Decimal:
        return self.total_value - self.cost_basis


@dataclass
class PortfolioValuePoint:
    """One date of a portfolio value series."""

    date: date
    total_value: Decimal
    cost_basis: Decimal
    is_partial: bool = False


@dataclass
class PositionSummary:
    """All lots of one ticker rolled into a single position."""

    ticker: str
    total_shares: Decimal
    avg_cost_basis: Decimal
    cost_basis: Decimal
    lot_count: int
