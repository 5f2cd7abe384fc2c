"""Portfolio valuation service - single source of truth for value calculations.

Live snapshots degrade gracefully: a ticker without a usable price is valued
at its cost basis and the whole snapshot is flagged partial. Reconstructed
history is stricter and drops any date on which a held ticker has no price.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import date, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from app.config import settings
from app.constants import VALUE_HISTORY_RANGE_DAYS, ValueHistoryRange
from app.services.dividends.exceptions import InvalidDividendDataError
from app.services.portfolio.valuation_types import (
    HoldingPosition,
    PortfolioValuation,
    PortfolioValuePoint,
    PositionSummary,
)
from app.services.repositories import (
    HoldingRepository,
    PortfolioValueRepository,
    PriceRepository,
)

if TYPE_CHECKING:
    from app.models import PortfolioValueHistory

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def _validated_lot(holding: HoldingPosition) -> tuple[str, Decimal, Decimal]:
    ticker = holding.ticker.strip().upper()
    shares = Decimal(holding.shares)
    avg_cost = Decimal(holding.avg_cost_basis)
    if shares < 0:
        raise InvalidDividendDataError(f"Negative share count for {ticker}: {shares}", field="shares")
    if avg_cost < 0:
        raise InvalidDividendDataError(
            f"Negative cost basis for {ticker}: {avg_cost}", field="avg_cost_basis"
        )
    return ticker, shares, avg_cost


def _validated_price(ticker: str, price: Decimal) -> Decimal:
    price = Decimal(price)
    if price <= 0:
        raise InvalidDividendDataError(
            f"Price for {ticker} must be positive: {price}", field="close_price"
        )
    return price


def _value_with_cost_basis_fallback(shares: Decimal, avg_cost: Decimal) -> Decimal:
    """Value of a lot without a usable price: what was paid for it."""
    return shares * avg_cost


def compute_portfolio_snapshot(
    holdings: Iterable[HoldingPosition], prices: Mapping[str, Decimal]
) -> PortfolioValuation:
    """Value lots at the given prices.

    Args:
        holdings: Lots to value (ticker, shares, avg_cost_basis)
        prices: Latest usable close per upper-case ticker; stale prices must
            already be left out

    Returns:
        PortfolioValuation. An empty portfolio is worth zero and not partial.
    """
    total_value = ZERO
    cost_basis = ZERO
    missing: list[str] = []

    for holding in holdings:
        ticker, shares, avg_cost = _validated_lot(holding)
        cost_basis += shares * avg_cost

        price = prices.get(ticker)
        if price is None:
            total_value += _value_with_cost_basis_fallback(shares, avg_cost)
            if ticker not in missing:
                missing.append(ticker)
            continue

        total_value += shares * _validated_price(ticker, price)

    if missing:
        logger.debug(f"No usable price for {', '.join(missing)}; valued at cost basis")

    return PortfolioValuation(
        total_value=total_value,
        cost_basis=cost_basis,
        is_partial=bool(missing),
        missing_tickers=missing,
    )


def build_portfolio_value_series(
    holdings: Iterable[HoldingPosition],
    daily_prices: Mapping[date, Mapping[str, Decimal]],
) -> list[PortfolioValuePoint]:
    """Historical value of the given lots, one point per complete price date.

    A date is kept only when every held ticker has a close on it; such
    points are never partial. Returns an empty list when nothing is held.
    """
    lots = [_validated_lot(h) for h in holdings]
    held_tickers = {ticker for ticker, _, _ in lots}
    if not held_tickers:
        return []

    cost_basis = sum((shares * avg_cost for _, shares, avg_cost in lots), ZERO)
    points = []
    skipped = 0

    for day in sorted(daily_prices):
        prices = daily_prices[day]
        if not held_tickers.issubset(prices.keys()):
            skipped += 1
            continue

        total_value = sum(
            (shares * _validated_price(ticker, prices[ticker]) for ticker, shares, _ in lots),
            ZERO,
        )
        points.append(PortfolioValuePoint(date=day, total_value=total_value, cost_basis=cost_basis))

    if skipped:
        logger.debug(f"Dropped {skipped} dates with incomplete prices from value series")
    return points


def aggregate_positions(holdings: Iterable[HoldingPosition]) -> list[PositionSummary]:
    """Roll lots up per ticker with a share-weighted average cost, sorted by ticker."""
    shares_by_ticker: dict[str, Decimal] = {}
    cost_by_ticker: dict[str, Decimal] = {}
    lots_by_ticker: dict[str, int] = {}

    for holding in holdings:
        ticker, shares, avg_cost = _validated_lot(holding)
        shares_by_ticker[ticker] = shares_by_ticker.get(ticker, ZERO) + shares
        cost_by_ticker[ticker] = cost_by_ticker.get(ticker, ZERO) + shares * avg_cost
        lots_by_ticker[ticker] = lots_by_ticker.get(ticker, 0) + 1

    positions = []
    for ticker in sorted(shares_by_ticker):
        total_shares = shares_by_ticker[ticker]
        total_cost = cost_by_ticker[ticker]
        positions.append(
            PositionSummary(
                ticker=ticker,
                total_shares=total_shares,
                avg_cost_basis=total_cost / total_shares if total_shares > 0 else ZERO,
                cost_basis=total_cost,
                lot_count=lots_by_ticker[ticker],
            )
        )
    return positions


class PortfolioValuationService:
    """Values portfolios from their lots and the stored price history."""

    def __init__(self, db: Session) -> None:
        self._db = db
        self.holding_repo = HoldingRepository(db)
        self.price_repo = PriceRepository(db)
        self.value_repo = PortfolioValueRepository(db)

    def _usable_prices(self, tickers: list[str], as_of: date) -> dict[str, Decimal]:
        """Latest close per ticker, leaving out closes too old to trust."""
        max_age = timedelta(days=settings.max_price_age_days)
        usable = {}
        for ticker, price in self.price_repo.find_latest_prices(tickers, as_of).items():
            if as_of - price.date > max_age:
                logger.debug(f"Ignoring stale price for {ticker} from {price.date}")
                continue
            usable[ticker] = price.close_price
        return usable

    def snapshot_portfolio(self, portfolio_id: str, as_of: date | None = None) -> PortfolioValuation:
        """Value a portfolio's current lots at the latest usable prices."""
        as_of = as_of or date.today()
        holdings = self.holding_repo.find_by_portfolio(portfolio_id)
        tickers = sorted({h.ticker for h in holdings})
        return compute_portfolio_snapshot(holdings, self._usable_prices(tickers, as_of))

    def save_snapshot(self, portfolio_id: str, as_of: date | None = None) -> "PortfolioValueHistory":
        """Value the portfolio and store it, replacing any snapshot of the same day."""
        as_of = as_of or date.today()
        valuation = self.snapshot_portfolio(portfolio_id, as_of)
        row = self.value_repo.upsert(
            portfolio_id,
            as_of,
            total_value=valuation.total_value,
            cost_basis=valuation.cost_basis,
            is_partial=valuation.is_partial,
        )
        logger.info(
            f"Saved value snapshot for portfolio {portfolio_id} on {as_of}: "
            f"{valuation.total_value} (partial={valuation.is_partial})"
        )
        return row

    def get_value_history(
        self,
        portfolio_id: str,
        value_range: ValueHistoryRange = ValueHistoryRange.ALL,
        today: date | None = None,
    ) -> list[PortfolioValuePoint]:
        """Stored snapshots within the lookback range, oldest first."""
        today = today or date.today()
        days = VALUE_HISTORY_RANGE_DAYS.get(value_range)
        start_date = today - timedelta(days=days) if days is not None else None

        return [
            PortfolioValuePoint(
                date=row.date,
                total_value=row.total_value,
                cost_basis=row.cost_basis,
                is_partial=row.is_partial,
            )
            for row in self.value_repo.find_history(portfolio_id, start_date)
        ]

    def reconstruct_value_history(
        self, portfolio_id: str, days: int, today: date | None = None
    ) -> list[PortfolioValuePoint]:
        """Value today's lots on each of the last `days` days that have complete prices."""
        today = today or date.today()
        if days <= 0:
            return []

        holdings = self.holding_repo.find_by_portfolio(portfolio_id)
        tickers = sorted({h.ticker for h in holdings})
        daily_prices = self.price_repo.find_daily_prices(
            tickers, today - timedelta(days=days - 1), today
        )
        return build_portfolio_value_series(holdings, daily_prices)

    def get_positions(self, portfolio_id: str) -> list[PositionSummary]:
        return aggregate_positions(self.holding_repo.find_by_portfolio(portfolio_id))
