"""Price history data access layer."""

import logging
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import desc, func
from sqlalchemy.orm import Session

from app.models import PriceHistory
from app.services.repositories.exceptions import NotFoundError

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


class PriceRepository:
    """Centralized price history data access.

    Naming conventions:
    - find_* : Query that may return None or empty list
    - get_* : Query that raises NotFoundError if missing
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def find_latest_price(self, ticker: str, as_of: date | None = None) -> PriceHistory | None:
        """Most recent close for a ticker, optionally on or before a date."""
        query = self._db.query(PriceHistory).filter(PriceHistory.ticker == ticker)
        if as_of is not None:
            query = query.filter(PriceHistory.date <= as_of)
        return query.order_by(desc(PriceHistory.date)).first()

    def get_latest_price(self, ticker: str, as_of: date | None = None) -> PriceHistory:
        """Most recent close for a ticker.

        Raises:
            NotFoundError: If no price was ever recorded for the ticker
        """
        price = self.find_latest_price(ticker, as_of)
        if price is None:
            raise NotFoundError("PriceHistory", ticker)
        return price

    def find_latest_prices(
        self, tickers: list[str], as_of: date | None = None
    ) -> dict[str, PriceHistory]:
        """Most recent close per ticker. Tickers without any price are absent."""
        if not tickers:
            return {}

        latest = self._db.query(
            PriceHistory.ticker, func.max(PriceHistory.date).label("latest_date")
        ).filter(PriceHistory.ticker.in_(tickers))
        if as_of is not None:
            latest = latest.filter(PriceHistory.date <= as_of)
        latest = latest.group_by(PriceHistory.ticker).subquery()

        rows = (
            self._db.query(PriceHistory)
            .join(
                latest,
                (PriceHistory.ticker == latest.c.ticker)
                & (PriceHistory.date == latest.c.latest_date),
            )
            .all()
        )
        return {row.ticker: row for row in rows}

    def find_daily_prices(
        self, tickers: list[str], start_date: date, end_date: date
    ) -> dict[date, dict[str, Decimal]]:
        """Closing prices per day in [start_date, end_date], keyed date -> ticker -> close."""
        if not tickers:
            return {}

        rows = (
            self._db.query(PriceHistory)
            .filter(
                PriceHistory.ticker.in_(tickers),
                PriceHistory.date >= start_date,
                PriceHistory.date <= end_date,
            )
            .order_by(PriceHistory.date)
            .all()
        )

        result: dict[date, dict[str, Decimal]] = {}
        for row in rows:
            result.setdefault(row.date, {})[row.ticker] = row.close_price
        return result

    def find_price_history(
        self, ticker: str, start_date: date, end_date: date
    ) -> "Sequence[PriceHistory]":
        """Price history for a ticker within a date range."""
        return (
            self._db.query(PriceHistory)
            .filter(
                PriceHistory.ticker == ticker,
                PriceHistory.date >= start_date,
                PriceHistory.date <= end_date,
            )
            .order_by(PriceHistory.date)
            .all()
        )

    def upsert_price(self, ticker: str, price_date: date, close_price: Decimal) -> PriceHistory:
        """Insert the close for (ticker, date) or overwrite the existing one."""
        price = self._db.get(PriceHistory, (ticker, price_date))
        if price is None:
            price = PriceHistory(ticker=ticker, date=price_date, close_price=close_price)
            self._db.add(price)
        else:
            price.close_price = close_price
        self._db.flush()
        return price
