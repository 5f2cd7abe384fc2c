"""Price history model - one closing price per ticker per day."""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Date, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.database import Base


class PriceHistory(Base):
    """End-of-day closing price for a ticker."""

    __tablename__ = "price_history"
    __table_args__ = (
        Index("idx_price_history_ticker", "ticker"),
        Index("idx_price_history_date", "date"),
    )

    ticker: Mapped[str] = mapped_column(String(20), primary_key=True)
    date: Mapped[date] = mapped_column(Date, primary_key=True)
    close_price: Mapped[Decimal] = mapped_column(Numeric(18, 6), comment="End-of-day closing price")
    fetched_at: Mapped[datetime] = mapped_column(server_default=func.now())

    def __repr__(self) -> str:
        return f"<PriceHistory(ticker={self.ticker}, date={self.date}, close_price={self.close_price})>"
