"""Holding model - a single purchase lot of one ticker in an account."""

from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import uuid4

from sqlalchemy import Date, ForeignKey, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from app.database import Base

if TYPE_CHECKING:
    from app.models.account import Account


class Holding(Base):
    """Holding model representing one lot (shares bought at one cost basis and date).

    Several lots of the same ticker may live in one account.
    """

    __tablename__ = "holdings"
    __table_args__ = (
        Index("idx_holdings_account", "account_id"),
        Index("idx_holdings_account_ticker", "account_id", "ticker"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    account_id: Mapped[str] = mapped_column(String(36), ForeignKey("accounts.id", ondelete="CASCADE"))
    ticker: Mapped[str] = mapped_column(String(20))
    shares: Mapped[Decimal] = mapped_column(Numeric(18, 6))
    avg_cost_basis: Mapped[Decimal] = mapped_column(
        Numeric(18, 6), comment="Average cost per share"
    )
    purchase_date: Mapped[date] = mapped_column(Date)
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(server_default=func.now(), onupdate=func.now())

    # Relationships
    account: Mapped["Account"] = relationship(back_populates="holdings")

    def __repr__(self) -> str:
        return f"<Holding(id={self.id}, account_id={self.account_id}, ticker={self.ticker}, shares={self.shares})>"
