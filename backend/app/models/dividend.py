"""Dividend model - a scheduled, projected or paid distribution."""

from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import uuid4

from sqlalchemy import Date, Enum, ForeignKey, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from app.constants import DividendStatus
from app.database import Base

if TYPE_CHECKING:
    from app.models.account import Account


class Dividend(Base):
    """Dividend model.

    total_amount always equals amount_per_share times the shares of the
    ticker held in the account when the record was last recomputed.
    """

    __tablename__ = "dividends"
    __table_args__ = (
        Index("idx_dividends_account", "account_id"),
        Index("idx_dividends_pay_date", "pay_date"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    account_id: Mapped[str] = mapped_column(String(36), ForeignKey("accounts.id", ondelete="CASCADE"))
    ticker: Mapped[str] = mapped_column(String(20))
    amount_per_share: Mapped[Decimal] = mapped_column(Numeric(18, 6))
    total_amount: Mapped[Decimal] = mapped_column(Numeric(18, 6))
    pay_date: Mapped[date] = mapped_column(Date)
    projected_per_share: Mapped[Decimal | None] = mapped_column(Numeric(18, 6))
    projected_payout: Mapped[Decimal | None] = mapped_column(Numeric(18, 6))
    status: Mapped[DividendStatus] = mapped_column(
        Enum(
            DividendStatus,
            name="dividend_status",
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        default=DividendStatus.SCHEDULED,
    )
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(server_default=func.now(), onupdate=func.now())

    # Relationships
    account: Mapped["Account"] = relationship(back_populates="dividends")

    def __repr__(self) -> str:
        return f"<Dividend(ticker={self.ticker}, pay_date={self.pay_date}, total={self.total_amount}, status={self.status})>"
