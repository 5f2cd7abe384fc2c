"""Portfolio value history model - daily portfolio valuation snapshots."""

from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import uuid4

from sqlalchemy import Boolean, Date, ForeignKey, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from app.database import Base

if TYPE_CHECKING:
    from app.models.portfolio import Portfolio


class PortfolioValueHistory(Base):
    """One valuation per portfolio per day (upserted, never duplicated)."""

    __tablename__ = "portfolio_value_history"
    __table_args__ = (
        UniqueConstraint("portfolio_id", "date", name="uq_portfolio_value_portfolio_date"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    portfolio_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("portfolios.id", ondelete="CASCADE")
    )
    date: Mapped[date] = mapped_column(Date)
    total_value: Mapped[Decimal] = mapped_column(Numeric(18, 6))
    cost_basis: Mapped[Decimal] = mapped_column(Numeric(18, 6))
    is_partial: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())

    # Relationships
    portfolio: Mapped["Portfolio"] = relationship(back_populates="value_history")

    def __repr__(self) -> str:
        return f"<PortfolioValueHistory(portfolio_id={self.portfolio_id}, date={self.date}, total_value={self.total_value})>"
