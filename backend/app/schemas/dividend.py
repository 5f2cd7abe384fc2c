"""Pydantic schemas for Dividend model.

total_amount is never accepted from clients; it is derived from the
amount per share and the shares held.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.constants import DividendStatus


class DividendBase(BaseModel):
    """Base Dividend schema with common fields."""

    account_id: str
    ticker: str = Field(..., min_length=1, max_length=20)
    amount_per_share: Decimal = Field(..., ge=0)
    pay_date: date
    status: DividendStatus = DividendStatus.SCHEDULED
    projected_per_share: Decimal | None = Field(None, ge=0)
    projected_payout: Decimal | None = Field(None, ge=0)

    @field_validator("ticker")
    @classmethod
    def normalize_ticker(cls, v: str) -> str:
        return v.strip().upper()


class DividendCreate(DividendBase):
    """Schema for creating a new Dividend."""

    pass


class DividendUpdate(BaseModel):
    """Schema for updating an existing Dividend."""

    account_id: str | None = None
    ticker: str | None = Field(None, min_length=1, max_length=20)
    amount_per_share: Decimal | None = Field(None, ge=0)
    pay_date: date | None = None
    status: DividendStatus | None = None
    projected_per_share: Decimal | None = Field(None, ge=0)
    projected_payout: Decimal | None = Field(None, ge=0)


class Dividend(DividendBase):
    """Schema for Dividend responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    total_amount: Decimal
    created_at: datetime
    updated_at: datetime
