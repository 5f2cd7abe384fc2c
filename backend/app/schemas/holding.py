"""Pydantic schemas for Holding (lot) model and per-ticker positions."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.common import AnalyticsModel


class HoldingBase(BaseModel):
    """Base Holding schema with common fields."""

    account_id: str
    ticker: str = Field(..., min_length=1, max_length=20)
    shares: Decimal = Field(..., gt=0, description="Shares in this lot")
    avg_cost_basis: Decimal = Field(..., ge=0, description="Average cost per share")
    purchase_date: date

    @field_validator("ticker")
    @classmethod
    def normalize_ticker(cls, v: str) -> str:
        return v.strip().upper()


class HoldingCreate(HoldingBase):
    """Schema for creating a new Holding."""

    pass


class HoldingUpdate(BaseModel):
    """Schema for updating an existing Holding."""

    account_id: str | None = None
    ticker: str | None = Field(None, min_length=1, max_length=20)
    shares: Decimal | None = Field(None, gt=0)
    avg_cost_basis: Decimal | None = Field(None, ge=0)
    purchase_date: date | None = None


class Holding(HoldingBase):
    """Schema for Holding responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime
    updated_at: datetime


class Position(AnalyticsModel):
    """All lots of one ticker rolled up."""

    ticker: str
    total_shares: float
    avg_cost_basis: float
    cost_basis: float
    lot_count: int
