"""Pydantic schemas for PriceHistory model."""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PriceCreate(BaseModel):
    """Closing price for one ticker on one day (replaces an existing close)."""

    ticker: str = Field(..., min_length=1, max_length=20)
    date: dt.date
    close_price: Decimal = Field(..., gt=0, description="End-of-day closing price")

    @field_validator("ticker")
    @classmethod
    def normalize_ticker(cls, v: str) -> str:
        return v.strip().upper()


class Price(BaseModel):
    """Schema for PriceHistory responses."""

    model_config = ConfigDict(from_attributes=True)

    ticker: str
    date: dt.date
    close_price: Decimal
    fetched_at: dt.datetime
