"""Pydantic schemas for Portfolio model."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PortfolioBase(BaseModel):
    """Base Portfolio schema with common fields."""

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)


class PortfolioCreate(PortfolioBase):
    """Schema for creating a new Portfolio."""

    pass


class PortfolioUpdate(BaseModel):
    """Schema for updating an existing Portfolio."""

    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)


class Portfolio(PortfolioBase):
    """Schema for Portfolio responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    created_at: datetime
    updated_at: datetime


class PortfolioWithAccountCount(Portfolio):
    """Portfolio with account count for list endpoint."""

    account_count: int = 0
