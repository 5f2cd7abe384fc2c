"""Pydantic schemas for Account model."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AccountBase(BaseModel):
    """Base Account schema with common fields."""

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)


class AccountCreate(AccountBase):
    """Schema for creating a new Account."""

    portfolio_id: str = Field(..., description="Portfolio the account belongs to")


class AccountUpdate(BaseModel):
    """Schema for updating an existing Account."""

    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)


class Account(AccountBase):
    """Schema for Account responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    portfolio_id: str
    created_at: datetime
    updated_at: datetime
