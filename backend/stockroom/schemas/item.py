"""
Item Pydantic schemas for API validation.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class ItemBase(BaseModel):
    """Base item schema."""
    name: str = Field(..., min_length=1, max_length=100)
    product_name: Optional[str] = Field(None, max_length=255)
    price: Optional[int] = Field(None, ge=0)
    quantity: int = Field(..., ge=0)
    unit: str = Field(..., min_length=1, max_length=20)
    threshold: Optional[int] = Field(None, ge=0)
    note: Optional[str] = None
    category_id: Optional[str] = None


class ItemCreate(ItemBase):
    """Schema for creating an item."""
    pass


class ItemUpdate(BaseModel):
    """Schema for partially updating an item.

    Only fields present in the request body are applied, so an explicit
    null clears threshold, note, price or category.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    product_name: Optional[str] = Field(None, max_length=255)
    price: Optional[int] = Field(None, ge=0)
    quantity: Optional[int] = Field(None, ge=0)
    unit: Optional[str] = Field(None, min_length=1, max_length=20)
    threshold: Optional[int] = Field(None, ge=0)
    note: Optional[str] = None
    category_id: Optional[str] = None


class ItemResponse(ItemBase):
    """Schema for item response."""
    id: str
    sort_order: int
    group_id: Optional[str] = None
    user_id: Optional[str] = None
    category_name: Optional[str] = None
    category_color: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    is_low_stock: bool

    class Config:
        from_attributes = True


class ItemList(BaseModel):
    """Schema for listing items."""
    items: list[ItemResponse]
    total: int
