"""
Inventory schemas.
"""

from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from decimal import Decimal
from typing import Optional


class InventoryItemCreate(BaseModel):
    """Schema for adding a stock item."""
    item_name: str = Field(..., min_length=1, max_length=255)
    item_code: Optional[str] = Field(None, max_length=100, description="Unique stock code")
    category: str = Field(..., min_length=1, max_length=50, description="spare_parts, tools, safety_equipment, consumables")
    current_stock: int = Field(0, ge=0)
    minimum_stock: int = Field(0, ge=0)
    max_stock: Optional[int] = Field(None, ge=0)
    unit_price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    location: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None


class InventoryItemUpdate(BaseModel):
    """Schema for updating a stock item."""
    item_name: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[str] = Field(None, min_length=1, max_length=50)
    current_stock: Optional[int] = Field(None, ge=0)
    minimum_stock: Optional[int] = Field(None, ge=0)
    max_stock: Optional[int] = Field(None, ge=0)
    unit_price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    location: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("item_name", "category", "current_stock", "minimum_stock", "is_active")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class InventoryItemResponse(BaseModel):
    """Schema for inventory item response."""
    id: str
    item_name: str
    item_code: Optional[str]
    category: str
    current_stock: int
    minimum_stock: int
    max_stock: Optional[int]
    unit_price: Optional[float]
    location: Optional[str]
    description: Optional[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime
    
    class Config:
        from_attributes = True
