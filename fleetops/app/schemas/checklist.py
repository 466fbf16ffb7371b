"""
Driver checklist schemas.
"""

from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional, List
from fleetops.app.models.enums import ChecklistStatus


class ChecklistItemCreate(BaseModel):
    """Schema for adding an item to a checklist."""
    item_name: str = Field(..., min_length=1, max_length=255)
    item_category: str = Field(..., min_length=1, max_length=50, description="safety, inventory, maintenance, documentation")
    is_checked: bool = False
    condition: Optional[str] = Field(None, max_length=50, description="good, fair, poor, needs_attention")
    quantity: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None
    image_url: Optional[str] = Field(None, max_length=500)


class ChecklistItemUpdate(BaseModel):
    """Schema for updating a checklist item."""
    is_checked: Optional[bool] = None
    condition: Optional[str] = Field(None, max_length=50)
    quantity: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None
    image_url: Optional[str] = Field(None, max_length=500)

    @field_validator("is_checked")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class ChecklistItemResponse(BaseModel):
    """Schema for checklist item response."""
    id: str
    checklist_id: str
    item_name: str
    item_category: str
    is_checked: bool
    condition: Optional[str]
    quantity: Optional[int]
    notes: Optional[str]
    image_url: Optional[str]
    
    class Config:
        from_attributes = True


class ChecklistCreate(BaseModel):
    """Schema for starting a checklist on the assigned vehicle."""
    checklist_type: str = Field(..., min_length=1, max_length=50, description="pre_trip, post_trip, inventory, maintenance")
    notes: Optional[str] = None
    items: List[ChecklistItemCreate] = Field(default_factory=list)


class ChecklistUpdate(BaseModel):
    """Schema for updating a checklist; completing it stamps completed_at."""
    status: Optional[ChecklistStatus] = None
    notes: Optional[str] = None

    @field_validator("status")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class ChecklistResponse(BaseModel):
    """Schema for checklist response."""
    id: str
    driver_id: str
    vehicle_id: str
    checklist_type: str
    status: ChecklistStatus
    completed_at: Optional[datetime]
    notes: Optional[str]
    created_at: datetime
    
    class Config:
        from_attributes = True


class ChecklistDetailResponse(ChecklistResponse):
    """Checklist with its items."""
    items: List[ChecklistItemResponse] = Field(default_factory=list)
