"""
Assignment schemas.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class AssignmentCreate(BaseModel):
    """Schema for assigning a driver to a vehicle."""
    driver_id: str = Field(..., min_length=1)
    vehicle_id: str = Field(..., min_length=1)


class AssignmentResponse(BaseModel):
    """Schema for assignment response."""
    id: str
    driver_id: str
    vehicle_id: str
    is_active: bool
    assigned_at: datetime
    unassigned_at: Optional[datetime]
    
    class Config:
        from_attributes = True
