"""
Incident schemas.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal
from typing import Optional


class IncidentCreate(BaseModel):
    """Schema for reporting an incident on the assigned vehicle."""
    incident_type: str = Field(..., min_length=1, max_length=100, description="e.g. accident, breakdown, damage")
    description: str = Field(..., min_length=1)
    trip_id: Optional[str] = None
    damage_amount: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)


class IncidentResponse(BaseModel):
    """Schema for incident response."""
    id: str
    trip_id: Optional[str]
    driver_id: str
    vehicle_id: str
    incident_type: str
    description: str
    damage_amount: Optional[float]
    is_resolved: bool
    reported_at: datetime
    resolved_at: Optional[datetime]
    
    class Config:
        from_attributes = True
