"""
Trip schemas.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal
from typing import Optional
from fleetops.app.models.enums import TripStatus
from fleetops.app.schemas.payout import PayoutResponse


class TripCreate(BaseModel):
    """Schema for logging a trip; driver and vehicle come from the caller."""
    pickup_location: str = Field(..., min_length=1)
    drop_location: str = Field(..., min_length=1)
    revenue: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    distance: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2, description="Distance in km")


class TripResponse(BaseModel):
    """Schema for trip response."""
    id: str
    driver_id: str
    vehicle_id: str
    pickup_location: str
    drop_location: str
    distance: Optional[float]
    revenue: float
    start_time: Optional[datetime]
    end_time: Optional[datetime]
    status: TripStatus
    created_at: datetime
    updated_at: datetime
    
    class Config:
        from_attributes = True


class TripCreatedResponse(TripResponse):
    """A freshly logged trip together with its pending payout."""
    payout: PayoutResponse
