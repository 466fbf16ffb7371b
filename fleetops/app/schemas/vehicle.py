"""
Vehicle Pydantic schemas.

Defines request and response models for vehicle management.
"""

from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional
from fleetops.app.models.enums import VehicleStatus


class VehicleCreate(BaseModel):
    """Schema for registering a new vehicle."""
    registration_number: str = Field(..., min_length=1, max_length=100, description="Unique registration number")
    make: str = Field(..., min_length=1, max_length=100)
    model: str = Field(..., min_length=1, max_length=100)
    year: Optional[int] = Field(None, ge=1900, le=2100)
    capacity: Optional[int] = Field(None, gt=0, description="Seating capacity")
    fuel_type: Optional[str] = Field(None, max_length=50, description="Fuel type (e.g., Diesel, CNG)")
    insurance_number: Optional[str] = Field(None, max_length=100)
    insurance_expiry_date: Optional[datetime] = None
    permit_number: Optional[str] = Field(None, max_length=100)
    permit_expiry_date: Optional[datetime] = None
    status: VehicleStatus = VehicleStatus.ACTIVE


class VehicleUpdate(BaseModel):
    """Schema for updating an existing vehicle."""
    make: Optional[str] = Field(None, min_length=1, max_length=100)
    model: Optional[str] = Field(None, min_length=1, max_length=100)
    year: Optional[int] = Field(None, ge=1900, le=2100)
    capacity: Optional[int] = Field(None, gt=0)
    fuel_type: Optional[str] = Field(None, max_length=50)
    insurance_number: Optional[str] = Field(None, max_length=100)
    insurance_expiry_date: Optional[datetime] = None
    permit_number: Optional[str] = Field(None, max_length=100)
    permit_expiry_date: Optional[datetime] = None
    status: Optional[VehicleStatus] = None

    @field_validator("make", "model", "status")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class VehicleResponse(BaseModel):
    """Schema for vehicle response."""
    id: str
    registration_number: str
    make: str
    model: str
    year: Optional[int]
    capacity: Optional[int]
    fuel_type: Optional[str]
    insurance_number: Optional[str]
    insurance_expiry_date: Optional[datetime]
    permit_number: Optional[str]
    permit_expiry_date: Optional[datetime]
    status: VehicleStatus
    created_at: datetime
    updated_at: datetime
    
    class Config:
        from_attributes = True
