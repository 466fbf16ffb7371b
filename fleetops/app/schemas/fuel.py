"""
Fuel station and fuel record schemas.
"""

from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from decimal import Decimal
from typing import Optional
from fleetops.app.models.enums import FuelRecordType


class FuelStationCreate(BaseModel):
    """Schema for registering a fuel station."""
    name: str = Field(..., min_length=1, max_length=255)
    location: str = Field(..., min_length=1)
    contact_person: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    contract_details: Optional[str] = None


class FuelStationUpdate(BaseModel):
    """Schema for updating a fuel station."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    location: Optional[str] = Field(None, min_length=1)
    contact_person: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    contract_details: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("name", "location", "is_active")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class FuelStationResponse(BaseModel):
    """Schema for fuel station response."""
    id: str
    name: str
    location: str
    contact_person: Optional[str]
    phone: Optional[str]
    contract_details: Optional[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime
    
    class Config:
        from_attributes = True


class FuelRecordCreate(BaseModel):
    """
    Schema for logging fuel; vehicle and driver come from the caller.

    total_cost defaults to quantity * price_per_liter.
    """
    record_type: FuelRecordType = FuelRecordType.REFUEL
    fuel_type: str = Field(..., min_length=1, max_length=50)
    quantity: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2, description="Litres")
    price_per_liter: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    total_cost: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    fuel_station_id: Optional[str] = None
    odometer_reading: Optional[int] = Field(None, ge=0)
    receipt_number: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None
    refuel_date: Optional[datetime] = None


class FuelRecordResponse(BaseModel):
    """Schema for fuel record response."""
    id: str
    vehicle_id: str
    driver_id: str
    fuel_station_id: Optional[str]
    record_type: FuelRecordType
    fuel_type: str
    quantity: float
    price_per_liter: float
    total_cost: float
    odometer_reading: Optional[int]
    receipt_number: Optional[str]
    notes: Optional[str]
    refuel_date: datetime
    created_at: datetime
    
    class Config:
        from_attributes = True
