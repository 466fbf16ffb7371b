"""
Driver Pydantic schemas.

Defines request and response models for driver profiles.
"""

from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional


class DriverCreate(BaseModel):
    """Schema for creating a driver profile for an existing user."""
    user_id: str = Field(..., min_length=1, description="User the profile belongs to")
    employee_id: str = Field(..., min_length=1, max_length=100, description="Unique employee number")
    phone_number: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None
    license_number: Optional[str] = Field(None, max_length=100, description="Unique driving license number")
    license_expiry_date: Optional[datetime] = None
    date_of_birth: Optional[datetime] = None
    emergency_contact: Optional[str] = Field(None, max_length=255)


class DriverUpdate(BaseModel):
    """Schema for updating a driver profile."""
    phone_number: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None
    license_number: Optional[str] = Field(None, max_length=100)
    license_expiry_date: Optional[datetime] = None
    date_of_birth: Optional[datetime] = None
    emergency_contact: Optional[str] = Field(None, max_length=255)
    is_active: Optional[bool] = None

    @field_validator("is_active")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class DriverResponse(BaseModel):
    """Schema for driver profile response."""
    id: str
    user_id: str
    employee_id: str
    phone_number: Optional[str]
    address: Optional[str]
    license_number: Optional[str]
    license_expiry_date: Optional[datetime]
    date_of_birth: Optional[datetime]
    emergency_contact: Optional[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime
    
    class Config:
        from_attributes = True
