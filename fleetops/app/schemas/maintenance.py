"""
Maintenance record and task schemas.
"""

from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from decimal import Decimal
from typing import Optional
from fleetops.app.models.enums import MaintenanceStatus


class MaintenanceRecordCreate(BaseModel):
    """Schema for scheduling or logging maintenance."""
    vehicle_id: str = Field(..., min_length=1)
    maintenance_type: str = Field(..., min_length=1, max_length=50, description="scheduled, repair, inspection, service")
    description: str = Field(..., min_length=1)
    status: MaintenanceStatus = MaintenanceStatus.SCHEDULED
    scheduled_date: Optional[datetime] = None
    cost: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    service_provider: Optional[str] = Field(None, max_length=255)
    odometer_reading: Optional[int] = Field(None, ge=0)
    next_service_due: Optional[datetime] = None
    notes: Optional[str] = None


class MaintenanceRecordUpdate(BaseModel):
    """Schema for updating maintenance; completing it stamps completed_date."""
    status: Optional[MaintenanceStatus] = None
    description: Optional[str] = Field(None, min_length=1)
    scheduled_date: Optional[datetime] = None
    cost: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    service_provider: Optional[str] = Field(None, max_length=255)
    odometer_reading: Optional[int] = Field(None, ge=0)
    next_service_due: Optional[datetime] = None
    notes: Optional[str] = None

    @field_validator("status", "description")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class MaintenanceRecordResponse(BaseModel):
    """Schema for maintenance record response."""
    id: str
    vehicle_id: str
    maintenance_type: str
    description: str
    status: MaintenanceStatus
    scheduled_date: Optional[datetime]
    completed_date: Optional[datetime]
    cost: Optional[float]
    service_provider: Optional[str]
    odometer_reading: Optional[int]
    next_service_due: Optional[datetime]
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime
    
    class Config:
        from_attributes = True


class MaintenanceTaskCreate(BaseModel):
    """Schema for adding a task to a maintenance record."""
    task_name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    assigned_to: Optional[str] = Field(None, max_length=255)
    estimated_duration: Optional[int] = Field(None, ge=0, description="Minutes")
    parts_used: Optional[str] = None
    cost: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)


class MaintenanceTaskUpdate(BaseModel):
    """Schema for updating a maintenance task."""
    description: Optional[str] = None
    is_completed: Optional[bool] = None
    assigned_to: Optional[str] = Field(None, max_length=255)
    completed_by: Optional[str] = Field(None, max_length=255)
    estimated_duration: Optional[int] = Field(None, ge=0)
    actual_duration: Optional[int] = Field(None, ge=0)
    parts_used: Optional[str] = None
    cost: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)

    @field_validator("is_completed")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class MaintenanceTaskResponse(BaseModel):
    """Schema for maintenance task response."""
    id: str
    maintenance_record_id: str
    task_name: str
    description: Optional[str]
    is_completed: bool
    assigned_to: Optional[str]
    completed_by: Optional[str]
    estimated_duration: Optional[int]
    actual_duration: Optional[int]
    parts_used: Optional[str]
    cost: Optional[float]
    
    class Config:
        from_attributes = True
