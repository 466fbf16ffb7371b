"""
User Pydantic schemas.
"""

from pydantic import BaseModel
from datetime import datetime
from typing import Optional, List
from fleetops.app.models.enums import UserRole
from fleetops.app.schemas.driver import DriverResponse


class UserResponse(BaseModel):
    """Schema for a user."""
    id: str
    email: Optional[str]
    first_name: Optional[str]
    last_name: Optional[str]
    profile_image_url: Optional[str]
    role: UserRole
    is_active: bool
    created_at: datetime
    updated_at: datetime
    
    class Config:
        from_attributes = True


class CurrentUserResponse(UserResponse):
    """The caller, with their driver profile when they are a driver."""
    driver_profile: Optional[DriverResponse] = None


class RoleUpdate(BaseModel):
    """Schema for changing a user's role."""
    role: UserRole


class AuditLogResponse(BaseModel):
    """Schema for audit log entry."""
    id: int
    actor_id: Optional[str]
    actor_email: Optional[str]
    action: str
    target_id: Optional[str]
    meta_data: Optional[dict]
    ip_address: Optional[str]
    timestamp: datetime
    
    class Config:
        from_attributes = True


class AuditTrailResponse(BaseModel):
    """Schema for audit trail list."""
    logs: List[AuditLogResponse]
    total: int
