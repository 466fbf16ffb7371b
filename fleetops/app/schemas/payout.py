"""
Payout Schemas.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal
from typing import Optional
from fleetops.app.models.enums import PayoutStatus


class PayoutResponse(BaseModel):
    """Schema for displaying a payout."""
    id: str
    trip_id: str
    driver_id: str
    revenue: float
    calculated_amount: float
    approved_amount: Optional[float]
    status: PayoutStatus
    approved_by: Optional[str]
    approved_at: Optional[datetime]
    paid_at: Optional[datetime]
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime
    
    class Config:
        from_attributes = True


class PayoutApproveRequest(BaseModel):
    """Body of an approval; the amount defaults to the calculated amount."""
    approved_amount: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    notes: Optional[str] = None


class PayoutRejectRequest(BaseModel):
    """Body of a rejection."""
    notes: Optional[str] = None


class PayoutCalculationRequest(BaseModel):
    """Revenue to preview a payout for."""
    revenue: Decimal = Field(..., max_digits=12, decimal_places=2, description="Negative values are rejected with 400")


class PayoutCalculationResponse(BaseModel):
    """Payout preview."""
    payout: float
    formula: str
