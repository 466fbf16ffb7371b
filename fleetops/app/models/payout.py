"""
Payout database model.

Derived 1:1 from a trip and moved through an approval workflow.
"""

from sqlalchemy import Column, String, Text, Numeric, DateTime, ForeignKey
from sqlalchemy.sql import func
from fleetops.app.db.session import Base, new_id
from fleetops.app.models.enums import PayoutStatus, db_enum


class Payout(Base):
    """
    Payout model.

    Holds the formula amount computed from the trip revenue and follows
    the workflow PENDING -> APPROVED -> PAID, or PENDING -> REJECTED.
    """
    __tablename__ = "payouts"
    
    id = Column(String(36), primary_key=True, default=new_id)
    trip_id = Column(String(36), ForeignKey('trips.id'), unique=True, nullable=False, index=True)
    driver_id = Column(String(36), ForeignKey('drivers.id'), nullable=False, index=True)
    
    # Financials
    revenue = Column(Numeric(10, 2), nullable=False)
    calculated_amount = Column(Numeric(10, 2), nullable=False)
    approved_amount = Column(Numeric(10, 2), nullable=True)
    
    status = Column(db_enum(PayoutStatus, "payout_status"), default=PayoutStatus.PENDING, nullable=False, index=True)
    
    # Approval Flow
    approved_by = Column(String(255), ForeignKey('users.id'), nullable=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)
    notes = Column(Text, nullable=True)
    
    # Payment Flow
    paid_at = Column(DateTime(timezone=True), nullable=True)
    
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    def __repr__(self):
        return f"<Payout(id={self.id}, status='{self.status.value}', amount={self.calculated_amount})>"
