"""
Driver-vehicle assignment database model.
"""

from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey
from sqlalchemy.sql import func
from fleetops.app.db.session import Base, new_id


class Assignment(Base):
    """
    Assignment model.

    Binds a driver to a vehicle. At most one assignment per driver is
    active; creating a new one deactivates the previous.
    """
    __tablename__ = "assignments"
    
    id = Column(String(36), primary_key=True, default=new_id)
    driver_id = Column(String(36), ForeignKey('drivers.id'), nullable=False, index=True)
    vehicle_id = Column(String(36), ForeignKey('vehicles.id'), nullable=False, index=True)
    
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    assigned_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    unassigned_at = Column(DateTime(timezone=True), nullable=True)
    
    def __repr__(self):
        return f"<Assignment(id={self.id}, driver_id={self.driver_id}, vehicle_id={self.vehicle_id}, active={self.is_active})>"
