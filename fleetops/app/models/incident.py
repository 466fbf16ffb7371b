"""
Incident database model.
"""

from sqlalchemy import Column, String, Text, Numeric, Boolean, DateTime, ForeignKey
from sqlalchemy.sql import func
from fleetops.app.db.session import Base, new_id


class Incident(Base):
    """Accident, damage or breakdown reported by a driver."""
    __tablename__ = "incidents"
    
    id = Column(String(36), primary_key=True, default=new_id)
    trip_id = Column(String(36), ForeignKey('trips.id'), nullable=True, index=True)
    driver_id = Column(String(36), ForeignKey('drivers.id'), nullable=False, index=True)
    vehicle_id = Column(String(36), ForeignKey('vehicles.id'), nullable=False, index=True)
    
    incident_type = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    damage_amount = Column(Numeric(10, 2), nullable=True)
    
    is_resolved = Column(Boolean, default=False, nullable=False, index=True)
    reported_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    resolved_at = Column(DateTime(timezone=True), nullable=True)
    
    def __repr__(self):
        return f"<Incident(id={self.id}, type='{self.incident_type}', resolved={self.is_resolved})>"
