"""
Trip database model.

Trips are logged by drivers against the vehicle of their active assignment.
"""

from sqlalchemy import Column, String, Text, Numeric, DateTime, ForeignKey
from sqlalchemy.sql import func
from fleetops.app.db.session import Base, new_id
from fleetops.app.models.enums import TripStatus, db_enum


class Trip(Base):
    """
    Trip model.
    
    Every trip gets exactly one payout, created in the same transaction.
    """
    __tablename__ = "trips"
    
    id = Column(String(36), primary_key=True, default=new_id)
    
    driver_id = Column(String(36), ForeignKey('drivers.id'), nullable=False, index=True)
    vehicle_id = Column(String(36), ForeignKey('vehicles.id'), nullable=False, index=True)
    
    pickup_location = Column(Text, nullable=False)
    drop_location = Column(Text, nullable=False)
    distance = Column(Numeric(10, 2), nullable=True)  # km
    revenue = Column(Numeric(10, 2), nullable=False)
    
    start_time = Column(DateTime(timezone=True), nullable=True)
    end_time = Column(DateTime(timezone=True), nullable=True)
    status = Column(db_enum(TripStatus, "trip_status"), default=TripStatus.PENDING, nullable=False, index=True)
    
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    def __repr__(self):
        return f"<Trip(id={self.id}, driver_id={self.driver_id}, revenue={self.revenue}, status='{self.status.value}')>"
