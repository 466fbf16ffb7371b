"""
Vehicle database model.
"""

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from fleetops.app.db.session import Base, new_id
from fleetops.app.models.enums import VehicleStatus, db_enum


class Vehicle(Base):
    """
    Vehicle model.

    A fleet asset with registration, insurance and permit details.
    """
    __tablename__ = "vehicles"
    
    id = Column(String(36), primary_key=True, default=new_id)
    
    # Identification
    registration_number = Column(String(100), unique=True, nullable=False, index=True)
    make = Column(String(100), nullable=False)
    model = Column(String(100), nullable=False)
    year = Column(Integer, nullable=True)
    capacity = Column(Integer, nullable=True)  # seats
    fuel_type = Column(String(50), nullable=True)  # e.g., "Diesel", "Petrol", "CNG"
    
    # Paperwork
    insurance_number = Column(String(100), nullable=True)
    insurance_expiry_date = Column(DateTime(timezone=True), nullable=True)
    permit_number = Column(String(100), nullable=True)
    permit_expiry_date = Column(DateTime(timezone=True), nullable=True)
    
    status = Column(db_enum(VehicleStatus, "vehicle_status"), default=VehicleStatus.ACTIVE, nullable=False, index=True)
    
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    def __repr__(self):
        return f"<Vehicle(id={self.id}, registration='{self.registration_number}', status='{self.status.value}')>"
