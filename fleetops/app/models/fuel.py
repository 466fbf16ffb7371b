"""
Fuel station and fuel record database models.
"""

from sqlalchemy import Column, Integer, String, Text, Numeric, Boolean, DateTime, ForeignKey
from sqlalchemy.sql import func
from fleetops.app.db.session import Base, new_id
from fleetops.app.models.enums import FuelRecordType, db_enum


class FuelStation(Base):
    """Contracted fuel station."""
    __tablename__ = "fuel_stations"
    
    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    location = Column(Text, nullable=False)
    contact_person = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    contract_details = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    def __repr__(self):
        return f"<FuelStation(id={self.id}, name='{self.name}')>"


class FuelRecord(Base):
    """
    Fuel record model.

    Logged by a driver for the vehicle of their active assignment.
    """
    __tablename__ = "fuel_records"
    
    id = Column(String(36), primary_key=True, default=new_id)
    vehicle_id = Column(String(36), ForeignKey('vehicles.id'), nullable=False, index=True)
    driver_id = Column(String(36), ForeignKey('drivers.id'), nullable=False, index=True)
    fuel_station_id = Column(String(36), ForeignKey('fuel_stations.id'), nullable=True, index=True)
    
    record_type = Column(db_enum(FuelRecordType, "fuel_record_type"), nullable=False)
    fuel_type = Column(String(50), nullable=False)
    quantity = Column(Numeric(10, 2), nullable=False)  # litres
    price_per_liter = Column(Numeric(10, 2), nullable=False)
    total_cost = Column(Numeric(10, 2), nullable=False)
    
    odometer_reading = Column(Integer, nullable=True)
    receipt_number = Column(String(100), nullable=True)
    notes = Column(Text, nullable=True)
    
    refuel_date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    
    def __repr__(self):
        return f"<FuelRecord(id={self.id}, vehicle_id={self.vehicle_id}, quantity={self.quantity})>"
