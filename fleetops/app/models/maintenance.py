"""
Maintenance record and maintenance task database models.
"""

from sqlalchemy import Column, Integer, String, Text, Numeric, Boolean, DateTime, ForeignKey
from sqlalchemy.sql import func
from fleetops.app.db.session import Base, new_id
from fleetops.app.models.enums import MaintenanceStatus, db_enum


class MaintenanceRecord(Base):
    """
    Maintenance record model.

    maintenance_type: 'scheduled', 'repair', 'inspection', 'service'
    """
    __tablename__ = "maintenance_records"
    
    id = Column(String(36), primary_key=True, default=new_id)
    vehicle_id = Column(String(36), ForeignKey('vehicles.id'), nullable=False, index=True)
    
    maintenance_type = Column(String(50), nullable=False)
    description = Column(Text, nullable=False)
    status = Column(db_enum(MaintenanceStatus, "maintenance_status"), default=MaintenanceStatus.SCHEDULED, nullable=False, index=True)
    
    scheduled_date = Column(DateTime(timezone=True), nullable=True)
    completed_date = Column(DateTime(timezone=True), nullable=True)
    next_service_due = Column(DateTime(timezone=True), nullable=True)
    
    cost = Column(Numeric(10, 2), nullable=True)
    service_provider = Column(String(255), nullable=True)
    odometer_reading = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)
    
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    def __repr__(self):
        return f"<MaintenanceRecord(id={self.id}, vehicle_id={self.vehicle_id}, status='{self.status.value}')>"


class MaintenanceTask(Base):
    """Unit of work within a maintenance record. Durations are in minutes."""
    __tablename__ = "maintenance_tasks"
    
    id = Column(String(36), primary_key=True, default=new_id)
    maintenance_record_id = Column(String(36), ForeignKey('maintenance_records.id'), nullable=False, index=True)
    
    task_name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    is_completed = Column(Boolean, default=False, nullable=False)
    assigned_to = Column(String(255), nullable=True)
    completed_by = Column(String(255), nullable=True)
    estimated_duration = Column(Integer, nullable=True)
    actual_duration = Column(Integer, nullable=True)
    parts_used = Column(Text, nullable=True)  # JSON string of parts
    cost = Column(Numeric(10, 2), nullable=True)
    
    def __repr__(self):
        return f"<MaintenanceTask(id={self.id}, name='{self.task_name}', completed={self.is_completed})>"
