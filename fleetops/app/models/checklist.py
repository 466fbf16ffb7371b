"""
Driver checklist and checklist item database models.
"""

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.sql import func
from fleetops.app.db.session import Base, new_id
from fleetops.app.models.enums import ChecklistStatus, db_enum


class DriverChecklist(Base):
    """
    Inspection completed by a driver for their assigned vehicle.

    checklist_type: 'pre_trip', 'post_trip', 'inventory', 'maintenance'
    """
    __tablename__ = "driver_checklists"
    
    id = Column(String(36), primary_key=True, default=new_id)
    driver_id = Column(String(36), ForeignKey('drivers.id'), nullable=False, index=True)
    vehicle_id = Column(String(36), ForeignKey('vehicles.id'), nullable=False, index=True)
    
    checklist_type = Column(String(50), nullable=False)
    status = Column(db_enum(ChecklistStatus, "checklist_status"), default=ChecklistStatus.PENDING, nullable=False, index=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    notes = Column(Text, nullable=True)
    
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    
    def __repr__(self):
        return f"<DriverChecklist(id={self.id}, type='{self.checklist_type}', status='{self.status.value}')>"


class ChecklistItem(Base):
    """
    Single pass/fail entry of a checklist.

    item_category: 'safety', 'inventory', 'maintenance', 'documentation'
    condition: 'good', 'fair', 'poor', 'needs_attention'
    """
    __tablename__ = "checklist_items"
    
    id = Column(String(36), primary_key=True, default=new_id)
    checklist_id = Column(String(36), ForeignKey('driver_checklists.id'), nullable=False, index=True)
    
    item_name = Column(String(255), nullable=False)
    item_category = Column(String(50), nullable=False)
    is_checked = Column(Boolean, default=False, nullable=False)
    condition = Column(String(50), nullable=True)
    quantity = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=True)
    
    def __repr__(self):
        return f"<ChecklistItem(id={self.id}, name='{self.item_name}', checked={self.is_checked})>"
