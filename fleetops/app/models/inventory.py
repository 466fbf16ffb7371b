"""
Inventory item database model.
"""

from sqlalchemy import Column, Integer, String, Text, Numeric, Boolean, DateTime
from sqlalchemy.sql import func
from fleetops.app.db.session import Base, new_id


class InventoryItem(Base):
    """
    Stock item kept for the fleet.

    category: 'spare_parts', 'tools', 'safety_equipment', 'consumables'
    An item is low on stock when current_stock <= minimum_stock.
    """
    __tablename__ = "inventory_items"
    
    id = Column(String(36), primary_key=True, default=new_id)
    item_name = Column(String(255), nullable=False)
    item_code = Column(String(100), unique=True, nullable=True, index=True)
    category = Column(String(50), nullable=False)
    
    current_stock = Column(Integer, default=0, nullable=False)
    minimum_stock = Column(Integer, default=0, nullable=False)
    max_stock = Column(Integer, nullable=True)
    unit_price = Column(Numeric(10, 2), nullable=True)
    
    location = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    def __repr__(self):
        return f"<InventoryItem(id={self.id}, name='{self.item_name}', stock={self.current_stock})>"
