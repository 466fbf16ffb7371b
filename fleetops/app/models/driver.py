"""
Driver profile database model.
"""

from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.sql import func
from fleetops.app.db.session import Base, new_id


class Driver(Base):
    """
    Driver model.

    Employee and license metadata for a user with the driver role (1:1).
    """
    __tablename__ = "drivers"
    
    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(255), ForeignKey('users.id'), unique=True, nullable=False, index=True)
    
    # Employment
    employee_id = Column(String(100), unique=True, nullable=False, index=True)
    phone_number = Column(String(50), nullable=True)
    address = Column(Text, nullable=True)
    emergency_contact = Column(String(255), nullable=True)
    date_of_birth = Column(DateTime(timezone=True), nullable=True)
    
    # License
    license_number = Column(String(100), unique=True, nullable=True)
    license_expiry_date = Column(DateTime(timezone=True), nullable=True)
    
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    def __repr__(self):
        return f"<Driver(id={self.id}, employee_id='{self.employee_id}', user_id={self.user_id})>"
