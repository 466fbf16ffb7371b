"""
User database model.

Users mirror identities held by the external identity provider; the id is
the provider's subject and the role is managed locally.
"""

from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.sql import func
from fleetops.app.db.session import Base
from fleetops.app.models.enums import UserRole, db_enum


class User(Base):
    """
    User model for identity and role management.

    A driver role implies a Driver profile, which is created separately by
    an admin.
    """
    __tablename__ = "users"
    
    id = Column(String(255), primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    profile_image_url = Column(String(500), nullable=True)
    
    role = Column(db_enum(UserRole, "user_role"), default=UserRole.DRIVER, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role.value}')>"
