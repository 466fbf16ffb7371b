"""
Audit Log Database Model.

Tracks business actions (approvals, assignments, uploads) for accountability.
"""

from sqlalchemy import Column, Integer, String, DateTime, JSON
from sqlalchemy.sql import func
from fleetops.app.db.session import Base


class AuditLog(Base):
    """
    Audit log model for tracking state-changing actions.
    
    Events logged include:
    - PAYOUT_APPROVED / PAYOUT_REJECTED / PAYOUT_PAID
    - ASSIGNMENT_CREATED / ASSIGNMENT_ENDED
    - TRIP_CREATED
    - DOCUMENT_UPLOADED / DOCUMENT_DELETED
    - ROLE_CHANGED (for privilege escalation detection)
    """
    __tablename__ = "audit_logs"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    
    # Who performed the action (None for system actions)
    actor_id = Column(String(255), index=True, nullable=True)
    actor_email = Column(String(255), nullable=True)
    
    # What action was performed
    action = Column(String(100), nullable=False, index=True)
    
    # Which record the action touched
    target_id = Column(String(255), index=True, nullable=True)
    
    # Additional context (JSON for flexibility)
    meta_data = Column(JSON, nullable=True)
    
    ip_address = Column(String(50), nullable=True)
    
    timestamp = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    
    def __repr__(self):
        return f"<AuditLog(id={self.id}, action='{self.action}', actor={self.actor_email}, target={self.target_id})>"
