"""
Audit logging service for tracking business actions.

Provides centralized logging for accountability on approvals, assignments
and document handling.
"""

from typing import Optional, Dict, Any
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, desc
from fleetops.app.models.audit_log import AuditLog
from fleetops.app.models.user import User


# Audit event constants
class AuditAction:
    """Standardized audit action constants."""
    USER_PROVISIONED = "USER_PROVISIONED"
    ROLE_CHANGED = "ROLE_CHANGED"

    DRIVER_CREATED = "DRIVER_CREATED"
    DRIVER_UPDATED = "DRIVER_UPDATED"

    VEHICLE_CREATED = "VEHICLE_CREATED"
    VEHICLE_UPDATED = "VEHICLE_UPDATED"

    ASSIGNMENT_CREATED = "ASSIGNMENT_CREATED"
    ASSIGNMENT_ENDED = "ASSIGNMENT_ENDED"

    TRIP_CREATED = "TRIP_CREATED"

    PAYOUT_APPROVED = "PAYOUT_APPROVED"
    PAYOUT_REJECTED = "PAYOUT_REJECTED"
    PAYOUT_PAID = "PAYOUT_PAID"

    INCIDENT_REPORTED = "INCIDENT_REPORTED"
    INCIDENT_RESOLVED = "INCIDENT_RESOLVED"

    MAINTENANCE_CREATED = "MAINTENANCE_CREATED"
    MAINTENANCE_UPDATED = "MAINTENANCE_UPDATED"

    INVENTORY_CREATED = "INVENTORY_CREATED"
    INVENTORY_UPDATED = "INVENTORY_UPDATED"

    DOCUMENT_UPLOADED = "DOCUMENT_UPLOADED"
    DOCUMENT_DELETED = "DOCUMENT_DELETED"


async def log_event(
    db: AsyncSession,
    action: str,
    actor: Optional[User] = None,
    target_id: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
    ip_address: Optional[str] = None
) -> AuditLog:
    """
    Log a business event to the audit log.
    
    Args:
        db: Database session
        action: Action being performed (use AuditAction constants)
        actor: User performing the action (None for system actions)
        target_id: ID of the record acted upon
        metadata: Additional context as JSON
        ip_address: IP address of the request
        
    Returns:
        Created AuditLog instance
    """
    audit_log = AuditLog(
        actor_id=actor.id if actor else None,
        actor_email=actor.email if actor else None,
        action=action,
        target_id=target_id,
        meta_data=metadata,
        ip_address=ip_address
    )
    
    db.add(audit_log)
    await db.commit()
    await db.refresh(audit_log)
    
    return audit_log


async def get_audit_trail(
    db: AsyncSession,
    target_id: Optional[str] = None,
    action: Optional[str] = None,
    limit: int = 100
) -> list[AuditLog]:
    """
    Retrieve audit trail with optional filtering.
    
    Args:
        db: Database session
        target_id: Filter by target record ID
        action: Filter by action type
        limit: Maximum number of records to return
        
    Returns:
        List of AuditLog instances, most recent first
    """
    query = select(AuditLog).order_by(desc(AuditLog.timestamp), desc(AuditLog.id))
    
    if target_id:
        query = query.where(AuditLog.target_id == target_id)
    
    if action:
        query = query.where(AuditLog.action == action)
    
    query = query.limit(limit)
    
    result = await db.execute(query)
    return list(result.scalars().all())


def client_ip(request) -> Optional[str]:
    """Best-effort caller address for audit entries."""
    return request.client.host if request.client else None
