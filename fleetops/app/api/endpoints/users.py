"""
User Management API Endpoints.

Admin-only listing, role changes and the audit trail.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fleetops.app.db.session import get_db
from fleetops.app.core.exceptions import ResourceNotFoundError
from fleetops.app.core.guards import require_admin
from fleetops.app.models.user import User
from fleetops.app.schemas.user import (
    UserResponse, RoleUpdate, AuditLogResponse, AuditTrailResponse
)
from fleetops.app.services.audit import log_event, AuditAction, get_audit_trail, client_ip

router = APIRouter(tags=["Users"])


@router.get("/users", response_model=List[UserResponse])
async def list_users(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """List all users, newest first (admin-only)."""
    result = await db.execute(select(User).order_by(User.created_at.desc()))
    return [UserResponse.model_validate(user) for user in result.scalars().all()]


@router.patch("/users/{user_id}/role", response_model=UserResponse)
async def update_user_role(
    user_id: str,
    payload: RoleUpdate,
    request: Request,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Change the role of a user (admin-only).

    Admins cannot change their own role.
    """
    if user_id == admin.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot change your own role"
        )

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if not user:
        raise ResourceNotFoundError("User", user_id)

    previous_role = user.role
    user.role = payload.role
    await db.commit()
    await db.refresh(user)

    await log_event(
        db=db,
        action=AuditAction.ROLE_CHANGED,
        actor=admin,
        target_id=user.id,
        metadata={"from": previous_role.value, "to": user.role.value},
        ip_address=client_ip(request)
    )

    return UserResponse.model_validate(user)


@router.get("/audit-logs", response_model=AuditTrailResponse)
async def list_audit_logs(
    target_id: Optional[str] = Query(None, description="Filter by target record ID"),
    action: Optional[str] = Query(None, description="Filter by action type"),
    limit: int = Query(100, ge=1, le=1000, description="Maximum number of records"),
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Get the audit trail (admin-only).

    Returns audit logs with optional filtering by target and action.
    """
    logs = await get_audit_trail(db, target_id=target_id, action=action, limit=limit)

    return AuditTrailResponse(
        logs=[AuditLogResponse.model_validate(log) for log in logs],
        total=len(logs)
    )
