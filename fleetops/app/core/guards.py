"""
Security guards for role-based and ownership-based access control.

Provides dependencies for protecting endpoints.
"""

from typing import List
from fastapi import Depends, HTTPException, status
from fleetops.app.models.enums import UserRole
from fleetops.app.models.user import User
from fleetops.app.core.dependencies import get_current_user

STAFF_ROLES = [UserRole.ADMIN, UserRole.MANAGER]


def require_role(allowed_roles: List[UserRole]):
    """
    Dependency factory for role-based access control.

    Usage:
        @router.get("/vehicles")
        async def list_vehicles(current_user: User = Depends(require_role(STAFF_ROLES))):
            ...

    Args:
        allowed_roles: List of UserRole enums that are allowed to access the endpoint

    Returns:
        FastAPI dependency function that validates user role

    Raises:
        HTTPException 403 if user role is not in allowed_roles
    """
    async def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. Required role: {', '.join([r.value for r in allowed_roles])}"
            )

        return current_user

    return role_checker


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """
    Dependency for admin-only endpoints.

    Args:
        current_user: Authenticated user

    Returns:
        The user if admin, raises 403 otherwise
    """
    if current_user.role != UserRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )

    return current_user


def is_staff(user: User) -> bool:
    """Admins and managers see every driver's records."""
    return user.role in STAFF_ROLES


class OwnershipGuard:
    """
    Ownership guard for driver-owned records.

    Staff (admin/manager) may touch any record; drivers only their own.

    Usage:
        ownership_guard = OwnershipGuard()

        checklist = await get_checklist(db, checklist_id)
        ownership_guard.enforce(checklist.driver_id, current_user, driver, "checklist")
    """

    def enforce(
        self,
        resource_driver_id: str,
        current_user: User,
        driver_id: str = None,
        resource_name: str = "resource"
    ):
        """
        Enforce ownership validation, raise 403 if access denied.

        Args:
            resource_driver_id: Driver id stored on the resource
            current_user: Current authenticated user
            driver_id: Driver profile id of the current user (if any)
            resource_name: Name of resource for error message

        Raises:
            HTTPException 403 if ownership check fails
        """
        if is_staff(current_user):
            return
        if driver_id is None or driver_id != resource_driver_id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. You do not have permission to access this {resource_name}."
            )
