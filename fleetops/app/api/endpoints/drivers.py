"""
Driver Profile API Endpoints.

Admins create driver profiles for users holding the driver role; managers
can browse them.
"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fleetops.app.db.session import get_db
from fleetops.app.core.exceptions import ResourceNotFoundError, DuplicateResourceError
from fleetops.app.core.guards import require_role, require_admin, STAFF_ROLES
from fleetops.app.models.driver import Driver
from fleetops.app.models.enums import UserRole
from fleetops.app.models.user import User
from fleetops.app.schemas.driver import DriverCreate, DriverUpdate, DriverResponse
from fleetops.app.services.audit import log_event, AuditAction

router = APIRouter(prefix="/drivers", tags=["Drivers"])


async def _ensure_unique(db: AsyncSession, field: str, value, exclude_id: str = None):
    if value is None:
        return
    query = select(Driver.id).where(getattr(Driver, field) == value)
    if exclude_id:
        query = query.where(Driver.id != exclude_id)
    result = await db.execute(query)
    if result.first():
        raise DuplicateResourceError("Driver", field, value)


async def _get_driver(db: AsyncSession, driver_id: str) -> Driver:
    result = await db.execute(select(Driver).where(Driver.id == driver_id))
    driver = result.scalar_one_or_none()
    if not driver:
        raise ResourceNotFoundError("Driver", driver_id)
    return driver


@router.get("", response_model=List[DriverResponse])
async def list_drivers(
    current_user: User = Depends(require_role(STAFF_ROLES)),
    db: AsyncSession = Depends(get_db)
):
    """List active drivers (admin/manager)."""
    result = await db.execute(
        select(Driver).where(Driver.is_active == True).order_by(Driver.created_at.desc())
    )
    return [DriverResponse.model_validate(driver) for driver in result.scalars().all()]


@router.get("/{driver_id}", response_model=DriverResponse)
async def get_driver(
    driver_id: str,
    current_user: User = Depends(require_role(STAFF_ROLES)),
    db: AsyncSession = Depends(get_db)
):
    """Get one driver profile (admin/manager)."""
    return DriverResponse.model_validate(await _get_driver(db, driver_id))


@router.post("", response_model=DriverResponse, status_code=status.HTTP_201_CREATED)
async def create_driver(
    driver_data: DriverCreate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Create the driver profile of an existing user (admin-only).

    The user must hold the driver role and must not have a profile yet.
    """
    result = await db.execute(select(User).where(User.id == driver_data.user_id))
    user = result.scalar_one_or_none()
    if not user:
        raise ResourceNotFoundError("User", driver_data.user_id)

    if user.role != UserRole.DRIVER:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User must have the driver role"
        )

    await _ensure_unique(db, "user_id", driver_data.user_id)
    await _ensure_unique(db, "employee_id", driver_data.employee_id)
    await _ensure_unique(db, "license_number", driver_data.license_number)

    driver = Driver(**driver_data.model_dump())
    db.add(driver)
    await db.commit()
    await db.refresh(driver)

    await log_event(
        db=db,
        action=AuditAction.DRIVER_CREATED,
        actor=admin,
        target_id=driver.id,
        metadata={"user_id": driver.user_id, "employee_id": driver.employee_id}
    )

    return DriverResponse.model_validate(driver)


@router.patch("/{driver_id}", response_model=DriverResponse)
async def update_driver(
    driver_id: str,
    driver_data: DriverUpdate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Update a driver profile (admin-only)."""
    driver = await _get_driver(db, driver_id)

    update_data = driver_data.model_dump(exclude_unset=True)
    if "license_number" in update_data:
        await _ensure_unique(db, "license_number", update_data["license_number"], exclude_id=driver.id)

    for field, value in update_data.items():
        setattr(driver, field, value)

    await db.commit()
    await db.refresh(driver)

    await log_event(
        db=db,
        action=AuditAction.DRIVER_UPDATED,
        actor=admin,
        target_id=driver.id,
        metadata={"updated_fields": sorted(update_data.keys())}
    )

    return DriverResponse.model_validate(driver)
