"""
Driver context lookups.

Resolves the driver profile behind a user and the vehicle that driver is
currently assigned to.
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from fleetops.app.core.exceptions import ResourceNotFoundError, MissingAssignmentError
from fleetops.app.models.assignment import Assignment
from fleetops.app.models.driver import Driver
from fleetops.app.models.user import User


async def find_driver_profile(db: AsyncSession, user_id: str) -> Optional[Driver]:
    result = await db.execute(select(Driver).where(Driver.user_id == user_id))
    return result.scalar_one_or_none()


async def get_driver_profile(db: AsyncSession, user: User) -> Driver:
    """Driver profile of the user; 404 when the user has none."""
    driver = await find_driver_profile(db, user.id)
    if not driver:
        raise ResourceNotFoundError("Driver profile", message="Driver profile not found")
    return driver


async def find_active_assignment(db: AsyncSession, driver_id: str) -> Optional[Assignment]:
    result = await db.execute(
        select(Assignment)
        .where(Assignment.driver_id == driver_id, Assignment.is_active == True)
        .order_by(Assignment.assigned_at.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def get_active_assignment(db: AsyncSession, driver_id: str) -> Assignment:
    """Active assignment of the driver; 400 when no vehicle is assigned."""
    assignment = await find_active_assignment(db, driver_id)
    if not assignment:
        raise MissingAssignmentError()
    return assignment
