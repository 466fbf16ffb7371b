"""
Authentication API Endpoints.

Sign-in happens at the identity provider; this module only reports who
the caller is.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from fleetops.app.db.session import get_db
from fleetops.app.core.dependencies import get_current_user
from fleetops.app.models.enums import UserRole
from fleetops.app.models.user import User
from fleetops.app.schemas.driver import DriverResponse
from fleetops.app.schemas.user import CurrentUserResponse
from fleetops.app.services.driver_context import find_driver_profile

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.get("/user", response_model=CurrentUserResponse)
async def get_authenticated_user(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Return the current user.

    Drivers also get their driver profile (null until an admin creates it).
    """
    response = CurrentUserResponse.model_validate(current_user)

    if current_user.role == UserRole.DRIVER:
        driver = await find_driver_profile(db, current_user.id)
        if driver:
            response.driver_profile = DriverResponse.model_validate(driver)

    return response
