"""
Trip API Endpoints.

Drivers log trips on the vehicle they are assigned to; each trip creates
its pending payout.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fleetops.app.db.session import get_db
from fleetops.app.core.dependencies import get_current_user
from fleetops.app.core.exceptions import ResourceNotFoundError
from fleetops.app.core.guards import OwnershipGuard, is_staff
from fleetops.app.domain.payouts.payout_service import PayoutService
from fleetops.app.models.trip import Trip
from fleetops.app.models.user import User
from fleetops.app.schemas.payout import PayoutResponse
from fleetops.app.schemas.trip import TripCreate, TripResponse, TripCreatedResponse
from fleetops.app.services.audit import log_event, AuditAction
from fleetops.app.services.driver_context import (
    get_driver_profile, get_active_assignment, find_driver_profile
)

router = APIRouter(prefix="/trips", tags=["Trips"])
ownership_guard = OwnershipGuard()


@router.get("", response_model=List[TripResponse])
async def list_trips(
    driver_id: Optional[str] = Query(None, description="Filter by driver (admin/manager)"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    List trips, newest first.

    Drivers only see their own trips.
    """
    query = select(Trip).order_by(Trip.created_at.desc())

    if is_staff(current_user):
        if driver_id:
            query = query.where(Trip.driver_id == driver_id)
    else:
        driver = await get_driver_profile(db, current_user)
        query = query.where(Trip.driver_id == driver.id)

    result = await db.execute(query)
    return [TripResponse.model_validate(trip) for trip in result.scalars().all()]


@router.get("/{trip_id}", response_model=TripResponse)
async def get_trip(
    trip_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Get one trip; drivers may only read their own."""
    result = await db.execute(select(Trip).where(Trip.id == trip_id))
    trip = result.scalar_one_or_none()
    if not trip:
        raise ResourceNotFoundError("Trip", trip_id)

    driver = await find_driver_profile(db, current_user.id)
    ownership_guard.enforce(trip.driver_id, current_user, driver.id if driver else None, "trip")

    return TripResponse.model_validate(trip)


@router.post("", response_model=TripCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Log a completed trip.

    Flow:
    1. Resolve the caller's driver profile (404 if missing)
    2. Resolve the active assignment (400 if none)
    3. Create the trip and its pending payout together
    """
    driver = await get_driver_profile(db, current_user)
    assignment = await get_active_assignment(db, driver.id)

    trip, payout = await PayoutService.record_trip(
        db,
        driver=driver,
        assignment=assignment,
        pickup_location=trip_data.pickup_location,
        drop_location=trip_data.drop_location,
        revenue=trip_data.revenue,
        distance=trip_data.distance,
    )

    await log_event(
        db=db,
        action=AuditAction.TRIP_CREATED,
        actor=current_user,
        target_id=trip.id,
        metadata={
            "vehicle_id": trip.vehicle_id,
            "revenue": str(trip.revenue),
            "payout_id": payout.id,
            "calculated_amount": str(payout.calculated_amount)
        }
    )

    return TripCreatedResponse(
        **TripResponse.model_validate(trip).model_dump(),
        payout=PayoutResponse.model_validate(payout)
    )
