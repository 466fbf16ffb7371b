"""
Fuel API Endpoints.

Contracted fuel stations (admin-managed) and fuel records logged by
drivers for their assigned vehicle.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fleetops.app.db.session import get_db
from fleetops.app.core.dependencies import get_current_user
from fleetops.app.core.exceptions import ResourceNotFoundError
from fleetops.app.core.guards import require_role, require_admin, is_staff, STAFF_ROLES
from fleetops.app.domain.payouts.payout_calculator import CENTS
from fleetops.app.models.fuel import FuelStation, FuelRecord
from fleetops.app.models.user import User
from fleetops.app.schemas.fuel import (
    FuelStationCreate, FuelStationUpdate, FuelStationResponse,
    FuelRecordCreate, FuelRecordResponse
)
from fleetops.app.services.driver_context import get_driver_profile, get_active_assignment

router = APIRouter(tags=["Fuel"])


async def _get_station(db: AsyncSession, station_id: str) -> FuelStation:
    result = await db.execute(select(FuelStation).where(FuelStation.id == station_id))
    station = result.scalar_one_or_none()
    if not station:
        raise ResourceNotFoundError("Fuel station", station_id)
    return station


# --- Fuel stations ---

@router.get("/fuel-stations", response_model=List[FuelStationResponse])
async def list_fuel_stations(
    active_only: bool = Query(False, description="Only stations still under contract"),
    current_user: User = Depends(require_role(STAFF_ROLES)),
    db: AsyncSession = Depends(get_db)
):
    """List fuel stations (admin/manager)."""
    query = select(FuelStation).order_by(FuelStation.name)
    if active_only:
        query = query.where(FuelStation.is_active == True)

    result = await db.execute(query)
    return [FuelStationResponse.model_validate(station) for station in result.scalars().all()]


@router.post("/fuel-stations", response_model=FuelStationResponse, status_code=status.HTTP_201_CREATED)
async def create_fuel_station(
    station_data: FuelStationCreate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Register a fuel station (admin-only)."""
    station = FuelStation(**station_data.model_dump())
    db.add(station)
    await db.commit()
    await db.refresh(station)
    return FuelStationResponse.model_validate(station)


@router.patch("/fuel-stations/{station_id}", response_model=FuelStationResponse)
async def update_fuel_station(
    station_id: str,
    station_data: FuelStationUpdate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Update a fuel station (admin-only)."""
    station = await _get_station(db, station_id)

    for field, value in station_data.model_dump(exclude_unset=True).items():
        setattr(station, field, value)

    await db.commit()
    await db.refresh(station)
    return FuelStationResponse.model_validate(station)


# --- Fuel records ---

@router.get("/fuel-records", response_model=List[FuelRecordResponse])
async def list_fuel_records(
    vehicle_id: Optional[str] = Query(None, description="Filter by vehicle"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """List fuel records, newest first; drivers only see their own."""
    query = select(FuelRecord).order_by(FuelRecord.refuel_date.desc())

    if not is_staff(current_user):
        driver = await get_driver_profile(db, current_user)
        query = query.where(FuelRecord.driver_id == driver.id)

    if vehicle_id:
        query = query.where(FuelRecord.vehicle_id == vehicle_id)

    result = await db.execute(query)
    return [FuelRecordResponse.model_validate(record) for record in result.scalars().all()]


@router.post("/fuel-records", response_model=FuelRecordResponse, status_code=status.HTTP_201_CREATED)
async def create_fuel_record(
    record_data: FuelRecordCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Log fuel for the caller's assigned vehicle.

    total_cost defaults to quantity * price_per_liter.
    """
    driver = await get_driver_profile(db, current_user)
    assignment = await get_active_assignment(db, driver.id)

    if record_data.fuel_station_id:
        await _get_station(db, record_data.fuel_station_id)

    data = record_data.model_dump(exclude_none=True)
    if "total_cost" not in data:
        data["total_cost"] = (record_data.quantity * record_data.price_per_liter).quantize(CENTS)

    record = FuelRecord(
        driver_id=driver.id,
        vehicle_id=assignment.vehicle_id,
        **data
    )
    db.add(record)
    await db.commit()
    await db.refresh(record)

    return FuelRecordResponse.model_validate(record)
