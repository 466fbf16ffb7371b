"""
Vehicle API Endpoints.

Admins register vehicles; admins and managers browse and update them.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fleetops.app.db.session import get_db
from fleetops.app.core.exceptions import ResourceNotFoundError, DuplicateResourceError
from fleetops.app.core.guards import require_role, require_admin, STAFF_ROLES
from fleetops.app.models.enums import VehicleStatus
from fleetops.app.models.user import User
from fleetops.app.models.vehicle import Vehicle
from fleetops.app.schemas.vehicle import VehicleCreate, VehicleUpdate, VehicleResponse
from fleetops.app.services.audit import log_event, AuditAction

router = APIRouter(prefix="/vehicles", tags=["Vehicles"])


async def _get_vehicle(db: AsyncSession, vehicle_id: str) -> Vehicle:
    result = await db.execute(select(Vehicle).where(Vehicle.id == vehicle_id))
    vehicle = result.scalar_one_or_none()
    if not vehicle:
        raise ResourceNotFoundError("Vehicle", vehicle_id)
    return vehicle


@router.get("", response_model=List[VehicleResponse])
async def list_vehicles(
    vehicle_status: Optional[VehicleStatus] = Query(None, alias="status", description="Filter by status"),
    current_user: User = Depends(require_role(STAFF_ROLES)),
    db: AsyncSession = Depends(get_db)
):
    """List vehicles (admin/manager)."""
    query = select(Vehicle).order_by(Vehicle.created_at.desc())
    if vehicle_status:
        query = query.where(Vehicle.status == vehicle_status)

    result = await db.execute(query)
    return [VehicleResponse.model_validate(vehicle) for vehicle in result.scalars().all()]


@router.get("/{vehicle_id}", response_model=VehicleResponse)
async def get_vehicle(
    vehicle_id: str,
    current_user: User = Depends(require_role(STAFF_ROLES)),
    db: AsyncSession = Depends(get_db)
):
    """Get one vehicle (admin/manager)."""
    return VehicleResponse.model_validate(await _get_vehicle(db, vehicle_id))


@router.post("", response_model=VehicleResponse, status_code=status.HTTP_201_CREATED)
async def create_vehicle(
    vehicle_data: VehicleCreate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Register a new vehicle (admin-only).

    Registration numbers are unique across the fleet.
    """
    result = await db.execute(
        select(Vehicle.id).where(Vehicle.registration_number == vehicle_data.registration_number)
    )
    if result.first():
        raise DuplicateResourceError("Vehicle", "registration_number", vehicle_data.registration_number)

    vehicle = Vehicle(**vehicle_data.model_dump())
    db.add(vehicle)
    await db.commit()
    await db.refresh(vehicle)

    await log_event(
        db=db,
        action=AuditAction.VEHICLE_CREATED,
        actor=admin,
        target_id=vehicle.id,
        metadata={"registration_number": vehicle.registration_number}
    )

    return VehicleResponse.model_validate(vehicle)


@router.patch("/{vehicle_id}", response_model=VehicleResponse)
async def update_vehicle(
    vehicle_id: str,
    vehicle_data: VehicleUpdate,
    current_user: User = Depends(require_role(STAFF_ROLES)),
    db: AsyncSession = Depends(get_db)
):
    """Update a vehicle (admin/manager)."""
    vehicle = await _get_vehicle(db, vehicle_id)

    update_data = vehicle_data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(vehicle, field, value)

    await db.commit()
    await db.refresh(vehicle)

    await log_event(
        db=db,
        action=AuditAction.VEHICLE_UPDATED,
        actor=current_user,
        target_id=vehicle.id,
        metadata={"updated_fields": sorted(update_data.keys())}
    )

    return VehicleResponse.model_validate(vehicle)
