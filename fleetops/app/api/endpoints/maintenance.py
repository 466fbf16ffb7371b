"""
Maintenance API Endpoints.

Maintenance records per vehicle and the tasks that make them up.
"""

from datetime import datetime, timezone
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fleetops.app.db.session import get_db
from fleetops.app.core.dependencies import get_current_user
from fleetops.app.core.exceptions import ResourceNotFoundError
from fleetops.app.core.guards import require_role, STAFF_ROLES
from fleetops.app.models.enums import MaintenanceStatus
from fleetops.app.models.maintenance import MaintenanceRecord, MaintenanceTask
from fleetops.app.models.user import User
from fleetops.app.models.vehicle import Vehicle
from fleetops.app.schemas.maintenance import (
    MaintenanceRecordCreate, MaintenanceRecordUpdate, MaintenanceRecordResponse,
    MaintenanceTaskCreate, MaintenanceTaskUpdate, MaintenanceTaskResponse
)
from fleetops.app.services.audit import log_event, AuditAction

router = APIRouter(tags=["Maintenance"])


async def _get_record(db: AsyncSession, record_id: str) -> MaintenanceRecord:
    result = await db.execute(select(MaintenanceRecord).where(MaintenanceRecord.id == record_id))
    record = result.scalar_one_or_none()
    if not record:
        raise ResourceNotFoundError("Maintenance record", record_id)
    return record


@router.get("/maintenance", response_model=List[MaintenanceRecordResponse])
async def list_maintenance_records(
    vehicle_id: Optional[str] = Query(None, description="Filter by vehicle"),
    record_status: Optional[MaintenanceStatus] = Query(None, alias="status", description="Filter by status"),
    current_user: User = Depends(require_role(STAFF_ROLES)),
    db: AsyncSession = Depends(get_db)
):
    """List maintenance records, newest first (admin/manager)."""
    query = select(MaintenanceRecord).order_by(MaintenanceRecord.created_at.desc())
    if vehicle_id:
        query = query.where(MaintenanceRecord.vehicle_id == vehicle_id)
    if record_status:
        query = query.where(MaintenanceRecord.status == record_status)

    result = await db.execute(query)
    return [MaintenanceRecordResponse.model_validate(r) for r in result.scalars().all()]


@router.post("/maintenance", response_model=MaintenanceRecordResponse, status_code=status.HTTP_201_CREATED)
async def create_maintenance_record(
    record_data: MaintenanceRecordCreate,
    current_user: User = Depends(require_role(STAFF_ROLES)),
    db: AsyncSession = Depends(get_db)
):
    """Schedule or log maintenance for a vehicle (admin/manager)."""
    vehicle = await db.get(Vehicle, record_data.vehicle_id)
    if not vehicle:
        raise ResourceNotFoundError("Vehicle", record_data.vehicle_id)

    record = MaintenanceRecord(**record_data.model_dump())
    if record.status == MaintenanceStatus.COMPLETED:
        record.completed_date = datetime.now(timezone.utc)

    db.add(record)
    await db.commit()
    await db.refresh(record)

    await log_event(
        db=db,
        action=AuditAction.MAINTENANCE_CREATED,
        actor=current_user,
        target_id=record.id,
        metadata={"vehicle_id": record.vehicle_id, "maintenance_type": record.maintenance_type}
    )

    return MaintenanceRecordResponse.model_validate(record)


@router.patch("/maintenance/{record_id}", response_model=MaintenanceRecordResponse)
async def update_maintenance_record(
    record_id: str,
    record_data: MaintenanceRecordUpdate,
    current_user: User = Depends(require_role(STAFF_ROLES)),
    db: AsyncSession = Depends(get_db)
):
    """Update maintenance; moving it to completed stamps completed_date."""
    record = await _get_record(db, record_id)

    update_data = record_data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(record, field, value)

    if update_data.get("status") == MaintenanceStatus.COMPLETED and record.completed_date is None:
        record.completed_date = datetime.now(timezone.utc)

    await db.commit()
    await db.refresh(record)

    await log_event(
        db=db,
        action=AuditAction.MAINTENANCE_UPDATED,
        actor=current_user,
        target_id=record.id,
        metadata={"updated_fields": sorted(update_data.keys()), "status": record.status.value}
    )

    return MaintenanceRecordResponse.model_validate(record)


@router.get("/maintenance/{record_id}/tasks", response_model=List[MaintenanceTaskResponse])
async def list_maintenance_tasks(
    record_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """List the tasks of a maintenance record."""
    record = await _get_record(db, record_id)
    result = await db.execute(
        select(MaintenanceTask).where(MaintenanceTask.maintenance_record_id == record.id)
    )
    return [MaintenanceTaskResponse.model_validate(task) for task in result.scalars().all()]


@router.post(
    "/maintenance/{record_id}/tasks",
    response_model=MaintenanceTaskResponse,
    status_code=status.HTTP_201_CREATED
)
async def add_maintenance_task(
    record_id: str,
    task_data: MaintenanceTaskCreate,
    current_user: User = Depends(require_role(STAFF_ROLES)),
    db: AsyncSession = Depends(get_db)
):
    """Add a task to a maintenance record (admin/manager)."""
    record = await _get_record(db, record_id)

    task = MaintenanceTask(maintenance_record_id=record.id, **task_data.model_dump())
    db.add(task)
    await db.commit()
    await db.refresh(task)
    return MaintenanceTaskResponse.model_validate(task)


@router.patch("/maintenance-tasks/{task_id}", response_model=MaintenanceTaskResponse)
async def update_maintenance_task(
    task_id: str,
    task_data: MaintenanceTaskUpdate,
    current_user: User = Depends(require_role(STAFF_ROLES)),
    db: AsyncSession = Depends(get_db)
):
    """
    Update a maintenance task (admin/manager).

    Completing a task without naming who did it records the caller.
    """
    result = await db.execute(select(MaintenanceTask).where(MaintenanceTask.id == task_id))
    task = result.scalar_one_or_none()
    if not task:
        raise ResourceNotFoundError("Maintenance task", task_id)

    update_data = task_data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(task, field, value)

    if update_data.get("is_completed") and not task.completed_by:
        task.completed_by = current_user.email or current_user.id

    await db.commit()
    await db.refresh(task)
    return MaintenanceTaskResponse.model_validate(task)
