"""
Driver Checklist API Endpoints.

Drivers run inspections on their assigned vehicle; staff can read and
correct any checklist.
"""

from datetime import datetime, timezone
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fleetops.app.db.session import get_db
from fleetops.app.core.dependencies import get_current_user
from fleetops.app.core.exceptions import ResourceNotFoundError
from fleetops.app.core.guards import OwnershipGuard, is_staff
from fleetops.app.models.checklist import DriverChecklist, ChecklistItem
from fleetops.app.models.enums import ChecklistStatus
from fleetops.app.models.user import User
from fleetops.app.schemas.checklist import (
    ChecklistCreate, ChecklistUpdate, ChecklistResponse, ChecklistDetailResponse,
    ChecklistItemCreate, ChecklistItemUpdate, ChecklistItemResponse
)
from fleetops.app.services.driver_context import (
    get_driver_profile, get_active_assignment, find_driver_profile
)

router = APIRouter(tags=["Checklists"])
ownership_guard = OwnershipGuard()


async def _get_owned_checklist(db: AsyncSession, checklist_id: str, current_user: User) -> DriverChecklist:
    """Load a checklist and make sure the caller may touch it."""
    result = await db.execute(select(DriverChecklist).where(DriverChecklist.id == checklist_id))
    checklist = result.scalar_one_or_none()
    if not checklist:
        raise ResourceNotFoundError("Checklist", checklist_id)

    driver = None if is_staff(current_user) else await find_driver_profile(db, current_user.id)
    ownership_guard.enforce(checklist.driver_id, current_user, driver.id if driver else None, "checklist")
    return checklist


async def _list_items(db: AsyncSession, checklist_id: str) -> List[ChecklistItem]:
    result = await db.execute(
        select(ChecklistItem).where(ChecklistItem.checklist_id == checklist_id)
    )
    return list(result.scalars().all())


@router.get("/checklists", response_model=List[ChecklistResponse])
async def list_checklists(
    checklist_status: Optional[ChecklistStatus] = Query(None, alias="status", description="Filter by status"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """List checklists, newest first; drivers only see their own."""
    query = select(DriverChecklist).order_by(DriverChecklist.created_at.desc())

    if not is_staff(current_user):
        driver = await get_driver_profile(db, current_user)
        query = query.where(DriverChecklist.driver_id == driver.id)

    if checklist_status:
        query = query.where(DriverChecklist.status == checklist_status)

    result = await db.execute(query)
    return [ChecklistResponse.model_validate(c) for c in result.scalars().all()]


@router.post("/checklists", response_model=ChecklistDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_checklist(
    checklist_data: ChecklistCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Start a checklist for the caller's assigned vehicle.

    Items may be supplied inline and are stored with the checklist.
    """
    driver = await get_driver_profile(db, current_user)
    assignment = await get_active_assignment(db, driver.id)

    checklist = DriverChecklist(
        driver_id=driver.id,
        vehicle_id=assignment.vehicle_id,
        checklist_type=checklist_data.checklist_type,
        notes=checklist_data.notes,
        status=ChecklistStatus.PENDING,
    )
    db.add(checklist)
    await db.flush()

    for item_data in checklist_data.items:
        db.add(ChecklistItem(checklist_id=checklist.id, **item_data.model_dump()))

    await db.commit()
    await db.refresh(checklist)

    items = await _list_items(db, checklist.id)
    return ChecklistDetailResponse(
        **ChecklistResponse.model_validate(checklist).model_dump(),
        items=[ChecklistItemResponse.model_validate(item) for item in items]
    )


@router.get("/checklists/{checklist_id}", response_model=ChecklistDetailResponse)
async def get_checklist(
    checklist_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Get a checklist with its items."""
    checklist = await _get_owned_checklist(db, checklist_id, current_user)
    items = await _list_items(db, checklist.id)

    return ChecklistDetailResponse(
        **ChecklistResponse.model_validate(checklist).model_dump(),
        items=[ChecklistItemResponse.model_validate(item) for item in items]
    )


@router.patch("/checklists/{checklist_id}", response_model=ChecklistResponse)
async def update_checklist(
    checklist_id: str,
    checklist_data: ChecklistUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Update a checklist; moving it to completed stamps completed_at."""
    checklist = await _get_owned_checklist(db, checklist_id, current_user)

    update_data = checklist_data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(checklist, field, value)

    if update_data.get("status") == ChecklistStatus.COMPLETED and checklist.completed_at is None:
        checklist.completed_at = datetime.now(timezone.utc)

    await db.commit()
    await db.refresh(checklist)
    return ChecklistResponse.model_validate(checklist)


@router.get("/checklists/{checklist_id}/items", response_model=List[ChecklistItemResponse])
async def list_checklist_items(
    checklist_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """List the items of a checklist."""
    checklist = await _get_owned_checklist(db, checklist_id, current_user)
    return [ChecklistItemResponse.model_validate(item) for item in await _list_items(db, checklist.id)]


@router.post(
    "/checklists/{checklist_id}/items",
    response_model=ChecklistItemResponse,
    status_code=status.HTTP_201_CREATED
)
async def add_checklist_item(
    checklist_id: str,
    item_data: ChecklistItemCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Add an item to a checklist."""
    checklist = await _get_owned_checklist(db, checklist_id, current_user)

    item = ChecklistItem(checklist_id=checklist.id, **item_data.model_dump())
    db.add(item)
    await db.commit()
    await db.refresh(item)
    return ChecklistItemResponse.model_validate(item)


@router.patch("/checklist-items/{item_id}", response_model=ChecklistItemResponse)
async def update_checklist_item(
    item_id: str,
    item_data: ChecklistItemUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Update a checklist item; ownership follows the parent checklist."""
    result = await db.execute(select(ChecklistItem).where(ChecklistItem.id == item_id))
    item = result.scalar_one_or_none()
    if not item:
        raise ResourceNotFoundError("Checklist item", item_id)

    await _get_owned_checklist(db, item.checklist_id, current_user)

    for field, value in item_data.model_dump(exclude_unset=True).items():
        setattr(item, field, value)

    await db.commit()
    await db.refresh(item)
    return ChecklistItemResponse.model_validate(item)
