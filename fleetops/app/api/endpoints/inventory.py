"""
Inventory API Endpoints.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fleetops.app.db.session import get_db
from fleetops.app.core.exceptions import ResourceNotFoundError, DuplicateResourceError
from fleetops.app.core.guards import require_role, require_admin, STAFF_ROLES
from fleetops.app.models.inventory import InventoryItem
from fleetops.app.models.user import User
from fleetops.app.schemas.inventory import InventoryItemCreate, InventoryItemUpdate, InventoryItemResponse
from fleetops.app.services.audit import log_event, AuditAction

router = APIRouter(prefix="/inventory", tags=["Inventory"])


@router.get("", response_model=List[InventoryItemResponse])
async def list_inventory(
    category: Optional[str] = Query(None, description="Filter by category"),
    current_user: User = Depends(require_role(STAFF_ROLES)),
    db: AsyncSession = Depends(get_db)
):
    """List stock items by name (admin/manager)."""
    query = select(InventoryItem).order_by(InventoryItem.item_name)
    if category:
        query = query.where(InventoryItem.category == category)

    result = await db.execute(query)
    return [InventoryItemResponse.model_validate(item) for item in result.scalars().all()]


@router.get("/low-stock", response_model=List[InventoryItemResponse])
async def list_low_stock(
    current_user: User = Depends(require_role(STAFF_ROLES)),
    db: AsyncSession = Depends(get_db)
):
    """Active items at or below their minimum stock (admin/manager)."""
    result = await db.execute(
        select(InventoryItem)
        .where(
            InventoryItem.is_active == True,
            InventoryItem.current_stock <= InventoryItem.minimum_stock
        )
        .order_by(InventoryItem.item_name)
    )
    return [InventoryItemResponse.model_validate(item) for item in result.scalars().all()]


@router.post("", response_model=InventoryItemResponse, status_code=status.HTTP_201_CREATED)
async def create_inventory_item(
    item_data: InventoryItemCreate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Add a stock item (admin-only). Item codes are unique."""
    if item_data.item_code:
        result = await db.execute(
            select(InventoryItem.id).where(InventoryItem.item_code == item_data.item_code)
        )
        if result.first():
            raise DuplicateResourceError("Inventory item", "item_code", item_data.item_code)

    item = InventoryItem(**item_data.model_dump())
    db.add(item)
    await db.commit()
    await db.refresh(item)

    await log_event(
        db=db,
        action=AuditAction.INVENTORY_CREATED,
        actor=admin,
        target_id=item.id,
        metadata={"item_name": item.item_name, "current_stock": item.current_stock}
    )

    return InventoryItemResponse.model_validate(item)


@router.patch("/{item_id}", response_model=InventoryItemResponse)
async def update_inventory_item(
    item_id: str,
    item_data: InventoryItemUpdate,
    current_user: User = Depends(require_role(STAFF_ROLES)),
    db: AsyncSession = Depends(get_db)
):
    """Update a stock item (admin/manager)."""
    result = await db.execute(select(InventoryItem).where(InventoryItem.id == item_id))
    item = result.scalar_one_or_none()
    if not item:
        raise ResourceNotFoundError("Inventory item", item_id)

    update_data = item_data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(item, field, value)

    await db.commit()
    await db.refresh(item)

    await log_event(
        db=db,
        action=AuditAction.INVENTORY_UPDATED,
        actor=current_user,
        target_id=item.id,
        metadata={"updated_fields": sorted(update_data.keys()), "current_stock": item.current_stock}
    )

    return InventoryItemResponse.model_validate(item)
