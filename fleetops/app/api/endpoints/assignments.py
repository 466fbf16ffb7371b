"""
Assignment API Endpoints.

Admins and managers bind drivers to vehicles.
"""

from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fleetops.app.db.session import get_db
from fleetops.app.core.guards import require_role, STAFF_ROLES
from fleetops.app.models.assignment import Assignment
from fleetops.app.models.user import User
from fleetops.app.schemas.assignment import AssignmentCreate, AssignmentResponse
from fleetops.app.services.assignment_service import AssignmentService
from fleetops.app.services.audit import log_event, AuditAction

router = APIRouter(prefix="/assignments", tags=["Assignments"])


@router.get("", response_model=List[AssignmentResponse])
async def list_active_assignments(
    current_user: User = Depends(require_role(STAFF_ROLES)),
    db: AsyncSession = Depends(get_db)
):
    """List active assignments (admin/manager)."""
    result = await db.execute(
        select(Assignment)
        .where(Assignment.is_active == True)
        .order_by(Assignment.assigned_at.desc())
    )
    return [AssignmentResponse.model_validate(a) for a in result.scalars().all()]


@router.post("", response_model=AssignmentResponse, status_code=status.HTTP_201_CREATED)
async def create_assignment(
    assignment_data: AssignmentCreate,
    current_user: User = Depends(require_role(STAFF_ROLES)),
    db: AsyncSession = Depends(get_db)
):
    """
    Assign a vehicle to a driver (admin/manager).

    Any assignment the driver already has is ended first.
    """
    assignment = await AssignmentService.assign_vehicle(
        db, assignment_data.driver_id, assignment_data.vehicle_id
    )

    await log_event(
        db=db,
        action=AuditAction.ASSIGNMENT_CREATED,
        actor=current_user,
        target_id=assignment.id,
        metadata={"driver_id": assignment.driver_id, "vehicle_id": assignment.vehicle_id}
    )

    return AssignmentResponse.model_validate(assignment)


@router.patch("/{assignment_id}/end", response_model=AssignmentResponse)
async def end_assignment(
    assignment_id: str,
    current_user: User = Depends(require_role(STAFF_ROLES)),
    db: AsyncSession = Depends(get_db)
):
    """End an active assignment (admin/manager)."""
    assignment = await AssignmentService.end_assignment(db, assignment_id)

    await log_event(
        db=db,
        action=AuditAction.ASSIGNMENT_ENDED,
        actor=current_user,
        target_id=assignment.id,
        metadata={"driver_id": assignment.driver_id, "vehicle_id": assignment.vehicle_id}
    )

    return AssignmentResponse.model_validate(assignment)
