"""
Incident API Endpoints.

Drivers report incidents on their assigned vehicle; staff resolve them.
"""

from datetime import datetime, timezone
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fleetops.app.db.session import get_db
from fleetops.app.core.dependencies import get_current_user
from fleetops.app.core.exceptions import ResourceNotFoundError, InvalidStateTransitionError
from fleetops.app.core.guards import require_role, is_staff, STAFF_ROLES
from fleetops.app.models.incident import Incident
from fleetops.app.models.trip import Trip
from fleetops.app.models.user import User
from fleetops.app.schemas.incident import IncidentCreate, IncidentResponse
from fleetops.app.services.audit import log_event, AuditAction
from fleetops.app.services.driver_context import get_driver_profile, get_active_assignment

router = APIRouter(prefix="/incidents", tags=["Incidents"])


@router.get("", response_model=List[IncidentResponse])
async def list_incidents(
    resolved: Optional[bool] = Query(None, description="Filter by resolution state"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """List incidents; drivers only see their own."""
    query = select(Incident).order_by(Incident.reported_at.desc())

    if not is_staff(current_user):
        driver = await get_driver_profile(db, current_user)
        query = query.where(Incident.driver_id == driver.id)

    if resolved is not None:
        query = query.where(Incident.is_resolved == resolved)

    result = await db.execute(query)
    return [IncidentResponse.model_validate(incident) for incident in result.scalars().all()]


@router.post("", response_model=IncidentResponse, status_code=status.HTTP_201_CREATED)
async def report_incident(
    incident_data: IncidentCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Report an incident on the caller's assigned vehicle."""
    driver = await get_driver_profile(db, current_user)
    assignment = await get_active_assignment(db, driver.id)

    if incident_data.trip_id:
        trip = await db.get(Trip, incident_data.trip_id)
        if not trip:
            raise ResourceNotFoundError("Trip", incident_data.trip_id)

    incident = Incident(
        driver_id=driver.id,
        vehicle_id=assignment.vehicle_id,
        **incident_data.model_dump()
    )
    db.add(incident)
    await db.commit()
    await db.refresh(incident)

    await log_event(
        db=db,
        action=AuditAction.INCIDENT_REPORTED,
        actor=current_user,
        target_id=incident.id,
        metadata={"incident_type": incident.incident_type, "vehicle_id": incident.vehicle_id}
    )

    return IncidentResponse.model_validate(incident)


@router.patch("/{incident_id}/resolve", response_model=IncidentResponse)
async def resolve_incident(
    incident_id: str,
    current_user: User = Depends(require_role(STAFF_ROLES)),
    db: AsyncSession = Depends(get_db)
):
    """Mark an open incident resolved (admin/manager)."""
    result = await db.execute(select(Incident).where(Incident.id == incident_id))
    incident = result.scalar_one_or_none()
    if not incident:
        raise ResourceNotFoundError("Incident", incident_id)

    if incident.is_resolved:
        raise InvalidStateTransitionError("Incident", "resolved", "open")

    incident.is_resolved = True
    incident.resolved_at = datetime.now(timezone.utc)
    await db.commit()
    await db.refresh(incident)

    await log_event(
        db=db,
        action=AuditAction.INCIDENT_RESOLVED,
        actor=current_user,
        target_id=incident.id
    )

    return IncidentResponse.model_validate(incident)
