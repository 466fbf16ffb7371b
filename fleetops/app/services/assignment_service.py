"""
Assignment Service.

Keeps the one-active-assignment-per-driver invariant: a new assignment
deactivates every active one of the same driver in the same transaction.
"""

import logging
from datetime import datetime, timezone
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update

from fleetops.app.core.exceptions import ResourceNotFoundError, InvalidStateTransitionError
from fleetops.app.models.assignment import Assignment
from fleetops.app.models.driver import Driver
from fleetops.app.models.vehicle import Vehicle

logger = logging.getLogger("fleetops.assignments")


class AssignmentService:

    @staticmethod
    async def assign_vehicle(db: AsyncSession, driver_id: str, vehicle_id: str) -> Assignment:
        """
        Bind a driver to a vehicle.

        Flow:
        1. Validate driver and vehicle exist
        2. Deactivate the driver's active assignments
        3. Insert the new active assignment
        4. Commit once

        Raises:
            ResourceNotFoundError: If driver or vehicle does not exist
        """
        driver = await db.get(Driver, driver_id)
        if not driver:
            raise ResourceNotFoundError("Driver", driver_id)

        vehicle = await db.get(Vehicle, vehicle_id)
        if not vehicle:
            raise ResourceNotFoundError("Vehicle", vehicle_id)

        now = datetime.now(timezone.utc)
        result = await db.execute(
            update(Assignment)
            .where(Assignment.driver_id == driver_id, Assignment.is_active == True)
            .values(is_active=False, unassigned_at=now)
        )
        if result.rowcount:
            logger.info("Deactivated %s previous assignment(s) for driver %s", result.rowcount, driver_id)

        assignment = Assignment(
            driver_id=driver_id,
            vehicle_id=vehicle_id,
            is_active=True,
            assigned_at=now,
        )
        db.add(assignment)
        await db.commit()
        await db.refresh(assignment)

        return assignment

    @staticmethod
    async def end_assignment(db: AsyncSession, assignment_id: str) -> Assignment:
        """
        Deactivate a single assignment.

        Raises:
            ResourceNotFoundError: If the assignment does not exist
            InvalidStateTransitionError: If it is already inactive
        """
        result = await db.execute(select(Assignment).where(Assignment.id == assignment_id))
        assignment = result.scalar_one_or_none()
        if not assignment:
            raise ResourceNotFoundError("Assignment", assignment_id)

        if not assignment.is_active:
            raise InvalidStateTransitionError("Assignment", "inactive", "active")

        assignment.is_active = False
        assignment.unassigned_at = datetime.now(timezone.utc)
        await db.commit()
        await db.refresh(assignment)

        return assignment
