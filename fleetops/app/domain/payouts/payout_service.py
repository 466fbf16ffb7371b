"""
Payout Service (Domain Logic).

Handles trip logging with its payout, and the payout approval workflow.
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from fleetops.app.core.exceptions import ResourceNotFoundError, InvalidStateTransitionError
from fleetops.app.domain.payouts.payout_calculator import calculate_payout, to_decimal
from fleetops.app.models.assignment import Assignment
from fleetops.app.models.driver import Driver
from fleetops.app.models.enums import PayoutStatus, TripStatus
from fleetops.app.models.payout import Payout
from fleetops.app.models.trip import Trip
from fleetops.app.models.user import User

logger = logging.getLogger("fleetops.payouts")


class PayoutService:

    @staticmethod
    async def record_trip(
        db: AsyncSession,
        driver: Driver,
        assignment: Assignment,
        pickup_location: str,
        drop_location: str,
        revenue: Decimal,
        distance: Optional[Decimal] = None
    ) -> Tuple[Trip, Payout]:
        """
        Log a completed trip and create its pending payout.

        Flow:
        1. Create the trip on the assigned vehicle (status COMPLETED)
        2. Calculate the payout from the revenue
        3. Create the payout (status PENDING)
        4. Commit both together

        Returns:
            The created trip and payout
        """
        now = datetime.now(timezone.utc)
        revenue = to_decimal(revenue)

        trip = Trip(
            driver_id=driver.id,
            vehicle_id=assignment.vehicle_id,
            pickup_location=pickup_location,
            drop_location=drop_location,
            distance=to_decimal(distance) if distance is not None else None,
            revenue=revenue,
            status=TripStatus.COMPLETED,
            start_time=now,
            end_time=now,
        )
        db.add(trip)
        await db.flush()

        payout = Payout(
            trip_id=trip.id,
            driver_id=driver.id,
            revenue=revenue,
            calculated_amount=calculate_payout(revenue),
            status=PayoutStatus.PENDING,
        )
        db.add(payout)
        await db.commit()
        await db.refresh(trip)
        await db.refresh(payout)

        logger.info(
            "Trip %s logged for driver %s: revenue=%s payout=%s",
            trip.id, driver.id, revenue, payout.calculated_amount
        )
        return trip, payout

    @staticmethod
    async def _get_payout(db: AsyncSession, payout_id: str) -> Payout:
        result = await db.execute(select(Payout).where(Payout.id == payout_id))
        payout = result.scalar_one_or_none()
        if not payout:
            raise ResourceNotFoundError("Payout", payout_id)
        return payout

    @staticmethod
    async def approve(
        db: AsyncSession,
        payout_id: str,
        approver: User,
        approved_amount: Optional[Decimal] = None,
        notes: Optional[str] = None
    ) -> Payout:
        """
        Approve a PENDING payout.

        The approved amount defaults to the calculated amount.
        """
        payout = await PayoutService._get_payout(db, payout_id)

        if payout.status != PayoutStatus.PENDING:
            raise InvalidStateTransitionError("Payout", payout.status.value, PayoutStatus.PENDING.value)

        payout.status = PayoutStatus.APPROVED
        payout.approved_amount = (
            to_decimal(approved_amount) if approved_amount is not None else payout.calculated_amount
        )
        payout.approved_by = approver.id
        payout.approved_at = datetime.now(timezone.utc)
        if notes:
            payout.notes = notes

        await db.commit()
        await db.refresh(payout)
        return payout

    @staticmethod
    async def reject(
        db: AsyncSession,
        payout_id: str,
        approver: User,
        notes: Optional[str] = None
    ) -> Payout:
        """Reject a PENDING payout."""
        payout = await PayoutService._get_payout(db, payout_id)

        if payout.status != PayoutStatus.PENDING:
            raise InvalidStateTransitionError("Payout", payout.status.value, PayoutStatus.PENDING.value)

        payout.status = PayoutStatus.REJECTED
        payout.approved_by = approver.id
        payout.approved_at = datetime.now(timezone.utc)
        if notes:
            payout.notes = notes

        await db.commit()
        await db.refresh(payout)
        return payout

    @staticmethod
    async def mark_paid(db: AsyncSession, payout_id: str) -> Payout:
        """Mark an APPROVED payout as PAID."""
        payout = await PayoutService._get_payout(db, payout_id)

        if payout.status != PayoutStatus.APPROVED:
            raise InvalidStateTransitionError("Payout", payout.status.value, PayoutStatus.APPROVED.value)

        payout.status = PayoutStatus.PAID
        payout.paid_at = datetime.now(timezone.utc)

        await db.commit()
        await db.refresh(payout)
        return payout
