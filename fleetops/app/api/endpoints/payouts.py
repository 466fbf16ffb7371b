"""
Payout API Endpoints.

Listing, the approval workflow and the public payout calculator.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fleetops.app.db.session import get_db
from fleetops.app.core.dependencies import get_current_user
from fleetops.app.core.guards import require_role, require_admin, is_staff, STAFF_ROLES
from fleetops.app.domain.payouts.payout_calculator import calculate_payout, describe_formula
from fleetops.app.domain.payouts.payout_service import PayoutService
from fleetops.app.models.enums import PayoutStatus
from fleetops.app.models.payout import Payout
from fleetops.app.models.user import User
from fleetops.app.schemas.payout import (
    PayoutResponse, PayoutApproveRequest, PayoutRejectRequest,
    PayoutCalculationRequest, PayoutCalculationResponse
)
from fleetops.app.services.audit import log_event, AuditAction, client_ip
from fleetops.app.services.driver_context import get_driver_profile

router = APIRouter(tags=["Payouts"])


@router.get("/payouts", response_model=List[PayoutResponse])
async def list_payouts(
    payout_status: Optional[PayoutStatus] = Query(
        None, alias="status", description="Filter by status (admin/manager; defaults to pending)"
    ),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    List payouts, newest first.

    - Drivers: all of their own payouts
    - Admin/manager: the approval queue (pending unless ``status`` is given)
    """
    query = select(Payout).order_by(Payout.created_at.desc())

    if is_staff(current_user):
        query = query.where(Payout.status == (payout_status or PayoutStatus.PENDING))
    else:
        driver = await get_driver_profile(db, current_user)
        query = query.where(Payout.driver_id == driver.id)
        if payout_status:
            query = query.where(Payout.status == payout_status)

    result = await db.execute(query)
    return [PayoutResponse.model_validate(payout) for payout in result.scalars().all()]


@router.patch("/payouts/{payout_id}/approve", response_model=PayoutResponse)
async def approve_payout(
    payout_id: str,
    request: Request,
    approval: Optional[PayoutApproveRequest] = None,
    current_user: User = Depends(require_role(STAFF_ROLES)),
    db: AsyncSession = Depends(get_db)
):
    """
    Approve a pending payout (admin/manager).

    The approved amount defaults to the calculated amount.
    """
    approval = approval or PayoutApproveRequest()
    payout = await PayoutService.approve(
        db,
        payout_id,
        approver=current_user,
        approved_amount=approval.approved_amount,
        notes=approval.notes,
    )

    await log_event(
        db=db,
        action=AuditAction.PAYOUT_APPROVED,
        actor=current_user,
        target_id=payout.id,
        metadata={
            "calculated_amount": str(payout.calculated_amount),
            "approved_amount": str(payout.approved_amount)
        },
        ip_address=client_ip(request)
    )

    return PayoutResponse.model_validate(payout)


@router.patch("/payouts/{payout_id}/reject", response_model=PayoutResponse)
async def reject_payout(
    payout_id: str,
    request: Request,
    rejection: Optional[PayoutRejectRequest] = None,
    current_user: User = Depends(require_role(STAFF_ROLES)),
    db: AsyncSession = Depends(get_db)
):
    """Reject a pending payout (admin/manager)."""
    rejection = rejection or PayoutRejectRequest()
    payout = await PayoutService.reject(db, payout_id, approver=current_user, notes=rejection.notes)

    await log_event(
        db=db,
        action=AuditAction.PAYOUT_REJECTED,
        actor=current_user,
        target_id=payout.id,
        metadata={"notes": payout.notes},
        ip_address=client_ip(request)
    )

    return PayoutResponse.model_validate(payout)


@router.patch("/payouts/{payout_id}/mark-paid", response_model=PayoutResponse)
async def mark_payout_paid(
    payout_id: str,
    request: Request,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Record that an approved payout was paid out (admin-only)."""
    payout = await PayoutService.mark_paid(db, payout_id)

    await log_event(
        db=db,
        action=AuditAction.PAYOUT_PAID,
        actor=admin,
        target_id=payout.id,
        metadata={"amount": str(payout.approved_amount)},
        ip_address=client_ip(request)
    )

    return PayoutResponse.model_validate(payout)


@router.post("/calculate-payout", response_model=PayoutCalculationResponse)
async def preview_payout(payload: PayoutCalculationRequest):
    """
    Preview the payout for a revenue figure (public).

    Formula: min(revenue, 2250) * 0.30 + max(revenue - 2250, 0) * 0.70
    """
    try:
        amount = calculate_payout(payload.revenue)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return PayoutCalculationResponse(payout=float(amount), formula=describe_formula(payload.revenue))
