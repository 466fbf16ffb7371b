"""
Dashboard API Endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fleetops.app.db.session import get_db
from fleetops.app.core.guards import require_role, STAFF_ROLES
from fleetops.app.models.user import User
from fleetops.app.schemas.dashboard import DashboardStats
from fleetops.app.services.dashboard import DashboardService

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(
    current_user: User = Depends(require_role(STAFF_ROLES)),
    db: AsyncSession = Depends(get_db)
):
    """Fleet headline numbers (admin/manager)."""
    return await DashboardService.get_stats(db)
