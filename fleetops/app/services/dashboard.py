"""
Dashboard Service.

Read-only aggregates for the manager dashboard.
"""

from datetime import datetime, timezone
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from fleetops.app.models.driver import Driver
from fleetops.app.models.enums import PayoutStatus, VehicleStatus
from fleetops.app.models.incident import Incident
from fleetops.app.models.inventory import InventoryItem
from fleetops.app.models.payout import Payout
from fleetops.app.models.trip import Trip
from fleetops.app.models.vehicle import Vehicle
from fleetops.app.schemas.dashboard import DashboardStats


def start_of_today() -> datetime:
    """Midnight of the current day in UTC."""
    now = datetime.now(timezone.utc)
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


class DashboardService:

    @staticmethod
    async def get_stats(db: AsyncSession) -> DashboardStats:
        """Collect the dashboard headline numbers."""

        # 1. Active drivers
        active_drivers = (await db.execute(
            select(func.count(Driver.id)).where(Driver.is_active == True)
        )).scalar() or 0

        # 2. Vehicles in service
        fleet_size = (await db.execute(
            select(func.count(Vehicle.id)).where(Vehicle.status == VehicleStatus.ACTIVE)
        )).scalar() or 0

        # 3. Revenue of trips logged today (UTC)
        daily_revenue = (await db.execute(
            select(func.sum(Trip.revenue)).where(Trip.created_at >= start_of_today())
        )).scalar() or 0

        # 4. Approval queue
        pending_total, pending_count = (await db.execute(
            select(func.sum(Payout.calculated_amount), func.count(Payout.id))
            .where(Payout.status == PayoutStatus.PENDING)
        )).one()

        # 5. Open incidents and low stock
        open_incidents = (await db.execute(
            select(func.count(Incident.id)).where(Incident.is_resolved == False)
        )).scalar() or 0

        low_stock_items = (await db.execute(
            select(func.count(InventoryItem.id)).where(
                InventoryItem.is_active == True,
                InventoryItem.current_stock <= InventoryItem.minimum_stock
            )
        )).scalar() or 0

        return DashboardStats(
            active_drivers=active_drivers,
            fleet_size=fleet_size,
            daily_revenue=float(daily_revenue),
            pending_payouts=float(pending_total or 0),
            pending_payout_count=pending_count or 0,
            open_incidents=open_incidents,
            low_stock_items=low_stock_items
        )
