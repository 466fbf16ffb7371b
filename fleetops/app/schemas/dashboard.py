"""
Dashboard schemas.
"""

from pydantic import BaseModel


class DashboardStats(BaseModel):
    """Headline numbers for the manager dashboard."""
    active_drivers: int
    fleet_size: int
    daily_revenue: float
    pending_payouts: float
    pending_payout_count: int
    open_incidents: int
    low_stock_items: int
