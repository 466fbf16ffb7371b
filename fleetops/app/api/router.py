"""
API Router.

Aggregates all API endpoints.
"""

from fastapi import APIRouter
from fleetops.app.api.endpoints import (
    auth, users, drivers, vehicles, assignments,
    trips, payouts, dashboard, incidents,
    fuel, checklists, maintenance, inventory, documents
)

router = APIRouter()

# Identity and user management
router.include_router(auth.router)
router.include_router(users.router)

# Fleet setup
router.include_router(drivers.router)
router.include_router(vehicles.router)
router.include_router(assignments.router)

# Trips and payouts
router.include_router(trips.router)
router.include_router(payouts.router)
router.include_router(dashboard.router)

# Operations
router.include_router(incidents.router)
router.include_router(fuel.router)
router.include_router(checklists.router)
router.include_router(maintenance.router)
router.include_router(inventory.router)

# Attachments
router.include_router(documents.router)
