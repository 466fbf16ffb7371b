"""
Integration tests for trip logging and the payout workflow.
"""

import pytest
from decimal import Decimal
from sqlalchemy import select
from fleetops.app.models.payout import Payout


async def log_trip(client, headers, revenue=3000):
    response = await client.post("/api/trips", headers=headers, json={
        "pickup_location": "Airport",
        "drop_location": "City Centre",
        "revenue": revenue,
        "distance": 42.5
    })
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_trip_creates_exactly_one_pending_payout(client, driver_headers, assigned_driver, db_session):
    trip = await log_trip(client, driver_headers, revenue=3000)

    assert trip["status"] == "completed"
    assert trip["vehicle_id"] == assigned_driver["vehicle"]["id"]
    assert trip["driver_id"] == assigned_driver["driver"]["id"]
    assert trip["payout"]["status"] == "pending"
    assert trip["payout"]["calculated_amount"] == 1200.0

    result = await db_session.execute(select(Payout).where(Payout.trip_id == trip["id"]))
    payouts = result.scalars().all()
    assert len(payouts) == 1
    assert payouts[0].calculated_amount == Decimal("1200.00")


@pytest.mark.asyncio
async def test_trip_without_driver_profile_is_404(client, driver_headers):
    response = await client.post("/api/trips", headers=driver_headers, json={
        "pickup_location": "A",
        "drop_location": "B",
        "revenue": 100
    })

    assert response.status_code == 404
    assert response.json()["message"] == "Driver profile not found"


@pytest.mark.asyncio
async def test_trip_without_assignment_is_400(client, driver_headers, driver_profile):
    response = await client.post("/api/trips", headers=driver_headers, json={
        "pickup_location": "A",
        "drop_location": "B",
        "revenue": 100
    })

    assert response.status_code == 400
    assert response.json()["message"] == "No active vehicle assignment found"


@pytest.mark.asyncio
async def test_trip_rejects_negative_revenue(client, driver_headers, assigned_driver):
    response = await client.post("/api/trips", headers=driver_headers, json={
        "pickup_location": "A",
        "drop_location": "B",
        "revenue": -5
    })
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_driver_only_sees_own_trips(client, admin_headers, driver_headers, assigned_driver, user_factory):
    own_trip = await log_trip(client, driver_headers)

    other_user, other_headers = await user_factory("other-driver")
    profile = await client.post("/api/drivers", headers=admin_headers, json={
        "user_id": other_user.id,
        "employee_id": "EMP-002"
    })
    assert profile.status_code == 201

    listing = await client.get("/api/trips", headers=other_headers)
    assert listing.status_code == 200
    assert listing.json() == []

    forbidden = await client.get(f"/api/trips/{own_trip['id']}", headers=other_headers)
    assert forbidden.status_code == 403

    mine = await client.get(f"/api/trips/{own_trip['id']}", headers=driver_headers)
    assert mine.status_code == 200

    staff = await client.get("/api/trips", headers=admin_headers)
    assert [t["id"] for t in staff.json()] == [own_trip["id"]]


@pytest.mark.asyncio
async def test_approve_defaults_to_calculated_amount(client, manager_headers, driver_headers, assigned_driver):
    trip = await log_trip(client, driver_headers, revenue=2000)
    payout_id = trip["payout"]["id"]

    queue = await client.get("/api/payouts", headers=manager_headers)
    assert [p["id"] for p in queue.json()] == [payout_id]

    response = await client.patch(f"/api/payouts/{payout_id}/approve", headers=manager_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "approved"
    assert data["approved_amount"] == 600.0
    assert data["approved_by"] == "manager"
    assert data["approved_at"] is not None

    queue = await client.get("/api/payouts", headers=manager_headers)
    assert queue.json() == []


@pytest.mark.asyncio
async def test_approve_with_adjusted_amount(client, admin_headers, driver_headers, assigned_driver):
    trip = await log_trip(client, driver_headers, revenue=2000)

    response = await client.patch(
        f"/api/payouts/{trip['payout']['id']}/approve",
        headers=admin_headers,
        json={"approved_amount": 550, "notes": "Toll deducted"}
    )
    assert response.status_code == 200
    assert response.json()["approved_amount"] == 550.0
    assert response.json()["notes"] == "Toll deducted"


@pytest.mark.asyncio
async def test_payout_transitions(client, admin_headers, manager_headers, driver_headers, assigned_driver):
    """
    pending -> approved -> paid; anything else is refused.
    """
    trip = await log_trip(client, driver_headers)
    payout_id = trip["payout"]["id"]

    # Only approved payouts can be paid
    early = await client.patch(f"/api/payouts/{payout_id}/mark-paid", headers=admin_headers)
    assert early.status_code == 400
    assert early.json()["error_code"] == "ERR_STATE_001"

    approved = await client.patch(f"/api/payouts/{payout_id}/approve", headers=manager_headers)
    assert approved.status_code == 200

    # Approved payouts cannot be rejected
    reject = await client.patch(f"/api/payouts/{payout_id}/reject", headers=manager_headers, json={})
    assert reject.status_code == 400

    # Managers cannot mark as paid
    manager_paid = await client.patch(f"/api/payouts/{payout_id}/mark-paid", headers=manager_headers)
    assert manager_paid.status_code == 403

    paid = await client.patch(f"/api/payouts/{payout_id}/mark-paid", headers=admin_headers)
    assert paid.status_code == 200
    assert paid.json()["status"] == "paid"
    assert paid.json()["paid_at"] is not None

    by_status = await client.get("/api/payouts", headers=admin_headers, params={"status": "paid"})
    assert [p["id"] for p in by_status.json()] == [payout_id]


@pytest.mark.asyncio
async def test_reject_pending_payout(client, manager_headers, driver_headers, assigned_driver):
    trip = await log_trip(client, driver_headers)
    payout_id = trip["payout"]["id"]

    response = await client.patch(
        f"/api/payouts/{payout_id}/reject",
        headers=manager_headers,
        json={"notes": "Duplicate trip"}
    )
    assert response.status_code == 200
    assert response.json()["status"] == "rejected"
    assert response.json()["approved_amount"] is None

    again = await client.patch(f"/api/payouts/{payout_id}/approve", headers=manager_headers)
    assert again.status_code == 400


@pytest.mark.asyncio
async def test_driver_sees_own_payouts_but_cannot_approve(client, driver_headers, assigned_driver):
    trip = await log_trip(client, driver_headers)

    own = await client.get("/api/payouts", headers=driver_headers)
    assert own.status_code == 200
    assert [p["id"] for p in own.json()] == [trip["payout"]["id"]]

    response = await client.patch(f"/api/payouts/{trip['payout']['id']}/approve", headers=driver_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_unknown_payout_is_404(client, admin_headers):
    response = await client.patch("/api/payouts/missing/approve", headers=admin_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_dashboard_stats(client, admin_headers, driver_headers, assigned_driver):
    await log_trip(client, driver_headers, revenue=3000)
    await log_trip(client, driver_headers, revenue=1000)

    response = await client.get("/api/dashboard/stats", headers=admin_headers)

    assert response.status_code == 200
    stats = response.json()
    assert stats["active_drivers"] == 1
    assert stats["fleet_size"] == 1
    assert stats["daily_revenue"] == 4000.0
    assert stats["pending_payouts"] == 1500.0
    assert stats["pending_payout_count"] == 2
    assert stats["open_incidents"] == 0
