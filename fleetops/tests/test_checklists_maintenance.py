"""
Integration tests for driver checklists and vehicle maintenance.
"""

import pytest
from fleetops.app.models.enums import UserRole


async def start_checklist(client, headers, items=None):
    response = await client.post("/api/checklists", headers=headers, json={
        "checklist_type": "pre_trip",
        "notes": "Morning shift",
        "items": items or []
    })
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_checklist_with_inline_items(client, driver_headers, assigned_driver):
    checklist = await start_checklist(client, driver_headers, items=[
        {"item_name": "Tyres", "item_category": "safety", "is_checked": True, "condition": "good"},
        {"item_name": "First aid kit", "item_category": "inventory", "quantity": 1},
    ])

    assert checklist["status"] == "pending"
    assert checklist["vehicle_id"] == assigned_driver["vehicle"]["id"]
    assert checklist["completed_at"] is None
    assert {item["item_name"] for item in checklist["items"]} == {"Tyres", "First aid kit"}

    items = await client.get(f"/api/checklists/{checklist['id']}/items", headers=driver_headers)
    assert items.status_code == 200
    assert len(items.json()) == 2


@pytest.mark.asyncio
async def test_checklist_requires_assignment(client, driver_headers, driver_profile):
    response = await client.post("/api/checklists", headers=driver_headers, json={"checklist_type": "pre_trip"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_completing_checklist_stamps_completed_at(client, driver_headers, assigned_driver):
    checklist = await start_checklist(client, driver_headers)

    response = await client.patch(
        f"/api/checklists/{checklist['id']}",
        headers=driver_headers,
        json={"status": "completed"}
    )

    assert response.status_code == 200
    assert response.json()["status"] == "completed"
    assert response.json()["completed_at"] is not None


@pytest.mark.asyncio
async def test_checklist_items_can_be_added_and_updated(client, driver_headers, assigned_driver):
    checklist = await start_checklist(client, driver_headers)

    added = await client.post(f"/api/checklists/{checklist['id']}/items", headers=driver_headers, json={
        "item_name": "Brake lights",
        "item_category": "safety"
    })
    assert added.status_code == 201
    assert added.json()["is_checked"] is False

    updated = await client.patch(f"/api/checklist-items/{added.json()['id']}", headers=driver_headers, json={
        "is_checked": True,
        "condition": "needs_attention",
        "notes": "Left bulb flickers"
    })
    assert updated.status_code == 200
    assert updated.json()["is_checked"] is True
    assert updated.json()["condition"] == "needs_attention"


@pytest.mark.asyncio
async def test_checklists_are_private_to_their_driver(
    client, admin_headers, manager_headers, driver_headers, assigned_driver, user_factory
):
    checklist = await start_checklist(client, driver_headers)

    other_user, other_headers = await user_factory("second-driver", UserRole.DRIVER)
    await client.post("/api/drivers", headers=admin_headers, json={
        "user_id": other_user.id,
        "employee_id": "EMP-002"
    })

    listing = await client.get("/api/checklists", headers=other_headers)
    assert listing.json() == []

    forbidden = await client.get(f"/api/checklists/{checklist['id']}", headers=other_headers)
    assert forbidden.status_code == 403

    staff_listing = await client.get("/api/checklists", headers=manager_headers)
    assert [c["id"] for c in staff_listing.json()] == [checklist["id"]]

    staff_view = await client.get(f"/api/checklists/{checklist['id']}", headers=manager_headers)
    assert staff_view.status_code == 200


@pytest.mark.asyncio
async def test_maintenance_lifecycle(client, manager_headers, driver_headers, vehicle):
    created = await client.post("/api/maintenance", headers=manager_headers, json={
        "vehicle_id": vehicle["id"],
        "maintenance_type": "service",
        "description": "30k km service",
        "cost": 4500.50
    })
    assert created.status_code == 201
    record = created.json()
    assert record["status"] == "scheduled"
    assert record["completed_date"] is None
    assert record["cost"] == 4500.5

    task = await client.post(f"/api/maintenance/{record['id']}/tasks", headers=manager_headers, json={
        "task_name": "Oil change",
        "estimated_duration": 45
    })
    assert task.status_code == 201

    # Any authenticated user can read the tasks
    tasks = await client.get(f"/api/maintenance/{record['id']}/tasks", headers=driver_headers)
    assert tasks.status_code == 200
    assert [t["task_name"] for t in tasks.json()] == ["Oil change"]

    done_task = await client.patch(f"/api/maintenance-tasks/{task.json()['id']}", headers=manager_headers, json={
        "is_completed": True,
        "actual_duration": 50
    })
    assert done_task.status_code == 200
    assert done_task.json()["completed_by"] == "manager@test.com"

    completed = await client.patch(f"/api/maintenance/{record['id']}", headers=manager_headers, json={
        "status": "completed"
    })
    assert completed.status_code == 200
    assert completed.json()["completed_date"] is not None

    filtered = await client.get("/api/maintenance", headers=manager_headers, params={"status": "completed"})
    assert [r["id"] for r in filtered.json()] == [record["id"]]


@pytest.mark.asyncio
async def test_maintenance_is_staff_only(client, driver_headers, vehicle):
    response = await client.post("/api/maintenance", headers=driver_headers, json={
        "vehicle_id": vehicle["id"],
        "maintenance_type": "repair",
        "description": "Dent"
    })
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_maintenance_for_unknown_vehicle_is_404(client, admin_headers):
    response = await client.post("/api/maintenance", headers=admin_headers, json={
        "vehicle_id": "missing",
        "maintenance_type": "repair",
        "description": "Dent"
    })
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_explicit_null_on_checklist_status_is_422(client, driver_headers, assigned_driver):
    checklist = await start_checklist(client, driver_headers, items=[
        {"item_name": "Horn", "item_category": "safety"}
    ])

    response = await client.patch(
        f"/api/checklists/{checklist['id']}",
        headers=driver_headers,
        json={"status": None}
    )
    assert response.status_code == 422

    item_id = checklist["items"][0]["id"]
    response = await client.patch(f"/api/checklist-items/{item_id}", headers=driver_headers, json={"is_checked": None})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_explicit_null_on_required_maintenance_fields_is_422(client, manager_headers, vehicle):
    created = await client.post("/api/maintenance", headers=manager_headers, json={
        "vehicle_id": vehicle["id"],
        "maintenance_type": "inspection",
        "description": "Annual fitness check"
    })
    record_id = created.json()["id"]

    for field in ("status", "description"):
        response = await client.patch(f"/api/maintenance/{record_id}", headers=manager_headers, json={field: None})
        assert response.status_code == 422, field

    task = await client.post(f"/api/maintenance/{record_id}/tasks", headers=manager_headers, json={
        "task_name": "Emission test"
    })
    response = await client.patch(
        f"/api/maintenance-tasks/{task.json()['id']}",
        headers=manager_headers,
        json={"is_completed": None}
    )
    assert response.status_code == 422
