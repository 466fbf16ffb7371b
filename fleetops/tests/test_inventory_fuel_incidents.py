"""
Integration tests for inventory, fuel and incident flows.
"""

import pytest


@pytest.mark.asyncio
async def test_low_stock_lists_active_items_at_or_below_minimum(client, admin_headers, manager_headers):
    items = [
        {"item_name": "Brake pads", "item_code": "BP-1", "category": "spare_parts", "current_stock": 2, "minimum_stock": 5},
        {"item_name": "Coolant", "item_code": "CL-1", "category": "consumables", "current_stock": 5, "minimum_stock": 5},
        {"item_name": "Jack", "item_code": "JK-1", "category": "tools", "current_stock": 9, "minimum_stock": 2},
    ]
    created = {}
    for item in items:
        response = await client.post("/api/inventory", headers=admin_headers, json=item)
        assert response.status_code == 201
        created[item["item_code"]] = response.json()

    low = await client.get("/api/inventory/low-stock", headers=manager_headers)
    assert low.status_code == 200
    assert [i["item_name"] for i in low.json()] == ["Brake pads", "Coolant"]

    # Deactivated items drop out of the low-stock list
    patched = await client.patch(
        f"/api/inventory/{created['BP-1']['id']}",
        headers=manager_headers,
        json={"is_active": False}
    )
    assert patched.status_code == 200

    low = await client.get("/api/inventory/low-stock", headers=manager_headers)
    assert [i["item_name"] for i in low.json()] == ["Coolant"]

    stats = await client.get("/api/dashboard/stats", headers=admin_headers)
    assert stats.json()["low_stock_items"] == 1


@pytest.mark.asyncio
async def test_inventory_creation_is_admin_only_and_codes_unique(client, admin_headers, manager_headers):
    item = {"item_name": "Fuse", "item_code": "FS-1", "category": "spare_parts"}

    forbidden = await client.post("/api/inventory", headers=manager_headers, json=item)
    assert forbidden.status_code == 403

    first = await client.post("/api/inventory", headers=admin_headers, json=item)
    assert first.status_code == 201

    duplicate = await client.post("/api/inventory", headers=admin_headers, json=item)
    assert duplicate.status_code == 400


@pytest.mark.asyncio
async def test_fuel_record_defaults_total_cost(client, admin_headers, driver_headers, assigned_driver):
    station = await client.post("/api/fuel-stations", headers=admin_headers, json={
        "name": "Highway Fuels",
        "location": "NH-48 km 12"
    })
    assert station.status_code == 201

    response = await client.post("/api/fuel-records", headers=driver_headers, json={
        "fuel_type": "diesel",
        "quantity": 40,
        "price_per_liter": 92.5,
        "fuel_station_id": station.json()["id"],
        "odometer_reading": 12000
    })

    assert response.status_code == 201, response.text
    record = response.json()
    assert record["total_cost"] == 3700.0
    assert record["record_type"] == "refuel"
    assert record["vehicle_id"] == assigned_driver["vehicle"]["id"]

    explicit = await client.post("/api/fuel-records", headers=driver_headers, json={
        "fuel_type": "diesel",
        "quantity": 10,
        "price_per_liter": 90,
        "total_cost": 850
    })
    assert explicit.json()["total_cost"] == 850.0

    own = await client.get("/api/fuel-records", headers=driver_headers)
    assert len(own.json()) == 2


@pytest.mark.asyncio
async def test_fuel_record_with_unknown_station_is_404(client, driver_headers, assigned_driver):
    response = await client.post("/api/fuel-records", headers=driver_headers, json={
        "fuel_type": "diesel",
        "quantity": 10,
        "price_per_liter": 90,
        "fuel_station_id": "missing"
    })
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_fuel_stations_are_admin_managed(client, admin_headers, manager_headers):
    forbidden = await client.post("/api/fuel-stations", headers=manager_headers, json={
        "name": "City Pump",
        "location": "Ring Road"
    })
    assert forbidden.status_code == 403

    created = await client.post("/api/fuel-stations", headers=admin_headers, json={
        "name": "City Pump",
        "location": "Ring Road"
    })
    station_id = created.json()["id"]

    deactivated = await client.patch(f"/api/fuel-stations/{station_id}", headers=admin_headers, json={
        "is_active": False
    })
    assert deactivated.json()["is_active"] is False

    active = await client.get("/api/fuel-stations", headers=manager_headers, params={"active_only": True})
    assert active.json() == []


@pytest.mark.asyncio
async def test_incident_report_and_resolve(client, manager_headers, driver_headers, assigned_driver):
    reported = await client.post("/api/incidents", headers=driver_headers, json={
        "incident_type": "breakdown",
        "description": "Engine overheating",
        "damage_amount": 1500
    })
    assert reported.status_code == 201
    incident = reported.json()
    assert incident["is_resolved"] is False
    assert incident["vehicle_id"] == assigned_driver["vehicle"]["id"]

    stats = await client.get("/api/dashboard/stats", headers=manager_headers)
    assert stats.json()["open_incidents"] == 1

    forbidden = await client.patch(f"/api/incidents/{incident['id']}/resolve", headers=driver_headers)
    assert forbidden.status_code == 403

    resolved = await client.patch(f"/api/incidents/{incident['id']}/resolve", headers=manager_headers)
    assert resolved.status_code == 200
    assert resolved.json()["is_resolved"] is True
    assert resolved.json()["resolved_at"] is not None

    again = await client.patch(f"/api/incidents/{incident['id']}/resolve", headers=manager_headers)
    assert again.status_code == 400

    open_only = await client.get("/api/incidents", headers=manager_headers, params={"resolved": False})
    assert open_only.json() == []


@pytest.mark.asyncio
async def test_incident_for_unknown_trip_is_404(client, driver_headers, assigned_driver):
    response = await client.post("/api/incidents", headers=driver_headers, json={
        "incident_type": "accident",
        "description": "Scratch",
        "trip_id": "missing"
    })
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_explicit_null_on_required_inventory_fields_is_422(client, admin_headers, manager_headers):
    created = await client.post("/api/inventory", headers=admin_headers, json={
        "item_name": "Wiper blade",
        "category": "spare_parts",
        "current_stock": 4
    })
    item_id = created.json()["id"]

    for field in ("item_name", "category", "current_stock", "minimum_stock", "is_active"):
        response = await client.patch(f"/api/inventory/{item_id}", headers=manager_headers, json={field: None})
        assert response.status_code == 422, field

    listing = await client.get("/api/inventory", headers=manager_headers)
    item = next(i for i in listing.json() if i["id"] == item_id)
    assert item["item_name"] == "Wiper blade"
    assert item["current_stock"] == 4


@pytest.mark.asyncio
async def test_explicit_null_on_required_fuel_station_fields_is_422(client, admin_headers):
    created = await client.post("/api/fuel-stations", headers=admin_headers, json={
        "name": "Depot Pump",
        "location": "Yard 2"
    })
    station_id = created.json()["id"]

    for field in ("name", "location", "is_active"):
        response = await client.patch(f"/api/fuel-stations/{station_id}", headers=admin_headers, json={field: None})
        assert response.status_code == 422, field
