"""
Database seeding script for development data.

Creates an ADMIN, a MANAGER and a DRIVER user, the driver's profile, one
vehicle and the assignment between them, then prints identity tokens for
each user so the API can be exercised without the identity provider.
Run this script after database is set up but before first use.
"""

import asyncio
import sys
from datetime import timedelta
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import select
from fleetops.app.core.jwt import create_identity_token
from fleetops.app.db.session import AsyncSessionLocal, engine, Base
from fleetops.app.models.assignment import Assignment
from fleetops.app.models.driver import Driver
from fleetops.app.models.enums import UserRole
from fleetops.app.models.user import User
from fleetops.app.models.vehicle import Vehicle
import fleetops.app.main  # noqa: F401  registers every model with Base

SEED_USERS = [
    ("seed-admin", "admin@fleetops.local", "Ada", "Admin", UserRole.ADMIN),
    ("seed-manager", "manager@fleetops.local", "Max", "Manager", UserRole.MANAGER),
    ("seed-driver", "driver@fleetops.local", "Dina", "Driver", UserRole.DRIVER),
]


async def seed():
    """
    Seed development data.

    Creates:
    - 1 ADMIN, 1 MANAGER and 1 DRIVER user
    - the driver's profile
    - 1 vehicle assigned to that driver
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as db:
        print("🌱 Starting seeding...")

        result = await db.execute(select(User).where(User.id == "seed-admin"))
        if result.scalar_one_or_none():
            print("ℹ️  Seed users already exist, skipping seeding")
        else:
            for user_id, email, first_name, last_name, role in SEED_USERS:
                db.add(User(
                    id=user_id,
                    email=email,
                    first_name=first_name,
                    last_name=last_name,
                    role=role,
                ))
                print(f"✅ Created {role.value.upper()} user ({email})")
            await db.flush()

            driver = Driver(user_id="seed-driver", employee_id="EMP-0001", license_number="DL-0001")
            vehicle = Vehicle(registration_number="FLEET-001", make="Toyota", model="Innova", capacity=7, fuel_type="Diesel")
            db.add_all([driver, vehicle])
            await db.flush()

            db.add(Assignment(driver_id=driver.id, vehicle_id=vehicle.id, is_active=True))
            print("✅ Created driver profile EMP-0001 assigned to FLEET-001")

            await db.commit()
            print("\n🎉 Seeding completed successfully!")

    print("\nDevelopment tokens (send as 'Authorization: Bearer <token>'):")
    for user_id, email, _, _, role in SEED_USERS:
        print(f"  - {role.value.upper():8} {create_identity_token(user_id, email=email, expires_delta=timedelta(days=7))}")


if __name__ == "__main__":
    asyncio.run(seed())
