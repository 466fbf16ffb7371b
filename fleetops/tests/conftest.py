"""
Centralized Test Configuration.
"""

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from fleetops.app.main import app
from fleetops.app.core.jwt import create_identity_token
from fleetops.app.db.session import get_db, Base
from fleetops.app.models.enums import UserRole
from fleetops.app.models.user import User
from fleetops.app.services.document_storage import DocumentStorage, get_document_storage

# Setup In-Memory Test Database
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Event handler to enable foreign keys for SQLite
from sqlalchemy import event
from sqlalchemy.pool import Pool

@event.listens_for(Pool, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    """Enable foreign key constraints for SQLite."""
    if 'sqlite' in str(type(dbapi_conn)):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

engine = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)

# Upload size limit used by tests so oversized files stay small
TEST_MAX_UPLOAD_BYTES = 1024


@pytest.fixture(scope="session", autouse=True)
def apply_overrides():
    """Apply overrides once for the session."""

    async def override_get_db():
        async with TestingSessionLocal() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield

    app.dependency_overrides = {}


@pytest.fixture(autouse=True)
async def setup_database():
    """Create tables before each test function and drop after."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def upload_storage(tmp_path):
    """Point document storage at a temporary directory."""
    storage = DocumentStorage(upload_dir=str(tmp_path / "uploads"), max_file_size=TEST_MAX_UPLOAD_BYTES)
    app.dependency_overrides[get_document_storage] = lambda: storage
    yield storage
    app.dependency_overrides.pop(get_document_storage, None)


@pytest.fixture
async def client():
    """Async client for testing."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


# Shared session for fixture data creation
@pytest.fixture
async def db_session():
    async with TestingSessionLocal() as session:
        yield session


def auth_headers(user_id: str) -> dict:
    """Bearer header carrying an identity token for the user."""
    return {"Authorization": f"Bearer {create_identity_token(user_id)}"}


async def make_user(db_session, user_id: str, role: UserRole, is_active: bool = True) -> User:
    user = User(
        id=user_id,
        email=f"{user_id}@test.com",
        first_name=user_id.capitalize(),
        role=role,
        is_active=is_active,
    )
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.fixture
def user_factory(db_session):
    """Create a user with a role and return (user, headers)."""
    async def _create(user_id: str, role: UserRole = UserRole.DRIVER, is_active: bool = True):
        user = await make_user(db_session, user_id, role, is_active)
        return user, auth_headers(user_id)
    return _create


@pytest.fixture
async def admin_headers(db_session):
    await make_user(db_session, "admin", UserRole.ADMIN)
    return auth_headers("admin")


@pytest.fixture
async def manager_headers(db_session):
    await make_user(db_session, "manager", UserRole.MANAGER)
    return auth_headers("manager")


@pytest.fixture
async def driver_user(db_session):
    return await make_user(db_session, "driver", UserRole.DRIVER)


@pytest.fixture
def driver_headers(driver_user):
    return auth_headers(driver_user.id)


@pytest.fixture
async def vehicle(client, admin_headers):
    """A vehicle registered through the API."""
    response = await client.post("/api/vehicles", headers=admin_headers, json={
        "registration_number": "KA-01-1234",
        "make": "Toyota",
        "model": "Innova",
        "capacity": 7,
        "fuel_type": "Diesel"
    })
    assert response.status_code == 201
    return response.json()


@pytest.fixture
async def driver_profile(client, admin_headers, driver_user):
    """Driver profile of the driver user, created through the API."""
    response = await client.post("/api/drivers", headers=admin_headers, json={
        "user_id": driver_user.id,
        "employee_id": "EMP-001",
        "license_number": "DL-001"
    })
    assert response.status_code == 201
    return response.json()


@pytest.fixture
async def assigned_driver(client, admin_headers, driver_profile, vehicle):
    """Driver profile with an active assignment to the vehicle fixture."""
    response = await client.post("/api/assignments", headers=admin_headers, json={
        "driver_id": driver_profile["id"],
        "vehicle_id": vehicle["id"]
    })
    assert response.status_code == 201
    return {"driver": driver_profile, "vehicle": vehicle, "assignment": response.json()}
