"""
FastAPI Application Entry Point.

This is the main application file for the Fleet Operations Backend.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from fleetops.app.core.config import settings
from fleetops.app.core.logging import configure_logging
from fleetops.app.core.observability import ObservabilityMiddleware
from fleetops.app.api.router import router as api_router
from fleetops.app.db.session import engine, Base
from fleetops.app.core.exceptions import (
    AppException,
    app_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    generic_exception_handler
)

# Import models to ensure they are registered with Base
from fleetops.app.models.user import User
from fleetops.app.models.audit_log import AuditLog
from fleetops.app.models.driver import Driver
from fleetops.app.models.vehicle import Vehicle
from fleetops.app.models.assignment import Assignment
from fleetops.app.models.trip import Trip
from fleetops.app.models.payout import Payout
from fleetops.app.models.incident import Incident
from fleetops.app.models.fuel import FuelStation, FuelRecord
from fleetops.app.models.checklist import DriverChecklist, ChecklistItem
from fleetops.app.models.maintenance import MaintenanceRecord, MaintenanceTask
from fleetops.app.models.inventory import InventoryItem
from fleetops.app.models.document import Document

configure_logging()
logger = logging.getLogger("fleetops")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for application startup/shutdown.
    
    1. Creates database tables on startup.
    2. Makes sure the upload directory exists.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
    logger.info("%s %s started", settings.app_name, settings.api_version)
    yield
    await engine.dispose()


# Initialize FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.api_version,
    debug=settings.debug,
    description="Fleet operations backend: drivers, vehicles, trips, payouts and upkeep",
    lifespan=lifespan,
)

# Register global exception handlers
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# Middleware
app.add_middleware(ObservabilityMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint.
    
    Returns:
        dict: Status and application information
    """
    return {
        "status": "healthy",
        "app_name": settings.app_name,
        "version": settings.api_version,
    }


# Include API router
app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint.
    
    Returns:
        dict: Welcome message and API documentation links
    """
    return {
        "message": "Welcome to Fleet Operations Backend API",
        "docs": "/docs",
        "health": "/health",
    }
