"""
Enumerations for the fleet operations domain.

Defines roles and the status vocabularies stored in enum columns.
"""

import enum
from sqlalchemy import Enum as SAEnum


class UserRole(str, enum.Enum):
    """
    User role enumeration.
    
    Roles:
        ADMIN: Full access, including fleet setup and user management
        MANAGER: Day-to-day operations (assignments, approvals, maintenance)
        DRIVER: Logs trips, fuel and checklists for the assigned vehicle (default role)
    """
    ADMIN = "admin"
    MANAGER = "manager"
    DRIVER = "driver"


class VehicleStatus(str, enum.Enum):
    """Vehicle status enumeration."""
    ACTIVE = "active"
    MAINTENANCE = "maintenance"
    INACTIVE = "inactive"


class TripStatus(str, enum.Enum):
    """Trip status enumeration."""
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PayoutStatus(str, enum.Enum):
    """Payout status enumeration: PENDING -> APPROVED -> PAID, or PENDING -> REJECTED."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    PAID = "paid"


class FuelRecordType(str, enum.Enum):
    """Fuel record type enumeration."""
    REFUEL = "refuel"
    DISTRIBUTION = "distribution"
    TRANSFER = "transfer"


class MaintenanceStatus(str, enum.Enum):
    """Maintenance record status enumeration."""
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ChecklistStatus(str, enum.Enum):
    """Driver checklist status enumeration."""
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class DocumentEntityType(str, enum.Enum):
    """Kinds of records a document can be attached to."""
    TRIP = "trip"
    FUEL_RECORD = "fuel_record"
    CHECKLIST = "checklist"
    MAINTENANCE = "maintenance"
    DRIVER = "driver"
    VEHICLE = "vehicle"


def db_enum(enum_cls, name: str) -> SAEnum:
    """Enum column type storing the lowercase values rather than member names."""
    return SAEnum(
        enum_cls,
        name=name,
        values_callable=lambda members: [member.value for member in members],
    )
