"""Entity models for the dormitory domain.

Python attributes are snake_case; the aliases are the camelCase wire names
used by the web client, so the same models serve both the store and the API.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field  # type: ignore

from ..core.enums import BillingStatus, MaintenancePriority, MaintenanceStatus


def new_id(prefix: str) -> str:
    """Generate a unique identifier such as ``tenant-3f2a9c1b7d4e``."""
    return f"{prefix}-{uuid4().hex[:12]}"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DomainModel(BaseModel):
    """Base model shared by all entities."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


class Tenant(DomainModel):
    """A resident assigned to exactly one room."""

    id: str
    name: str
    rent: float = Field(gt=0, description="Monthly rent")
    billing_status: BillingStatus = Field(
        default=BillingStatus.DUE, alias="billingStatus"
    )
    room_id: int = Field(ge=1, alias="roomId")


class Room(DomainModel):
    """A fixed-capacity housing unit."""

    id: int = Field(ge=1)
    tenants: List[Tenant] = Field(default_factory=list)


class MaintenanceRequest(DomainModel):
    """A tracked issue tied to a room."""

    id: str
    room_id: int = Field(ge=1, alias="roomId")
    description: str
    status: MaintenanceStatus = MaintenanceStatus.REPORTED
    priority: MaintenancePriority = MaintenancePriority.MEDIUM
    assigned_to: str = Field(default="", alias="assignedTo")
    reported_date: datetime = Field(default_factory=utc_now, alias="reportedDate")


class Announcement(DomainModel):
    """An admin notice shown to every tenant."""

    id: str
    title: str
    content: str
    date: datetime = Field(default_factory=utc_now)


class AuditLogEntry(DomainModel):
    """One append-only audit record."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True, frozen=True)

    id: str
    timestamp: datetime = Field(default_factory=utc_now)
    user: str
    action: str
    details: str


class MaintenanceUpdate(BaseModel):
    """Partial update of a maintenance request.

    A field left as ``None`` is not part of the update.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    status: Optional[MaintenanceStatus] = None
    priority: Optional[MaintenancePriority] = None
    assigned_to: Optional[str] = Field(default=None, alias="assignedTo")

    def requested_changes(self) -> Dict[str, Any]:
        """Return the supplied fields keyed by attribute name, in declaration order."""
        return {
            name: value
            for name, value in (
                ("status", self.status),
                ("priority", self.priority),
                ("assigned_to", self.assigned_to),
            )
            if value is not None
        }

    @staticmethod
    def wire_name(attribute: str) -> str:
        """Return the client-facing name of an update attribute."""
        return MaintenanceUpdate.model_fields[attribute].alias or attribute
