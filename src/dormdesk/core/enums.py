"""Enums for the DormDesk application."""

from enum import Enum


class BillingStatus(str, Enum):
    """Billing status of a tenant for the current period."""

    DUE = "Due"
    PAID = "Paid"

    def toggled(self) -> "BillingStatus":
        """Return the opposite status."""
        return BillingStatus.PAID if self is BillingStatus.DUE else BillingStatus.DUE


class MaintenanceStatus(str, Enum):
    """Workflow status of a maintenance request."""

    REPORTED = "Reported"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class MaintenancePriority(str, Enum):
    """Priority of a maintenance request."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class ActorRole(str, Enum):
    """Actor labels written to the audit log."""

    ADMIN = "Admin"
    TENANT = "Tenant"
    SYSTEM = "System"


class SessionRole(str, Enum):
    """Role carried by a resolved session."""

    ADMIN = "admin"
    TENANT = "tenant"
