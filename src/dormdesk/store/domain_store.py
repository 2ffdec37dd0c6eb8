"""In-memory domain store for rooms, tenants, maintenance and announcements.

All reads and writes go through one asyncio lock per store instance, so two
operations never interleave. Reads hand out deep copies; nothing returned to a
caller aliases the store's own objects.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError  # type: ignore

from ..config import DormConfig
from ..core.enums import (
    ActorRole,
    BillingStatus,
    MaintenancePriority,
    MaintenanceStatus,
)
from ..domain.errors import CapacityExceeded, InvalidInput, NotFound
from ..domain.models import (
    Announcement,
    AuditLogEntry,
    MaintenanceRequest,
    MaintenanceUpdate,
    Room,
    Tenant,
    new_id,
    utc_now,
)
from ..utils.logging_config import get_logger
from .audit import AuditRecorder


@dataclass
class StoreSnapshot:
    """Point-in-time copy of every collection in the store."""

    rooms: List[Room] = field(default_factory=list)
    maintenance_requests: List[MaintenanceRequest] = field(default_factory=list)
    announcements: List[Announcement] = field(default_factory=list)
    audit_logs: List[AuditLogEntry] = field(default_factory=list)

    @property
    def tenants(self) -> List[Tenant]:
        return [tenant for room in self.rooms for tenant in room.tenants]


def _display(value: Any) -> str:
    return value.value if hasattr(value, "value") else str(value)


class DomainStore:
    """Authoritative in-memory state of the dormitory."""

    def __init__(self, total_rooms: int = 10, max_tenants_per_room: int = 2):
        if total_rooms < 1:
            raise InvalidInput(f"total_rooms must be positive, got {total_rooms}")
        if max_tenants_per_room < 0:
            raise InvalidInput(
                f"max_tenants_per_room must not be negative, got {max_tenants_per_room}"
            )

        self._total_rooms = total_rooms
        self._max_tenants_per_room = max_tenants_per_room
        self._lock = asyncio.Lock()
        self.audit = AuditRecorder()
        self.logger = get_logger(__name__)

        self._rooms: List[Room] = []
        self._requests: List[MaintenanceRequest] = []
        self._announcements: List[Announcement] = []
        self._reset_collections()

    @classmethod
    def from_config(cls, dorm: DormConfig) -> "DomainStore":
        """Build a store from the dormitory config section, seeding if enabled."""
        store = cls(
            total_rooms=dorm.total_rooms,
            max_tenants_per_room=dorm.max_tenants_per_room,
        )
        if dorm.seed_demo_data:
            store._load_demo_data()
        return store

    @property
    def total_rooms(self) -> int:
        return self._total_rooms

    @property
    def max_tenants_per_room(self) -> int:
        return self._max_tenants_per_room

    # ------------------------------------------------------------------ reads

    async def get_rooms(self) -> List[Room]:
        """Get all rooms with their tenants, ordered by room id."""
        async with self._lock:
            return [room.model_copy(deep=True) for room in self._rooms]

    async def get_all_tenants(self) -> List[Tenant]:
        """Get every tenant, in room order."""
        async with self._lock:
            return [t.model_copy(deep=True) for room in self._rooms for t in room.tenants]

    async def get_available_rooms(self) -> List[Room]:
        """Get rooms that can still take a tenant."""
        async with self._lock:
            return [
                room.model_copy(deep=True)
                for room in self._rooms
                if len(room.tenants) < self._max_tenants_per_room
            ]

    async def get_maintenance_requests(self) -> List[MaintenanceRequest]:
        """Get all maintenance requests, most recent first."""
        async with self._lock:
            return [r.model_copy(deep=True) for r in self._requests]

    async def get_requests_for_room(self, room_id: int) -> List[MaintenanceRequest]:
        """Get the maintenance requests filed for one room, most recent first."""
        async with self._lock:
            return [r.model_copy(deep=True) for r in self._requests if r.room_id == room_id]

    async def get_announcements(self) -> List[Announcement]:
        """Get all announcements, most recent first."""
        async with self._lock:
            return [a.model_copy(deep=True) for a in self._announcements]

    async def get_audit_logs(self) -> List[AuditLogEntry]:
        """Get the audit log, most recent first."""
        async with self._lock:
            return [e.model_copy(deep=True) for e in self.audit.entries()]

    async def snapshot(self) -> StoreSnapshot:
        """Copy every collection under a single lock acquisition."""
        async with self._lock:
            return StoreSnapshot(
                rooms=[room.model_copy(deep=True) for room in self._rooms],
                maintenance_requests=[r.model_copy(deep=True) for r in self._requests],
                announcements=[a.model_copy(deep=True) for a in self._announcements],
                audit_logs=[e.model_copy(deep=True) for e in self.audit.entries()],
            )

    async def find_tenant(self, name: str, room_id: int) -> Optional[Tenant]:
        """First tenant whose trimmed, case-folded name and room both match."""
        wanted = (name or "").strip().lower()
        async with self._lock:
            for room in self._rooms:
                for tenant in room.tenants:
                    if tenant.name.lower() == wanted and tenant.room_id == room_id:
                        return tenant.model_copy(deep=True)
        return None

    async def get_tenant(self, tenant_id: str) -> Optional[Tenant]:
        """Current state of a tenant, or None if it has been removed."""
        async with self._lock:
            tenant = self._find_tenant_by_id(tenant_id)
            return tenant.model_copy(deep=True) if tenant is not None else None

    # -------------------------------------------------------------- mutations

    async def add_tenant(self, room_id: int, name: str, rent: float) -> Tenant:
        """
        Place a new tenant in a room with billing status Due.

        Raises:
            InvalidInput: If the name is blank or the rent is not a positive number
            CapacityExceeded: If the room does not exist or is already full
        """
        name = (name or "").strip()
        if not name:
            raise InvalidInput("Tenant name must not be empty")
        if rent is None or not rent > 0:
            raise InvalidInput(f"Rent must be positive, got {rent}")

        async with self._lock:
            room = self._find_room(room_id)
            if room is None or len(room.tenants) >= self._max_tenants_per_room:
                self.logger.warning(f"Rejected tenant '{name}' for room {room_id}: full or missing")
                raise CapacityExceeded(room_id)

            tenant = Tenant(id=new_id("tenant"), name=name, rent=rent, room_id=room.id)
            room.tenants.append(tenant)
            self.audit.record("Tenant Added", f"Added tenant '{name}' to Room {room.id}.")
            return tenant.model_copy(deep=True)

    async def remove_tenant(self, tenant_id: str) -> Optional[Tenant]:
        """Remove a tenant from whichever room holds it.

        Removing an unknown tenant is a no-op and returns None.
        """
        async with self._lock:
            for room in self._rooms:
                for index, tenant in enumerate(room.tenants):
                    if tenant.id == tenant_id:
                        del room.tenants[index]
                        self.audit.record(
                            "Tenant Removed",
                            f"Removed tenant '{tenant.name}' from Room {room.id}.",
                        )
                        return tenant.model_copy(deep=True)

        self.logger.debug(f"remove_tenant: no tenant with id {tenant_id}")
        return None

    async def toggle_billing(self, tenant_id: str) -> Optional[Tenant]:
        """Flip a tenant between Due and Paid. Unknown ids are a no-op."""
        async with self._lock:
            tenant = self._find_tenant_by_id(tenant_id)
            if tenant is None:
                self.logger.debug(f"toggle_billing: no tenant with id {tenant_id}")
                return None

            old_status = tenant.billing_status
            tenant.billing_status = old_status.toggled()
            self.audit.record(
                "Billing Status Changed",
                f"Billing for '{tenant.name}' changed from {old_status.value} "
                f"to {tenant.billing_status.value}.",
            )
            return tenant.model_copy(deep=True)

    async def add_maintenance_request(
        self,
        room_id: int,
        description: str,
        actor: ActorRole = ActorRole.ADMIN,
    ) -> MaintenanceRequest:
        """
        File a new maintenance request for a room.

        The room does not need tenants. The request starts as Reported with
        Medium priority and no assignee, and is placed first in the list.

        Raises:
            InvalidInput: If the description is blank or the room id is out of range
        """
        description = (description or "").strip()
        if not description:
            raise InvalidInput("Description must not be empty")
        if not 1 <= room_id <= self._total_rooms:
            raise InvalidInput(f"Room {room_id} does not exist")

        async with self._lock:
            request = MaintenanceRequest(
                id=new_id("req"),
                room_id=room_id,
                description=description,
                reported_date=utc_now(),
            )
            self._requests.insert(0, request)
            self.audit.record(
                "Maintenance Request Added",
                f'New request for Room {room_id}: "{description}"',
                actor,
            )
            return request.model_copy(deep=True)

    async def update_maintenance_request(
        self,
        request_id: str,
        update: Union[MaintenanceUpdate, Mapping[str, Any]],
    ) -> MaintenanceRequest:
        """
        Apply a partial update to a maintenance request.

        Only fields whose value actually changes are listed in the audit
        entry; an update that changes nothing writes no entry.

        Raises:
            InvalidInput: If the update has unknown fields or invalid values
            NotFound: If no request has the given id
        """
        if not isinstance(update, MaintenanceUpdate):
            try:
                update = MaintenanceUpdate.model_validate(update)
            except ValidationError as e:
                raise InvalidInput(f"Invalid maintenance update: {e.error_count()} error(s)") from e

        async with self._lock:
            request = next((r for r in self._requests if r.id == request_id), None)
            if request is None:
                raise NotFound("Maintenance request", request_id)

            changes: List[str] = []
            for attribute, value in update.requested_changes().items():
                if getattr(request, attribute) != value:
                    setattr(request, attribute, value)
                    changes.append(
                        f"{MaintenanceUpdate.wire_name(attribute)} to '{_display(value)}'"
                    )

            if changes:
                self.audit.record(
                    "Maintenance Updated",
                    f"Request for Room {request.room_id} updated: {', '.join(changes)}.",
                )
            return request.model_copy(deep=True)

    async def create_announcement(self, title: str, content: str) -> Announcement:
        """Publish an announcement, placed first in the list."""
        title = (title or "").strip()
        if not title:
            raise InvalidInput("Announcement title must not be empty")

        async with self._lock:
            announcement = Announcement(id=new_id("anno"), title=title, content=content or "")
            self._announcements.insert(0, announcement)
            self.audit.record("Announcement Created", f'New announcement: "{title}"')
            return announcement.model_copy(deep=True)

    async def delete_announcement(self, announcement_id: str) -> Optional[Announcement]:
        """Delete an announcement. Unknown ids are a no-op and return None."""
        async with self._lock:
            for index, announcement in enumerate(self._announcements):
                if announcement.id == announcement_id:
                    del self._announcements[index]
                    self.audit.record(
                        "Announcement Deleted", f'Deleted announcement: "{announcement.title}"'
                    )
                    return announcement
        return None

    async def record_event(
        self, action: str, details: str, user: Union[ActorRole, str] = ActorRole.SYSTEM
    ) -> AuditLogEntry:
        """Write an audit entry that is not tied to a data change (logins)."""
        async with self._lock:
            return self.audit.record(action, details, user)

    async def seed_demo_data(self) -> None:
        """Reset the store and load the demo data set."""
        async with self._lock:
            self._load_demo_data()

    # ---------------------------------------------------------------- helpers

    def _reset_collections(self) -> None:
        self._rooms = [Room(id=i + 1) for i in range(self._total_rooms)]
        self._requests = []
        self._announcements = []
        self.audit.clear()

    def _find_room(self, room_id: int) -> Optional[Room]:
        for room in self._rooms:
            if room.id == room_id:
                return room
        return None

    def _find_tenant_by_id(self, tenant_id: str) -> Optional[Tenant]:
        for room in self._rooms:
            for tenant in room.tenants:
                if tenant.id == tenant_id:
                    return tenant
        return None

    def _load_demo_data(self) -> None:
        """Demo tenants, requests and announcements.

        Entries that do not fit the configured room count or capacity are
        skipped. Callers must hold the lock or own the store exclusively.
        """
        self._reset_collections()
        now = utc_now()

        demo_tenants: List[Dict[str, Any]] = [
            {"id": "tenant-1", "name": "John Doe", "rent": 10500, "billing_status": BillingStatus.PAID, "room_id": 1},
            {"id": "tenant-2", "name": "Jane Smith", "rent": 10500, "billing_status": BillingStatus.DUE, "room_id": 1},
            {"id": "tenant-3", "name": "Peter Jones", "rent": 12000, "billing_status": BillingStatus.DUE, "room_id": 3},
        ]
        for data in demo_tenants:
            room = self._find_room(data["room_id"])
            if room is not None and len(room.tenants) < self._max_tenants_per_room:
                room.tenants.append(Tenant(**data))

        demo_requests = [
            MaintenanceRequest(
                id="req-1",
                room_id=3,
                description="Leaky faucet in the kitchen sink.",
                reported_date=now - timedelta(days=2),
            ),
            MaintenanceRequest(
                id="req-2",
                room_id=8,
                description="Wi-Fi is not working in the common area on this floor.",
                status=MaintenanceStatus.IN_PROGRESS,
                priority=MaintenancePriority.HIGH,
                assigned_to="Tech Team",
                reported_date=now - timedelta(days=5),
            ),
            MaintenanceRequest(
                id="req-3",
                room_id=1,
                description="Lightbulb in the main ceiling fixture is out.",
                status=MaintenanceStatus.COMPLETED,
                priority=MaintenancePriority.LOW,
                assigned_to="Mike",
                reported_date=now - timedelta(days=10),
            ),
        ]
        self._requests = [r for r in demo_requests if r.room_id <= self._total_rooms]

        self._announcements = [
            Announcement(
                id="anno-1",
                title="Community BBQ This Saturday!",
                content=(
                    "Join us for a community BBQ in the common area this Saturday at 5 PM. "
                    "Free food and drinks for all residents!"
                ),
                date=now - timedelta(days=1),
            ),
            Announcement(
                id="anno-2",
                title="Package Delivery Policy Update",
                content=(
                    "Starting next week, all packages must be collected from the front desk "
                    "within 48 hours of delivery notification. Please bring your ID."
                ),
                date=now - timedelta(days=3),
            ),
        ]

        self.audit.record("System Initialized", "Mock data loaded.", ActorRole.SYSTEM)
        self.logger.info(
            f"Loaded demo data: {sum(len(r.tenants) for r in self._rooms)} tenants, "
            f"{len(self._requests)} requests, {len(self._announcements)} announcements"
        )
