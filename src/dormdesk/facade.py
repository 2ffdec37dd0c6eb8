"""Application facade consumed by clients.

Wraps the domain store, the session resolver and the report client behind
one async interface. After each mutation the facade refetches the whole
store into ``snapshot``; there is no incremental sync. Reports load the
snapshot on first use if no mutation or login has filled it yet.
"""

import asyncio
from typing import Any, List, Mapping, Optional, Union

from .auth.session import Session, SessionResolver
from .config import DormConfig
from .core.enums import ActorRole
from .domain.errors import ExternalServiceFailure
from .domain.models import (
    Announcement,
    AuditLogEntry,
    MaintenanceRequest,
    MaintenanceUpdate,
    Room,
    Tenant,
)
from .domain.reporting import DashboardStats, compute_dashboard_stats
from .services.report_generator import ReportGenerator
from .store.domain_store import DomainStore, StoreSnapshot
from .utils.logging_config import get_logger

REPORT_FALLBACK_MESSAGE = (
    "Sorry, an error occurred while generating the report. Please try again."
)


class DormitoryFacade:
    """Request/response boundary in front of the domain store."""

    def __init__(
        self,
        store: DomainStore,
        resolver: SessionResolver,
        report_generator: Optional[ReportGenerator] = None,
        simulated_latency_ms: int = 0,
    ):
        self.store = store
        self.resolver = resolver
        self.report_generator = report_generator
        self.simulated_latency_ms = simulated_latency_ms
        self.snapshot = StoreSnapshot()
        self._snapshot_loaded = False
        self.session: Optional[Session] = None
        self.logger = get_logger(__name__)

    @classmethod
    def from_config(
        cls,
        dorm: DormConfig,
        store: Optional[DomainStore] = None,
        report_generator: Optional[ReportGenerator] = None,
    ) -> "DormitoryFacade":
        store = store or DomainStore.from_config(dorm)
        resolver = SessionResolver(store, dorm.admin_email, dorm.admin_password)
        return cls(
            store,
            resolver,
            report_generator=report_generator,
            simulated_latency_ms=dorm.simulated_latency_ms,
        )

    async def _latency(self) -> None:
        if self.simulated_latency_ms > 0:
            await asyncio.sleep(self.simulated_latency_ms / 1000)

    async def refresh(self) -> StoreSnapshot:
        """Replace the held snapshot with a fresh copy of the store."""
        self.snapshot = await self.store.snapshot()
        self._snapshot_loaded = True
        return self.snapshot

    async def _ensure_snapshot(self) -> StoreSnapshot:
        if not self._snapshot_loaded:
            await self.refresh()
        return self.snapshot

    # ------------------------------------------------------------------ reads

    async def get_rooms(self) -> List[Room]:
        await self._latency()
        return await self.store.get_rooms()

    async def get_maintenance_requests(self) -> List[MaintenanceRequest]:
        await self._latency()
        return await self.store.get_maintenance_requests()

    async def get_announcements(self) -> List[Announcement]:
        await self._latency()
        return await self.store.get_announcements()

    async def get_audit_logs(self) -> List[AuditLogEntry]:
        await self._latency()
        return await self.store.get_audit_logs()

    # --------------------------------------------------------------- sessions

    async def login_admin(self, email: str, password: str) -> bool:
        await self._latency()
        success = await self.resolver.login_admin(email, password)
        if success:
            self.session = Session.admin()
        await self.refresh()
        return success

    async def find_tenant(self, name: str, room_id: Union[int, str]) -> Optional[Tenant]:
        await self._latency()
        tenant = await self.resolver.find_tenant(name, room_id)
        if tenant is not None:
            self.session = Session.for_tenant(tenant)
        await self.refresh()
        return tenant

    def logout(self) -> None:
        """Discard the current session."""
        self.session = None

    # -------------------------------------------------------------- mutations

    async def add_tenant(self, room_id: int, name: str, rent: float) -> Tenant:
        await self._latency()
        tenant = await self.store.add_tenant(room_id, name, rent)
        await self.refresh()
        return tenant

    async def remove_tenant(
        self,
        tenant_id: str,
        tenant_name: Optional[str] = None,
        room_id: Optional[int] = None,
    ) -> None:
        """Remove a tenant.

        ``tenant_name`` and ``room_id`` are what the caller believes it is
        removing; the audit entry always uses the stored values.
        """
        await self._latency()
        removed = await self.store.remove_tenant(tenant_id)
        if removed is not None and (
            (tenant_name is not None and tenant_name != removed.name)
            or (room_id is not None and room_id != removed.room_id)
        ):
            self.logger.warning(
                f"remove_tenant({tenant_id}): caller expected '{tenant_name}' in room {room_id}, "
                f"removed '{removed.name}' from room {removed.room_id}"
            )
        await self.refresh()

    async def toggle_tenant_billing(self, tenant_id: str) -> Optional[Tenant]:
        await self._latency()
        tenant = await self.store.toggle_billing(tenant_id)
        await self.refresh()
        return tenant

    async def add_maintenance_request(
        self, room_id: int, description: str, actor: Optional[ActorRole] = None
    ) -> MaintenanceRequest:
        """File a request; the audit actor comes from the session unless given."""
        await self._latency()
        if actor is None:
            actor = self.session.actor if self.session is not None else ActorRole.ADMIN
        request = await self.store.add_maintenance_request(room_id, description, actor)
        await self.refresh()
        return request

    async def update_maintenance_request(
        self, request_id: str, updates: Union[MaintenanceUpdate, Mapping[str, Any]]
    ) -> MaintenanceRequest:
        await self._latency()
        request = await self.store.update_maintenance_request(request_id, updates)
        await self.refresh()
        return request

    async def create_announcement(self, title: str, content: str) -> Announcement:
        await self._latency()
        announcement = await self.store.create_announcement(title, content)
        await self.refresh()
        return announcement

    async def delete_announcement(self, announcement_id: str) -> None:
        await self._latency()
        await self.store.delete_announcement(announcement_id)
        await self.refresh()

    # ---------------------------------------------------------------- reports

    async def dashboard_stats(self) -> DashboardStats:
        """Aggregate figures over the held snapshot, loading it on first use."""
        snapshot = await self._ensure_snapshot()
        return compute_dashboard_stats(
            snapshot.tenants,
            snapshot.maintenance_requests,
            self.store.total_rooms,
            self.store.max_tenants_per_room,
        )

    async def request_report(self) -> str:
        """Generate the narrative report, letting service failures propagate."""
        if self.report_generator is None:
            raise ExternalServiceFailure("Report generation is not configured.")
        snapshot = await self._ensure_snapshot()
        return await self.report_generator.generate_report(
            snapshot.tenants,
            snapshot.maintenance_requests,
            self.store.total_rooms,
            self.store.max_tenants_per_room,
        )

    async def generate_report(self) -> str:
        """Generate the narrative report, returning a fallback message on failure."""
        try:
            return await self.request_report()
        except ExternalServiceFailure as e:
            self.logger.error(f"Report generation failed: {e}")
            return REPORT_FALLBACK_MESSAGE
