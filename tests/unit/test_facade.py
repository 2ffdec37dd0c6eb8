"""Unit tests for the client-facing facade."""

import time

import httpx
import pytest

from dormdesk.config import DormConfig
from dormdesk.core.enums import BillingStatus, MaintenanceStatus, SessionRole
from dormdesk.domain.errors import CapacityExceeded, ExternalServiceFailure
from dormdesk.facade import REPORT_FALLBACK_MESSAGE, DormitoryFacade
from dormdesk.services.report_generator import ReportGenerator


@pytest.mark.unit
class TestSnapshot:
    """The held snapshot follows every mutation."""

    @pytest.mark.asyncio
    async def test_snapshot_refreshed_after_each_mutation(self, facade):
        tenant = await facade.add_tenant(1, "Alice", 10500)
        assert [t.id for t in facade.snapshot.tenants] == [tenant.id]

        await facade.toggle_tenant_billing(tenant.id)
        assert facade.snapshot.tenants[0].billing_status == BillingStatus.PAID

        request = await facade.add_maintenance_request(1, "Leak")
        assert facade.snapshot.maintenance_requests[0].id == request.id

        await facade.update_maintenance_request(request.id, {"status": "Completed"})
        assert facade.snapshot.maintenance_requests[0].status == MaintenanceStatus.COMPLETED

        announcement = await facade.create_announcement("Hello", "World")
        assert facade.snapshot.announcements[0].id == announcement.id

        await facade.delete_announcement(announcement.id)
        await facade.remove_tenant(tenant.id)
        assert facade.snapshot.announcements == []
        assert facade.snapshot.tenants == []
        assert len(facade.snapshot.audit_logs) == 7

    @pytest.mark.asyncio
    async def test_failed_mutation_propagates(self, facade):
        await facade.add_tenant(1, "A", 100)
        await facade.add_tenant(1, "B", 100)

        with pytest.raises(CapacityExceeded):
            await facade.add_tenant(1, "C", 100)

        assert len(facade.snapshot.tenants) == 2

    @pytest.mark.asyncio
    async def test_remove_with_stale_details_uses_stored_values(self, facade, caplog):
        tenant = await facade.add_tenant(2, "Bob", 100)

        await facade.remove_tenant(tenant.id, tenant_name="Robert", room_id=2)

        assert facade.snapshot.audit_logs[0].details == "Removed tenant 'Bob' from Room 2."
        assert "caller expected 'Robert'" in caplog.text


@pytest.mark.unit
class TestSessions:
    """Login state held by the facade."""

    @pytest.mark.asyncio
    async def test_admin_login_sets_session(self, facade):
        assert await facade.login_admin("admin@dorm.com", "password123") is True

        assert facade.session.role == SessionRole.ADMIN
        assert facade.snapshot.audit_logs[0].action == "Admin Login"

    @pytest.mark.asyncio
    async def test_failed_login_keeps_no_session(self, facade):
        assert await facade.login_admin("admin@dorm.com", "bad") is False

        assert facade.session is None

    @pytest.mark.asyncio
    async def test_tenant_actor_on_requests(self, facade):
        await facade.add_tenant(4, "Dana", 100)
        tenant = await facade.find_tenant("dana", "4")
        assert facade.session.tenant.id == tenant.id

        await facade.add_maintenance_request(4, "Heater broken")

        assert facade.snapshot.audit_logs[0].user == "Tenant"

    @pytest.mark.asyncio
    async def test_requests_without_session_are_admin(self, facade):
        await facade.add_maintenance_request(4, "Heater broken")

        assert facade.snapshot.audit_logs[0].user == "Admin"

    @pytest.mark.asyncio
    async def test_logout(self, facade):
        await facade.login_admin("admin@dorm.com", "password123")

        facade.logout()

        assert facade.session is None


@pytest.mark.unit
class TestReports:
    """Dashboard figures and narrative reports."""

    @pytest.mark.asyncio
    async def test_dashboard_stats_over_snapshot(self, facade):
        tenant = await facade.add_tenant(1, "A", 1000)
        await facade.add_tenant(2, "B", 500)
        await facade.toggle_tenant_billing(tenant.id)

        stats = await facade.dashboard_stats()

        assert stats.total_tenants == 2
        assert stats.occupancy_percentage == 10
        assert stats.collected_rent == 1000
        assert stats.outstanding_dues == 500

    @pytest.mark.asyncio
    async def test_generate_report(self, facade):
        assert await facade.generate_report() == "**Overall Summary**: All good."

    @pytest.mark.asyncio
    async def test_generate_report_falls_back_on_failure(self, facade, report_handler):
        report_handler["handler"] = lambda request: httpx.Response(500, json={"error": "boom"})

        assert await facade.generate_report() == REPORT_FALLBACK_MESSAGE

    @pytest.mark.asyncio
    async def test_request_report_propagates_failure(self, facade, report_handler):
        report_handler["handler"] = lambda request: httpx.Response(500)

        with pytest.raises(ExternalServiceFailure):
            await facade.request_report()

    @pytest.mark.asyncio
    async def test_no_report_generator(self, store, resolver):
        facade = DormitoryFacade(store, resolver)

        assert await facade.generate_report() == REPORT_FALLBACK_MESSAGE


@pytest.mark.unit
class TestFromConfig:
    @pytest.mark.asyncio
    async def test_builds_seeded_store(self):
        facade = DormitoryFacade.from_config(DormConfig(total_rooms=4, max_tenants_per_room=3))

        rooms = await facade.get_rooms()

        assert len(rooms) == 4
        assert len(await facade.get_announcements()) == 2
        assert facade.store.max_tenants_per_room == 3

    @pytest.mark.asyncio
    async def test_simulated_latency(self):
        facade = DormitoryFacade.from_config(
            DormConfig(seed_demo_data=False, simulated_latency_ms=20)
        )

        started = time.monotonic()
        await facade.get_rooms()
        await facade.get_audit_logs()

        assert time.monotonic() - started >= 0.03

    @pytest.mark.asyncio
    async def test_dashboard_stats_load_snapshot_on_first_use(self):
        facade = DormitoryFacade.from_config(DormConfig())

        stats = await facade.dashboard_stats()

        assert stats.total_tenants == 3
        assert stats.open_maintenance_requests == 2

    @pytest.mark.asyncio
    async def test_report_on_fresh_facade_sees_seeded_tenants(self):
        prompts = []

        def handler(request: httpx.Request) -> httpx.Response:
            prompts.append(request.content.decode("utf-8"))
            return httpx.Response(
                200, json={"candidates": [{"content": {"parts": [{"text": "ok"}]}}]}
            )

        generator = ReportGenerator(
            api_key="test-key", model="test-model", transport=httpx.MockTransport(handler)
        )
        facade = DormitoryFacade.from_config(DormConfig(), report_generator=generator)

        assert await facade.generate_report() == "ok"
        assert "- Current Tenants: 3" in prompts[0]
