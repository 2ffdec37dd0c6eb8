"""Unit tests for dashboard statistics and the report prompt."""

import pytest

from dormdesk.core.enums import BillingStatus, MaintenanceStatus
from dormdesk.domain.models import MaintenanceRequest, Tenant
from dormdesk.domain.reporting import (
    build_report_prompt,
    compute_dashboard_stats,
    format_amount,
    occupancy_percentage,
)


def make_tenant(name, rent, status=BillingStatus.DUE, room_id=1):
    return Tenant(id=f"tenant-{name}", name=name, rent=rent, billing_status=status, room_id=room_id)


def make_request(room_id, description, status=MaintenanceStatus.REPORTED):
    return MaintenanceRequest(
        id=f"req-{room_id}-{description}", room_id=room_id, description=description, status=status
    )


@pytest.mark.unit
class TestDashboardStats:
    """compute_dashboard_stats over plain lists."""

    def test_figures(self):
        tenants = [
            make_tenant("John", 10500, BillingStatus.PAID),
            make_tenant("Jane", 10500),
            make_tenant("Peter", 12000, room_id=3),
        ]
        requests = [
            make_request(3, "Leak"),
            make_request(8, "Wi-Fi", MaintenanceStatus.IN_PROGRESS),
            make_request(1, "Bulb", MaintenanceStatus.COMPLETED),
        ]

        stats = compute_dashboard_stats(tenants, requests, total_rooms=10, max_tenants_per_room=2)

        assert stats.total_tenants == 3
        assert stats.occupancy_percentage == 15
        assert stats.total_monthly_revenue == 33000
        assert stats.collected_rent == 10500
        assert stats.outstanding_dues == 22500
        assert stats.open_maintenance_requests == 2

    def test_quarter_occupancy(self):
        tenants = [make_tenant(f"T{i}", 100, room_id=i + 1) for i in range(5)]

        stats = compute_dashboard_stats(tenants, [], total_rooms=10, max_tenants_per_room=2)

        assert stats.occupancy_percentage == 25

    def test_revenue_splits_into_collected_and_due(self):
        tenants = [
            make_tenant("A", 300, BillingStatus.PAID),
            make_tenant("B", 450.5),
        ]

        stats = compute_dashboard_stats(tenants, [], total_rooms=2, max_tenants_per_room=2)

        assert stats.collected_rent + stats.outstanding_dues == stats.total_monthly_revenue

    def test_empty_dorm(self):
        stats = compute_dashboard_stats([], [], total_rooms=10, max_tenants_per_room=2)

        assert stats.to_dict() == {
            "total_tenants": 0,
            "occupancy_percentage": 0,
            "total_monthly_revenue": 0,
            "collected_rent": 0,
            "outstanding_dues": 0,
            "open_maintenance_requests": 0,
        }


@pytest.mark.unit
class TestOccupancy:
    """Rounding of the occupancy percentage."""

    @pytest.mark.parametrize(
        "tenants,capacity,expected",
        [
            (1, 3, 33),
            (2, 3, 67),
            (1, 8, 13),  # 12.5 rounds up
            (20, 20, 100),
        ],
    )
    def test_rounding(self, tenants, capacity, expected):
        assert occupancy_percentage(tenants, capacity) == expected

    def test_zero_capacity(self):
        assert occupancy_percentage(0, 0) == 0


@pytest.mark.unit
class TestReportPrompt:
    """Prompt text sent to the report service."""

    def test_prompt_contains_figures_and_details(self):
        tenants = [
            make_tenant("John Doe", 10500, BillingStatus.PAID),
            make_tenant("Jane Smith", 10500),
        ]
        requests = [
            make_request(3, "Leaky faucet"),
            make_request(1, "Bulb", MaintenanceStatus.COMPLETED),
        ]

        prompt = build_report_prompt(tenants, requests, total_rooms=10, max_tenants_per_room=2)

        assert "- Total Rooms: 10" in prompt
        assert "- Total Capacity: 20" in prompt
        assert "- Current Tenants: 2" in prompt
        assert "- Occupancy Rate: 10.0%" in prompt
        assert "- Total Collected Rent This Month: $10500" in prompt
        assert "- Tenants with outstanding payments: 1" in prompt
        assert "Jane Smith ($10500)" in prompt
        assert "- Open Maintenance Requests: 1" in prompt
        assert "Room 3: Leaky faucet" in prompt
        assert "Bulb" not in prompt
        assert "**Action Items**" in prompt

    def test_prompt_without_dues_or_requests(self):
        prompt = build_report_prompt([], [], total_rooms=10, max_tenants_per_room=2)

        assert "- Details of tenants with due payments: None" in prompt
        assert "- Details of open requests: None" in prompt

    def test_format_amount(self):
        assert format_amount(10500.0) == "10500"
        assert format_amount(99.5) == "99.50"
