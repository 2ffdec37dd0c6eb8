"""
Pure reporting functions over a snapshot of tenants and maintenance requests.

Nothing here touches the store: callers pass in the collections they already
hold, so the results are deterministic for a given snapshot.
"""

import math
from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, List, Sequence, Union

from ..core.enums import BillingStatus, MaintenanceStatus
from .models import MaintenanceRequest, Tenant

Number = Union[int, float]


@dataclass(frozen=True)
class DashboardStats:
    """Aggregate figures shown on the admin dashboard."""

    total_tenants: int
    occupancy_percentage: int
    total_monthly_revenue: float
    collected_rent: float
    outstanding_dues: float
    open_maintenance_requests: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def total_capacity(total_rooms: int, max_tenants_per_room: int) -> int:
    """Number of beds across the dormitory."""
    return max(total_rooms, 0) * max(max_tenants_per_room, 0)


def occupancy_percentage(tenant_count: int, capacity: int) -> int:
    """Occupancy rounded to the nearest whole percent, halves rounding up."""
    if capacity <= 0:
        return 0
    return int(math.floor(100 * tenant_count / capacity + 0.5))


def open_requests(requests: Iterable[MaintenanceRequest]) -> List[MaintenanceRequest]:
    return [r for r in requests if r.status != MaintenanceStatus.COMPLETED]


def due_tenants(tenants: Iterable[Tenant]) -> List[Tenant]:
    return [t for t in tenants if t.billing_status == BillingStatus.DUE]


def compute_dashboard_stats(
    tenants: Sequence[Tenant],
    requests: Sequence[MaintenanceRequest],
    total_rooms: int,
    max_tenants_per_room: int,
) -> DashboardStats:
    """Compute dashboard statistics.

    Args:
        tenants: Every tenant across all rooms
        requests: Every maintenance request
        total_rooms: Configured number of rooms
        max_tenants_per_room: Configured room capacity

    Returns:
        DashboardStats for the given snapshot
    """
    revenue = sum(t.rent for t in tenants)
    collected = sum(t.rent for t in tenants if t.billing_status == BillingStatus.PAID)

    return DashboardStats(
        total_tenants=len(tenants),
        occupancy_percentage=occupancy_percentage(
            len(tenants), total_capacity(total_rooms, max_tenants_per_room)
        ),
        total_monthly_revenue=revenue,
        collected_rent=collected,
        outstanding_dues=revenue - collected,
        open_maintenance_requests=len(open_requests(requests)),
    )


def format_amount(value: Number) -> str:
    """Render a currency amount without a trailing ``.0`` for whole values."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}"


def build_report_prompt(
    tenants: Sequence[Tenant],
    requests: Sequence[MaintenanceRequest],
    total_rooms: int,
    max_tenants_per_room: int,
) -> str:
    """Build the text prompt for the narrative monthly report."""
    capacity = total_capacity(total_rooms, max_tenants_per_room)
    rate = (len(tenants) / capacity * 100) if capacity > 0 else 0.0
    collected = sum(t.rent for t in tenants if t.billing_status == BillingStatus.PAID)
    due = due_tenants(tenants)
    still_open = open_requests(requests)

    due_details = ", ".join(f"{t.name} (${format_amount(t.rent)})" for t in due) or "None"
    open_details = "; ".join(f"Room {r.room_id}: {r.description}" for r in still_open) or "None"

    lines = [
        "Dormitory Status:",
        f"- Total Rooms: {total_rooms}",
        f"- Total Capacity: {capacity}",
        f"- Current Tenants: {len(tenants)}",
        f"- Occupancy Rate: {rate:.1f}%",
        f"- Total Collected Rent This Month: ${format_amount(collected)}",
        f"- Tenants with outstanding payments: {len(due)}",
        f"- Details of tenants with due payments: {due_details}",
        f"- Open Maintenance Requests: {len(still_open)}",
        f"- Details of open requests: {open_details}",
        "",
        "Based on the data above, please generate a concise and professional monthly "
        "summary report for the dormitory manager.",
        "Structure the report with the following sections:",
        "1. **Overall Summary**: A brief overview of the key metrics (occupancy, finances).",
        "2. **Financial Status**: Comment on the income and outstanding dues.",
        "3. **Maintenance Report**: Summarize the current maintenance load and mention "
        "any critical open issues.",
        "4. **Action Items**: Suggest actions for the manager, like following up with "
        "tenants who have due payments and prioritizing urgent maintenance.",
    ]
    return "\n".join(lines)
