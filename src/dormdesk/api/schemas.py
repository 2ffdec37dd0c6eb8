"""Pydantic models for API request/response validation."""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field  # type: ignore

from ..core.enums import SessionRole
from ..domain.models import Tenant


class BaseRequest(BaseModel):
    """Request models accept both camelCase wire names and snake_case."""

    model_config = ConfigDict(populate_by_name=True)


class BaseResponse(BaseModel):
    """Base response model with common fields."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class ProblemDetails(BaseModel):
    """RFC 9457 Problem Details for HTTP APIs."""

    type: str = Field(description="A URI reference that identifies the problem type")
    title: str = Field(description="A short, human-readable summary of the problem type")
    status: int = Field(description="The HTTP status code")
    detail: Optional[str] = Field(
        None, description="A human-readable explanation specific to this occurrence"
    )
    instance: Optional[str] = Field(
        None, description="A URI reference that identifies the specific occurrence"
    )


# Authentication schemas
class AdminLoginRequest(BaseRequest):
    """Schema for admin login."""

    email: str = Field(description="Admin email address", max_length=255)
    password: str = Field(description="Admin password", max_length=255)


class TenantLoginRequest(BaseRequest):
    """Schema for tenant lookup login."""

    name: str = Field(description="Tenant name (case-insensitive)", min_length=1, max_length=100)
    room_id: Union[int, str] = Field(alias="roomId", description="Room number")


class SessionResponse(BaseResponse):
    """Schema for a resolved session."""

    role: SessionRole
    tenant: Optional[Tenant] = None


class LoginResponse(SessionResponse):
    """Schema for a successful login."""

    session_token: str = Field(alias="sessionToken", description="Bearer token for later requests")


# Tenant schemas
class TenantCreate(BaseRequest):
    """Schema for adding a tenant to a room."""

    name: str = Field(description="Tenant name", min_length=1, max_length=100)
    rent: float = Field(gt=0, description="Monthly rent")


# Maintenance schemas
class MaintenanceCreate(BaseRequest):
    """Schema for filing a maintenance request."""

    room_id: int = Field(alias="roomId", ge=1, description="Room the request is for")
    description: str = Field(min_length=1, max_length=2000)


# Announcement schemas
class AnnouncementCreate(BaseRequest):
    """Schema for publishing an announcement."""

    title: str = Field(min_length=1, max_length=200)
    content: str = Field(default="", max_length=5000)


# Report schemas
class DashboardStatsResponse(BaseResponse):
    """Aggregate dashboard figures."""

    total_tenants: int = Field(alias="totalTenants")
    occupancy_percentage: int = Field(alias="occupancyPercentage")
    total_monthly_revenue: float = Field(alias="totalMonthlyRevenue")
    collected_rent: float = Field(alias="collectedRent")
    outstanding_dues: float = Field(alias="outstandingDues")
    open_maintenance_requests: int = Field(alias="openMaintenanceRequests")


class ReportResponse(BaseModel):
    """Narrative report text."""

    report: str


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    rooms: int
    capacity_per_room: int = Field(alias="capacityPerRoom")

    model_config = ConfigDict(populate_by_name=True)

