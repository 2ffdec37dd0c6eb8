"""Room and tenant management API endpoints."""

from typing import List

from fastapi import APIRouter, Depends, Path, Response, status

from ..auth.session import Session
from ..domain.models import Room, Tenant
from .dependencies import AppContainer, get_container, require_admin
from .schemas import ProblemDetails, TenantCreate

router = APIRouter(tags=["rooms"])


@router.get(
    "/v1/rooms",
    response_model=List[Room],
    responses={
        200: {"description": "Rooms with their tenants, in room order"},
        401: {"model": ProblemDetails, "description": "Authentication required"},
        403: {"model": ProblemDetails, "description": "Admin access required"},
    },
)
async def list_rooms(
    _admin: Session = Depends(require_admin),
    container: AppContainer = Depends(get_container),
) -> List[Room]:
    """List every room and its current tenants."""
    return await container.facade.get_rooms()


@router.get("/v1/rooms/available", response_model=List[Room])
async def list_available_rooms(
    _admin: Session = Depends(require_admin),
    container: AppContainer = Depends(get_container),
) -> List[Room]:
    """List rooms that still have a free place."""
    return await container.store.get_available_rooms()


@router.post(
    "/v1/rooms/{room_id}/tenants",
    response_model=Tenant,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Tenant added with billing status Due"},
        409: {"model": ProblemDetails, "description": "Room is full or does not exist"},
        422: {"model": ProblemDetails, "description": "Invalid name or rent"},
    },
)
async def add_tenant(
    tenant_data: TenantCreate,
    room_id: int = Path(description="Room number"),
    _admin: Session = Depends(require_admin),
    container: AppContainer = Depends(get_container),
) -> Tenant:
    """
    Add a tenant to a room.

    The room must exist and have fewer tenants than the per-room limit.
    """
    return await container.facade.add_tenant(room_id, tenant_data.name, tenant_data.rent)


@router.delete("/v1/tenants/{tenant_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_tenant(
    tenant_id: str,
    _admin: Session = Depends(require_admin),
    container: AppContainer = Depends(get_container),
) -> Response:
    """Remove a tenant. Removing an unknown tenant succeeds and changes nothing."""
    await container.facade.remove_tenant(tenant_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/v1/tenants/{tenant_id}/billing/toggle", status_code=status.HTTP_204_NO_CONTENT)
async def toggle_billing(
    tenant_id: str,
    _admin: Session = Depends(require_admin),
    container: AppContainer = Depends(get_container),
) -> Response:
    """Flip a tenant's billing status between Due and Paid."""
    await container.facade.toggle_tenant_billing(tenant_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
