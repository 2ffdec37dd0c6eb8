"""Maintenance request API endpoints."""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from ..auth.session import Session
from ..domain.models import MaintenanceRequest, MaintenanceUpdate
from .dependencies import AppContainer, get_container, get_current_session, require_admin
from .middleware import ProblemDetailsException
from .schemas import MaintenanceCreate, ProblemDetails

router = APIRouter(tags=["maintenance"])


@router.get(
    "/v1/maintenance",
    response_model=List[MaintenanceRequest],
    responses={
        200: {"description": "Requests, newest first"},
        401: {"model": ProblemDetails, "description": "Authentication required"},
    },
)
async def list_requests(
    session: Session = Depends(get_current_session),
    container: AppContainer = Depends(get_container),
) -> List[MaintenanceRequest]:
    """
    List maintenance requests.

    The admin sees every request; a tenant sees only the requests for the
    room they live in.
    """
    if session.is_admin:
        return await container.facade.get_maintenance_requests()
    return await container.store.get_requests_for_room(session.tenant.room_id)


@router.post(
    "/v1/maintenance",
    response_model=MaintenanceRequest,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Request filed as Reported with Medium priority"},
        401: {"model": ProblemDetails, "description": "Authentication required"},
        403: {"model": ProblemDetails, "description": "Tenants may only report for their own room"},
        422: {"model": ProblemDetails, "description": "Blank description or unknown room"},
    },
)
async def file_request(
    request_data: MaintenanceCreate,
    session: Session = Depends(get_current_session),
    container: AppContainer = Depends(get_container),
) -> MaintenanceRequest:
    """File a new maintenance request for a room."""
    if not session.is_admin and request_data.room_id != session.tenant.room_id:
        raise ProblemDetailsException(
            status_code=status.HTTP_403_FORBIDDEN,
            title="Forbidden",
            detail="Tenants can only report issues for their own room",
        )

    return await container.facade.add_maintenance_request(
        request_data.room_id, request_data.description, actor=session.actor
    )


@router.patch(
    "/v1/maintenance/{request_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        204: {"description": "Update applied"},
        404: {"model": ProblemDetails, "description": "Request not found"},
        422: {"model": ProblemDetails, "description": "Unknown field or invalid value"},
    },
)
async def update_request(
    request_id: str,
    update: MaintenanceUpdate,
    _admin: Session = Depends(require_admin),
    container: AppContainer = Depends(get_container),
) -> Response:
    """
    Partially update a maintenance request.

    Any of ``status``, ``priority`` and ``assignedTo`` may be supplied; fields
    that are left out keep their current value.
    """
    await container.facade.update_maintenance_request(request_id, update)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
