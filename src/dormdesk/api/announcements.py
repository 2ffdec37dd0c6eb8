"""Announcement API endpoints."""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from ..auth.session import Session
from ..domain.models import Announcement
from .dependencies import AppContainer, get_container, get_current_session, require_admin
from .schemas import AnnouncementCreate, ProblemDetails

router = APIRouter(tags=["announcements"])


@router.get("/v1/announcements", response_model=List[Announcement])
async def list_announcements(
    _session: Session = Depends(get_current_session),
    container: AppContainer = Depends(get_container),
) -> List[Announcement]:
    """List announcements, newest first."""
    return await container.facade.get_announcements()


@router.post(
    "/v1/announcements",
    response_model=Announcement,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Announcement published"},
        403: {"model": ProblemDetails, "description": "Admin access required"},
        422: {"model": ProblemDetails, "description": "Blank title"},
    },
)
async def create_announcement(
    announcement_data: AnnouncementCreate,
    _admin: Session = Depends(require_admin),
    container: AppContainer = Depends(get_container),
) -> Announcement:
    return await container.facade.create_announcement(
        announcement_data.title, announcement_data.content
    )


@router.delete("/v1/announcements/{announcement_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_announcement(
    announcement_id: str,
    _admin: Session = Depends(require_admin),
    container: AppContainer = Depends(get_container),
) -> Response:
    """Delete an announcement. Unknown ids are ignored."""
    await container.facade.delete_announcement(announcement_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
