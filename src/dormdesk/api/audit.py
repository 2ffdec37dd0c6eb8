"""Audit log API endpoint."""

from typing import List

from fastapi import APIRouter, Depends

from ..auth.session import Session
from ..domain.models import AuditLogEntry
from .dependencies import AppContainer, get_container, require_admin
from .schemas import ProblemDetails

router = APIRouter(tags=["audit"])


@router.get(
    "/v1/audit-logs",
    response_model=List[AuditLogEntry],
    responses={
        200: {"description": "Audit entries, newest first"},
        403: {"model": ProblemDetails, "description": "Admin access required"},
    },
)
async def list_audit_logs(
    _admin: Session = Depends(require_admin),
    container: AppContainer = Depends(get_container),
) -> List[AuditLogEntry]:
    """Return the full audit trail. Entries are never edited or removed."""
    return await container.facade.get_audit_logs()
