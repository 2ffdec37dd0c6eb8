"""Dashboard and report API endpoints."""

from fastapi import APIRouter, Depends

from ..auth.session import Session
from .dependencies import AppContainer, get_container, require_admin
from .schemas import DashboardStatsResponse, ProblemDetails, ReportResponse

router = APIRouter(tags=["reports"])


@router.get("/v1/reports/dashboard", response_model=DashboardStatsResponse)
async def dashboard(
    _admin: Session = Depends(require_admin),
    container: AppContainer = Depends(get_container),
) -> DashboardStatsResponse:
    """Occupancy, revenue and open-request figures for the admin dashboard."""
    await container.facade.refresh()
    stats = await container.facade.dashboard_stats()
    return DashboardStatsResponse(**stats.to_dict())


@router.post(
    "/v1/reports/summary",
    response_model=ReportResponse,
    responses={
        200: {"description": "Narrative report generated"},
        403: {"model": ProblemDetails, "description": "Admin access required"},
        502: {"model": ProblemDetails, "description": "Report service failed"},
    },
)
async def generate_summary(
    _admin: Session = Depends(require_admin),
    container: AppContainer = Depends(get_container),
) -> ReportResponse:
    """
    Generate a narrative status report from the current data.

    Failures of the report service are returned as 502 rather than the
    fallback text of ``DormitoryFacade.generate_report``.
    """
    await container.facade.refresh()
    report = await container.facade.request_report()
    return ReportResponse(report=report)
