"""Authentication API endpoints."""

from fastapi import APIRouter, Depends, Response, status

from ..auth.session import Session
from .dependencies import AppContainer, get_bearer_token, get_container, get_current_session
from .middleware import ProblemDetailsException
from .schemas import (
    AdminLoginRequest,
    LoginResponse,
    ProblemDetails,
    SessionResponse,
    TenantLoginRequest,
)

router = APIRouter(tags=["auth"])


@router.post(
    "/v1/auth/admin/login",
    response_model=LoginResponse,
    responses={
        200: {"description": "Login successful"},
        401: {"model": ProblemDetails, "description": "Invalid credentials"},
    },
)
async def admin_login(
    login_data: AdminLoginRequest,
    container: AppContainer = Depends(get_container),
) -> LoginResponse:
    """
    Log in as the dormitory admin.

    Every attempt is written to the audit log, successful or not.
    """
    session = await container.resolver.resolve_admin(login_data.email, login_data.password)
    if session is None:
        raise ProblemDetailsException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            title="Unauthorized",
            detail="Invalid email or password",
        )

    token = container.sessions.issue(session)
    return LoginResponse(role=session.role, tenant=None, session_token=token)


@router.post(
    "/v1/auth/tenant/login",
    response_model=LoginResponse,
    responses={
        200: {"description": "Login successful"},
        401: {"model": ProblemDetails, "description": "No tenant with that name in that room"},
    },
)
async def tenant_login(
    login_data: TenantLoginRequest,
    container: AppContainer = Depends(get_container),
) -> LoginResponse:
    """
    Log in as a tenant by name and room number.

    The name match ignores case and surrounding whitespace.
    """
    session = await container.resolver.resolve_tenant(login_data.name, login_data.room_id)
    if session is None:
        raise ProblemDetailsException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            title="Unauthorized",
            detail="No tenant found with that name and room number",
        )

    token = container.sessions.issue(session)
    return LoginResponse(role=session.role, tenant=session.tenant, session_token=token)


@router.post("/v1/auth/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    token: str = Depends(get_bearer_token),
    _session: Session = Depends(get_current_session),
    container: AppContainer = Depends(get_container),
) -> Response:
    """Discard the current session token."""
    container.sessions.revoke(token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/v1/auth/me", response_model=SessionResponse)
async def current_session(session: Session = Depends(get_current_session)) -> SessionResponse:
    """Return the role (and tenant profile) behind the bearer token."""
    return SessionResponse(role=session.role, tenant=session.tenant)
