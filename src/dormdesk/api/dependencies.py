"""Dependency injection for the HTTP API."""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..auth.session import Session, SessionResolver
from ..auth.tokens import SessionRegistry
from ..config import DormDeskConfig, get_config
from ..facade import DormitoryFacade
from ..services.report_generator import ReportGenerator
from ..store.domain_store import DomainStore
from .middleware import ProblemDetailsException

security = HTTPBearer(auto_error=False)


@dataclass
class AppContainer:
    """Everything a request handler needs, built once per process."""

    store: DomainStore
    resolver: SessionResolver
    facade: DormitoryFacade
    sessions: SessionRegistry

    @classmethod
    def from_config(
        cls,
        config: DormDeskConfig,
        store: Optional[DomainStore] = None,
        report_generator: Optional[ReportGenerator] = None,
    ) -> "AppContainer":
        store = store or DomainStore.from_config(config.dorm)
        report_generator = report_generator or ReportGenerator.from_config(config.report)
        facade = DormitoryFacade.from_config(
            config.dorm, store=store, report_generator=report_generator
        )
        return cls(
            store=store,
            resolver=facade.resolver,
            facade=facade,
            sessions=SessionRegistry(),
        )


_container: Optional[AppContainer] = None


def get_container() -> AppContainer:
    """Return the process-wide container, creating it from config on first use."""
    global _container
    if _container is None:
        _container = AppContainer.from_config(get_config())
    return _container


def reset_container() -> None:
    global _container
    _container = None


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    if credentials is None or not credentials.credentials:
        raise ProblemDetailsException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            title="Unauthorized",
            detail="Login required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return credentials.credentials


async def get_current_session(
    token: str = Depends(get_bearer_token),
    container: AppContainer = Depends(get_container),
) -> Session:
    """
    Get the session behind the request's bearer token.

    Use in route handlers that any logged-in user may call. A tenant session
    is checked against the store on every request; once the tenant has been
    removed the token is revoked and the request is rejected.
    """
    session = container.sessions.get(token)
    if session is not None and not session.is_admin:
        tenant = await container.store.get_tenant(session.tenant.id)
        if tenant is None:
            container.sessions.revoke(token)
            session = None
        else:
            session = Session.for_tenant(tenant)
    if session is None:
        raise ProblemDetailsException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            title="Unauthorized",
            detail="Invalid or expired session",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return session


def require_admin(session: Session = Depends(get_current_session)) -> Session:
    """Restrict a route to the admin session."""
    if not session.is_admin:
        raise ProblemDetailsException(
            status_code=status.HTTP_403_FORBIDDEN,
            title="Forbidden",
            detail="Admin access required",
        )
    return session
