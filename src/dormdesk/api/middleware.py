"""Error translation for the HTTP API (RFC 9457 Problem Details)."""

from typing import Callable, Optional

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from ..domain.errors import (
    CapacityExceeded,
    DormDeskError,
    ExternalServiceFailure,
    InvalidInput,
    NotFound,
)
from ..utils.logging_config import get_logger, log_exception

logger = get_logger("api")

DEFAULT_TITLES = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    409: "Conflict",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
    502: "Bad Gateway",
    503: "Service Unavailable",
}

# Domain error -> (status code, title)
DOMAIN_ERROR_STATUS = {
    CapacityExceeded: (status.HTTP_409_CONFLICT, "Room Full"),
    NotFound: (status.HTTP_404_NOT_FOUND, "Not Found"),
    InvalidInput: (status.HTTP_422_UNPROCESSABLE_ENTITY, "Invalid Input"),
    ExternalServiceFailure: (status.HTTP_502_BAD_GATEWAY, "Report Generation Failed"),
}


class ProblemDetailsException(HTTPException):
    """HTTPException that carries RFC 9457 Problem Details fields."""

    def __init__(
        self,
        status_code: int,
        title: str,
        detail: Optional[str] = None,
        type_uri: Optional[str] = None,
        instance: Optional[str] = None,
        headers: Optional[dict] = None,
        **extra_fields,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.title = title
        self.type_uri = type_uri or f"https://httpstatuses.com/{status_code}"
        self.instance = instance
        self.extra_fields = extra_fields


def problem_response(
    status_code: int,
    title: str,
    detail: Optional[str] = None,
    type_uri: Optional[str] = None,
    instance: Optional[str] = None,
    headers: Optional[dict] = None,
    **extra_fields,
) -> JSONResponse:
    """Create a JSON response in RFC 9457 Problem Details format."""
    problem = {
        "type": type_uri or f"https://httpstatuses.com/{status_code}",
        "title": title,
        "status": status_code,
    }
    if detail:
        problem["detail"] = detail
    if instance:
        problem["instance"] = instance
    problem.update(extra_fields)

    return JSONResponse(
        status_code=status_code,
        content=problem,
        media_type="application/problem+json",
        headers=headers,
    )


def domain_error_status(exc: DormDeskError) -> tuple:
    for error_type, result in DOMAIN_ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return result
    return status.HTTP_400_BAD_REQUEST, "Bad Request"


async def _handle_problem(request: Request, exc: ProblemDetailsException) -> JSONResponse:
    return problem_response(
        status_code=exc.status_code,
        title=exc.title,
        detail=exc.detail,
        type_uri=exc.type_uri,
        instance=exc.instance or str(request.url),
        headers=exc.headers,
        **exc.extra_fields,
    )


async def _handle_http(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return problem_response(
        status_code=exc.status_code,
        title=DEFAULT_TITLES.get(exc.status_code, "HTTP Error"),
        detail=exc.detail if isinstance(exc.detail, str) else None,
        instance=str(request.url),
        headers=getattr(exc, "headers", None),
    )


async def _handle_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    return problem_response(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        title="Validation Error",
        detail="Request validation failed",
        instance=str(request.url),
        errors=[
            {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
            for error in exc.errors()
        ],
    )


async def _handle_domain(request: Request, exc: DormDeskError) -> JSONResponse:
    status_code, title = domain_error_status(exc)
    if status_code >= 500:
        log_exception("api", exc, {"path": request.url.path})
    else:
        logger.info(f"{request.method} {request.url.path} -> {status_code}: {exc}")
    return problem_response(
        status_code=status_code,
        title=title,
        detail=str(exc),
        instance=str(request.url),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install Problem Details handlers for HTTP and domain errors."""
    app.add_exception_handler(ProblemDetailsException, _handle_problem)
    app.add_exception_handler(StarletteHTTPException, _handle_http)
    app.add_exception_handler(RequestValidationError, _handle_validation)
    app.add_exception_handler(DormDeskError, _handle_domain)


class ProblemDetailsMiddleware(BaseHTTPMiddleware):
    """Turns unhandled exceptions into a 500 Problem Details response."""

    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            log_exception("api", exc, {"method": request.method, "path": request.url.path})
            return problem_response(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                title="Internal Server Error",
                detail="An unexpected error occurred",
                instance=str(request.url),
            )
