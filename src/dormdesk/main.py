"""Main FastAPI application for DormDesk."""

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from . import __version__
from .api import announcements, audit, auth, maintenance, reports, rooms
from .api.dependencies import AppContainer, get_container
from .api.middleware import ProblemDetailsMiddleware, register_exception_handlers
from .api.schemas import HealthResponse
from .config import get_config, validate_config
from .utils.logging_config import get_logger, initialize_logging

# Create FastAPI app
app = FastAPI(
    title="DormDesk",
    description="Dormitory management backend: rooms, tenants, billing, maintenance and announcements",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(ProblemDetailsMiddleware)
register_exception_handlers(app)

config = get_config()
allowed_origins = list(config.server.cors_origins)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
)

# Register API routers
app.include_router(auth.router)
app.include_router(rooms.router)
app.include_router(maintenance.router)
app.include_router(announcements.router)
app.include_router(audit.router)
app.include_router(reports.router)


@app.on_event("startup")
async def startup_event():
    """Set up logging and report configuration problems."""
    initialize_logging(debug=config.server.debug)
    logger = get_logger("main")
    for issue in validate_config():
        logger.warning(f"Configuration: {issue}")
    container = get_container()
    logger.info(
        f"DormDesk {__version__} ready: {container.store.total_rooms} rooms, "
        f"{container.store.max_tenants_per_room} tenants per room"
    )


@app.get("/", include_in_schema=False)
async def root():
    return RedirectResponse(url="/docs")


@app.get("/health", response_model=HealthResponse)
async def health_check(container: AppContainer = Depends(get_container)) -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        service="dormdesk",
        version=__version__,
        rooms=container.store.total_rooms,
        capacity_per_room=container.store.max_tenants_per_room,
    )
