"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from notify_api import __version__
from notify_api.api.routes import health_router, notifications_router
from notify_api.core.config import get_settings
from notify_api.core.errors import NotificationApiError
from notify_api.core.logging import configure_logging, structured_log
from notify_api.core.telemetry import init_telemetry, instrument_fastapi


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: configure logging and telemetry."""
    settings = get_settings()
    configure_logging(settings.log_level)
    init_telemetry(project_id=settings.gcp_project_id)
    yield


app = FastAPI(
    title="Realtime Notification API",
    description="Firebase Realtime Database notification system",
    version=__version__,
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins(),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(notifications_router)

instrument_fastapi(app)


@app.exception_handler(NotificationApiError)
async def notification_error_handler(request: Request, exc: NotificationApiError) -> JSONResponse:
    """Map custom exceptions to JSON response."""
    if exc.status_code >= 500:
        structured_log(
            "ERROR",
            exc.message,
            operation=f"{request.method} {request.url.path}",
            error={"type": exc.error_code, "message": exc.message},
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.error_code,
            "message": exc.message,
            "details": exc.details,
        },
    )


@app.get("/")
async def root() -> dict:
    """Service info."""
    return {"service": "notify-api", "docs": "/docs"}
