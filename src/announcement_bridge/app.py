"""FastAPI application with lifespan, version endpoint and error envelope."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from announcement_bridge.announcement.router import router as announcement_router
from announcement_bridge.config import get_settings
from announcement_bridge.errors import register_error_handlers
from announcement_bridge.logging_config import configure_logging

VERSION = "1.4.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: configure logging and load config on startup."""
    settings = get_settings()
    configure_logging(settings.log_level)
    app.state.settings = settings
    yield


app = FastAPI(
    title="Announcement Bridge",
    version=VERSION,
    lifespan=lifespan,
)
register_error_handlers(app)
app.include_router(announcement_router)


@app.get("/version")
async def version():
    """Service version and liveness."""
    return {
        "version": VERSION,
        "status": "Running",
    }
