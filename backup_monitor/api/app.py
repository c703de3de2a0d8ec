"""FastAPI application for backup-monitor."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from backup_monitor.config import MonitorConfig
from backup_monitor._storage import StorageFactory
from .config import settings
from .routers import backups, health

# Configure backup-monitor logger with app-managed pattern
# This ensures INFO logs are visible regardless of uvicorn's logging config
import sys
import os

monitor_logger = logging.getLogger("backup-monitor")
monitor_logger.setLevel(logging.INFO)

# App-managed pattern: attach our own handler and don't propagate
monitor_logger.propagate = False

# Clear any existing handlers to avoid duplicates
monitor_logger.handlers.clear()

console_handler = logging.StreamHandler(sys.stdout)
console_handler.setLevel(logging.INFO)

formatter = logging.Formatter(
    '%(asctime)s - [%(name)s] - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
console_handler.setFormatter(formatter)
monitor_logger.addHandler(console_handler)

# Optional: Allow disabling app-managed logging via env var for production
if os.getenv("DISABLE_APP_LOGGING", "false").lower() == "true":
    monitor_logger.handlers.clear()
    monitor_logger.propagate = True  # Fall back to server-managed pattern

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage backup bucket client lifecycle."""
    config = MonitorConfig.from_env()
    app.state.monitor_config = config

    if config.storage.is_configured:
        app.state.storage = StorageFactory.create(config.storage)
        logger.info(f"Backup storage initialized: {config.storage.backend} ({config.storage.bucket or 'in-memory'})")
    else:
        app.state.storage = None
        logger.warning("BACKUP_BUCKET not configured - backup health endpoint will return 503")

    yield

    logger.info("Shutting down backup-monitor...")
    if app.state.storage is not None:
        await app.state.storage.close()


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        lifespan=lifespan,
        docs_url=f"{settings.api_prefix}/docs",
        openapi_url=f"{settings.api_prefix}/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(backups.router, prefix=settings.api_prefix)
    app.include_router(health.router, prefix=settings.api_prefix)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "name": settings.api_title,
            "version": settings.api_version,
            "docs": f"{settings.api_prefix}/docs"
        }

    return app


# Create default app instance
app = create_app()
