"""Dependency injection for FastAPI."""

from fastapi import Request

from backup_monitor.config import MonitorConfig
from backup_monitor._storage import BaseObjectStorage
from .exceptions import BackupBucketNotConfiguredError


async def get_monitor_config(request: Request) -> MonitorConfig:
    """Get monitor configuration from app state, falling back to defaults."""
    config = getattr(request.app.state, "monitor_config", None)
    return config if config is not None else MonitorConfig()


async def get_storage(request: Request) -> BaseObjectStorage:
    """Get the backup bucket client from app state."""
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        raise BackupBucketNotConfiguredError()
    return storage
