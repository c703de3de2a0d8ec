"""API routers."""

from . import backups, health

__all__ = ["backups", "health"]
