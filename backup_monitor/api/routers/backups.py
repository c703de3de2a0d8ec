"""Backup health endpoints."""

import dataclasses
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from backup_monitor.backup import check_backup_health, send_backup_alert
from backup_monitor.backup.models import BackupHealthResponse
from backup_monitor.config import HealthCheckConfig, MonitorConfig
from backup_monitor._storage import BaseObjectStorage
from backup_monitor._utils import logger
from ..dependencies import get_monitor_config, get_storage
from ..exceptions import InvalidThresholdsError

router = APIRouter(prefix="/backups", tags=["backups"])


def resolve_health_config(
    base: HealthCheckConfig,
    warning_age_hours: Optional[float] = None,
    critical_age_hours: Optional[float] = None,
    min_expected_routes: Optional[int] = None,
) -> HealthCheckConfig:
    """Apply per-request threshold overrides on top of the configured defaults."""
    overrides = {
        name: value
        for name, value in (
            ("warning_age_hours", warning_age_hours),
            ("critical_age_hours", critical_age_hours),
            ("min_expected_routes", min_expected_routes),
        )
        if value is not None
    }
    if not overrides:
        return base
    if (
        warning_age_hours is not None
        and critical_age_hours is not None
        and critical_age_hours <= warning_age_hours
    ):
        raise InvalidThresholdsError(
            f"critical_age_hours ({critical_age_hours:g}) must be greater than "
            f"warning_age_hours ({warning_age_hours:g})"
        )
    try:
        return dataclasses.replace(base, **overrides)
    except ValueError as e:
        raise InvalidThresholdsError(str(e))


@router.get("/health", response_model=BackupHealthResponse)
async def get_backup_health(
    warning_age_hours: Optional[float] = Query(None, gt=0),
    critical_age_hours: Optional[float] = Query(None, gt=0),
    min_expected_routes: Optional[int] = Query(None, ge=0),
    storage: BaseObjectStorage = Depends(get_storage),
    monitor_config: MonitorConfig = Depends(get_monitor_config),
) -> BackupHealthResponse:
    """Check backup system health.

    Always answers 200: the verdict lives in the body's ``status`` field so a
    degraded backup is distinguishable from this endpoint being down.
    """
    config = resolve_health_config(
        monitor_config.health,
        warning_age_hours=warning_age_hours,
        critical_age_hours=critical_age_hours,
        min_expected_routes=min_expected_routes,
    )
    return await check_backup_health(storage, config, root_prefix=monitor_config.storage.root_prefix)


@router.post("/health/notify")
async def notify_backup_health(
    storage: BaseObjectStorage = Depends(get_storage),
    monitor_config: MonitorConfig = Depends(get_monitor_config),
) -> Dict[str, Any]:
    """Evaluate backup health and alert Slack when it is not healthy."""
    health = await check_backup_health(
        storage,
        monitor_config.health,
        root_prefix=monitor_config.storage.root_prefix,
    )
    notified = await send_backup_alert(health, monitor_config.notifications)
    if not notified and health.status.value != "healthy":
        logger.warning(f"Backup is {health.status.value} but no alert was delivered")
    return {"status": health.status.value, "notified": notified}
