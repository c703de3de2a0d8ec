"""Backup health monitoring."""

from .health import (
    aggregate_status,
    check_backup_files,
    check_backup_health,
    check_route_count,
    classify_backup_age,
    compute_age_hours,
    expected_backup_files,
    fetch_manifest,
    find_latest_backup,
)
from .models import BackupHealthResponse, BackupManifest
from .notifications import send_backup_alert

__all__ = [
    "aggregate_status",
    "check_backup_files",
    "check_backup_health",
    "check_route_count",
    "classify_backup_age",
    "compute_age_hours",
    "expected_backup_files",
    "fetch_manifest",
    "find_latest_backup",
    "BackupHealthResponse",
    "BackupManifest",
    "send_backup_alert",
]
