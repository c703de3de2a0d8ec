"""Backup integrity and freshness evaluation.

Inspects the newest ``daily/YYYYMMDD/`` backup in object storage and reduces
what it finds to a single health verdict. The evaluation is read-only and
total: storage failures become absence signals in the report instead of
exceptions.
"""

import asyncio
from datetime import datetime
from typing import List, Optional, Tuple

from ..config import HealthCheckConfig
from .._storage import BaseObjectStorage
from .._utils import ensure_utc, from_epoch_ms, isoformat_utc, logger, to_epoch_ms
from .models import (
    BackupAgeStatus,
    BackupFileStatus,
    BackupHealthResponse,
    BackupManifest,
    HealthChecks,
    HealthIssue,
    HealthStatus,
    IssueSeverity,
    LastBackupInfo,
    ManifestSummary,
)
from .utils import extract_date_segment, manifest_key, parse_manifest, scheduled_time_for

DEFAULT_ROOT_PREFIX = "daily/"
MS_PER_HOUR = 60 * 60 * 1000

NO_BACKUP_MESSAGE = "No backup found in R2 bucket"
INVALID_MANIFEST_MESSAGE = "Backup manifest is missing or invalid"


async def find_latest_backup(
    storage: BaseObjectStorage,
    root_prefix: str = DEFAULT_ROOT_PREFIX,
) -> Optional[str]:
    """Locate the most recent dated backup directory.

    Args:
        storage: Object storage to inspect
        root_prefix: Prefix holding one child prefix per backup date

    Returns:
        Latest date (YYYYMMDD), or None if no well-formed date prefix exists
    """
    try:
        prefixes = await storage.list_prefixes(root_prefix, delimiter="/")
    except Exception as e:
        logger.warning(f"Failed to list backups under {root_prefix}: {e}")
        return None

    dates = [
        date for date in (extract_date_segment(p, root_prefix) for p in prefixes)
        if date is not None
    ]
    if not dates:
        return None

    # Zero-padded YYYYMMDD sorts lexicographically in date order
    return max(dates)


async def fetch_manifest(
    storage: BaseObjectStorage,
    date: str,
    root_prefix: str = DEFAULT_ROOT_PREFIX,
) -> Optional[BackupManifest]:
    """Fetch and validate the manifest for ``date``. Returns None when unusable."""
    key = manifest_key(root_prefix, date)
    try:
        body = await storage.get(key)
    except Exception as e:
        logger.warning(f"Failed to fetch manifest {key}: {e}")
        return None

    if body is None:
        logger.warning(f"Manifest not found: {key}")
        return None

    return parse_manifest(body, date)


def expected_backup_files(manifest: BackupManifest, root_prefix: str = DEFAULT_ROOT_PREFIX) -> List[str]:
    """Object keys a complete backup must contain, in report order."""
    keys = [manifest_key(root_prefix, manifest.date), manifest.kv.file]
    keys.extend(manifest.d1.files.values())
    return list(dict.fromkeys(keys))


async def _probe_file(storage: BaseObjectStorage, key: str) -> BackupFileStatus:
    try:
        head = await storage.head(key)
    except Exception as e:
        logger.warning(f"Failed to probe {key}: {e}")
        head = None

    if head is None:
        return BackupFileStatus(key=key, size=0, exists=False)
    return BackupFileStatus(key=key, size=head.size, exists=True)


async def check_backup_files(storage: BaseObjectStorage, keys: List[str]) -> List[BackupFileStatus]:
    """Probe every key concurrently and return one status per key, in input order."""
    results = await asyncio.gather(*(_probe_file(storage, key) for key in keys))
    logger.debug(f"Probed {len(results)} backup files, {sum(not r.exists for r in results)} missing")
    return list(results)


def compute_age_hours(timestamp_ms: int, now: datetime) -> float:
    return (to_epoch_ms(now) - timestamp_ms) / MS_PER_HOUR


def classify_backup_age(
    age_hours: float,
    config: HealthCheckConfig,
) -> Tuple[BackupAgeStatus, Optional[HealthIssue]]:
    """Classify backup age against the configured thresholds.

    Both thresholds are inclusive on the healthy side: an age exactly equal
    to ``warning_age_hours`` is still ``ok``.

    Returns:
        Age status and the issue to report, if any
    """
    if age_hours > config.critical_age_hours:
        return BackupAgeStatus.CRITICAL, HealthIssue(
            severity=IssueSeverity.CRITICAL,
            message=f"Backup is {age_hours:.1f} hours old (threshold: {config.critical_age_hours:g}h)",
        )
    if age_hours > config.warning_age_hours:
        return BackupAgeStatus.WARNING, HealthIssue(
            severity=IssueSeverity.WARNING,
            message=f"Backup is {age_hours:.1f} hours old (threshold: {config.warning_age_hours:g}h)",
        )
    return BackupAgeStatus.OK, None


def check_route_count(
    manifest: BackupManifest,
    config: HealthCheckConfig,
) -> Tuple[bool, Optional[HealthIssue]]:
    """Compare the exported route count with the configured floor.

    A low count is a data-quality signal, so it is only ever a warning.
    """
    total = manifest.kv.total_routes
    if total >= config.min_expected_routes:
        return True, None
    return False, HealthIssue(
        severity=IssueSeverity.WARNING,
        message=f"Route count ({total}) below minimum expected ({config.min_expected_routes})",
    )


def aggregate_status(issues: List[HealthIssue]) -> HealthStatus:
    """Reduce issues to the worst severity present."""
    severities = {issue.severity for issue in issues}
    if IssueSeverity.CRITICAL in severities:
        return HealthStatus.CRITICAL
    if IssueSeverity.WARNING in severities:
        return HealthStatus.WARNING
    return HealthStatus.HEALTHY


def _no_backup_response(now: datetime) -> BackupHealthResponse:
    return BackupHealthResponse(
        status=HealthStatus.CRITICAL,
        timestamp=isoformat_utc(now),
        last_backup=None,
        issues=[HealthIssue(severity=IssueSeverity.CRITICAL, message=NO_BACKUP_MESSAGE)],
        checks=HealthChecks(
            backup_exists=False,
            backup_age=BackupAgeStatus.CRITICAL,
            manifest_valid=False,
            files_complete=False,
            route_count_ok=False,
        ),
    )


async def check_backup_health(
    storage: BaseObjectStorage,
    config: Optional[HealthCheckConfig] = None,
    *,
    now: Optional[datetime] = None,
    root_prefix: str = DEFAULT_ROOT_PREFIX,
) -> BackupHealthResponse:
    """Evaluate the health of the most recent backup.

    Args:
        storage: Object storage holding the backups
        config: Thresholds for this call; defaults apply when None
        now: Evaluation instant; current UTC time when None
        root_prefix: Prefix holding the dated backup directories

    Returns:
        A freshly built health report. Never raises for storage faults.
    """
    config = config or HealthCheckConfig()
    now = ensure_utc(now)

    date = await find_latest_backup(storage, root_prefix)
    if date is None:
        logger.warning(f"No backup found under {root_prefix}")
        return _no_backup_response(now)

    issues: List[HealthIssue] = []

    manifest = await fetch_manifest(storage, date, root_prefix)
    if manifest is None:
        issues.append(HealthIssue(severity=IssueSeverity.CRITICAL, message=INVALID_MANIFEST_MESSAGE))

        # Files and routes need the manifest; age falls back to the nominal run time.
        scheduled_at = scheduled_time_for(date, config.scheduled_hour_utc)
        age_hours = None
        age_status = BackupAgeStatus.CRITICAL
        if scheduled_at is not None:
            age_hours = compute_age_hours(to_epoch_ms(scheduled_at), now)
            age_status, age_issue = classify_backup_age(age_hours, config)
            if age_issue:
                issues.append(age_issue)

        last_backup = LastBackupInfo(
            date=date,
            timestamp=isoformat_utc(scheduled_at) if scheduled_at else None,
            age_hours=age_hours,
            manifest=None,
            files=[],
        )
        checks = HealthChecks(
            backup_exists=True,
            backup_age=age_status,
            manifest_valid=False,
            files_complete=False,
            route_count_ok=False,
        )
    else:
        files = await check_backup_files(storage, expected_backup_files(manifest, root_prefix))
        missing = [f.key for f in files if not f.exists]
        if missing:
            issues.append(HealthIssue(
                severity=IssueSeverity.CRITICAL,
                message=f"Missing backup files: {', '.join(missing)}",
            ))

        age_hours = compute_age_hours(manifest.timestamp, now)
        age_status, age_issue = classify_backup_age(age_hours, config)
        if age_issue:
            issues.append(age_issue)

        route_count_ok, route_issue = check_route_count(manifest, config)
        if route_issue:
            issues.append(route_issue)

        last_backup = LastBackupInfo(
            date=date,
            timestamp=isoformat_utc(from_epoch_ms(manifest.timestamp)),
            age_hours=age_hours,
            manifest=ManifestSummary.from_manifest(manifest),
            files=files,
        )
        checks = HealthChecks(
            backup_exists=True,
            backup_age=age_status,
            manifest_valid=True,
            files_complete=not missing,
            route_count_ok=route_count_ok,
        )

    status = aggregate_status(issues)
    logger.info(f"Backup health for {date}: {status.value} ({len(issues)} issue(s))")

    return BackupHealthResponse(
        status=status,
        timestamp=isoformat_utc(now),
        last_backup=last_backup,
        issues=issues,
        checks=checks,
    )
