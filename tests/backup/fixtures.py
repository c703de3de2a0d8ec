"""Shared fixtures and test data for backup health testing."""

import json
import pytest
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

from backup_monitor._storage import InMemoryObjectStorage
from backup_monitor._utils import to_epoch_ms

# 2026-01-23 12:00:00 UTC
NOW = datetime(2026, 1, 23, 12, 0, tzinfo=timezone.utc)
# Producer runs at 20:00 UTC; this is the 20260122 run
BACKUP_TIME = datetime(2026, 1, 22, 20, 0, tzinfo=timezone.utc)

TABLES = ["link_clicks", "page_views", "file_downloads", "proxy_requests", "audit_logs"]

FILE_SIZES = {
    "manifest.json": 1234,
    "kv-routes.ndjson.gz": 45678,
    "d1-link_clicks.ndjson.gz": 123456,
    "d1-page_views.ndjson.gz": 45678,
    "d1-file_downloads.ndjson.gz": 12345,
    "d1-proxy_requests.ndjson.gz": 6789,
    "d1-audit_logs.ndjson.gz": 3456,
}


def epoch_ms(value: datetime) -> int:
    return to_epoch_ms(value)


def make_manifest(
    date: str = "20260122",
    timestamp: Optional[int] = None,
    total_routes: int = 320,
    tables: Iterable[str] = TABLES,
) -> Dict[str, Any]:
    """Build a manifest document as the backup job writes it."""
    tables = list(tables)
    return {
        "version": "1.0.0",
        "timestamp": epoch_ms(BACKUP_TIME) if timestamp is None else timestamp,
        "date": date,
        "kv": {
            "domains": ["example.com", "link.example.com"],
            "totalRoutes": total_routes,
            "file": f"daily/{date}/kv-routes.ndjson.gz",
        },
        "d1": {
            "tables": tables,
            "totalRows": 18046,
            "files": {t: f"daily/{date}/d1-{t}.ndjson.gz" for t in tables},
        },
        "retention": {"daily": 30, "weekly": 90},
    }


def seed_backup(
    storage: InMemoryObjectStorage,
    date: str = "20260122",
    manifest: Optional[Dict[str, Any]] = None,
    missing: Iterable[str] = (),
    write_manifest: bool = True,
) -> InMemoryObjectStorage:
    """Write a complete backup for ``date`` into ``storage``, minus ``missing`` filenames."""
    manifest = manifest if manifest is not None else make_manifest(date)
    missing = set(missing)
    for filename, size in FILE_SIZES.items():
        if filename in missing:
            continue
        key = f"daily/{date}/{filename}"
        if filename == "manifest.json":
            if write_manifest:
                storage.put(key, json.dumps(manifest))
        else:
            storage.put(key, b"x" * size)
    return storage


@pytest.fixture
def storage():
    """Empty in-memory bucket."""
    return InMemoryObjectStorage()


@pytest.fixture
def healthy_storage():
    """Bucket holding one complete, recent backup."""
    return seed_backup(InMemoryObjectStorage())
