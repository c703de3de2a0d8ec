"""Data models for backup manifests and health reports."""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    WARNING = "warning"
    CRITICAL = "critical"


class BackupAgeStatus(str, Enum):
    OK = "ok"
    WARNING = "warning"
    CRITICAL = "critical"


class IssueSeverity(str, Enum):
    WARNING = "warning"
    CRITICAL = "critical"


# Manifest written by the backup job

class KVBackupInfo(_WireModel):
    """Route export summary."""

    domains: List[str]
    total_routes: int = Field(..., ge=0)
    file: str = Field(..., min_length=1, description="Object key of the route export")


class D1BackupInfo(_WireModel):
    """Analytics table export summary."""

    tables: List[str]
    total_rows: int = Field(..., ge=0)
    files: Dict[str, str] = Field(..., description="Table name to object key")


class RetentionPolicy(_WireModel):
    """Informational only; never evaluated."""

    daily: int
    weekly: int


class BackupManifest(_WireModel):
    """Per-run backup manifest, immutable once written."""

    version: str
    timestamp: int = Field(..., ge=0, le=253402300799999, description="Creation time in milliseconds since epoch")
    date: str = Field(..., pattern=r"^\d{8}$", description="Backup date (YYYYMMDD)")
    kv: KVBackupInfo
    d1: D1BackupInfo
    retention: RetentionPolicy


# Health report

class BackupFileStatus(_WireModel):
    """Probe result for one expected object. Absent objects report size 0."""

    key: str
    size: int
    exists: bool


class HealthIssue(_WireModel):
    severity: IssueSeverity
    message: str


class HealthChecks(_WireModel):
    backup_exists: bool
    backup_age: BackupAgeStatus
    manifest_valid: bool
    files_complete: bool
    route_count_ok: bool


class D1TableInfo(_WireModel):
    name: str
    rows: int


class KVSummary(_WireModel):
    total_routes: int
    domains: List[str]


class D1Summary(_WireModel):
    total_rows: int
    tables: List[D1TableInfo]


class ManifestSummary(_WireModel):
    """Manifest digest included in the health response."""

    version: str
    kv: KVSummary
    d1: D1Summary

    @classmethod
    def from_manifest(cls, manifest: BackupManifest) -> "ManifestSummary":
        # The manifest carries no per-table counts, so rows are spread evenly.
        table_count = len(manifest.d1.tables)
        rows_per_table = manifest.d1.total_rows // table_count if table_count else 0
        return cls(
            version=manifest.version,
            kv=KVSummary(
                total_routes=manifest.kv.total_routes,
                domains=list(manifest.kv.domains),
            ),
            d1=D1Summary(
                total_rows=manifest.d1.total_rows,
                tables=[D1TableInfo(name=name, rows=rows_per_table) for name in manifest.d1.tables],
            ),
        )


class LastBackupInfo(_WireModel):
    date: str = Field(..., description="Backup date (YYYYMMDD)")
    timestamp: Optional[str] = Field(None, description="Backup time, ISO-8601 UTC")
    age_hours: Optional[float] = None
    manifest: Optional[ManifestSummary] = None
    files: List[BackupFileStatus] = Field(default_factory=list)


class BackupHealthResponse(_WireModel):
    """Root health verdict returned by every evaluation."""

    status: HealthStatus
    timestamp: str = Field(..., description="Evaluation time, ISO-8601 UTC")
    last_backup: Optional[LastBackupInfo] = None
    issues: List[HealthIssue] = Field(default_factory=list)
    checks: HealthChecks
