"""Configuration management for backup-monitor."""

import os
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class HealthCheckConfig:
    """Thresholds applied by a single health evaluation.

    Defaults assume one backup every 24 hours: a backup older than 25 hours
    is late, older than 26 hours has missed its window.
    """
    warning_age_hours: float = 25.0
    critical_age_hours: float = 26.0
    min_expected_routes: int = 100
    scheduled_hour_utc: int = 20  # cron hour of the backup producer

    @classmethod
    def from_env(cls) -> 'HealthCheckConfig':
        """Create config from environment variables."""
        return cls(
            warning_age_hours=float(os.getenv("BACKUP_WARNING_AGE_HOURS", "25")),
            critical_age_hours=float(os.getenv("BACKUP_CRITICAL_AGE_HOURS", "26")),
            min_expected_routes=int(os.getenv("BACKUP_MIN_EXPECTED_ROUTES", "100")),
            scheduled_hour_utc=int(os.getenv("BACKUP_SCHEDULED_HOUR_UTC", "20"))
        )

    def __post_init__(self):
        """Validate configuration."""
        if self.warning_age_hours <= 0:
            raise ValueError(f"warning_age_hours must be positive, got {self.warning_age_hours}")
        # warning_age_hours >= critical_age_hours is allowed: the warning band is then empty
        if self.critical_age_hours <= 0:
            raise ValueError(f"critical_age_hours must be positive, got {self.critical_age_hours}")
        if self.min_expected_routes < 0:
            raise ValueError(f"min_expected_routes must be non-negative, got {self.min_expected_routes}")
        if not 0 <= self.scheduled_hour_utc <= 23:
            raise ValueError(f"scheduled_hour_utc must be between 0 and 23, got {self.scheduled_hour_utc}")


@dataclass(frozen=True)
class StorageConfig:
    """Object storage configuration."""
    backend: str = "s3"  # s3, memory
    bucket: Optional[str] = None
    endpoint_url: Optional[str] = None  # e.g. https://<account>.r2.cloudflarestorage.com
    region: str = "auto"
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    root_prefix: str = "daily/"
    request_timeout: float = 10.0

    @classmethod
    def from_env(cls) -> 'StorageConfig':
        """Create config from environment variables."""
        return cls(
            backend=os.getenv("STORAGE_BACKEND", "s3"),
            bucket=os.getenv("BACKUP_BUCKET") or None,
            endpoint_url=os.getenv("BACKUP_ENDPOINT_URL") or None,
            region=os.getenv("BACKUP_REGION", "auto"),
            access_key_id=os.getenv("BACKUP_ACCESS_KEY_ID") or None,
            secret_access_key=os.getenv("BACKUP_SECRET_ACCESS_KEY") or None,
            root_prefix=os.getenv("BACKUP_ROOT_PREFIX", "daily/"),
            request_timeout=float(os.getenv("BACKUP_REQUEST_TIMEOUT", "10.0"))
        )

    @property
    def is_configured(self) -> bool:
        """Whether a bucket can actually be reached with this config."""
        if self.backend == "memory":
            return True
        return bool(self.bucket)

    def __post_init__(self):
        """Validate configuration."""
        valid_backends = {"s3", "memory"}
        if self.backend not in valid_backends:
            raise ValueError(f"Unknown storage backend: {self.backend}. Available: {valid_backends}")
        if not self.root_prefix.endswith("/"):
            raise ValueError(f"root_prefix must end with '/', got {self.root_prefix!r}")
        if self.request_timeout <= 0:
            raise ValueError(f"request_timeout must be positive, got {self.request_timeout}")


@dataclass(frozen=True)
class NotificationConfig:
    """Slack alerting configuration."""
    slack_webhook_url: Optional[str] = None
    slack_channel: Optional[str] = None
    timeout: float = 10.0

    @classmethod
    def from_env(cls) -> 'NotificationConfig':
        """Create config from environment variables."""
        return cls(
            slack_webhook_url=os.getenv("SLACK_BACKUP_WEBHOOK") or None,
            slack_channel=os.getenv("SLACK_BACKUP_CHANNEL") or None,
            timeout=float(os.getenv("SLACK_TIMEOUT", "10.0"))
        )

    @property
    def enabled(self) -> bool:
        return bool(self.slack_webhook_url)

    def __post_init__(self):
        """Validate configuration."""
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")


@dataclass(frozen=True)
class MonitorConfig:
    """Top-level configuration."""
    health: HealthCheckConfig = field(default_factory=HealthCheckConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    notifications: NotificationConfig = field(default_factory=NotificationConfig)

    @classmethod
    def from_env(cls) -> 'MonitorConfig':
        """Create complete config from environment variables."""
        return cls(
            health=HealthCheckConfig.from_env(),
            storage=StorageConfig.from_env(),
            notifications=NotificationConfig.from_env()
        )
