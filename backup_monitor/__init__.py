from .backup import check_backup_health, send_backup_alert
from .config import HealthCheckConfig, MonitorConfig, NotificationConfig, StorageConfig

__version__ = "0.1.0"
__author__ = "backup-monitor maintainers"

__all__ = [
    "check_backup_health",
    "send_backup_alert",
    "HealthCheckConfig",
    "MonitorConfig",
    "NotificationConfig",
    "StorageConfig",
]
