"""Custom exceptions for FastAPI application."""

from fastapi import HTTPException
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE


class BackupMonitorError(HTTPException):
    """Base exception for backup-monitor API errors."""
    pass


class BackupBucketNotConfiguredError(BackupMonitorError):
    def __init__(self):
        super().__init__(HTTP_503_SERVICE_UNAVAILABLE, "Backup bucket not configured")


class InvalidThresholdsError(BackupMonitorError):
    def __init__(self, reason: str):
        super().__init__(422, f"Invalid health check thresholds: {reason}")
