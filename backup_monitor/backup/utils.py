"""Utility functions for reading the backup bucket layout."""

import re
from datetime import datetime, timezone
from typing import Optional

from pydantic import ValidationError

from .._utils import logger
from .models import BackupManifest

DATE_PATTERN = re.compile(r"^\d{8}$")
MANIFEST_FILENAME = "manifest.json"


def extract_date_segment(prefix: str, root_prefix: str) -> Optional[str]:
    """Extract the date segment from a child prefix.

    Args:
        prefix: Child prefix as listed, e.g. ``daily/20260122/``
        root_prefix: Listing root, e.g. ``daily/``

    Returns:
        The 8-digit segment, or None if the prefix is not a date directory
    """
    if not prefix.startswith(root_prefix):
        return None
    segment = prefix[len(root_prefix):].rstrip("/")
    if not DATE_PATTERN.match(segment):
        return None
    return segment


def backup_prefix(root_prefix: str, date: str) -> str:
    return f"{root_prefix}{date}/"


def manifest_key(root_prefix: str, date: str) -> str:
    return f"{backup_prefix(root_prefix, date)}{MANIFEST_FILENAME}"


def scheduled_time_for(date: str, hour_utc: int) -> Optional[datetime]:
    """Nominal run time of the backup for ``date``.

    Args:
        date: Backup date (YYYYMMDD)
        hour_utc: Hour of day the producer runs

    Returns:
        Aware UTC datetime, or None if the digits are not a calendar date
    """
    try:
        return datetime(
            int(date[0:4]), int(date[4:6]), int(date[6:8]), hour_utc, tzinfo=timezone.utc
        )
    except ValueError:
        return None


def parse_manifest(body: bytes, expected_date: str) -> Optional[BackupManifest]:
    """Decode and validate a manifest body.

    Args:
        body: Raw manifest bytes
        expected_date: Date of the prefix the manifest was found under

    Returns:
        Validated manifest, or None if undecodable, malformed, or dated
        differently from its prefix
    """
    # Any decoding fault surfaces as ValidationError
    try:
        manifest = BackupManifest.model_validate_json(body)
    except ValidationError as e:
        logger.warning(f"Manifest for {expected_date} failed validation: {e.error_count()} error(s)")
        return None

    if manifest.date != expected_date:
        logger.warning(f"Manifest date {manifest.date} does not match prefix date {expected_date}")
        return None

    return manifest
