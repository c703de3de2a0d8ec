"""Slack alerts for unhealthy backup reports."""

from typing import Any, Dict, List, Optional

import httpx

from ..config import NotificationConfig
from .._utils import logger
from .models import BackupHealthResponse, HealthStatus

STATUS_COLORS = {
    HealthStatus.CRITICAL: "#dc2626",
    HealthStatus.WARNING: "#f59e0b",
}
STATUS_EMOJI = {
    HealthStatus.CRITICAL: ":rotating_light:",
    HealthStatus.WARNING: ":warning:",
}


def build_alert_payload(health: BackupHealthResponse, channel: Optional[str] = None) -> Dict[str, Any]:
    """Build the Slack attachment payload for a non-healthy report."""
    last_backup = health.last_backup
    age = f"{last_backup.age_hours:.1f}" if last_backup and last_backup.age_hours is not None else "N/A"
    routes = (
        str(last_backup.manifest.kv.total_routes)
        if last_backup and last_backup.manifest
        else "N/A"
    )

    blocks: List[Dict[str, Any]] = [
        {
            "type": "header",
            "text": {
                "type": "plain_text",
                "text": f"{STATUS_EMOJI[health.status]} Backup {health.status.value.upper()}",
                "emoji": True,
            },
        },
        {
            "type": "section",
            "fields": [
                {"type": "mrkdwn", "text": f"*Status:*\n{health.status.value}"},
                {"type": "mrkdwn", "text": f"*Last Backup:*\n{last_backup.date if last_backup else 'None'}"},
                {"type": "mrkdwn", "text": f"*Age:*\n{age} hours"},
                {"type": "mrkdwn", "text": f"*Routes:*\n{routes}"},
            ],
        },
    ]

    if health.issues:
        issue_lines = "\n".join(f"• {issue.message}" for issue in health.issues)
        blocks.append({
            "type": "section",
            "text": {"type": "mrkdwn", "text": f"*Issues:*\n{issue_lines}"},
        })

    payload: Dict[str, Any] = {
        "attachments": [{"color": STATUS_COLORS[health.status], "blocks": blocks}]
    }
    if channel:
        payload["channel"] = channel
    return payload


async def send_backup_alert(health: BackupHealthResponse, config: NotificationConfig) -> bool:
    """Post a Slack alert for warning and critical reports.

    Args:
        health: Health report to describe
        config: Webhook settings

    Returns:
        True if Slack accepted the message, False if nothing was sent or delivery failed
    """
    if health.status == HealthStatus.HEALTHY:
        return False

    if not config.enabled:
        logger.debug("Slack webhook not configured, skipping backup alert")
        return False

    payload = build_alert_payload(health, config.slack_channel)

    try:
        async with httpx.AsyncClient(timeout=config.timeout) as client:
            response = await client.post(config.slack_webhook_url, json=payload)
            response.raise_for_status()
    except httpx.HTTPStatusError as e:
        logger.error(f"Failed to send Slack alert: {e.response.status_code} {e.response.text}")
        return False
    except httpx.HTTPError as e:
        logger.error(f"Failed to send Slack alert: {e}")
        return False

    logger.info(f"Sent backup {health.status.value} alert to Slack")
    return True
