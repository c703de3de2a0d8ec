"""Tests for Slack backup alerts."""

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from backup_monitor.backup.health import check_backup_health
from backup_monitor.backup.notifications import build_alert_payload, send_backup_alert
from backup_monitor.config import NotificationConfig

from .fixtures import NOW, make_manifest, seed_backup

WEBHOOK = "https://hooks.slack.test/services/T000/B000/XXX"


def mock_httpx_client(mock_client_class, response=None, error=None):
    mock_client = AsyncMock()
    if error is not None:
        mock_client.post.side_effect = error
    else:
        mock_client.post.return_value = response or MagicMock(raise_for_status=MagicMock())
    mock_client_class.return_value.__aenter__.return_value = mock_client
    return mock_client


@pytest.mark.asyncio
async def test_no_alert_for_healthy(healthy_storage):
    """Test healthy reports never reach Slack."""
    health = await check_backup_health(healthy_storage, now=NOW)

    with patch("httpx.AsyncClient") as mock_client_class:
        sent = await send_backup_alert(health, NotificationConfig(slack_webhook_url=WEBHOOK))

    assert sent is False
    mock_client_class.assert_not_called()


@pytest.mark.asyncio
async def test_no_alert_without_webhook(storage):
    health = await check_backup_health(storage, now=NOW)

    with patch("httpx.AsyncClient") as mock_client_class:
        sent = await send_backup_alert(health, NotificationConfig())

    assert sent is False
    mock_client_class.assert_not_called()


@pytest.mark.asyncio
async def test_critical_alert_posted(storage):
    """Test a critical report is posted with channel override."""
    health = await check_backup_health(storage, now=NOW)
    config = NotificationConfig(slack_webhook_url=WEBHOOK, slack_channel="#ops")

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = mock_httpx_client(mock_client_class)
        sent = await send_backup_alert(health, config)

    assert sent is True
    mock_client.post.assert_awaited_once()
    url = mock_client.post.call_args.args[0]
    payload = mock_client.post.call_args.kwargs["json"]
    assert url == WEBHOOK
    assert payload["channel"] == "#ops"
    assert payload["attachments"][0]["color"] == "#dc2626"


@pytest.mark.asyncio
async def test_delivery_failure_is_logged_not_raised(storage):
    health = await check_backup_health(storage, now=NOW)
    config = NotificationConfig(slack_webhook_url=WEBHOOK)

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_httpx_client(mock_client_class, error=httpx.ConnectError("refused"))
        sent = await send_backup_alert(health, config)

    assert sent is False


@pytest.mark.asyncio
async def test_http_error_status_is_not_delivered(storage):
    health = await check_backup_health(storage, now=NOW)
    request = httpx.Request("POST", WEBHOOK)
    response = httpx.Response(500, text="invalid_payload", request=request)

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_httpx_client(mock_client_class, response=response)
        sent = await send_backup_alert(health, NotificationConfig(slack_webhook_url=WEBHOOK))

    assert sent is False


@pytest.mark.asyncio
async def test_warning_payload_fields(storage):
    """Test the payload describes the last backup and lists issues."""
    seed_backup(storage, manifest=make_manifest(total_routes=50))
    health = await check_backup_health(storage, now=NOW)

    payload = build_alert_payload(health)

    assert "channel" not in payload
    attachment = payload["attachments"][0]
    assert attachment["color"] == "#f59e0b"
    header, fields, issues = attachment["blocks"]
    assert header["text"]["text"] == ":warning: Backup WARNING"
    texts = [f["text"] for f in fields["fields"]]
    assert texts == [
        "*Status:*\nwarning",
        "*Last Backup:*\n20260122",
        "*Age:*\n16.0 hours",
        "*Routes:*\n50",
    ]
    assert "• Route count (50) below minimum expected (100)" in issues["text"]["text"]


@pytest.mark.asyncio
async def test_payload_without_backup(storage):
    health = await check_backup_health(storage, now=NOW)

    fields = build_alert_payload(health)["attachments"][0]["blocks"][1]["fields"]

    assert fields[1]["text"] == "*Last Backup:*\nNone"
    assert fields[2]["text"] == "*Age:*\nN/A hours"
    assert fields[3]["text"] == "*Routes:*\nN/A"
