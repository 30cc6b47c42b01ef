"""Alert definitions, notification payloads and multi-channel dispatch."""

import html
import json
import logging
import os
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import StrEnum
from typing import Any

from ambos.http import http_post
from ambos.text import isoformat_utc, utcnow

BOT_NAME = "AMBOS Intelligence"
BOT_AVATAR = "https://api.dicebear.com/7.x/shapes/svg?seed=AMBOS&backgroundColor=00D9FF"
FOOTER = "AMBOS - Advanced Multi-source OSINT System"
RESEND_API_URL = "https://api.resend.com/emails"
EMAIL_SENDER = "AMBOS Alerts <alerts@ambos.dev>"

DATA_FIELD_CHARS = 1000

logger = logging.getLogger(__name__)


class AlertLevel(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def color(self) -> int:
        """Embed colour as a 24-bit RGB integer."""
        return _LEVEL_COLORS[self]

    @property
    def emoji(self) -> str:
        return _LEVEL_EMOJI[self]


_LEVEL_COLORS = {
    AlertLevel.CRITICAL: 0xFF0000,
    AlertLevel.HIGH: 0xFF6B00,
    AlertLevel.MEDIUM: 0xFFFF00,
    AlertLevel.LOW: 0x00FF00,
}
_LEVEL_EMOJI = {
    AlertLevel.CRITICAL: "🔴",
    AlertLevel.HIGH: "🟠",
    AlertLevel.MEDIUM: "🟡",
    AlertLevel.LOW: "🟢",
}


class Channel(StrEnum):
    WEBHOOK = "webhook"
    EMAIL = "email"
    IN_APP = "in-app"


@dataclass(frozen=True)
class Alert:
    """A user-defined alert and its delivery settings."""

    name: str
    alert_type: str
    alert_level: AlertLevel = AlertLevel.MEDIUM
    channels: tuple[Channel, ...] = (Channel.IN_APP,)
    webhook_url: str | None = None
    email_address: str | None = None
    is_active: bool = True
    trigger_count: int = 0
    last_triggered: str | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass(frozen=True)
class AlertTrigger:
    """Record of one alert firing and where it was delivered."""

    alert_id: str
    data: dict[str, Any]
    channels: tuple[Channel, ...]
    delivered: tuple[Channel, ...]
    triggered_at: str

    @property
    def notification_sent(self) -> bool:
        return bool(self.delivered)


def format_data(data: dict[str, Any]) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def build_webhook_payload(
    alert: Alert, data: dict[str, Any], *, now: datetime | None = None
) -> dict[str, Any]:
    """Build a Discord-style embed payload for an alert.

    The trigger count shown includes the firing being reported.
    """
    now = now or utcnow()
    return {
        "username": BOT_NAME,
        "avatar_url": BOT_AVATAR,
        "embeds": [
            {
                "title": f"{alert.alert_level.emoji} {alert.name}",
                "description": (
                    f"**Type:** {alert.alert_type}\n"
                    f"**Level:** {alert.alert_level.value.upper()}"
                ),
                "color": alert.alert_level.color,
                "fields": [
                    {
                        "name": "📊 Data",
                        "value": format_data(data)[:DATA_FIELD_CHARS],
                        "inline": False,
                    },
                    {
                        "name": "⏰ Time",
                        "value": now.strftime("%Y-%m-%d %H:%M:%S UTC"),
                        "inline": True,
                    },
                    {
                        "name": "🔢 Triggers",
                        "value": str(alert.trigger_count + 1),
                        "inline": True,
                    },
                ],
                "footer": {"text": FOOTER},
                "timestamp": isoformat_utc(now),
            }
        ],
    }


def build_email(alert: Alert, data: dict[str, Any]) -> dict[str, Any]:
    """Build a Resend email request body for an alert."""
    level = alert.alert_level.value.upper()
    body = (
        f"<h1>🛡️ AMBOS Intelligence Alert</h1>"
        f"<h2>{html.escape(alert.name)}</h2>"
        f"<p><strong>Type:</strong> {html.escape(alert.alert_type)}</p>"
        f"<p><strong>Level:</strong> {level}</p>"
        f"<pre>{html.escape(format_data(data))}</pre>"
        f"<p>{FOOTER}</p>"
    )
    return {
        "from": EMAIL_SENDER,
        "to": alert.email_address,
        "subject": f"🚨 AMBOS alert: {alert.name} [{level}]",
        "html": body,
    }


class WebhookNotifier:
    """Post alert embeds to the alert's webhook URL."""

    async def send(self, alert: Alert, data: dict[str, Any]) -> bool:
        """Returns False when the alert has no webhook URL."""
        if not alert.webhook_url:
            return False
        await http_post("webhook", alert.webhook_url, json=build_webhook_payload(alert, data))
        logger.info(f"Webhook notification sent for: {alert.name}")
        return True


class EmailNotifier:
    """Send alert emails through the Resend API.

    Without an API key, emails are skipped with a warning.

    Args:
        api_key: Resend API key (defaults to RESEND_API_KEY env var).
    """

    def __init__(self, api_key: str | None = None) -> None:
        self._api_key = api_key or os.environ.get("RESEND_API_KEY")

    async def send(self, alert: Alert, data: dict[str, Any]) -> bool:
        if not alert.email_address:
            return False
        if not self._api_key:
            logger.warning("RESEND_API_KEY not configured, skipping email")
            return False
        await http_post(
            "resend",
            RESEND_API_URL,
            json=build_email(alert, data),
            headers={"Authorization": f"Bearer {self._api_key}"},
        )
        logger.info(f"Email sent to: {alert.email_address}")
        return True


class AlertDispatcher:
    """Deliver alerts on each of their channels.

    A channel that fails is logged and does not stop the others. In-app
    notifications are delivered by recording the trigger itself.

    Args:
        webhook: Webhook notifier.
        email: Email notifier.
    """

    def __init__(
        self,
        webhook: WebhookNotifier | None = None,
        email: EmailNotifier | None = None,
    ) -> None:
        self._webhook = webhook or WebhookNotifier()
        self._email = email or EmailNotifier()

    async def _send(self, channel: Channel, alert: Alert, data: dict[str, Any]) -> bool:
        if channel is Channel.WEBHOOK:
            return await self._webhook.send(alert, data)
        if channel is Channel.EMAIL:
            return await self._email.send(alert, data)
        logger.info(f"In-app notification recorded for: {alert.name}")
        return True

    async def trigger(
        self, alert: Alert, data: dict[str, Any]
    ) -> tuple[AlertTrigger, Alert] | None:
        """Fire an alert if it is active.

        Returns:
            Tuple of (trigger record, alert with updated trigger count and time),
            or None for an inactive alert.
        """
        if not alert.is_active:
            logger.info(f"Skipping inactive alert: {alert.name}")
            return None
        return await self._fire(alert, data)

    async def _fire(
        self, alert: Alert, data: dict[str, Any]
    ) -> tuple[AlertTrigger, Alert]:
        logger.info(f"Triggering alert: {alert.name}")
        delivered: list[Channel] = []
        for channel in alert.channels:
            try:
                if await self._send(Channel(channel), alert, data):
                    delivered.append(Channel(channel))
            except Exception as e:
                logger.warning(f"Error sending {channel} notification for {alert.name}: {e}")

        now = isoformat_utc(utcnow())
        trigger = AlertTrigger(
            alert_id=alert.id,
            data=data,
            channels=tuple(alert.channels),
            delivered=tuple(delivered),
            triggered_at=now,
        )
        updated = replace(alert, trigger_count=alert.trigger_count + 1, last_triggered=now)
        return (trigger, updated)

    async def test(
        self, alert: Alert, message: str | None = None
    ) -> tuple[AlertTrigger, Alert]:
        """Fire an alert manually with test data, even when it is inactive."""
        data = {
            "test": True,
            "message": message or "Test alert triggered manually",
            "timestamp": isoformat_utc(utcnow()),
            "alert_type": alert.alert_type,
            "alert_level": alert.alert_level.value,
        }
        return await self._fire(alert, data)
