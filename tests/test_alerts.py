"""Tests for alert payloads and dispatch."""

from dataclasses import replace
from datetime import UTC, datetime
from typing import Any

import httpx
import pytest

from ambos.alerts import (
    DATA_FIELD_CHARS,
    RESEND_API_URL,
    Alert,
    AlertDispatcher,
    AlertLevel,
    Channel,
    EmailNotifier,
    build_email,
    build_webhook_payload,
)

NOW = datetime(2026, 2, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def alert() -> Alert:
    return Alert(
        name="Convoy watch",
        alert_type="keyword",
        alert_level=AlertLevel.CRITICAL,
        channels=(Channel.WEBHOOK, Channel.EMAIL, Channel.IN_APP),
        webhook_url="https://hooks.test/abc",
        email_address="analyst@example.com",
        trigger_count=4,
    )


class TestPayloads:
    def test_webhook_embed(self, alert: Alert) -> None:
        payload = build_webhook_payload(alert, {"matches": 3}, now=NOW)
        (embed,) = payload["embeds"]

        assert embed["title"] == "🔴 Convoy watch"
        assert embed["color"] == 0xFF0000
        assert "**Level:** CRITICAL" in embed["description"]
        fields = {f["name"]: f["value"] for f in embed["fields"]}
        assert fields["🔢 Triggers"] == "5"
        assert fields["⏰ Time"] == "2026-02-01 12:00:00 UTC"
        assert embed["timestamp"] == "2026-02-01T12:00:00Z"

    def test_webhook_data_is_truncated(self, alert: Alert) -> None:
        payload = build_webhook_payload(alert, {"blob": "x" * 5000}, now=NOW)
        data_field = payload["embeds"][0]["fields"][0]
        assert len(data_field["value"]) == DATA_FIELD_CHARS

    @pytest.mark.parametrize(
        ("level", "color"),
        [(AlertLevel.HIGH, 0xFF6B00), (AlertLevel.MEDIUM, 0xFFFF00), (AlertLevel.LOW, 0x00FF00)],
    )
    def test_level_colors(self, level: AlertLevel, color: int) -> None:
        assert level.color == color

    def test_email_escapes_markup(self, alert: Alert) -> None:
        email = build_email(alert, {"note": "<script>"})
        assert email["to"] == "analyst@example.com"
        assert "[CRITICAL]" in email["subject"]
        assert "&lt;script&gt;" in email["html"]


class TestAlertDispatcher:
    async def test_delivers_on_every_channel(
        self, alert: Alert, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        posted: list[str] = []

        async def mock_post(client: httpx.AsyncClient, url: str, **kwargs: Any) -> httpx.Response:
            posted.append(url)
            return httpx.Response(200, json={"id": "1"})

        monkeypatch.setattr(httpx.AsyncClient, "post", mock_post)
        dispatcher = AlertDispatcher(email=EmailNotifier(api_key="re_test"))

        trigger, updated = await dispatcher.trigger(alert, {"matches": 3})

        assert posted == ["https://hooks.test/abc", RESEND_API_URL]
        assert trigger.delivered == (Channel.WEBHOOK, Channel.EMAIL, Channel.IN_APP)
        assert trigger.notification_sent
        assert updated.trigger_count == 5
        assert updated.last_triggered == trigger.triggered_at

    async def test_email_skipped_without_key(
        self, alert: Alert, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("RESEND_API_KEY", raising=False)
        email_only = Alert(
            name=alert.name,
            alert_type=alert.alert_type,
            channels=(Channel.EMAIL,),
            email_address=alert.email_address,
        )

        trigger, updated = await AlertDispatcher().trigger(email_only, {})

        assert trigger.delivered == ()
        assert not trigger.notification_sent
        assert updated.trigger_count == 1

    async def test_failing_channel_does_not_stop_others(
        self, alert: Alert, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def mock_post(client: httpx.AsyncClient, url: str, **kwargs: Any) -> httpx.Response:
            if "hooks.test" in url:
                return httpx.Response(500, text="webhook down")
            return httpx.Response(200, json={"id": "1"})

        monkeypatch.setattr(httpx.AsyncClient, "post", mock_post)
        dispatcher = AlertDispatcher(email=EmailNotifier(api_key="re_test"))

        trigger, _ = await dispatcher.trigger(alert, {})

        assert trigger.delivered == (Channel.EMAIL, Channel.IN_APP)

    async def test_manual_test_alert(self) -> None:
        alert = Alert(name="Manual", alert_type="test", alert_level=AlertLevel.LOW)

        trigger, _ = await AlertDispatcher().test(alert)

        assert trigger.data["test"] is True
        assert trigger.data["message"] == "Test alert triggered manually"
        assert trigger.data["alert_level"] == "low"
        assert trigger.delivered == (Channel.IN_APP,)

    async def test_inactive_alert_is_not_fired(
        self, alert: Alert, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def mock_post(*args: Any, **kwargs: Any) -> httpx.Response:
            raise AssertionError("inactive alert must not notify")

        monkeypatch.setattr(httpx.AsyncClient, "post", mock_post)
        inactive = replace(alert, is_active=False)

        assert await AlertDispatcher().trigger(inactive, {"count": 3}) is None

    async def test_manual_test_fires_inactive_alert(self) -> None:
        alert = Alert(name="Paused", alert_type="test", is_active=False)

        trigger, updated = await AlertDispatcher().test(alert)

        assert trigger.delivered == (Channel.IN_APP,)
        assert updated.trigger_count == 1
