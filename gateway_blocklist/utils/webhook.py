from __future__ import annotations

import logging
from typing import Optional, Protocol

import httpx

from .http import Transport

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    async def notify(self, message: str) -> None: ...


def is_webhook_url(url: Optional[str]) -> bool:
    if not url:
        return False
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL:
        return False
    return parsed.scheme in {"http", "https"} and bool(parsed.host)


class WebhookNotifier:
    """Posts messages to a Discord-compatible webhook.

    The message is sent as both ``content`` and ``body`` so webhook servers
    other than Discord can pick it up. ``notify`` never raises.
    """

    def __init__(self, url: Optional[str], transport: Transport, prefix: str = "CGPS") -> None:
        self.url = url
        self.transport = transport
        self.prefix = prefix

    @property
    def enabled(self) -> bool:
        return is_webhook_url(self.url)

    async def send_message(self, url: str, message: str) -> bool:
        payload = {"content": message, "body": message}
        try:
            response = await self.transport.send(
                "POST",
                url,
                headers={"Content-Type": "application/json"},
                json=payload,
            )
        except (httpx.HTTPError, OSError) as exc:
            logger.error("error sending message to webhook: %s", exc)
            return False
        if not response.is_success:
            logger.error("error sending message to webhook: HTTP status %s", response.status_code)
            return False
        return True

    async def deliver(self, message: str) -> bool:
        """Send a prefixed message to the configured webhook; False when none is configured."""
        if not self.enabled:
            return False
        return await self.send_message(self.url, f"{self.prefix}: {message}")

    async def notify(self, message: str) -> None:
        # Missing webhook is not logged; most setups run without one.
        try:
            await self.deliver(message)
        except Exception as exc:
            logger.error("webhook notification failed: %s", exc)
