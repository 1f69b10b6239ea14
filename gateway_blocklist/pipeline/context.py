from __future__ import annotations

from dataclasses import dataclass

import httpx

from ..api.client import TokenRotatingClient
from ..models.config import GatewayConfig
from ..utils.http import HttpClient
from ..utils.webhook import WebhookNotifier


@dataclass
class GatewayContext:
    config: GatewayConfig
    http_client: HttpClient
    notifier: WebhookNotifier
    client: TokenRotatingClient

    async def close(self) -> None:
        await self.http_client.close()


def build_context(config: GatewayConfig, transport: httpx.AsyncBaseTransport | None = None) -> GatewayContext:
    http = HttpClient(timeout_seconds=config.timeout_seconds, transport=transport)
    notifier = WebhookNotifier(config.webhook_url, http, prefix=config.notify_prefix)
    client = TokenRotatingClient.from_config(config, http, notifier)
    return GatewayContext(config=config, http_client=http, notifier=notifier, client=client)
