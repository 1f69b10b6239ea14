from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import httpx

from ..models.config import GatewayConfig
from .context import build_context

logger = logging.getLogger(__name__)


async def run_gateway_request(
    config: GatewayConfig,
    path: str,
    method: str = "GET",
    json: Any = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Any:
    context = build_context(config, transport=transport)
    try:
        return await context.client.request_gateway(path, method=method, json=json)
    finally:
        await context.close()


async def run_notify(
    config: GatewayConfig,
    message: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> bool:
    context = build_context(config, transport=transport)
    try:
        if not context.notifier.enabled:
            logger.warning("webhook URL missing or malformed; notification skipped")
            return False
        return await context.notifier.deliver(message)
    finally:
        await context.close()


def run_gateway_request_sync(
    config: GatewayConfig,
    path: str,
    method: str = "GET",
    json: Any = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Any:
    return asyncio.run(run_gateway_request(config, path, method=method, json=json, transport=transport))


def run_notify_sync(
    config: GatewayConfig,
    message: str,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> bool:
    return asyncio.run(run_notify(config, message, transport=transport))
