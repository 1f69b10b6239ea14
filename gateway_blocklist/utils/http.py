from __future__ import annotations

import logging
import time
from typing import Any, Optional, Protocol

import httpx

logger = logging.getLogger(__name__)


class Transport(Protocol):
    async def send(
        self,
        method: str,
        url: str,
        headers: Optional[dict] = None,
        json: Any = None,
    ) -> httpx.Response: ...


class HttpClient:
    def __init__(
        self,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.timeout = httpx.Timeout(timeout_seconds)
        self._client = httpx.AsyncClient(timeout=self.timeout, transport=transport)

    async def close(self) -> None:
        await self._client.aclose()

    async def send(
        self,
        method: str,
        url: str,
        headers: Optional[dict] = None,
        json: Any = None,
    ) -> httpx.Response:
        method = method.upper()
        start = time.monotonic()
        try:
            response = await self._client.request(method, url, headers=headers, json=json)
        except httpx.HTTPError as exc:
            logger.debug("http error", extra={"url": url, "method": method, "error": str(exc)})
            raise
        logger.debug(
            "http response",
            extra={
                "url": url,
                "method": method,
                "status": response.status_code,
                "duration_ms": int((time.monotonic() - start) * 1000),
            },
        )
        return response
