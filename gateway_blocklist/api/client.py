from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, NoReturn, Optional, Sequence

import httpx

from ..models.config import GatewayConfig
from ..models.results import AttemptRecord
from ..utils.http import Transport
from ..utils.normalize import redact_token, sanitize_headers
from ..utils.webhook import Notifier

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 50
CYCLE_DELAY_SECONDS = 5.0

_RESERVED_HEADERS = {"authorization", "content-type"}


class GatewayRequestError(RuntimeError):
    def __init__(
        self,
        message: str,
        status: int | None = None,
        body: Any = None,
        attempts: int = 0,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.body = body
        self.attempts = attempts


class NoCredentialsError(GatewayRequestError):
    pass


class UnsuccessfulResponse(Exception):
    def __init__(self, status: int) -> None:
        super().__init__(f"response not OK (status {status})")
        self.status = status


class TokenRotatingClient:
    """Sends JSON requests, cycling through bearer tokens until one succeeds.

    Every failed attempt moves on to the next token. After a full pass over
    the tokens the client waits ``cycle_delay_seconds`` before starting the
    next pass. Once ``max_attempts`` failures have accumulated the notifier is
    told and :class:`GatewayRequestError` is raised.
    """

    def __init__(
        self,
        tokens: Sequence[Optional[str]],
        transport: Transport,
        notifier: Notifier | None = None,
        *,
        config: GatewayConfig | None = None,
        max_attempts: int = MAX_ATTEMPTS,
        cycle_delay_seconds: float = CYCLE_DELAY_SECONDS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.tokens = tuple(token for token in tokens if token)
        self.transport = transport
        self.notifier = notifier
        self.config = config
        self.max_attempts = max_attempts
        self.cycle_delay_seconds = cycle_delay_seconds
        self._sleep = sleep

    @classmethod
    def from_config(
        cls,
        config: GatewayConfig,
        transport: Transport,
        notifier: Notifier | None = None,
        **kwargs: Any,
    ) -> "TokenRotatingClient":
        return cls(
            config.tokens,
            transport,
            notifier,
            config=config,
            max_attempts=config.max_attempts,
            cycle_delay_seconds=config.cycle_delay_seconds,
            **kwargs,
        )

    def build_headers(self, token: str, headers: Optional[dict] = None) -> dict:
        merged = {k: v for k, v in (headers or {}).items() if k.lower() not in _RESERVED_HEADERS}
        merged["Authorization"] = f"Bearer {token}"
        merged["Content-Type"] = "application/json"
        return merged

    async def request(
        self,
        url: str,
        method: str = "GET",
        json: Any = None,
        headers: Optional[dict] = None,
    ) -> Any:
        if not self.tokens:
            logger.error("no API tokens configured", extra={"url": url})
            raise NoCredentialsError("no API tokens configured; refusing to send request")

        record = AttemptRecord()
        while record.attempts < self.max_attempts:
            token = self.tokens[record.token_index]
            request_headers = self.build_headers(token, headers)
            logger.info("Attempting request with API token: %s", redact_token(token))
            logger.debug("request headers: %s", sanitize_headers(request_headers))
            try:
                response = await self.transport.send(method, url, headers=request_headers, json=json)
                record.last_status = response.status_code
                record.last_body = None
                record.last_body = response.json()
                if not response.is_success:
                    raise UnsuccessfulResponse(response.status_code)
            except (httpx.HTTPError, OSError, ValueError, UnsuccessfulResponse) as exc:
                record.last_error = exc
                wrapped = record.advance(len(self.tokens))
                logger.warning(
                    'An error occurred while making a web request: "%s". Retrying with a different API token...',
                    exc,
                    extra={"attempt": record.attempts, "status": record.last_status},
                )
                if record.attempts >= self.max_attempts:
                    break
                if wrapped:
                    await self._sleep(self.cycle_delay_seconds)
                continue

            logger.info("Request successful using API token: %s", redact_token(token))
            return record.last_body

        await self._fail(record)

    async def request_gateway(
        self,
        path: str,
        method: str = "GET",
        json: Any = None,
        headers: Optional[dict] = None,
    ) -> Any:
        if self.config is None:
            raise ValueError("request_gateway requires a GatewayConfig")
        return await self.request(self.config.gateway_url(path), method=method, json=json, headers=headers)

    async def _fail(self, record: AttemptRecord) -> NoReturn:
        status = record.last_status if record.last_status is not None else "unknown status"
        detail = record.error_detail()
        parts = [f"HTTP error! Status: {status}"]
        if detail:
            parts.append(detail)
        elif record.last_body is not None:
            parts.append(str(record.last_body))
        parts.append(str(record.last_error))
        message = " - ".join(parts)
        logger.error("request failed after %d attempts: %s", record.attempts, message)

        if self.notifier is not None:
            try:
                await self.notifier.notify(
                    f"An HTTP error has occurred ({status}) while making a web request: {message}. "
                    "Please check the logs for further details."
                )
            except Exception as exc:
                logger.error("webhook notification failed", extra={"error": str(exc)})

        raise GatewayRequestError(
            message,
            status=record.last_status,
            body=record.last_body,
            attempts=record.attempts,
        ) from record.last_error
