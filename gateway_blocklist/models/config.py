from __future__ import annotations

import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field

DEFAULT_API_HOST = "https://api.cloudflare.com/client/v4"

ENV_VARS = {
    "account_id": "CLOUDFLARE_ACCOUNT_ID",
    "account_email": "CLOUDFLARE_ACCOUNT_EMAIL",
    "api_host": "CLOUDFLARE_API_HOST",
    "api_token": "CLOUDFLARE_API_TOKEN",
    "api_token_1": "CLOUDFLARE_API_TOKEN_1",
    "api_token_2": "CLOUDFLARE_API_TOKEN_2",
    "api_token_3": "CLOUDFLARE_API_TOKEN_3",
    "webhook_url": "DISCORD_WEBHOOK_URL",
}

SECRET_FIELDS = ("api_token", "api_token_1", "api_token_2", "api_token_3", "webhook_url")


class ConfigError(ValueError):
    pass


class GatewayConfig(BaseModel):
    account_id: Optional[str] = None
    account_email: Optional[str] = None
    api_host: str = DEFAULT_API_HOST
    api_token: Optional[str] = None
    api_token_1: Optional[str] = None
    api_token_2: Optional[str] = None
    api_token_3: Optional[str] = None
    webhook_url: Optional[str] = None
    notify_prefix: str = "CGPS"
    max_attempts: int = Field(default=50, ge=1)
    cycle_delay_seconds: float = Field(default=5.0, ge=0)
    timeout_seconds: float = Field(default=30.0, gt=0)

    model_config = {"frozen": True}

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "GatewayConfig":
        """Build a config from environment variables; blank values count as unset."""
        env = os.environ if environ is None else environ
        values = {}
        for field_name, var in ENV_VARS.items():
            raw = (env.get(var) or "").strip()
            if raw:
                values[field_name] = raw
        values.update(overrides)
        return cls(**values)

    @property
    def tokens(self) -> tuple[str, ...]:
        candidates = (self.api_token, self.api_token_1, self.api_token_2, self.api_token_3)
        return tuple(token for token in candidates if token)

    def gateway_url(self, path: str) -> str:
        if not self.account_id:
            raise ConfigError(f"account id is not configured (set {ENV_VARS['account_id']})")
        if not self.api_host:
            raise ConfigError(f"API host is not configured (set {ENV_VARS['api_host']})")
        return f"{self.api_host.rstrip('/')}/accounts/{self.account_id}/gateway{path}"

    def redacted(self) -> dict:
        data = self.model_dump()
        for secret in SECRET_FIELDS:
            if data.get(secret):
                data[secret] = "***"
        return data
