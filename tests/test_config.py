import pytest

from gateway_blocklist.models.config import DEFAULT_API_HOST, ConfigError, GatewayConfig


def test_from_env_reads_tokens_in_order_and_drops_blanks():
    env = {
        "CLOUDFLARE_ACCOUNT_ID": "acc",
        "CLOUDFLARE_API_TOKEN": "primary",
        "CLOUDFLARE_API_TOKEN_1": "   ",
        "CLOUDFLARE_API_TOKEN_2": "second",
        "CLOUDFLARE_API_TOKEN_3": "third",
        "DISCORD_WEBHOOK_URL": "https://hooks.example.com/x",
    }
    config = GatewayConfig.from_env(env)
    assert config.account_id == "acc"
    assert config.api_host == DEFAULT_API_HOST
    assert config.tokens == ("primary", "second", "third")
    assert config.webhook_url == "https://hooks.example.com/x"


def test_from_env_uses_process_environment(monkeypatch):
    monkeypatch.setenv("CLOUDFLARE_ACCOUNT_ID", "from-env")
    monkeypatch.setenv("CLOUDFLARE_API_HOST", "https://api.test/v4")
    monkeypatch.delenv("CLOUDFLARE_API_TOKEN", raising=False)
    config = GatewayConfig.from_env(max_attempts=3)
    assert config.account_id == "from-env"
    assert config.gateway_url("/rules") == "https://api.test/v4/accounts/from-env/gateway/rules"
    assert config.max_attempts == 3


def test_gateway_url_requires_account_id():
    with pytest.raises(ConfigError):
        GatewayConfig(api_token="t").gateway_url("/lists")


def test_gateway_url_requires_host():
    with pytest.raises(ConfigError):
        GatewayConfig(account_id="acc", api_host="").gateway_url("/lists")


def test_redacted_hides_secrets():
    config = GatewayConfig(account_id="acc", api_token="secret", webhook_url="https://hooks.example.com/x")
    data = config.redacted()
    assert data["api_token"] == "***"
    assert data["webhook_url"] == "***"
    assert data["api_token_1"] is None
    assert data["account_id"] == "acc"
