from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

import typer

from . import __version__
from .api.client import GatewayRequestError
from .models.config import ConfigError, GatewayConfig
from .pipeline.runner import run_gateway_request_sync, run_notify_sync
from .utils.normalize import normalize_entries

app = typer.Typer(add_completion=False)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "time": datetime.now(timezone.utc).isoformat(),
        }
        return json.dumps(payload)


def setup_logging(verbose: bool = False) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, handlers=[handler], force=True)


@app.command()
def request(
    path: str = typer.Argument(..., help="Path under /accounts/<id>/gateway, e.g. /lists"),
    method: str = typer.Option("GET", "--method", "-X"),
    data: str | None = typer.Option(None, "--data", "-d", help="JSON request body."),
    verbose: bool = typer.Option(False, "--verbose"),
) -> None:
    """Send a request to the Zero Trust gateway, rotating API tokens on failure."""
    setup_logging(verbose)
    body = None
    if data is not None:
        try:
            body = json.loads(data)
        except json.JSONDecodeError as exc:
            typer.echo(f"invalid JSON body: {exc}", err=True)
            raise typer.Exit(1)
    try:
        result = run_gateway_request_sync(GatewayConfig.from_env(), path, method=method, json=body)
    except (ConfigError, GatewayRequestError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1)
    typer.echo(json.dumps(result, indent=2, default=str))


@app.command()
def normalize(
    input: str = typer.Argument(..., help="Block-list or allow-list file; '-' reads stdin."),
    allowlist: bool = typer.Option(False, "--allowlist", help="Also strip @@|| allow-list markers."),
) -> None:
    """Print normalized, de-duplicated domains from a list file."""
    if input == "-":
        lines = sys.stdin.read().splitlines()
    else:
        try:
            lines = Path(input).read_text(encoding="utf-8").splitlines()
        except OSError as exc:
            typer.echo(f"cannot read {input}: {exc}", err=True)
            raise typer.Exit(1)
    for domain in normalize_entries(lines, is_allowlisting=allowlist):
        typer.echo(domain)


@app.command()
def notify(message: str = typer.Argument(...)) -> None:
    """Send a message to the configured webhook."""
    setup_logging()
    if not run_notify_sync(GatewayConfig.from_env(), message):
        typer.echo("notification not sent", err=True)
        raise typer.Exit(1)
    typer.echo("notification sent")


@app.command("show-config")
def show_config() -> None:
    """Print the configuration read from the environment, secrets redacted."""
    config = GatewayConfig.from_env()
    payload = {"version": __version__, "config": config.redacted(), "token_count": len(config.tokens)}
    typer.echo(json.dumps(payload, indent=2, default=str))
