"""Mini README: Entry point CLI for the QR scan core.

This script exposes a Typer CLI that starts the FastAPI facade with
configurable host, port and production flags, and a ``classify`` helper to
inspect how a payload would be categorised.
"""

from __future__ import annotations

import typer
import uvicorn

from qrscan.classification import classify
from qrscan.configuration import get_settings
from qrscan.logging_utils import configure_root_logger

cli = typer.Typer(help="Run and inspect the QR scan core.")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    # Browsers cannot open the 0.0.0.0 sentinel, so point at localhost instead.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting QR scan core on {effective_host}:{effective_port}.\n"
        f"Open http://{browser_host}:{effective_port}/docs to explore the API."
    )
    uvicorn.run(
        "qrscan.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command("classify")
def classify_command(
    data: str = typer.Argument(..., help="Decoded QR payload."),
    raw_type: str = typer.Option("qr", help="Scanner symbology label."),
) -> None:
    """Print the content type and action for a payload."""

    result = classify(data, raw_type)
    typer.echo(f"type: {result.content_type.value}")
    typer.echo(f"label: {result.label}")
    typer.echo(f"actionable: {'yes' if result.actionable else 'no'}")
    if result.action_target:
        typer.echo(f"action: {result.action_target}")


if __name__ == "__main__":
    cli()
