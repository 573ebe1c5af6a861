"""Entry point for the standalone health endpoint — `pingcheck` console script."""

from __future__ import annotations

import logging

import uvicorn
from rich.console import Console
from rich.panel import Panel

from pingcheck.config import settings
from pingcheck.server.app import create_app
from pingcheck.server.tls import TLSConfigError, resolve_tls

console = Console()


def main() -> None:
    """Start the health endpoint in the foreground."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    try:
        tls = resolve_tls(settings)
    except TLSConfigError as e:
        console.print(f"[red]TLS configuration error: {e}[/red]")
        raise SystemExit(1) from e

    scheme = "https" if tls else "http"
    secret_status = "SET" if settings.health_secret else "NOT SET (open endpoint)"

    console.print(
        Panel.fit(
            f"[bold]pingcheck[/bold]\n"
            f"URL:    {scheme}://{settings.health_host}:{settings.health_port}{settings.health_path}\n"
            f"Secret: {secret_status}",
            title="pingcheck",
            border_style="green",
        )
    )

    try:
        uvicorn.run(
            create_app(cfg=settings),
            host=settings.health_host,
            port=settings.health_port,
            log_level=settings.log_level.lower(),
            **(tls.uvicorn_kwargs() if tls else {}),
        )
    finally:
        if tls:
            tls.cleanup()


if __name__ == "__main__":
    main()
