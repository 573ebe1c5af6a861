"""Run the health endpoint inside the host process.

Application code calls ``start_server()`` once at startup and keeps calling
``pingcheck.notify()`` as usual; uvicorn serves snapshots from a daemon
thread.
"""

from __future__ import annotations

import logging
import threading
import time

import uvicorn

from pingcheck.config import PingCheckSettings, settings
from pingcheck.registry import StatusRegistry
from pingcheck.server.app import create_app
from pingcheck.server.tls import TLSFiles, resolve_tls

logger = logging.getLogger(__name__)


def build_config(
    registry: StatusRegistry | None = None,
    cfg: PingCheckSettings | None = None,
) -> tuple[uvicorn.Config, TLSFiles | None]:
    """uvicorn config for the endpoint, plus any TLS files to clean up."""
    cfg = cfg or settings
    tls = resolve_tls(cfg)
    tls_kwargs = tls.uvicorn_kwargs() if tls else {}

    config = uvicorn.Config(
        create_app(registry, cfg),
        host=cfg.health_host,
        port=cfg.health_port,
        log_level=cfg.log_level.lower(),
        access_log=False,
        **tls_kwargs,
    )
    return config, tls


class BackgroundServer:
    """uvicorn server running on a daemon thread."""

    def __init__(self, config: uvicorn.Config, tls: TLSFiles | None = None) -> None:
        self.server = uvicorn.Server(config)
        self.tls = tls
        self._thread = threading.Thread(
            target=self.server.run, name="pingcheck-server", daemon=True
        )

    @property
    def started(self) -> bool:
        return self.server.started

    def start(self, timeout: float = 10.0) -> "BackgroundServer":
        """Start serving and wait until the socket is bound."""
        self._thread.start()
        deadline = time.monotonic() + timeout
        while not self.server.started:
            if not self._thread.is_alive():
                raise RuntimeError("Health server exited during startup")
            if time.monotonic() > deadline:
                raise TimeoutError(f"Health server did not start within {timeout}s")
            time.sleep(0.05)

        cfg = self.server.config
        scheme = "https" if self.tls else "http"
        logger.info("Health endpoint listening on %s://%s:%s", scheme, cfg.host, cfg.port)
        return self

    def stop(self, timeout: float = 10.0) -> None:
        """Ask uvicorn to exit and wait for the thread."""
        self.server.should_exit = True
        if self._thread.is_alive():
            self._thread.join(timeout=timeout)
        if self.tls:
            self.tls.cleanup()
        logger.info("Health endpoint stopped")


def start_server(
    registry: StatusRegistry | None = None,
    cfg: PingCheckSettings | None = None,
    timeout: float = 10.0,
) -> BackgroundServer:
    """Start the health endpoint in the background and return its handle."""
    config, tls = build_config(registry, cfg)
    server = BackgroundServer(config, tls)
    try:
        return server.start(timeout=timeout)
    except Exception:
        server.stop(timeout=1.0)
        raise
