"""Health endpoint FastAPI application — secret middleware + snapshot route."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from pingcheck import __version__
from pingcheck.config import PingCheckSettings, settings
from pingcheck.registry import HealthQueryService, StatusRegistry, get_registry

logger = logging.getLogger(__name__)

SECRET_HEADER = "X-Check-Secret"
SECRET_QUERY_PARAM = "checkSecret"


# ── Auth middleware ───────────────────────────────────────────────────────────


class SecretAuthMiddleware(BaseHTTPMiddleware):
    """Reject requests that carry neither a valid X-Check-Secret header nor
    a valid ``checkSecret`` query parameter."""

    def __init__(self, app: ASGIApp, secret: str = "") -> None:
        super().__init__(app)
        self.secret = secret

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # No secret configured: open endpoint
        if not self.secret:
            return await call_next(request)

        if request.headers.get(SECRET_HEADER) == self.secret:
            return await call_next(request)
        if request.query_params.get(SECRET_QUERY_PARAM) == self.secret:
            return await call_next(request)

        client = request.client.host if request.client else "unknown"
        logger.warning("Rejected health request from %s: invalid secret", client)
        return JSONResponse(status_code=401, content={"message": "Invalid Secret."})


# ── Routes ───────────────────────────────────────────────────────────────────


def health_snapshot(request: Request) -> list[dict[str, Any]]:
    """Per-service health, with expired statuses reverted."""
    query: HealthQueryService = request.app.state.query
    return [row.to_dict() for row in query.snapshot()]


# ── App factory ──────────────────────────────────────────────────────────────


def create_app(
    registry: StatusRegistry | None = None,
    cfg: PingCheckSettings | None = None,
) -> FastAPI:
    """Create the health endpoint application around ``registry``."""
    cfg = cfg or settings
    registry = registry if registry is not None else get_registry()

    app = FastAPI(
        title="pingcheck",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.registry = registry
    app.state.query = HealthQueryService(registry)

    app.add_middleware(SecretAuthMiddleware, secret=cfg.health_secret)
    app.add_api_route(cfg.health_path, health_snapshot, methods=["GET"])

    return app


# Target for `uvicorn pingcheck.server.app:app`
app = create_app()
