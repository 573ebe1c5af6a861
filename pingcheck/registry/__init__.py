"""Status registry — per-service health records, expiry and snapshots."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from .models import (
    DEFAULT_SERVICE,
    NotifyRequest,
    ServiceStatus,
    Status,
    StatusRecord,
    parse_expiration,
    parse_status,
)
from .query import HealthQueryService
from .store import ServiceEntry, StatusRegistry

# One registry per process, created on first use
_default_registry: StatusRegistry | None = None
_default_lock = threading.Lock()


def get_registry() -> StatusRegistry:
    """Return the process-wide registry."""
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            _default_registry = StatusRegistry()
        return _default_registry


def notify(
    request: NotifyRequest | Mapping[str, Any] | str | None = None,
    service: str = DEFAULT_SERVICE,
) -> StatusRecord:
    """Report a status to the process-wide registry."""
    return get_registry().notify(request, service)


def snapshot(now: datetime | None = None) -> list[ServiceStatus]:
    """Snapshot the process-wide registry."""
    return HealthQueryService(get_registry()).snapshot(now)


__all__ = [
    "DEFAULT_SERVICE",
    "HealthQueryService",
    "NotifyRequest",
    "ServiceEntry",
    "ServiceStatus",
    "Status",
    "StatusRecord",
    "StatusRegistry",
    "get_registry",
    "notify",
    "parse_expiration",
    "parse_status",
    "snapshot",
]
