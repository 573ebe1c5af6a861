"""pingcheck — in-process health registry behind a single HTTP(S) endpoint."""

from .registry import (
    NotifyRequest,
    ServiceStatus,
    Status,
    StatusRecord,
    StatusRegistry,
    get_registry,
    notify,
    snapshot,
)

__version__ = "0.1.0"

__all__ = [
    "NotifyRequest",
    "ServiceStatus",
    "Status",
    "StatusRecord",
    "StatusRegistry",
    "get_registry",
    "notify",
    "snapshot",
]
