"""Point-in-time view of every service in a registry."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from .models import ServiceStatus
from .store import StatusRegistry

logger = logging.getLogger(__name__)


class HealthQueryService:
    """Builds snapshots of a StatusRegistry.

    Reading is also a write: expired records are reverted to their fallback
    while the snapshot is taken, and the reversion sticks. The whole pass runs
    under the registry lock against a single timestamp so one snapshot never
    mixes resolved and unresolved state.
    """

    def __init__(self, registry: StatusRegistry) -> None:
        self.registry = registry

    def snapshot(self, now: datetime | None = None) -> list[ServiceStatus]:
        if now is None:
            now = datetime.now(timezone.utc)
        elif now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)

        rows = [
            ServiceStatus(
                service=service,
                status=record.status,
                message=record.message,
                expiration=record.expiration,
            )
            for service, record in self.registry.resolve_all(now)
        ]

        logger.debug("Snapshot at %s: %d services", now.isoformat(), len(rows))
        return rows
