"""In-process status registry with expiration and fallback semantics.

Each service keeps the record currently in force plus the last non-expiring
record it reported. When the current record lapses it is replaced by that
fallback (or by an error record if the service never reported one). The
replacement happens lazily, on read, under the same lock as writes.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from .models import (
    DEFAULT_SERVICE,
    EXPIRED_WITHOUT_FALLBACK,
    HEALTHY,
    NotifyRequest,
    StatusRecord,
)

logger = logging.getLogger(__name__)


@dataclass
class ServiceEntry:
    current: StatusRecord
    fallback: StatusRecord | None = None


class StatusRegistry:
    """Thread-safe table of per-service health records.

    All lookups, writes and expiry resolution are serialized by one lock.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[str, ServiceEntry] = {
            DEFAULT_SERVICE: ServiceEntry(current=HEALTHY, fallback=HEALTHY),
        }

    def notify(
        self,
        request: NotifyRequest | Mapping[str, Any] | str | None = None,
        service: str = DEFAULT_SERVICE,
    ) -> StatusRecord:
        """Record a new status for ``service``.

        ``request=None`` reports the service healthy with no expiration. A
        plain string in place of the request names the service instead.
        Malformed fields fall back to defaults; this never raises.
        """
        name, record = _normalize(request, service)
        with self._lock:
            entry = self._entries.get(name)
            if entry is None:
                entry = ServiceEntry(current=record)
                self._entries[name] = entry
            entry.current = record
            if record.expiration is None:
                entry.fallback = record

        logger.debug(
            "Service %s reported %s (expires=%s)",
            name,
            record.status.value,
            record.expiration.isoformat() if record.expiration else "never",
        )
        return record

    def resolve(self, service: str, now: datetime) -> StatusRecord | None:
        """Revert ``service`` to its fallback if its record lapsed before ``now``."""
        with self._lock:
            return self._resolve_locked(service, now)

    def resolve_all(self, now: datetime) -> list[tuple[str, StatusRecord]]:
        """Resolve every service against one timestamp, in insertion order."""
        with self._lock:
            return [(name, self._resolve_locked(name, now)) for name in self._entries]

    def _resolve_locked(self, service: str, now: datetime) -> StatusRecord | None:
        entry = self._entries.get(service)
        if entry is None:
            return None

        if entry.current.is_expired(now):
            replacement = entry.fallback or EXPIRED_WITHOUT_FALLBACK
            logger.info(
                "Status for %s expired at %s: %s -> %s",
                service,
                entry.current.expiration.isoformat(),
                entry.current.status.value,
                replacement.status.value,
            )
            entry.current = replacement

        return entry.current

    def get(self, service: str) -> StatusRecord | None:
        """Current record for one service, without resolving expiry."""
        with self._lock:
            entry = self._entries.get(service)
            return entry.current if entry else None

    def services(self) -> list[str]:
        """Service names in the order they were first reported."""
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def _normalize(
    request: NotifyRequest | Mapping[str, Any] | str | None,
    service: Any,
) -> tuple[str, StatusRecord]:
    name = service if isinstance(service, str) and service else DEFAULT_SERVICE

    if request is None:
        return name, HEALTHY
    if isinstance(request, str):
        return (request or name), HEALTHY
    if isinstance(request, NotifyRequest):
        return name, request.to_record()
    if isinstance(request, Mapping):
        return name, NotifyRequest.from_mapping(request).to_record()

    # Anything else is not a usable report; treat it as a bare "healthy" call
    return name, HEALTHY
