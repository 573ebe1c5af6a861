"""Status models and permissive input normalization.

Every parser here returns a default instead of raising on malformed
input.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from email.utils import parsedate_to_datetime
from enum import Enum
from typing import Any

DEFAULT_SERVICE = "default"
MISSING_MESSAGE = "Message not provided."


# ── Models ───────────────────────────────────────────────────────────────────


class Status(str, Enum):
    OK = "ok"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class StatusRecord:
    """A reported (or resolved) health status for one service."""

    status: Status
    message: str | None = None
    expiration: datetime | None = None

    def is_expired(self, now: datetime) -> bool:
        return self.expiration is not None and self.expiration < now


HEALTHY = StatusRecord(Status.OK)
EXPIRED_WITHOUT_FALLBACK = StatusRecord(Status.ERROR)


@dataclass(frozen=True)
class NotifyRequest:
    """Explicit report from application code. Unset fields get defaults."""

    status: Any = None
    message: Any = None
    expiration: Any = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "NotifyRequest":
        # "kind" is accepted as an alias for "status"
        status = data.get("status") or data.get("kind")
        return cls(
            status=status,
            message=data.get("message"),
            expiration=data.get("expiration"),
        )

    def to_record(self) -> StatusRecord:
        message = self.message if isinstance(self.message, str) and self.message else MISSING_MESSAGE
        return StatusRecord(
            status=parse_status(self.status, default=Status.WARNING),
            message=message,
            expiration=parse_expiration(self.expiration),
        )


@dataclass(frozen=True)
class ServiceStatus:
    """One row of a snapshot."""

    service: str
    status: Status
    message: str | None
    expiration: datetime | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "service": self.service,
            "status": self.status.value,
            "message": self.message,
            "expiration": self.expiration.isoformat() if self.expiration else None,
        }


# ── Parsers ──────────────────────────────────────────────────────────────────


def parse_status(value: Any, default: Status = Status.WARNING) -> Status:
    """Map an enum member, value ("ok") or member name ("OK") to a Status."""
    if isinstance(value, Status):
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        for member in Status:
            if key == member.value:
                return member
    return default


def parse_expiration(value: Any) -> datetime | None:
    """Best-effort conversion to an aware UTC datetime; None when unusable."""
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        return _as_utc(value)

    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)

    if isinstance(value, (int, float)):
        # 0 means "no expiration", not the epoch
        if not value:
            return None
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return _as_utc(datetime.fromisoformat(text))
        except ValueError:
            pass
        try:
            return _as_utc(parsedate_to_datetime(text))
        except (TypeError, ValueError, IndexError):
            return None

    return None


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
