"""Shared test fixtures."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from pingcheck.config import PingCheckSettings
from pingcheck.registry import HealthQueryService, StatusRegistry


@pytest.fixture
def registry() -> StatusRegistry:
    """A fresh registry, independent of the process-wide one."""
    return StatusRegistry()


@pytest.fixture
def query(registry: StatusRegistry) -> HealthQueryService:
    return HealthQueryService(registry)


@pytest.fixture
def now() -> datetime:
    return datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def cfg() -> PingCheckSettings:
    """Settings with no secret and no TLS, ignoring the environment's values."""
    return PingCheckSettings(
        health_host="127.0.0.1",
        health_port=8080,
        health_path="/health",
        health_secret="",
        health_key="",
        health_key_path="",
        health_certificate="",
        health_certificate_path="",
        health_passphrase="",
        log_level="WARNING",
    )
