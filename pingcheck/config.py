"""Endpoint configuration — loaded from environment / .env file."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class PingCheckSettings(BaseSettings):
    """Settings for the health endpoint."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # Bind address
    health_host: str = "127.0.0.1"
    health_port: int = 8080
    health_path: str = "/health"

    # Auth (empty = every request accepted)
    health_secret: str = ""

    # TLS — inline PEM wins over the matching *_path
    health_key: str = ""
    health_key_path: str = ""
    health_certificate: str = ""
    health_certificate_path: str = ""
    health_passphrase: str = ""

    # Logging
    log_level: str = "INFO"

    @property
    def tls_enabled(self) -> bool:
        return bool(self.health_key or self.health_key_path)


settings = PingCheckSettings()
