"""TLS material for the health endpoint.

uvicorn loads keys and certificates from files, so inline PEM values are
written to a private temp directory first.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path

from pingcheck.config import PingCheckSettings

logger = logging.getLogger(__name__)


class TLSConfigError(Exception):
    """Raised when TLS is requested but the key/certificate are unusable."""


@dataclass
class TLSFiles:
    keyfile: str
    certfile: str
    password: str | None = None
    tempdir: str | None = None

    def uvicorn_kwargs(self) -> dict[str, str | None]:
        return {
            "ssl_keyfile": self.keyfile,
            "ssl_certfile": self.certfile,
            "ssl_keyfile_password": self.password,
        }

    def cleanup(self) -> None:
        """Remove temp files written for inline PEM values."""
        if self.tempdir:
            shutil.rmtree(self.tempdir, ignore_errors=True)
            self.tempdir = None


def resolve_tls(cfg: PingCheckSettings) -> TLSFiles | None:
    """Return file paths for uvicorn, or None when TLS is not configured."""
    if not cfg.tls_enabled:
        return None

    if not (cfg.health_certificate or cfg.health_certificate_path):
        raise TLSConfigError("TLS key configured without a certificate")

    # Paths are checked before anything is written
    if not cfg.health_key:
        _require_file(cfg.health_key_path)
    if not cfg.health_certificate:
        _require_file(cfg.health_certificate_path)

    keyfile = cfg.health_key_path
    certfile = cfg.health_certificate_path
    tempdir: str | None = None
    if cfg.health_key or cfg.health_certificate:
        tempdir = tempfile.mkdtemp(prefix="pingcheck-tls-")
        if cfg.health_key:
            keyfile = _write_private(Path(tempdir) / "key.pem", cfg.health_key)
        if cfg.health_certificate:
            certfile = _write_private(Path(tempdir) / "cert.pem", cfg.health_certificate)

    logger.info("TLS enabled (key=%s, cert=%s)", keyfile, certfile)
    return TLSFiles(
        keyfile=keyfile,
        certfile=certfile,
        password=cfg.health_passphrase or None,
        tempdir=tempdir,
    )


def _require_file(path: str) -> None:
    if not Path(path).is_file():
        raise TLSConfigError(f"TLS file not found: {path}")


def _write_private(target: Path, value: str) -> str:
    fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as fh:
        fh.write(value)
    return str(target)
