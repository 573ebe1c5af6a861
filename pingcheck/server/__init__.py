"""Health endpoint — FastAPI app, TLS material, in-process runner."""

from .app import SecretAuthMiddleware, create_app
from .runner import BackgroundServer, start_server
from .tls import TLSConfigError, TLSFiles, resolve_tls
