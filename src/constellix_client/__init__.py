"""Constellix DNS REST API client."""

import logging
from importlib.metadata import version, PackageNotFoundError

from .core.client import ConstellixClient, new_client

# Опциональный импорт AsyncConstellixClient (требует httpx)
try:
    from .async_client import AsyncConstellixClient
    _HAS_ASYNC = True
except ImportError:
    _HAS_ASYNC = False
    AsyncConstellixClient = None  # type: ignore
from .core.config import ClientConfig, TimeoutConfig, BASE_URL, CHECKS_HOST
from .core.context import CallContext
from .core.signing import generate_token
from .core.exceptions import (
    ConstellixClientException,
    ConfigurationError,
    SerializationError,
    TransportError,
    TimeoutError,
    ConnectionError,
    ProxyError,
    SSLError,
    RequestCancelledError,
    APIError,
    PrimaryAPIError,
    ChecksAPIError,
)
from .core.logging import LoggingConfig

# NullHandler: без настройки логирования у приложения библиотека молчит
logging.getLogger('constellix_client').addHandler(logging.NullHandler())

try:
    __version__ = version("constellix-client-core")
except PackageNotFoundError:
    # Package is not installed (development mode)
    __version__ = "0.0.0-dev"

__all__ = [
    # Clients
    "ConstellixClient",
    "AsyncConstellixClient",
    "new_client",

    # Config
    "ClientConfig",
    "TimeoutConfig",
    "LoggingConfig",
    "CallContext",
    "BASE_URL",
    "CHECKS_HOST",
    "generate_token",

    # Exceptions
    "ConstellixClientException",
    "ConfigurationError",
    "SerializationError",
    "TransportError",
    "TimeoutError",
    "ConnectionError",
    "ProxyError",
    "SSLError",
    "RequestCancelledError",
    "APIError",
    "PrimaryAPIError",
    "ChecksAPIError",

    # Version
    "__version__",
]
