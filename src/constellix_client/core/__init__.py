"""Core Constellix client модули."""

from .config import (
    BASE_URL,
    CHECKS_HOST,
    TimeoutConfig,
    ClientConfig,
)
from .exceptions import (
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
    classify_requests_exception,
)
from .context import CallContext
from .endpoints import Target, ResolvedEndpoint, resolve_endpoint
from .signing import generate_token, build_headers
from .rate_gate import RateGate
from .transport import Transport, create_ssl_context
from .error_handler import ErrorHandler
from .client import ConstellixClient, new_client

__all__ = [
    # Config
    "BASE_URL",
    "CHECKS_HOST",
    "TimeoutConfig",
    "ClientConfig",
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
    "classify_requests_exception",
    # Pipeline
    "CallContext",
    "Target",
    "ResolvedEndpoint",
    "resolve_endpoint",
    "generate_token",
    "build_headers",
    "RateGate",
    "Transport",
    "create_ssl_context",
    "ErrorHandler",
    # Client
    "ConstellixClient",
    "new_client",
]
