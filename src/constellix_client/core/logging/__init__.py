"""
Logging for the Constellix client.

The library logs through the ``constellix_client`` logger and installs no
handlers unless a LoggingConfig is passed to the client.

Example:
    >>> from constellix_client import ConstellixClient
    >>> from constellix_client.core.logging import LoggingConfig
    >>>
    >>> client = ConstellixClient(
    ...     api_key="key",
    ...     secret_key="secret",
    ...     logging=LoggingConfig.create(level="DEBUG", format="json"),
    ... )
"""

from .config import LoggingConfig, LogLevel, LogFormat
from .logger import ClientLogger, DEFAULT_LOGGER_NAME
from .formatters import JSONFormatter, TextFormatter, get_formatter
from .filters import (
    RequestIdFilter,
    ExtraFieldsFilter,
    set_request_id,
    get_request_id,
    reset_request_id,
)

__all__ = [
    # Config
    "LoggingConfig",
    "LogLevel",
    "LogFormat",
    # Logger
    "ClientLogger",
    "DEFAULT_LOGGER_NAME",
    # Formatters
    "JSONFormatter",
    "TextFormatter",
    "get_formatter",
    # Filters
    "RequestIdFilter",
    "ExtraFieldsFilter",
    "set_request_id",
    "get_request_id",
    "reset_request_id",
]
