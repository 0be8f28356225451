"""
Pydantic settings for environment configuration.
"""

from typing import FrozenSet, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..config import BASE_URL, CHECKS_HOST


class ConstellixSettings(BaseSettings):
    """
    Constellix client configuration from environment variables.

    Reads from:
    1. Explicit keyword arguments
    2. Environment variables (CONSTELLIX_*)
    3. .env file (only if passed as ``_env_file``)
    4. Defaults

    Example .env file:
        CONSTELLIX_API_KEY=0c4b1c2e-...
        CONSTELLIX_SECRET_KEY=...
        CONSTELLIX_PROXY_URL=http://proxy.local:3128
        CONSTELLIX_REQUEST_INTERVAL=0.5
        CONSTELLIX_LOG_LEVEL=INFO
        CONSTELLIX_LOG_FORMAT=json

    Usage:
        >>> settings = ConstellixSettings()
        >>> settings.request_interval
        0.5
    """

    model_config = SettingsConfigDict(
        env_prefix='CONSTELLIX_',
        env_file=None,
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    # Credentials
    api_key: Optional[str] = Field(default=None, description="API key id")
    secret_key: Optional[str] = Field(default=None, description="HMAC secret")

    # Transport
    insecure: bool = Field(default=False, description="Disable TLS certificate verification")
    proxy_url: Optional[str] = Field(default=None, description="Proxy for all traffic")
    request_interval: float = Field(default=0.0, description="Min seconds between requests, <= 0 disables")

    # Endpoints
    base_url: str = Field(default=BASE_URL)
    checks_hosts: str = Field(default=CHECKS_HOST, description="Comma-separated checks API hosts")

    # Timeouts
    timeout_connect: float = Field(default=10.0, gt=0)
    timeout_read: float = Field(default=60.0, gt=0)

    # Logging (no level and no file = library installs no handlers)
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = None
    log_format: Literal["json", "text"] = Field(default="text")
    log_enable_console: bool = Field(default=True)
    log_file_path: Optional[str] = None
    log_max_bytes: int = Field(default=10 * 1024 * 1024, gt=0)
    log_backup_count: int = Field(default=5, ge=0)

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper() or None
        return v

    @field_validator('log_format', mode='before')
    @classmethod
    def normalize_log_format(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    def checks_host_set(self) -> FrozenSet[str]:
        """Parsed ``checks_hosts``."""
        return frozenset(
            host.strip().lower() for host in self.checks_hosts.split(',') if host.strip()
        )
