"""
Configuration loader from environment variables and .env files.
"""

from typing import Any, Optional

from pydantic import ValidationError

from ..config import ClientConfig, TimeoutConfig
from ..exceptions import ConfigurationError
from ..logging.config import LoggingConfig
from ...utils.sanitizer import mask_url
from .secrets import mask_secret
from .settings import ConstellixSettings


def load_settings(env_file: Optional[str] = None, **overrides: Any) -> ConstellixSettings:
    """
    Read ConstellixSettings; validation errors become ConfigurationError.

    Args:
        env_file: Optional .env file
        **overrides: Field values that win over the environment
    """
    try:
        return ConstellixSettings(_env_file=env_file, **overrides)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid environment configuration: {e}") from e


def load_from_env(env_file: Optional[str] = None, **overrides: Any) -> ClientConfig:
    """
    Load ClientConfig from environment variables.

    Priority (highest to lowest):
    1. **overrides - explicit parameters (ConstellixSettings field names)
    2. Environment variables (CONSTELLIX_*)
    3. .env file
    4. Defaults

    Raises:
        ConfigurationError: Invalid values or missing credentials

    Example:
        >>> config = load_from_env()
        >>> config = load_from_env(env_file=".env.staging", request_interval=1.0)
    """
    settings = load_settings(env_file, **overrides)

    logging_config = None
    # Файл без уровня: пишем с уровнем INFO
    level = settings.log_level or ("INFO" if settings.log_file_path else None)
    if level:
        try:
            logging_config = LoggingConfig.create(
                level=level,
                format=settings.log_format,
                enable_console=settings.log_enable_console,
                enable_file=bool(settings.log_file_path),
                file_path=settings.log_file_path,
                max_bytes=settings.log_max_bytes,
                backup_count=settings.log_backup_count,
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid logging configuration: {e}") from e

    return ClientConfig(
        api_key=settings.api_key or "",
        secret_key=settings.secret_key or "",
        insecure=settings.insecure,
        proxy_url=settings.proxy_url,
        request_interval=settings.request_interval,
        base_url=settings.base_url,
        checks_hosts=settings.checks_host_set(),
        timeout=TimeoutConfig(connect=settings.timeout_connect, read=settings.timeout_read),
        logging=logging_config,
    )


def print_config_summary(config: ClientConfig, mask_secrets: bool = True):
    """
    Print configuration summary.

    Example:
        >>> print_config_summary(load_from_env())
        ClientConfig:
          api_key: 0c4b***1111
          ...
    """
    api_key = mask_secret(config.api_key) if mask_secrets else config.api_key
    secret_key = mask_secret(config.secret_key) if mask_secrets else config.secret_key
    proxy = config.proxy_url
    if proxy and mask_secrets:
        proxy = mask_url(proxy)

    print("ClientConfig:")
    print(f"  api_key: {api_key}")
    print(f"  secret_key: {secret_key}")
    print(f"  base_url: {config.base_url}")
    print(f"  checks_hosts: {', '.join(sorted(config.checks_hosts))}")
    print(f"  insecure: {config.insecure}")
    print(f"  proxy_url: {proxy}")
    print(f"  request_interval: {config.request_interval}s")
    print(f"  timeout: connect={config.timeout.connect}s, read={config.timeout.read}s")

    if config.logging:
        print(f"  logging: level={config.logging.level.value}, format={config.logging.format.value}")
        if config.logging.enable_file:
            print(f"    file: {config.logging.file_path}")
