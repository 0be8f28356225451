"""
Logging configuration for Constellix client.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any

from .formatters import RESERVED_RECORD_FIELDS


class LogLevel(str, Enum):
    """Log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""
    JSON = "json"
    TEXT = "text"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Куда и как клиент пишет свои логи.

    Без LoggingConfig клиент пишет в логгер ``constellix_client`` и не
    трогает его handlers: решает настройка логирования приложения.
    С LoggingConfig клиент ставит свои console/file handlers на время
    жизни (до ``close()``).

    Проверки при создании:
        - ``enable_file`` и ``file_path`` задаются только вместе
        - хотя бы один вывод включён
        - ``extra_fields`` не перекрывают стандартные поля LogRecord
          и ``request_id``

    Example:
        >>> config = LoggingConfig.create(level="DEBUG", format="json")
        >>> config = LoggingConfig.create(enable_console=False, enable_file=True, file_path="logs/constellix.log")
    """

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.TEXT
    enable_console: bool = True
    enable_file: bool = False
    file_path: Optional[str] = None
    max_bytes: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5
    extra_fields: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.enable_file and not self.file_path:
            raise ValueError("file_path is required when enable_file=True")
        if self.file_path and not self.enable_file:
            raise ValueError("file_path is set but enable_file=False")
        if not (self.enable_console or self.enable_file):
            raise ValueError("no log output enabled: set enable_console or enable_file")
        if self.max_bytes <= 0:
            raise ValueError("max_bytes must be positive")
        if self.backup_count < 0:
            raise ValueError("backup_count must not be negative")

        clashing = sorted(
            key for key in self.extra_fields
            if key in RESERVED_RECORD_FIELDS or key == "request_id"
        )
        if clashing:
            raise ValueError(f"extra_fields shadow log record fields: {', '.join(clashing)}")

    @property
    def level_no(self) -> int:
        """Numeric level for ``logging``."""
        return getattr(logging, self.level.value)

    @classmethod
    def create(
        cls,
        level: str = "INFO",
        format: str = "text",
        enable_console: bool = True,
        enable_file: bool = False,
        file_path: Optional[str] = None,
        max_bytes: int = 10 * 1024 * 1024,
        backup_count: int = 5,
        extra_fields: Optional[Dict[str, Any]] = None
    ) -> "LoggingConfig":
        """
        Create LoggingConfig from plain strings (env, CLI flags).

        Raises:
            ValueError: Unknown level/format or inconsistent options
        """
        try:
            log_level = LogLevel(level.strip().upper())
        except ValueError:
            raise ValueError(
                f"Unknown log level {level!r}, expected one of: "
                f"{', '.join(item.value for item in LogLevel)}"
            ) from None
        try:
            log_format = LogFormat(format.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown log format {format!r}, expected 'json' or 'text'") from None

        return cls(
            level=log_level,
            format=log_format,
            enable_console=enable_console,
            enable_file=enable_file,
            file_path=file_path,
            max_bytes=max_bytes,
            backup_count=backup_count,
            extra_fields=extra_fields or {}
        )
