"""
Structured logger used by the Constellix clients.

All clients log through the one ``constellix_client`` logger. Clients
built with a LoggingConfig install their own handlers on it; the
module-level registry below tracks them so that closing one client never
breaks the logging of another.
"""

import logging
import sys
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .config import LoggingConfig
from .filters import ExtraFieldsFilter, RequestIdFilter, get_request_id
from .formatters import get_formatter
from ...utils.sanitizer import mask_sensitive_data

DEFAULT_LOGGER_NAME = "constellix_client"
_OWNED_MARK = "_constellix_owned"

_registry_lock = threading.Lock()
# logger name -> (level, propagate) до появления первого владельца
_original_state: Dict[str, Tuple[int, bool]] = {}
# logger name -> настроенные ClientLogger в порядке создания
_owners: Dict[str, List["ClientLogger"]] = {}


def _apply_owner_settings(logger: logging.Logger, owners: List["ClientLogger"]) -> None:
    # Уровень логгера - самый подробный среди владельцев; каждый handler режет по своему
    logger.setLevel(min(owner.config.level_no for owner in owners))
    logger.propagate = False


class ClientLogger:
    """
    Thin wrapper over ``logging.Logger`` with keyword fields.

    Keyword arguments become record attributes (``extra``) after masking,
    so a token or proxy password passed by mistake never reaches a handler.
    The request id bound by the client for the current call is attached
    to every record.

    Without a config the wrapped logger is left alone: no handlers, no
    level change, records propagate to whatever the application set up.

    With a config the instance adds its own console/file handlers and the
    logger stops propagating while at least one configured instance is
    open. Several configured clients may be open at once: their handlers
    coexist, the logger level is the most verbose of their levels, and the
    original level and propagation come back when the last one closes.

    Example:
        >>> logger = ClientLogger(LoggingConfig.create(level="DEBUG", format="json"))
        >>> logger.info("Request started", method="GET", url="https://api.dns.constellix.com/v1/domains")
    """

    def __init__(self, config: Optional[LoggingConfig] = None, name: str = DEFAULT_LOGGER_NAME):
        self.config = config
        self.name = name
        self._closed = False
        self._handlers: List[logging.Handler] = []
        self._logger = logging.getLogger(name)

        if config is None:
            return

        self._handlers = self._build_handlers(config)

        with _registry_lock:
            owners = _owners.setdefault(name, [])
            if not owners:
                _original_state[name] = (self._logger.level, self._logger.propagate)
            owners.append(self)
            for handler in self._handlers:
                self._logger.addHandler(handler)
            _apply_owner_settings(self._logger, owners)

    @staticmethod
    def _build_handlers(config: LoggingConfig) -> List[logging.Handler]:
        """Console (stderr) and rotating file handlers for ``config``."""
        level = config.level_no
        formatter = get_formatter(config.format.value)
        filters: List[logging.Filter] = [RequestIdFilter()]
        if config.extra_fields:
            filters.append(ExtraFieldsFilter(config.extra_fields))

        handlers: List[logging.Handler] = []
        if config.enable_console:
            handlers.append(logging.StreamHandler(sys.stderr))

        if config.enable_file:
            Path(config.file_path).parent.mkdir(parents=True, exist_ok=True)
            # app.log -> app.log.1 ... app.log.N по достижении max_bytes
            handlers.append(RotatingFileHandler(
                filename=config.file_path,
                maxBytes=config.max_bytes,
                backupCount=config.backup_count,
                encoding='utf-8'
            ))

        for handler in handlers:
            handler.setLevel(level)
            handler.setFormatter(formatter)
            for f in filters:
                handler.addFilter(f)
            setattr(handler, _OWNED_MARK, True)

        return handlers

    @property
    def logger(self) -> logging.Logger:
        """Underlying stdlib logger."""
        return self._logger

    @property
    def handlers(self) -> List[logging.Handler]:
        """Handlers installed by this instance."""
        return list(self._handlers)

    def is_enabled_for(self, level: int) -> bool:
        return self._logger.isEnabledFor(level)

    def _log(self, level: int, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return
        extra = mask_sensitive_data(kwargs)
        request_id = get_request_id()
        if request_id and "request_id" not in extra:
            extra["request_id"] = request_id
        self._logger.log(level, message, exc_info=exc_info, extra=extra)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """
        Log info message.

        Example:
            >>> logger.info("Request completed", status_code=200, duration_ms=150)
        """
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, **kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log error with traceback; call from an exception handler."""
        self._log(logging.ERROR, message, exc_info=True, **kwargs)

    def close(self) -> None:
        """
        Flush and detach the handlers this instance installed.

        The logger settings of the remaining configured instances are
        re-applied; after the last one the original level and propagation
        are restored. Idempotent. Handlers owned by the application are
        not touched.
        """
        if self._closed:
            return
        self._closed = True

        if self.config is None:
            return

        with _registry_lock:
            for handler in self._handlers:
                self._logger.removeHandler(handler)
                handler.flush()
                handler.close()
            self._handlers.clear()

            owners = _owners.get(self.name, [])
            if self in owners:
                owners.remove(self)

            if owners:
                _apply_owner_settings(self._logger, owners)
            else:
                _owners.pop(self.name, None)
                level, propagate = _original_state.pop(self.name, (logging.NOTSET, True))
                self._logger.setLevel(level)
                self._logger.propagate = propagate

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
