"""
Log filters: per-call request id and static extra fields.

The request id lives in a ContextVar, so it follows both threads and
asyncio tasks.
"""

import logging
from contextvars import ContextVar
from typing import Any, Dict, Optional

_request_id: ContextVar[Optional[str]] = ContextVar("constellix_request_id", default=None)


def set_request_id(request_id: str):
    """
    Bind a request id to the current context.

    Returns:
        Token for :func:`reset_request_id`
    """
    return _request_id.set(request_id)


def get_request_id() -> Optional[str]:
    """Request id bound to the current context, if any."""
    return _request_id.get()


def reset_request_id(token) -> None:
    """Restore the request id that was bound before ``set_request_id``."""
    _request_id.reset(token)


class RequestIdFilter(logging.Filter):
    """Adds ``request_id`` to records emitted inside a client call."""

    def filter(self, record: logging.LogRecord) -> bool:
        request_id = get_request_id()
        if request_id and not hasattr(record, "request_id"):
            record.request_id = request_id
        return True


class ExtraFieldsFilter(logging.Filter):
    """
    Adds static fields (service, environment) to every record.

    Example:
        >>> handler.addFilter(ExtraFieldsFilter({"service": "dns-sync"}))
    """

    def __init__(self, extra_fields: Dict[str, Any]):
        super().__init__()
        self.extra_fields = extra_fields

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in self.extra_fields.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
