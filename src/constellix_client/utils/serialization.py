"""
Payload serialization for create/update calls.

Accepts what callers typically hand over as a resource body: dicts and
lists, dataclasses, and pydantic models. Output is strict JSON (no NaN or
Infinity), UTF-8 encoded.
"""

import dataclasses
import json
from typing import Any

from pydantic import BaseModel

from ..core.exceptions import SerializationError


def _to_jsonable(obj: Any) -> Any:
    """``default=`` hook for json.dumps."""
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json", by_alias=True)
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, (set, frozenset, tuple)):
        return list(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def encode_payload(obj: Any) -> bytes:
    """
    Encode a request body as JSON.

    Args:
        obj: Body object

    Returns:
        UTF-8 encoded JSON

    Raises:
        SerializationError: Object cannot be represented as JSON

    Example:
        >>> encode_payload({"name": "example.com", "soa": {"ttl": 3600}})
        b'{"name": "example.com", "soa": {"ttl": 3600}}'
    """
    if isinstance(obj, BaseModel):
        obj = obj.model_dump(mode="json", by_alias=True)

    try:
        text = json.dumps(obj, default=_to_jsonable, allow_nan=False)
    except (TypeError, ValueError, RecursionError) as e:
        raise SerializationError(
            f"Cannot encode payload as JSON: {e}",
            payload_type=type(obj).__name__,
        ) from e

    return text.encode("utf-8")
