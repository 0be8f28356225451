"""
HMAC подпись запросов к Constellix API.

Токен имеет вид ``<api_key>:<base64(HMAC-SHA1(secret, ts))>:<ts>``, где
``ts`` - текущее время в миллисекундах. Токен живёт столько, сколько
допускает окно рассинхронизации часов на стороне API, поэтому он
генерируется заново для каждого запроса и нигде не кешируется.
"""

import base64
import hashlib
import hmac
import time
from typing import Dict, Optional

TOKEN_HEADER = "x-cns-security-token"
CONTENT_TYPE = "application/json"


def current_millis() -> int:
    """Текущее epoch время в миллисекундах."""
    return time.time_ns() // 1_000_000


def generate_token(api_key: str, secret_key: str, timestamp_ms: Optional[int] = None) -> str:
    """
    Сгенерировать токен для заголовка x-cns-security-token.

    Args:
        api_key: Идентификатор ключа
        secret_key: Секрет для HMAC
        timestamp_ms: Время в миллисекундах (по умолчанию - сейчас)

    Returns:
        Строка ``key:signature:timestamp``

    Example:
        >>> generate_token("key", "secret", timestamp_ms=1700000000000)
        'key:...:1700000000000'
    """
    if timestamp_ms is None:
        timestamp_ms = current_millis()

    epoch = str(timestamp_ms)
    digest = hmac.new(
        secret_key.encode("utf-8"),
        epoch.encode("utf-8"),
        hashlib.sha1,
    ).digest()
    signature = base64.b64encode(digest).decode("ascii")

    return f"{api_key}:{signature}:{epoch}"


def build_headers(api_key: str, secret_key: str) -> Dict[str, str]:
    """Заголовки, которые ставятся на каждый запрос."""
    return {
        "Content-Type": CONTENT_TYPE,
        TOKEN_HEADER: generate_token(api_key, secret_key),
    }
