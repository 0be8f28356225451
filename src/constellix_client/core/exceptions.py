"""
Иерархия исключений Constellix client.

Классификация:
- TransportError (retryable=True) - сеть, таймауты, прокси, TLS
- APIError - удалённый API вернул неуспешный статус
- ConfigurationError / SerializationError (fatal=True) - ошибка вызывающего кода

Повторы запросов клиент не делает: флаг ``retryable`` только подсказка
для внешнего кода, который решает, повторять ли вызов.
"""

from typing import Any, Optional

import requests

from ..utils.sanitizer import mask_url

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ConstellixClientException(Exception):
    """Базовое исключение Constellix client."""

    retryable: bool = False
    fatal: bool = False

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ОШИБКИ ВЫЗЫВАЮЩЕГО КОДА (fatal=True)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ConfigurationError(ConstellixClientException):
    """Невалидная конфигурация клиента (например, битый proxy URL)."""
    fatal = True


class SerializationError(ConstellixClientException):
    """
    Payload нельзя закодировать в JSON.

    Args:
        message: Сообщение
        payload_type: Имя типа объекта, который не удалось закодировать
    """
    fatal = True

    def __init__(self, message: str, payload_type: Optional[str] = None):
        self.payload_type = payload_type
        msg = message
        if payload_type:
            msg += f" (payload type: {payload_type})"
        super().__init__(msg)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ТРАНСПОРТ (retryable=True)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TransportError(ConstellixClientException):
    """
    Сетевая ошибка: запрос не дошёл до API или ответ не получен.

    Args:
        message: Сообщение
        url: URL запроса
    """
    retryable = True

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        full_message = message
        if url:
            full_message += f" (url: {url})"
        super().__init__(full_message)


class TimeoutError(TransportError):
    """Таймаут подключения или чтения."""
    pass


class ConnectionError(TransportError):
    """
    Ошибка подключения.

    Примеры:
    - Connection refused
    - Connection reset
    - DNS resolution failed
    """
    pass


class ProxyError(TransportError):
    """
    Ошибка прокси.

    Args:
        message: Сообщение
        url: URL
        proxy: Адрес прокси
    """

    def __init__(self, message: str, url: Optional[str] = None, proxy: Optional[str] = None):
        # user:password из URL прокси в сообщение не попадает
        self.proxy = mask_url(proxy) if proxy else proxy
        msg = message
        if proxy:
            msg += f" (proxy: {self.proxy})"
        super().__init__(msg, url)


class SSLError(TransportError):
    """TLS handshake failed (version, cipher or certificate mismatch)."""
    retryable = False

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ОТМЕНА
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class RequestCancelledError(ConstellixClientException):
    """
    Ожидание rate gate прервано: контекст вызова отменён или истёк deadline.

    Args:
        message: Сообщение
        reason: 'cancelled' или 'deadline'
    """

    def __init__(self, message: str, reason: str = "cancelled"):
        self.reason = reason
        super().__init__(message)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ОШИБКИ УДАЛЁННОГО API
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class APIError(ConstellixClientException):
    """
    Удалённый API вернул неуспешный статус.

    ``str(error)`` - ровно нормализованное сообщение API, без префиксов:
    вызывающий код показывает его пользователю как есть.

    Args:
        message: Нормализованное сообщение об ошибке
        status_code: HTTP статус
        url: URL запроса
        response: Объект ответа (requests.Response или httpx.Response)
    """

    target: str = ""

    def __init__(
        self,
        message: str,
        status_code: int,
        url: Optional[str] = None,
        response: Any = None,
    ):
        self.status_code = status_code
        self.url = url
        self.response = response
        super().__init__(message)

    @property
    def retryable(self) -> bool:  # type: ignore[override]
        return self.status_code == 429 or 500 <= self.status_code < 600

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(status_code={self.status_code}, "
            f"url={self.url!r}, message={self.message!r})"
        )


class PrimaryAPIError(APIError):
    """Ошибка основного DNS API (api.dns.constellix.com)."""
    target = "primary"


class ChecksAPIError(APIError):
    """Ошибка checks API (api.sonar.constellix.com)."""
    target = "checks"

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# УТИЛИТЫ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def classify_requests_exception(
    exc: Exception,
    url: str,
    proxy: Optional[str] = None,
) -> ConstellixClientException:
    """
    Конвертировать requests.exceptions в наши исключения.

    Порядок проверок важен: ProxyError и SSLError в requests наследуются
    от ConnectionError.

    Args:
        exc: Исключение из requests
        url: URL запроса
        proxy: Адрес прокси (для сообщения ProxyError)

    Returns:
        Наше исключение с правильной классификацией

    Examples:
        >>> exc = requests.exceptions.ConnectTimeout()
        >>> our_exc = classify_requests_exception(exc, "https://api.dns.constellix.com/v1/domains")
        >>> assert isinstance(our_exc, TimeoutError)
        >>> assert our_exc.retryable == True
    """
    if isinstance(exc, requests.exceptions.Timeout):
        return TimeoutError(f"Request timeout: {exc}", url)

    elif isinstance(exc, requests.exceptions.ProxyError):
        return ProxyError(f"Proxy error: {exc}", url, proxy=proxy)

    elif isinstance(exc, requests.exceptions.SSLError):
        return SSLError(f"TLS error: {exc}", url)

    elif isinstance(exc, requests.exceptions.ConnectionError):
        return ConnectionError(f"Connection error: {exc}", url)

    elif isinstance(exc, requests.exceptions.RequestException):
        return TransportError(f"Request failed: {exc}", url)

    else:
        return ConstellixClientException(f"Unexpected error: {exc}")
