# src/constellix_client/core/client.py
"""
Синхронный клиент Constellix DNS REST API.

Каждый вызов проходит один и тот же конвейер:
resolve URL -> serialize body -> rate gate -> sign -> send -> normalize errors.
"""
from typing import Any, Optional
import time
import uuid

import requests

from .config import ClientConfig
from .context import CallContext
from .endpoints import ResolvedEndpoint, resolve_endpoint
from .error_handler import ErrorHandler
from .exceptions import ConstellixClientException, classify_requests_exception
from .logging import ClientLogger
from .logging.filters import reset_request_id, set_request_id
from .rate_gate import RateGate
from .session_manager import ThreadSafeSessionManager
from .signing import build_headers
from .transport import Transport
from ..utils.serialization import encode_payload

# Маркер "у запроса нет тела" (None - валидный JSON null)
_NO_BODY = object()


class ConstellixClient:
    """
    Клиент Constellix DNS API.

    Features:
        - HMAC подпись каждого запроса (x-cns-security-token)
        - Фиксированная TLS политика, опциональный прокси
        - Rate gate: минимальный интервал между запросами
        - Нормализация ошибок основного и checks API в APIError
        - Thread-safe: каждый поток получает собственную сессию,
          rate gate общий для всех потоков

    Клиент не делает повторов: ``error.retryable`` - подсказка вызывающему коду.

    Example:
        >>> with ConstellixClient(api_key="key", secret_key="secret") as client:
        ...     response = client.fetch_by_id("v1/domains/12345")
        ...     domain = response.json()
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        config: Optional[ClientConfig] = None,
        **kwargs: Any
    ):
        """
        Initialize client.

        Args:
            api_key: API ключ (если config не передан)
            secret_key: Секретный ключ (если config не передан)
            config: Готовый ClientConfig
            **kwargs: Параметры для ClientConfig.create

        Raises:
            ConfigurationError: Нет ключей, битый proxy URL и т.п.
        """
        if config is None:
            config = ClientConfig.create(api_key, secret_key, **kwargs)
        elif api_key is not None or secret_key is not None or kwargs:
            raise TypeError("Pass either config or individual parameters, not both")

        transport = Transport(insecure=config.insecure, proxy_url=config.proxy_url)

        object.__setattr__(self, '_config', config)
        object.__setattr__(self, '_transport', transport)
        object.__setattr__(self, '_rate_gate', RateGate(config.request_interval))
        object.__setattr__(self, '_logger', ClientLogger(config.logging))
        object.__setattr__(
            self,
            '_session_manager',
            ThreadSafeSessionManager(session_factory=transport.create_session)
        )
        object.__setattr__(self, '_initialized', True)

        if config.insecure:
            self._logger.warning(
                "TLS verification disabled",
                detail="certificate and hostname checks are off; traffic can be intercepted",
            )

        self._logger.debug(
            "Client initialized",
            base_url=config.base_url,
            proxy=transport.proxy_url,
            request_interval=config.request_interval,
            insecure=config.insecure,
        )

    def __setattr__(self, name, value):
        """Запретить изменение после init (immutability)."""
        if hasattr(self, '_initialized'):
            raise RuntimeError(
                f"Cannot modify '{name}' - ConstellixClient is immutable. "
                f"Create new instance instead."
            )
        object.__setattr__(self, name, value)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None, **overrides: Any) -> 'ConstellixClient':
        """
        Создать клиент из переменных окружения CONSTELLIX_*.

        Example:
            >>> # CONSTELLIX_API_KEY=... CONSTELLIX_SECRET_KEY=...
            >>> client = ConstellixClient.from_env()
        """
        from .env_config import load_from_env
        return cls(config=load_from_env(env_file=env_file, **overrides))

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def rate_gate(self) -> RateGate:
        return self._rate_gate

    @property
    def transport(self) -> Transport:
        return self._transport

    # ==================== Жизненный цикл ====================

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self):
        """
        Закрывает сессии всех потоков и handlers логгера.

        Можно вызывать повторно.
        """
        self._logger.close()
        self._session_manager.close_all()

    # ==================== Конвейер запроса ====================

    def _dispatch(
        self,
        method: str,
        endpoint: str,
        payload: Any = _NO_BODY,
        ctx: Optional[CallContext] = None,
    ) -> requests.Response:
        resolved = resolve_endpoint(endpoint, self._config.base_url, self._config.checks_hosts)
        body = None if payload is _NO_BODY else encode_payload(payload)

        token = set_request_id(uuid.uuid4().hex[:16])
        start_time = time.monotonic()
        try:
            self._logger.info(
                "Request started",
                method=method,
                url=resolved.url,
                target=resolved.target.value,
            )

            waited = self._rate_gate.acquire(ctx)
            if waited > 0:
                self._logger.debug("Rate gate wait", wait_s=round(waited, 3))

            response = self._send(method, resolved, body)
            ErrorHandler.check(response, resolved.target)

            self._logger.info(
                "Request completed",
                method=method,
                url=resolved.url,
                status_code=response.status_code,
                duration_ms=round((time.monotonic() - start_time) * 1000, 2),
            )
            return response

        except ConstellixClientException as e:
            self._logger.error(
                "Request failed",
                method=method,
                url=resolved.url,
                error=str(e),
                error_type=type(e).__name__,
                status_code=getattr(e, 'status_code', None),
                duration_ms=round((time.monotonic() - start_time) * 1000, 2),
            )
            raise
        finally:
            reset_request_id(token)

    def _send(self, method: str, resolved: ResolvedEndpoint, body: Optional[bytes]) -> requests.Response:
        """Подписать и отправить запрос; ошибки requests -> TransportError."""
        # Токен подписывается после rate gate: timestamp = момент отправки
        headers = build_headers(self._config.api_key, self._config.secret_key)
        session = self._session_manager.get_session()

        try:
            return session.request(
                method,
                resolved.url,
                data=body,
                headers=headers,
                timeout=self._config.timeout.as_tuple(),
            )
        except requests.exceptions.RequestException as e:
            raise classify_requests_exception(e, resolved.url, self._transport.proxy_url) from e

    # ==================== Публичные операции ====================

    def create(self, obj: Any, endpoint: str, ctx: Optional[CallContext] = None) -> requests.Response:
        """
        POST: создать ресурс.

        Args:
            obj: Тело запроса (dict, list, dataclass, pydantic модель)
            endpoint: Путь относительно base URL или полный URL checks API
            ctx: Дедлайн/отмена ожидания в rate gate

        Returns:
            Ответ API (успешный)

        Raises:
            SerializationError: obj не кодируется в JSON
            TransportError: Сетевая ошибка
            APIError: API вернул ошибку
            RequestCancelledError: ctx отменил ожидание

        Example:
            >>> client.create({"name": "example.com"}, "v1/domains")
        """
        return self._dispatch("POST", endpoint, obj, ctx)

    def fetch_by_id(self, endpoint: str, ctx: Optional[CallContext] = None) -> requests.Response:
        """
        GET: получить ресурс.

        Example:
            >>> client.fetch_by_id("v1/domains/12345").json()
        """
        return self._dispatch("GET", endpoint, ctx=ctx)

    def update_by_id(self, obj: Any, endpoint: str, ctx: Optional[CallContext] = None) -> requests.Response:
        """PUT: обновить ресурс целиком."""
        return self._dispatch("PUT", endpoint, obj, ctx)

    def delete_by_id(self, endpoint: str, ctx: Optional[CallContext] = None) -> None:
        """
        DELETE: удалить ресурс.

        Ничего не возвращает; неуспех - исключение.
        """
        self._dispatch("DELETE", endpoint, ctx=ctx)

    def __repr__(self) -> str:
        return (
            f"ConstellixClient(base_url={self._config.base_url!r}, "
            f"api_key={self._config.api_key!r}, gate={self._rate_gate!r})"
        )


def new_client(
    api_key: str,
    secret_key: str,
    *,
    insecure: bool = False,
    proxy_url: Optional[str] = None,
    request_interval: float = 0.0,
    **config: Any
) -> ConstellixClient:
    """
    Создать клиент; каждый вызов возвращает новый независимый экземпляр.

    Args:
        api_key: API ключ
        secret_key: Секретный ключ
        insecure: Отключить проверку TLS сертификата (ОПАСНО)
        proxy_url: URL прокси
        request_interval: Минимальный интервал между запросами (сек), 0 = без ограничения
        **config: Остальные параметры ClientConfig.create (timeout, checks_hosts, logging)

    Example:
        >>> client = new_client("key", "secret", request_interval=0.5)
    """
    return ConstellixClient(
        config=ClientConfig.create(
            api_key,
            secret_key,
            insecure=insecure,
            proxy_url=proxy_url,
            request_interval=request_interval,
            **config
        )
    )
