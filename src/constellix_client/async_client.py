# src/constellix_client/async_client.py
"""
Асинхронный клиент Constellix API на базе httpx.

Тот же конвейер, что у ConstellixClient: resolve URL -> serialize body ->
rate gate -> sign -> send -> normalize errors. Для asyncio приложений.
"""

import ssl
import time
import uuid
from typing import Any, Optional

try:
    import httpx
except ImportError:
    raise ImportError(
        "httpx is required for AsyncConstellixClient. "
        "Install with: pip install constellix-client-core[async]"
    )

from .core.config import ClientConfig
from .core.context import CallContext
from .core.endpoints import ResolvedEndpoint, resolve_endpoint
from .core.error_handler import ErrorHandler
from .core.exceptions import (
    ConstellixClientException,
    TransportError,
    TimeoutError,
    ConnectionError,
    ProxyError,
    SSLError,
)
from .core.logging import ClientLogger
from .core.logging.filters import reset_request_id, set_request_id
from .core.rate_gate import RateGate
from .core.signing import build_headers
from .core.transport import create_ssl_context, parse_proxy_url
from .utils.serialization import encode_payload

_NO_BODY = object()


def _caused_by_ssl(exc: BaseException) -> bool:
    """Есть ли ssl.SSLError в цепочке причин исключения."""
    seen = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        if isinstance(current, ssl.SSLError):
            return True
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return False


def classify_httpx_exception(
    exc: Exception,
    url: str,
    proxy: Optional[str] = None,
) -> ConstellixClientException:
    """
    Конвертировать httpx исключения в наши.

    Examples:
        >>> our_exc = classify_httpx_exception(httpx.ConnectTimeout("slow"), "https://api.dns.constellix.com/")
        >>> assert isinstance(our_exc, TimeoutError)
    """
    if isinstance(exc, httpx.TimeoutException):
        return TimeoutError(f"Request timeout: {exc}", url)

    elif isinstance(exc, httpx.ProxyError):
        return ProxyError(f"Proxy error: {exc}", url, proxy=proxy)

    elif isinstance(exc, httpx.ConnectError):
        if _caused_by_ssl(exc):
            return SSLError(f"TLS error: {exc}", url)
        return ConnectionError(f"Connection error: {exc}", url)

    elif isinstance(exc, httpx.NetworkError):
        return ConnectionError(f"Connection error: {exc}", url)

    elif isinstance(exc, httpx.RequestError):
        return TransportError(f"Request failed: {exc}", url)

    else:
        return ConstellixClientException(f"Unexpected error: {exc}")


class AsyncConstellixClient:
    """
    Асинхронный клиент Constellix DNS API.

    Rate gate ждёт через ``asyncio.sleep``; отмена задачи
    (``asyncio.CancelledError``) проходит наружу без изменений.

    Example:
        >>> async with AsyncConstellixClient(api_key="key", secret_key="secret") as client:
        ...     response = await client.fetch_by_id("v1/domains/12345")
        ...     print(response.json())
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        *,
        config: Optional[ClientConfig] = None,
        **kwargs: Any,
    ):
        if config is None:
            config = ClientConfig.create(api_key, secret_key, **kwargs)
        elif api_key is not None or secret_key is not None or kwargs:
            raise TypeError("Pass either config or individual parameters, not both")

        self._config = config
        self._proxy_url = parse_proxy_url(config.proxy_url) if config.proxy_url else None
        self._ssl_context = create_ssl_context(config.insecure)
        self._rate_gate = RateGate(config.request_interval)
        self._logger = ClientLogger(config.logging)
        self._timeout = httpx.Timeout(
            connect=config.timeout.connect,
            read=config.timeout.read,
            write=config.timeout.read,
            pool=config.timeout.connect,
        )

        # Клиент создаётся лениво или при входе в context manager
        self._client: Optional[httpx.AsyncClient] = None

        if config.insecure:
            self._logger.warning(
                "TLS verification disabled",
                detail="certificate and hostname checks are off; traffic can be intercepted",
            )

        self._logger.debug(
            "Client initialized",
            base_url=config.base_url,
            proxy=self._proxy_url,
            request_interval=config.request_interval,
            insecure=config.insecure,
        )

    @classmethod
    def from_env(cls, env_file: Optional[str] = None, **overrides: Any) -> "AsyncConstellixClient":
        """Создать клиент из переменных окружения CONSTELLIX_*."""
        from .core.env_config import load_from_env
        return cls(config=load_from_env(env_file=env_file, **overrides))

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def rate_gate(self) -> RateGate:
        return self._rate_gate

    def _get_client(self) -> httpx.AsyncClient:
        """Получить или создать httpx клиент."""
        if self._client is None:
            client_kwargs = {
                "timeout": self._timeout,
                "verify": self._ssl_context,
                "follow_redirects": True,
            }
            if self._proxy_url:
                client_kwargs["proxy"] = self._proxy_url

            self._client = httpx.AsyncClient(**client_kwargs)
        return self._client

    async def __aenter__(self) -> "AsyncConstellixClient":
        self._get_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Закрыть httpx клиент и handlers логгера."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
        self._logger.close()

    # ==================== Конвейер запроса ====================

    async def _dispatch(
        self,
        method: str,
        endpoint: str,
        payload: Any = _NO_BODY,
        ctx: Optional[CallContext] = None,
    ) -> httpx.Response:
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

            waited = await self._rate_gate.acquire_async(ctx)
            if waited > 0:
                self._logger.debug("Rate gate wait", wait_s=round(waited, 3))

            response = await self._send(method, resolved, body)
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

    async def _send(self, method: str, resolved: ResolvedEndpoint, body: Optional[bytes]) -> httpx.Response:
        headers = build_headers(self._config.api_key, self._config.secret_key)
        client = self._get_client()

        try:
            return await client.request(method, resolved.url, content=body, headers=headers)
        except httpx.RequestError as e:
            raise classify_httpx_exception(e, resolved.url, self._proxy_url) from e

    # ==================== Публичные операции ====================

    async def create(self, obj: Any, endpoint: str, ctx: Optional[CallContext] = None) -> httpx.Response:
        """POST: создать ресурс."""
        return await self._dispatch("POST", endpoint, obj, ctx)

    async def fetch_by_id(self, endpoint: str, ctx: Optional[CallContext] = None) -> httpx.Response:
        """GET: получить ресурс."""
        return await self._dispatch("GET", endpoint, ctx=ctx)

    async def update_by_id(self, obj: Any, endpoint: str, ctx: Optional[CallContext] = None) -> httpx.Response:
        """PUT: обновить ресурс."""
        return await self._dispatch("PUT", endpoint, obj, ctx)

    async def delete_by_id(self, endpoint: str, ctx: Optional[CallContext] = None) -> None:
        """DELETE: удалить ресурс. Неуспех - исключение."""
        await self._dispatch("DELETE", endpoint, ctx=ctx)
