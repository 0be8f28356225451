"""
Система конфигурации для Constellix client.

Все конфиги immutable (frozen dataclasses): один экземпляр клиента
разделяется потоками, поэтому конфигурация не меняется после создания.
"""

from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterable, Optional, Tuple, Union, TYPE_CHECKING

from .exceptions import ConfigurationError

if TYPE_CHECKING:
    from .logging import LoggingConfig

BASE_URL = "https://api.dns.constellix.com/"
CHECKS_HOST = "api.sonar.constellix.com"

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TIMEOUT CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class TimeoutConfig:
    """
    Конфигурация таймаутов.

    Args:
        connect: Таймаут подключения (сек)
        read: Таймаут чтения данных (сек)

    Examples:
        >>> TimeoutConfig(connect=5, read=30)
    """
    connect: float = 10.0
    read: float = 60.0

    def __post_init__(self):
        """Валидация."""
        if self.connect <= 0:
            raise ConfigurationError("connect timeout must be positive")
        if self.read <= 0:
            raise ConfigurationError("read timeout must be positive")

    def as_tuple(self) -> Tuple[float, float]:
        """Вернуть как (connect, read) для requests."""
        return (self.connect, self.read)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# MAIN CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class ClientConfig:
    """
    Главная конфигурация ConstellixClient.

    Args:
        api_key: Идентификатор API ключа (обязателен)
        secret_key: Секрет для HMAC подписи (обязателен, не попадает в repr)
        insecure: Отключить проверку TLS сертификата. ОПАСНО: делает
            возможной MITM атаку; только для тестовых стендов
        proxy_url: URL прокси для всех запросов (http, https, socks5)
        request_interval: Минимальный интервал между запросами (сек).
            ``<= 0`` отключает rate gate
        base_url: Базовый URL основного API
        checks_hosts: Хосты checks API; endpoint с таким хостом
            используется без изменений
        timeout: Конфигурация таймаутов
        logging: Конфигурация логирования (None = не ставить handlers)

    Examples:
        >>> config = ClientConfig(api_key="key", secret_key="secret")
        >>> config = ClientConfig.create("key", "secret", request_interval=0.5)
    """
    api_key: str
    secret_key: str = field(repr=False)
    insecure: bool = False
    proxy_url: Optional[str] = None
    request_interval: float = 0.0
    base_url: str = BASE_URL
    checks_hosts: FrozenSet[str] = field(default_factory=lambda: frozenset({CHECKS_HOST}))
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    logging: Optional['LoggingConfig'] = None

    def __post_init__(self):
        """Валидация и нормализация."""
        if not self.api_key:
            raise ConfigurationError("api_key is required")
        if not self.secret_key:
            raise ConfigurationError("secret_key is required")
        if not self.base_url:
            raise ConfigurationError("base_url must not be empty")

        # base_url всегда заканчивается на '/', endpoint приклеивается к нему
        if not self.base_url.endswith('/'):
            object.__setattr__(self, 'base_url', self.base_url + '/')

        # Хосты сравниваются без учёта регистра
        hosts = frozenset(h.lower() for h in self.checks_hosts)
        object.__setattr__(self, 'checks_hosts', hosts)

        # Пустая строка прокси = прокси нет
        if self.proxy_url is not None and not self.proxy_url.strip():
            object.__setattr__(self, 'proxy_url', None)

        object.__setattr__(self, 'request_interval', float(self.request_interval))

    @property
    def rate_limited(self) -> bool:
        """Включён ли rate gate."""
        return self.request_interval > 0

    @classmethod
    def create(
        cls,
        api_key: str,
        secret_key: str,
        insecure: bool = False,
        proxy_url: Optional[str] = None,
        request_interval: float = 0.0,
        timeout: Union[float, Tuple[float, float], TimeoutConfig, None] = None,
        checks_hosts: Optional[Iterable[str]] = None,
        logging: Optional['LoggingConfig'] = None,
        **kwargs
    ) -> 'ClientConfig':
        """
        Удобный конструктор конфигурации.

        Args:
            api_key: API ключ
            secret_key: Секретный ключ
            insecure: Отключить проверку сертификата
            proxy_url: URL прокси
            request_interval: Минимальный интервал между запросами (сек)
            timeout: Таймаут (число = read, (connect, read) или TimeoutConfig)
            checks_hosts: Хосты checks API
            logging: Конфигурация логирования

        Returns:
            ClientConfig instance

        Examples:
            >>> config = ClientConfig.create("key", "secret", timeout=(5, 30))
        """
        if timeout is None:
            timeout_cfg = TimeoutConfig()
        elif isinstance(timeout, TimeoutConfig):
            timeout_cfg = timeout
        elif isinstance(timeout, tuple):
            timeout_cfg = TimeoutConfig(connect=timeout[0], read=timeout[1])
        else:
            timeout_cfg = TimeoutConfig(read=timeout)

        if checks_hosts is not None:
            kwargs['checks_hosts'] = frozenset(checks_hosts)

        return cls(
            api_key=api_key,
            secret_key=secret_key,
            insecure=insecure,
            proxy_url=proxy_url,
            request_interval=request_interval,
            timeout=timeout_cfg,
            logging=logging,
            **kwargs
        )

    def with_request_interval(self, request_interval: float) -> 'ClientConfig':
        """
        Создать новый конфиг с другим интервалом rate gate.

        Example:
            >>> paced = config.with_request_interval(0.5)
        """
        return replace(self, request_interval=request_interval)

    def with_proxy(self, proxy_url: Optional[str]) -> 'ClientConfig':
        """Создать новый конфиг с другим прокси."""
        return replace(self, proxy_url=proxy_url)

    def with_timeout(self, timeout: Union[float, Tuple[float, float], TimeoutConfig]) -> 'ClientConfig':
        """Создать новый конфиг с изменённым timeout."""
        if isinstance(timeout, TimeoutConfig):
            timeout_cfg = timeout
        elif isinstance(timeout, tuple):
            timeout_cfg = TimeoutConfig(connect=timeout[0], read=timeout[1])
        else:
            timeout_cfg = TimeoutConfig(read=timeout)
        return replace(self, timeout=timeout_cfg)
