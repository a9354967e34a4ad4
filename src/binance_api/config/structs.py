import msgspec
from msgspec import Struct, field

from binance_api.exceptions import ConfigurationError

DEFAULT_BASE_URL = "https://api.binance.com"
DEFAULT_STREAM_URL = "wss://stream.binance.com:9443/ws/"
DEFAULT_USER_AGENT = "Binance/client"
DEFAULT_RECV_WINDOW = 5000
MAX_RECV_WINDOW = 60000


class RestClientConfig(Struct, frozen=True, kw_only=True):
    """
    REST transport configuration.

    Attributes:
        api_key: API key sent in the X-MBX-APIKEY header
        api_secret: Secret used only as the HMAC key, never transmitted
        base_url: Exchange REST host, TLS only
        recv_window: Signed request tolerance in milliseconds
        request_timeout: Total HTTP request timeout in seconds
        connect_timeout: Connection timeout in seconds
        max_connections: Connection pool size
        user_agent: User-Agent header value
    """
    api_key: str = ""
    api_secret: str = ""
    base_url: str = DEFAULT_BASE_URL
    recv_window: int = DEFAULT_RECV_WINDOW
    request_timeout: float = 10.0
    connect_timeout: float = 5.0
    max_connections: int = 100
    user_agent: str = DEFAULT_USER_AGENT

    def __repr__(self) -> str:
        return f"RestClientConfig(base_url={self.base_url!r}, api_key={'***' if self.api_key else ''!r})"

    def validate(self) -> None:
        """Validate REST configuration."""
        if not self.base_url.startswith("https://"):
            raise ConfigurationError("base_url must use https", "rest.base_url")
        if not 0 < self.recv_window <= MAX_RECV_WINDOW:
            raise ConfigurationError(f"recv_window must be in (0, {MAX_RECV_WINDOW}]", "rest.recv_window")
        if self.request_timeout <= 0:
            raise ConfigurationError("request_timeout must be positive", "rest.request_timeout")
        if self.connect_timeout <= 0:
            raise ConfigurationError("connect_timeout must be positive", "rest.connect_timeout")
        if self.max_connections <= 0:
            raise ConfigurationError("max_connections must be positive", "rest.max_connections")


class WebSocketConfig(Struct, frozen=True, kw_only=True):
    """
    WebSocket stream configuration.

    Attributes:
        stream_url: Base URL, stream names are appended to it
        open_timeout: Connection and upgrade timeout in seconds
        ping_interval: Keepalive ping interval in seconds
        ping_timeout: Keepalive pong timeout in seconds
        close_timeout: Close handshake timeout in seconds
        max_message_size: Maximum frame size in bytes
        max_queue_size: Maximum number of undelivered events per stream
        subscriber_queue_size: Maximum backlog of one user data subscriber before it is detached
    """
    stream_url: str = DEFAULT_STREAM_URL
    open_timeout: float = 10.0
    ping_interval: float = 20.0
    ping_timeout: float = 10.0
    close_timeout: float = 5.0
    max_message_size: int = 1024 * 1024  # 1MB
    max_queue_size: int = 1
    subscriber_queue_size: int = 1024

    def validate(self) -> None:
        """Validate WebSocket configuration."""
        if not self.stream_url.startswith(("wss://", "ws://")):
            raise ConfigurationError("stream_url must be a ws:// or wss:// URL", "websocket.stream_url")
        if self.open_timeout <= 0:
            raise ConfigurationError("open_timeout must be positive", "websocket.open_timeout")
        if self.close_timeout <= 0:
            raise ConfigurationError("close_timeout must be positive", "websocket.close_timeout")
        if self.max_message_size <= 0:
            raise ConfigurationError("max_message_size must be positive", "websocket.max_message_size")
        if self.max_queue_size <= 0:
            raise ConfigurationError("max_queue_size must be positive", "websocket.max_queue_size")
        if self.subscriber_queue_size <= 0:
            raise ConfigurationError(
                "subscriber_queue_size must be positive", "websocket.subscriber_queue_size"
            )

    def with_url(self, url: str) -> "WebSocketConfig":
        """Create a copy pointing at another stream host."""
        return msgspec.structs.replace(self, stream_url=url)


class LoggingConfig(Struct, frozen=True, kw_only=True):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class ClientConfig(Struct, frozen=True, kw_only=True):
    """Complete client configuration."""
    rest: RestClientConfig = field(default_factory=RestClientConfig)
    websocket: WebSocketConfig = field(default_factory=WebSocketConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> None:
        self.rest.validate()
        self.websocket.validate()
