from .structs import ClientConfig, RestClientConfig, WebSocketConfig, LoggingConfig
from .structs import DEFAULT_BASE_URL, DEFAULT_STREAM_URL, DEFAULT_RECV_WINDOW
from .config_manager import load_config, setup_logging, substitute_env_vars

__all__ = [
    "ClientConfig",
    "RestClientConfig",
    "WebSocketConfig",
    "LoggingConfig",
    "DEFAULT_BASE_URL",
    "DEFAULT_STREAM_URL",
    "DEFAULT_RECV_WINDOW",
    "load_config",
    "setup_logging",
    "substitute_env_vars",
]
