"""
Configuration loading.

Reads an optional YAML file, substitutes ``${VAR}`` / ``${VAR:default}`` references
from the environment (after loading ``.env``), and converts the result into a
validated ``ClientConfig``.

Lookup order for the YAML file:
1. Explicit ``path`` argument
2. ``$BINANCE_API_CONFIG``
3. ``config.yaml`` in the current working directory

Without a file the defaults are used. Credentials missing from the file are taken
from ``BINANCE_API_KEY`` / ``BINANCE_API_SECRET``.

Usage:
    from binance_api.config import load_config

    config = load_config()
    client = Client(config.rest)
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional, Union

import msgspec
import yaml
from dotenv import load_dotenv

from binance_api.exceptions import ConfigurationError
from .structs import ClientConfig, LoggingConfig

CONFIG_PATH_ENV = "BINANCE_API_CONFIG"
API_KEY_ENV = "BINANCE_API_KEY"
API_SECRET_ENV = "BINANCE_API_SECRET"
DEFAULT_CONFIG_FILE = "config.yaml"

_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")

logger = logging.getLogger(__name__)


def substitute_env_vars(content: str) -> str:
    """Replace ${VAR} and ${VAR:default} with values from the environment."""

    def replace_var(match: "re.Match[str]") -> str:
        var_expr = match.group(1)
        if ":" in var_expr:
            var_name, default_value = var_expr.split(":", 1)
            return os.getenv(var_name, default_value)
        value = os.getenv(var_expr)
        if value is None:
            raise ConfigurationError(f"Environment variable {var_expr} is not set", var_expr)
        return value

    return _ENV_VAR_PATTERN.sub(replace_var, content)


def _find_config_file(path: Optional[Union[str, Path]]) -> Optional[Path]:
    if path is not None:
        config_path = Path(path)
        if not config_path.is_file():
            raise ConfigurationError(f"Config file not found: {config_path}", "path")
        return config_path

    env_path = os.getenv(CONFIG_PATH_ENV)
    if env_path:
        config_path = Path(env_path)
        if not config_path.is_file():
            raise ConfigurationError(f"Config file from ${CONFIG_PATH_ENV} not found: {config_path}", CONFIG_PATH_ENV)
        return config_path

    default_path = Path.cwd() / DEFAULT_CONFIG_FILE
    if default_path.is_file():
        return default_path
    return None


def _read_yaml(config_path: Path) -> Dict[str, Any]:
    try:
        raw_content = config_path.read_text()
    except OSError as e:
        raise ConfigurationError(f"Failed to read {config_path}: {e}", "path") from e

    substituted_content = substitute_env_vars(raw_content)
    try:
        data = yaml.safe_load(substituted_content)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}", "path") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Top level of {config_path} must be a mapping", "path")
    return data


def load_config(path: Optional[Union[str, Path]] = None, env_file: Optional[Union[str, Path]] = None) -> ClientConfig:
    """
    Load and validate client configuration.

    Args:
        path: Optional YAML file, overrides the lookup order
        env_file: Optional .env file, defaults to python-dotenv's search

    Returns:
        Validated ClientConfig

    Raises:
        ConfigurationError: Missing file, invalid YAML, type mismatch or invalid values
    """
    if env_file is not None:
        load_dotenv(dotenv_path=env_file, override=False)
    else:
        load_dotenv(override=False)

    config_path = _find_config_file(path)
    data: Dict[str, Any] = {}
    if config_path is not None:
        data = _read_yaml(config_path)
        logger.info("Configuration loaded from: %s", config_path)
    else:
        logger.debug("No config file found - using defaults and environment")

    rest = data.setdefault("rest", {}) or {}
    data["rest"] = rest
    if not rest.get("api_key") and os.getenv(API_KEY_ENV):
        rest["api_key"] = os.environ[API_KEY_ENV]
    if not rest.get("api_secret") and os.getenv(API_SECRET_ENV):
        rest["api_secret"] = os.environ[API_SECRET_ENV]

    try:
        config = msgspec.convert(data, ClientConfig, strict=False)
    except msgspec.ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

    config.validate()
    return config


def setup_logging(config: Optional[LoggingConfig] = None, level: Optional[str] = None) -> None:
    """Configure root logging for command line use."""
    config = config or LoggingConfig()
    log_level = (level or config.level).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigurationError(f"Unknown log level: {log_level}", "logging.level")
    logging.basicConfig(level=log_level, format=config.format)
