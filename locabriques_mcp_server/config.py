"""Configuration management for LocaBriques MCP Server."""

import json
import os
from typing import Any, Dict, Mapping, Optional
from dataclasses import dataclass, field


DEFAULT_BASE_URL = "https://locabriques.fr"
DEFAULT_USER_AGENT = "LocaBriques-MCP/1.0.0"

TOKEN_ENV_VAR = "LOCABRIQUES_API_TOKEN"
BASE_URL_ENV_VAR = "LOCABRIQUES_BASE_URL"
LOG_LEVEL_ENV_VAR = "LOCABRIQUES_LOG_LEVEL"


@dataclass
class ApiConfig:
    """LocaBriques API configuration."""
    base_url: str = DEFAULT_BASE_URL
    token: Optional[str] = None
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = 30.0
    verify_ssl: bool = True


@dataclass
class ServerConfig:
    """MCP server configuration."""
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    log_file: Optional[str] = None


@dataclass
class Config:
    """Main configuration."""
    api: ApiConfig = field(default_factory=ApiConfig)
    server: ServerConfig = field(default_factory=ServerConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary for logging setup."""
        return {
            "log_level": self.server.log_level,
            "log_file": self.server.log_file,
            "base_url": self.api.base_url,
            "authenticated": self.api.token is not None,
        }


def _apply_environment(config: Config, environ: Mapping[str, str]) -> Config:
    token = environ.get(TOKEN_ENV_VAR)
    if token:
        config.api.token = token

    base_url = environ.get(BASE_URL_ENV_VAR)
    if base_url:
        config.api.base_url = base_url

    log_level = environ.get(LOG_LEVEL_ENV_VAR)
    if log_level:
        config.server.log_level = log_level

    return config


def load_config(config_path: Optional[str] = None,
                environ: Optional[Mapping[str, str]] = None) -> Config:
    """Load configuration from file, then apply environment overrides.

    The API token is only read here, once, and travels with the returned
    ``Config`` from then on.
    """
    if environ is None:
        environ = os.environ

    if config_path is None:
        if os.path.exists("config.json"):
            config_path = "config.json"
        else:
            return _apply_environment(Config(), environ)

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise KeyError("top-level JSON object expected")

        config = Config(
            api=ApiConfig(**data.get("api", {})),
            server=ServerConfig(**data.get("server", {})),
        )
    except (OSError, json.JSONDecodeError, KeyError, TypeError) as e:
        raise ValueError(f"Failed to load config from {config_path}: {e}")

    return _apply_environment(config, environ)
