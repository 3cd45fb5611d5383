"""
1Password Connect MCP Server Configuration

Handles environment variables and server settings. Tenant credentials are
deliberately absent: they come from request headers (see auth.py).
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv
from pydantic import BaseModel, Field


def env_int(name: str, default: int) -> int:
    """Read an integer environment variable, falling back on bad input."""
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default


def env_float(name: str, default: float) -> float:
    """Read a float environment variable, falling back on bad input."""
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value.strip())
    except ValueError:
        return default


def env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class ServerConfig(BaseModel):
    """MCP Server configuration."""
    name: str = Field(default="primrose-mcp-1password", description="Server name")
    version: str = Field(default="1.0.0", description="Server version")
    host: str = Field(default="0.0.0.0", description="Listen address")
    port: int = Field(default=8000, description="HTTP port")
    path: str = Field(default="/mcp", description="Streamable HTTP MCP endpoint path")
    log_level: str = Field(default="INFO", description="Logging level")
    log_json: bool = Field(default=False, description="Emit JSON log lines")
    request_timeout: float = Field(
        default=30.0, description="Timeout in seconds for Connect API requests"
    )


class LimitsConfig(BaseModel):
    """Response shaping limits."""
    character_limit: int = Field(default=50000, description="Maximum characters per response")
    default_page_size: int = Field(default=20, description="Default page size for list operations")
    max_page_size: int = Field(default=100, description="Maximum page size allowed")


@dataclass
class AppConfig:
    """Application configuration container."""
    server: ServerConfig = field(default_factory=ServerConfig)
    limits: LimitsConfig = field(default_factory=LimitsConfig)

    @classmethod
    def from_env(cls) -> AppConfig:
        """Load configuration from environment variables.

        Environment variables referenced:
        - ONEPASSWORD_MCP_NAME
        - ONEPASSWORD_MCP_HOST
        - ONEPASSWORD_MCP_PORT
        - ONEPASSWORD_MCP_PATH
        - ONEPASSWORD_MCP_LOG_LEVEL
        - ONEPASSWORD_MCP_LOG_JSON
        - ONEPASSWORD_REQUEST_TIMEOUT
        - CHARACTER_LIMIT
        - DEFAULT_PAGE_SIZE
        - MAX_PAGE_SIZE
        """
        load_dotenv()

        return cls(
            server=ServerConfig(
                name=os.getenv("ONEPASSWORD_MCP_NAME", "primrose-mcp-1password"),
                host=os.getenv("ONEPASSWORD_MCP_HOST", "0.0.0.0"),
                port=env_int("ONEPASSWORD_MCP_PORT", 8000),
                path=os.getenv("ONEPASSWORD_MCP_PATH", "/mcp"),
                log_level=os.getenv("ONEPASSWORD_MCP_LOG_LEVEL", "INFO"),
                log_json=env_bool("ONEPASSWORD_MCP_LOG_JSON"),
                request_timeout=env_float("ONEPASSWORD_REQUEST_TIMEOUT", 30.0),
            ),
            limits=LimitsConfig(
                character_limit=env_int("CHARACTER_LIMIT", 50000),
                default_page_size=env_int("DEFAULT_PAGE_SIZE", 20),
                max_page_size=env_int("MAX_PAGE_SIZE", 100),
            ),
        )


# Global config instance (lazy-loaded)
_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def reset_config() -> None:
    """Reset the global configuration (useful for testing)."""
    global _config
    _config = None
