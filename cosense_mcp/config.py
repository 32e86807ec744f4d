"""Configuration for the Cosense MCP server"""

import os
from dataclasses import dataclass
from pathlib import Path


class ConfigError(Exception):
    """Raised when required startup configuration is missing or invalid."""


class Config:
    # Server identity
    SERVER_NAME = "cosense-mcp-server"
    SERVER_VERSION = "1.0.0"
    PROTOCOL_VERSION = "2024-11-05"
    SUPPORTED_PROTOCOL_VERSIONS = ("2024-11-05", "2025-03-26", "2025-06-18")

    # Outbound identity
    USER_AGENT = "cosense-mcp-server/1.0"
    DEFAULT_BASE_URL = "https://scrapbox.io"
    DEFAULT_TIMEOUT = 30.0

    # Logging (NEVER to stdout)
    DEFAULT_LOG_DIR = Path.home() / ".cosense-mcp" / "logs"
    DEFAULT_LOG_LEVEL = "INFO"
    LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _require(env, name: str) -> str:
    value = env.get(name, "")
    if not value:
        raise ConfigError(f"Environment variable {name} is not set.")
    return value


@dataclass(frozen=True)
class CosenseSettings:
    """Per-process settings for talking to one Cosense project.

    Built once at startup and handed to the gateway and tool dispatcher,
    so tests can construct their own without touching the environment.
    """

    project_name: str
    access_key: str
    base_url: str = Config.DEFAULT_BASE_URL
    timeout: float = Config.DEFAULT_TIMEOUT
    log_dir: Path = Config.DEFAULT_LOG_DIR
    log_level: str = Config.DEFAULT_LOG_LEVEL

    @property
    def api_base(self) -> str:
        return f"{self.base_url}/api/pages"

    @classmethod
    def from_env(cls, env=None) -> "CosenseSettings":
        env = os.environ if env is None else env

        project_name = _require(env, "COSENSE_PROJECT_NAME")
        access_key = _require(env, "COSENSE_SERVICE_ACCOUNT_ACCESS_KEY")
        base_url = (env.get("COSENSE_BASE_URL") or Config.DEFAULT_BASE_URL).rstrip("/")

        raw_timeout = env.get("COSENSE_HTTP_TIMEOUT") or str(Config.DEFAULT_TIMEOUT)
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigError(
                f"Environment variable COSENSE_HTTP_TIMEOUT must be a number, got {raw_timeout!r}."
            )
        if timeout <= 0:
            raise ConfigError("Environment variable COSENSE_HTTP_TIMEOUT must be positive.")

        log_dir = Path(env.get("COSENSE_MCP_LOG_DIR") or Config.DEFAULT_LOG_DIR).expanduser()
        log_level = (env.get("COSENSE_MCP_LOG_LEVEL") or Config.DEFAULT_LOG_LEVEL).upper()
        if log_level not in Config.LOG_LEVELS:
            raise ConfigError(
                f"Environment variable COSENSE_MCP_LOG_LEVEL must be one of "
                f"{', '.join(Config.LOG_LEVELS)}, got {log_level!r}."
            )

        return cls(
            project_name=project_name,
            access_key=access_key,
            base_url=base_url,
            timeout=timeout,
            log_dir=log_dir,
            log_level=log_level,
        )
