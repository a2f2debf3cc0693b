"""
Configuration management module.
Loads TOML settings into Pydantic models.
"""

import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field
from tomlkit import dumps as toml_dumps

from .logger import logger


class ApiConfig(BaseModel):
    base_url: str = "https://api.mangadex.org"
    user_agent: str = "mangadex-dl/1.0"
    # See https://api.mangadex.org/docs/rate-limits/
    requests_per_second: float = Field(default=5.0, gt=0)
    page_size: int = Field(default=100, ge=1, le=100)  # Chapter listing page size
    request_timeout: float = 30.0
    connect_timeout: float = 30.0
    sock_read_timeout: float = 30.0


class DownloadConfig(BaseModel):
    output: str = "."
    language: str = "en"
    fallback_language: str = "en"  # Title language used when `language` has none
    data_saver: bool = False  # Download compressed images


class LogConfig(BaseModel):
    """Configuration for logging."""

    level: str = "INFO"  # Console log level: DEBUG, INFO, WARNING, ERROR, CRITICAL
    file_level: str = "DEBUG"  # File log level
    rotation: str = (
        "00:00"  # Log rotation time (e.g., "00:00" for midnight, "500 MB" for size-based)
    )
    retention: str = "1 week"  # How long to keep old logs
    log_dir: str = ""  # Directory for log files, empty to disable file logging


class ProxyConfig(BaseModel):
    """Configuration for proxy settings."""

    http: str = ""  # HTTP proxy URL (e.g., "http://127.0.0.1:7890")
    https: str = ""  # HTTPS proxy URL (e.g., "http://127.0.0.1:7890")


class UserConfig(BaseModel):
    api: ApiConfig = ApiConfig()
    download: DownloadConfig = DownloadConfig()
    log: LogConfig = LogConfig()
    proxy: ProxyConfig = ProxyConfig()


class ConfigManager:
    def __init__(self, config_path: str = "config.toml"):
        self.config_path = Path(os.getcwd()) / config_path
        self._config: UserConfig = UserConfig()

        self._load()

    def _set_proxy_env(self) -> None:
        """Set proxy environment variables from configuration."""
        if self._config.proxy.http:
            os.environ["HTTP_PROXY"] = self._config.proxy.http
            logger.info(f"Set HTTP_PROXY to {self._config.proxy.http}")

        if self._config.proxy.https:
            os.environ["HTTPS_PROXY"] = self._config.proxy.https
            logger.info(f"Set HTTPS_PROXY to {self._config.proxy.https}")

    def _load(self) -> None:
        """Load configuration from file; keep defaults when it is missing or invalid."""
        if not self.config_path.exists():
            logger.debug(f"No configuration file at {self.config_path}, using defaults")
            return

        try:
            content = self.config_path.read_bytes()
            raw = tomllib.loads(content.decode("utf-8"))
            self._config = UserConfig.model_validate(raw)
            self._set_proxy_env()
        except Exception as e:
            logger.error(f"Failed to load configuration: {e}")

    @property
    def data(self) -> UserConfig:
        """Get configuration data, including any command line overrides."""
        return self._config

    def save(self) -> None:
        """Save current configuration to file."""
        try:
            payload = self._config.model_dump()
            self.config_path.write_text(toml_dumps(payload), encoding="utf-8")
        except Exception as e:
            logger.error(f"Failed to save configuration: {e}")

    def validate(self) -> bool:
        """
        Validate configuration values that Pydantic cannot check on its own.

        Returns:
            True if the configuration is usable, False otherwise.
        """
        errors: list[str] = []
        warnings: list[str] = []

        if not self.api.base_url:
            errors.append("MangaDex API URL is not configured in [api] base_url.")
        elif not self.api.base_url.startswith(("http://", "https://")):
            errors.append(f"Invalid [api] base_url '{self.api.base_url}'.")

        if not self.download.language:
            errors.append("No language configured in [download] language.")

        if self.api.requests_per_second > 5:
            warnings.append(
                "[api] requests_per_second is above the documented MangaDex "
                "limit of 5 requests per second."
            )

        for w in warnings:
            logger.warning(f"Config Warning: {w}")
        for e in errors:
            logger.error(f"Config Error: {e}")

        return len(errors) == 0

    @property
    def api(self) -> ApiConfig:
        return self.data.api

    @property
    def download(self) -> DownloadConfig:
        return self.data.download

    @property
    def log(self) -> LogConfig:
        return self.data.log

    @property
    def proxy(self) -> ProxyConfig:
        return self.data.proxy


def default_config_path() -> str:
    return os.environ.get("CONFIG_PATH") or "config.toml"
