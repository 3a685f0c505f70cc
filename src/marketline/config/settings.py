"""Application settings and configuration."""

import json
import re
from pathlib import Path
from typing import Annotated, Any, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64; rv:109.0) Gecko/20100101 Firefox/115.0"
)


def get_default_data_dir() -> Path:
    """Return the default data directory."""
    return Path.home() / ".marketline"


class Settings(BaseSettings):
    """Application configuration loaded from MARKETLINE_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MARKETLINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "marketline"
    app_version: str = "0.1.0"

    # Data directory (logs live here)
    data_dir: Optional[Path] = None

    log_level: str = "INFO"
    log_file: Optional[Path] = None

    # Quote provider
    quote_url: str = "https://query1.finance.yahoo.com/v7/finance/quote"
    cookie_url: str = "https://fc.yahoo.com"
    crumb_url: str = "https://query1.finance.yahoo.com/v1/test/getcrumb"
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout_seconds: float = 10.0

    # Dashboard behavior
    refresh_interval_seconds: float = 10.0
    # MARKETLINE_TICKERS accepts "AAPL,MSFT" or a JSON list
    tickers: Annotated[list[str], NoDecode] = ["AAPL", "MSFT", "NVDA"]
    offline: bool = False
    show_fetch_errors: bool = False

    @field_validator("tickers", mode="before")
    @classmethod
    def split_tickers(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        if value.strip().startswith("["):
            return json.loads(value)
        return [token for token in re.split(r"[,\s]+", value) if token]

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_log_dir(self) -> Path:
        """Get the log directory."""
        log_dir = self.get_data_dir() / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)
        return log_dir

    def get_log_file(self) -> Path:
        """Get the log file path, deriving it from data_dir if not set."""
        if self.log_file:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            return self.log_file
        return self.get_log_dir() / "marketline.log"


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
