"""Application settings and configuration."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_data_dir() -> Path:
    """Return the default data directory."""
    return Path.home() / ".paper_dashboard"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Paper Trading Dashboard"
    app_version: str = "0.1.0"

    # Data directory (sync database and snapshot exports live here)
    data_dir: Optional[Path] = None

    # Database URL (derived from data_dir if not set explicitly)
    database_url: Optional[str] = None

    log_level: str = "INFO"

    # Brokerage (Alpaca paper trading)
    alpaca_api_key: Optional[str] = None
    alpaca_secret_key: Optional[str] = None
    alpaca_base_url: str = "https://paper-api.alpaca.markets"
    orders_limit: int = 50
    history_period: str = "1W"
    history_timeframe: str = "1H"

    # Historical price bars: "twelvedata" or "yfinance"
    price_bar_provider: str = "twelvedata"
    twelvedata_api_key: Optional[str] = None
    twelvedata_base_url: str = "https://api.twelvedata.com"
    benchmark_symbol: str = "SPY"

    # Trade-reasoning feed (Google Sheet published as CSV)
    reasoning_sheet_id: Optional[str] = None
    reasoning_base_url: str = "https://docs.google.com/spreadsheets/d"

    # Offline mode: serve deterministic stub data instead of calling upstream APIs
    use_stub_providers: bool = False

    # Upstream calls
    request_timeout_seconds: float = 10.0

    # Response cache
    short_cache_ttl_seconds: int = 60
    long_cache_ttl_seconds: int = 3600

    # Dashboard behavior
    history_min_equity: float = 1000.0
    starting_capital: float = 100000.0
    benchmark_max_gap_hours: float = 2.0

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "dashboard.db"
        return f"sqlite:///{db_path}"

    def get_export_dir(self) -> Path:
        """Get the export directory for snapshot files."""
        export_dir = self.get_data_dir() / "exports"
        export_dir.mkdir(parents=True, exist_ok=True)
        return export_dir

    @property
    def has_alpaca_credentials(self) -> bool:
        return bool(self.alpaca_api_key and self.alpaca_secret_key)


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
