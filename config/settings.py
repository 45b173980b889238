"""
Application Settings - Load from YAML configs + .env secrets

Design Philosophy:
- Service configs (hosts, TTLs, indicator periods) → YAML files (versioned in git)
- Secrets and per-deployment switches → .env file (gitignored)

YAML files live in config/providers/:
- cache.yaml: Redis connection + per-entity TTLs
- market_data.yaml: Yahoo Finance + synthetic provider settings
- indicators.yaml: Indicator set and refresh behaviour

Uses Pydantic for validation and type safety
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.utils.config import load_yaml_safe

CONFIG_DIR = Path(__file__).parent / "providers"


@lru_cache(maxsize=1)
def _load_provider_configs() -> dict[str, dict[str, Any]]:
    """Load YAML configs once per process"""
    return {
        name: load_yaml_safe(CONFIG_DIR / f"{name}.yaml")
        for name in ("cache", "market_data", "indicators")
    }


class Settings(BaseSettings):
    """
    Application settings

    Architecture:
    - Infrastructure configs → config/providers/*.yaml
    - Secrets / switches → environment or .env

    Usage:
        from config.settings import get_settings

        settings = get_settings()
        print(settings.CACHE_TTL_INDICATORS_SECONDS)  # From cache.yaml
        print(settings.CACHE_BACKEND)  # From .env
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra fields in .env
    )

    # ============================================
    # ENVIRONMENT (.env only)
    # ============================================
    ENVIRONMENT: str = Field(default="local", description="Environment: local, dev, staging, prod")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_DIR: str = Field(default="data/logs", description="Directory for error log files")

    # ============================================
    # BACKEND SELECTION (.env only)
    # ============================================
    CACHE_BACKEND: str = Field(default="memory", description="Cache backend: memory, redis")
    MARKET_DATA_PROVIDER: str = Field(
        default="yahoo", description="Market data provider: yahoo, synthetic"
    )

    # Redis password from .env (optional secret)
    REDIS_PASSWORD: str | None = Field(default=None)

    @property
    def cache_config(self) -> dict[str, Any]:
        return _load_provider_configs()["cache"]

    @property
    def market_data_config(self) -> dict[str, Any]:
        return _load_provider_configs()["market_data"]

    @property
    def indicators_config(self) -> dict[str, Any]:
        return _load_provider_configs()["indicators"]

    # ============================================
    # REDIS (from YAML + .env)
    # ============================================
    @property
    def REDIS_HOST(self) -> str:
        """Redis host from cache.yaml"""
        return self.cache_config.get("redis", {}).get("host", "redis")

    @property
    def REDIS_PORT(self) -> int:
        """Redis port from cache.yaml"""
        return self.cache_config.get("redis", {}).get("port", 6379)

    @property
    def REDIS_DB(self) -> int:
        """Redis database from cache.yaml"""
        return self.cache_config.get("redis", {}).get("db", 0)

    @property
    def redis_url(self) -> str:
        """Redis connection URL"""
        if self.REDIS_PASSWORD:
            return f"redis://:{self.REDIS_PASSWORD}@{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    @property
    def CACHE_REDIS_EXPIRY_SECONDS(self) -> int | None:
        """Hard expiry on Redis keys (None = keep until overwritten)"""
        return self.cache_config.get("redis", {}).get("expiry_seconds")

    # ============================================
    # CACHE TTLs (from YAML)
    # ============================================
    def ttl_seconds(self, kind: str, default: int) -> int:
        return self.cache_config.get("ttl_seconds", {}).get(kind, default)

    @property
    def CACHE_TTL_QUOTE_SECONDS(self) -> int:
        """Price quotes go stale after 1 minute"""
        return self.ttl_seconds("quote", 60)

    @property
    def CACHE_TTL_HISTORY_SECONDS(self) -> int:
        """Historical bars go stale after 5 minutes"""
        return self.ttl_seconds("history", 300)

    @property
    def CACHE_TTL_INDICATORS_SECONDS(self) -> int:
        """Indicator snapshots go stale after 5 minutes"""
        return self.ttl_seconds("indicators", 300)

    @property
    def CACHE_TTL_NEWS_SECONDS(self) -> int:
        """News items go stale after 15 minutes"""
        return self.ttl_seconds("news", 900)

    @property
    def CACHE_TTL_RECOMMENDATION_SECONDS(self) -> int:
        """AI recommendations go stale after 1 hour"""
        return self.ttl_seconds("recommendation", 3600)

    # ============================================
    # MARKET DATA (from YAML)
    # ============================================
    @property
    def MARKET_DATA_SYMBOL_SUFFIX(self) -> str:
        """Exchange suffix appended to symbols for Yahoo Finance"""
        return self.market_data_config.get("yahoo", {}).get("symbol_suffix") or ""

    @property
    def MARKET_DATA_MAX_RETRIES(self) -> int:
        """Attempts per upstream call before giving up"""
        return self.market_data_config.get("yahoo", {}).get("max_retries", 3)

    @property
    def MARKET_DATA_RETRY_BACKOFF_SECONDS(self) -> float:
        """Base delay between retries (doubles each attempt)"""
        return self.market_data_config.get("yahoo", {}).get("retry_backoff_seconds", 1.0)

    @property
    def SYNTHETIC_SEED(self) -> int | None:
        """Seed for the synthetic random walk (None = unseeded)"""
        return self.market_data_config.get("synthetic", {}).get("seed")

    @property
    def SYNTHETIC_DAILY_VOLATILITY(self) -> float:
        """Max relative move per synthetic bar"""
        return self.market_data_config.get("synthetic", {}).get("daily_volatility", 0.02)

    @property
    def SYNTHETIC_DEFAULT_BASE_PRICE(self) -> float:
        """Starting price for symbols without a configured base"""
        return self.market_data_config.get("synthetic", {}).get("default_base_price", 1500)

    @property
    def SYNTHETIC_BASE_PRICES(self) -> dict[str, float]:
        """Per-symbol starting prices for the synthetic provider"""
        return self.market_data_config.get("synthetic", {}).get("base_prices", {})

    # ============================================
    # INDICATORS (from YAML)
    # ============================================
    @property
    def INDICATORS(self) -> list:
        """List of configured indicators from indicators.yaml"""
        return self.indicators_config.get("indicators", [])

    @property
    def INDICATOR_LOOKBACK_TIMEFRAME(self) -> str:
        """History window fetched when indicators are stale"""
        return self.indicators_config.get("settings", {}).get("lookback_timeframe", "1M")

    @property
    def INDICATOR_COALESCE_REFRESHES(self) -> bool:
        """Whether concurrent stale reads share one refresh"""
        return self.indicators_config.get("settings", {}).get("coalesce_refreshes", False)


# Singleton pattern
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """
    Get application settings (singleton)

    Returns:
        Settings instance

    Example:
        >>> settings = get_settings()
        >>> print(settings.CACHE_TTL_INDICATORS_SECONDS)
        300
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
