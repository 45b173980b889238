"""Factory package - Dependency injection for backend-agnostic code"""

from .client_factory import (
    create_cache_client,
    create_indicator_refresher,
    create_market_data_provider,
)

__all__ = [
    "create_cache_client",
    "create_market_data_provider",
    "create_indicator_refresher",
]
