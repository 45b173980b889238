"""
Indicator Loader - Load indicators from config

Responsibility: Bridge between config layer and domain layer
- Load indicator configs from settings (config layer)
- Use IndicatorRegistry to create instances (domain layer)
- Guarantee every snapshot field has an indicator behind it

This is SERVICE layer - knows about config, uses domain factories
"""

import logging

from config.settings import get_settings
from core.interfaces.indicators import BaseIndicator
from domain.indicators.registry import IndicatorRegistry

logger = logging.getLogger(__name__)

# One entry per IndicatorSnapshot field
DEFAULT_INDICATORS: list[dict] = [
    {"name": "rsi", "type": "rsi", "params": {"period": 14}},
    {"name": "macd", "type": "macd", "params": {"fast_period": 12, "slow_period": 26}},
    {"name": "ma20", "type": "sma", "params": {"period": 20}},
    {"name": "ma50", "type": "sma", "params": {"period": 50}},
    {"name": "ma200", "type": "sma", "params": {"period": 200}},
    {"name": "bollinger_bands", "type": "bollinger", "params": {"period": 20, "num_std": 2.0}},
]

# Snapshot field → indicator type it must be built from
SNAPSHOT_FIELDS = {config["name"]: config["type"] for config in DEFAULT_INDICATORS}


class IndicatorLoader:
    """Load indicators from YAML config using registry"""

    @staticmethod
    def build(configs: list[dict]) -> dict[str, BaseIndicator]:
        """
        Create indicator instances from config entries

        Only params are configurable: entries for names outside the
        snapshot, or with the wrong type for their field, are ignored.
        Fields left without a valid entry fall back to DEFAULT_INDICATORS.

        Args:
            configs: [{"name": "ma20", "type": "sma", "params": {"period": 20}}, ...]

        Returns:
            Dict of indicator instances keyed by snapshot field
        """
        indicators: dict[str, BaseIndicator] = {}

        for config in configs:
            name = config.get("name")
            if name not in SNAPSHOT_FIELDS:
                logger.warning(f"  ✗ Skipping {name}: not a snapshot field")
                continue

            indicator_type = str(config.get("type", "")).lower()
            if indicator_type != SNAPSHOT_FIELDS[name]:
                logger.warning(
                    f"  ✗ Skipping {name}: type must be {SNAPSHOT_FIELDS[name]}, got {indicator_type}"
                )
                continue

            try:
                indicator = IndicatorRegistry.from_config(config)
                indicators[name] = indicator
                logger.debug(f"  ✓ Loaded {name}: {indicator}")

            except (TypeError, ValueError) as e:
                logger.warning(f"  ✗ Skipping {name}: {e}")

        for default in DEFAULT_INDICATORS:
            name = default["name"]
            if name not in indicators:
                indicators[name] = IndicatorRegistry.from_config(default)
                logger.warning(f"  ✗ No valid config for {name}; using default {indicators[name]}")

        return indicators

    @staticmethod
    def load_from_settings() -> dict[str, BaseIndicator]:
        """
        Load indicators from settings.INDICATORS

        Returns:
            Dict of indicator instances: {"rsi": RSI(14), "ma20": SMA(20), ...}

        Example:
            >>> indicators = IndicatorLoader.load_from_settings()
            >>> list(indicators)
            ['rsi', 'macd', 'ma20', 'ma50', 'ma200', 'bollinger_bands']
        """
        settings = get_settings()
        indicators = IndicatorLoader.build(settings.INDICATORS)
        logger.info(f"✓ Loaded {len(indicators)} indicators: {list(indicators.keys())}")
        return indicators
