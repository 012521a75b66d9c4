"""Analytics configuration management."""

from functools import lru_cache
from pathlib import Path

from .schemas import AnalyticsConfig
from .utils import load_json

CONFIG_PATH = Path(__file__).parent.parent / 'data' / 'analytics_config.json'


@lru_cache(maxsize=1)
def get_config() -> AnalyticsConfig:
    """
    Load analytics configuration from data/analytics_config.json.

    Configuration is cached after first load. Engine functions never call
    this themselves; callers pass the values they need.

    Returns:
        AnalyticsConfig object with validated settings

    Raises:
        FileNotFoundError: If analytics_config.json doesn't exist
        ValueError: If config file has invalid structure

    Example:
        from footy.config import get_config
        config = get_config()
        print(f"Current season: {config.current_year}")
    """
    return load_json(CONFIG_PATH, schema=AnalyticsConfig)


def get_current_year() -> int:
    """Get the current season from config."""
    return get_config().current_year


def get_prior_year() -> int:
    """Get the comparison season from config."""
    return get_config().prior_year


def get_anchor_weekday() -> int:
    """Get the weekly game day (Monday=0) from config."""
    return get_config().anchor_weekday


def get_language() -> str:
    """Get the default display language from config."""
    return get_config().language


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file is modified during runtime
    and you need to reload it.
    """
    get_config.cache_clear()
