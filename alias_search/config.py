"""Configuration for the alias search engine."""
import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class EngineConfig:
    """Configuration for ranking, truncation and caching."""
    max_results: int = 100  # Results kept per query
    cache_capacity: int = 100  # Distinct queries cached

    # Recency boost windows
    recent_days: int = 7
    stale_days: int = 30

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Create config from environment variables."""
        return cls(
            max_results=int(os.environ.get("ALIAS_SEARCH_MAX_RESULTS", "100")),
            cache_capacity=int(os.environ.get("ALIAS_SEARCH_CACHE_CAPACITY", "100")),
            recent_days=int(os.environ.get("ALIAS_SEARCH_RECENT_DAYS", "7")),
            stale_days=int(os.environ.get("ALIAS_SEARCH_STALE_DAYS", "30")),
        )


# Global config instance
_config: Optional[EngineConfig] = None


def get_config() -> EngineConfig:
    """Get the global config instance.

    Returns:
        EngineConfig loaded from environment
    """
    global _config

    if _config is None:
        _config = EngineConfig.from_env()

    return _config
