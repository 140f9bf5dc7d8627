"""
Agent connection configuration from environment variables.

Usage:
    from faultbridge.config import get_settings

    settings = get_settings()
    print(settings.host, settings.port)
"""

from functools import lru_cache
import os


class Settings:
    """Dispatcher configuration loaded from environment variables."""

    def __init__(self) -> None:
        # Agent endpoint defaults, used when an experiment omits host/port
        self.host: str = os.getenv("FAULTBRIDGE_AGENT_HOST", "localhost")
        self.port: str = os.getenv("FAULTBRIDGE_AGENT_PORT", "9526")

        # Agent routes
        self.inject_path: str = os.getenv("FAULTBRIDGE_INJECT_PATH", "/inject")
        self.recover_path: str = os.getenv("FAULTBRIDGE_RECOVER_PATH", "/recover")

        # Per-call deadline when the caller does not pass one
        self.timeout: float = float(os.getenv("FAULTBRIDGE_TIMEOUT_SECONDS", "30"))


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def reset_settings() -> None:
    """Clear settings cache. For testing only."""
    get_settings.cache_clear()
