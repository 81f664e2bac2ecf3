"""Application package exports commonly used helpers for convenience."""

from .config import Settings, get_settings
from .logging_config import configure_logging
from .rate_limit import Decision, FixedWindowRateLimiter

__all__ = [
    "Decision",
    "FixedWindowRateLimiter",
    "Settings",
    "configure_logging",
    "get_settings",
]
