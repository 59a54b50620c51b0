"""
Rate Limiter - SlowAPI configuration for API rate limiting

Limits are checked by the @limiter.limit decorators on each remote
procedure, keyed by client address and procedure.
"""
from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

from .config import AppConfig, config

_rate_limit = config.rate_limit

limiter = Limiter(key_func=get_remote_address, enabled=config.rate_limit_enabled)


def current_rate_limit() -> str:
    """Limit string applied to every remote procedure, e.g. "60/minute"."""
    return _rate_limit


def configure_limiter(app_config: AppConfig) -> Limiter:
    """Apply an app's rate limit settings and clear recorded hits."""
    global _rate_limit
    _rate_limit = app_config.rate_limit
    limiter.enabled = app_config.rate_limit_enabled
    limiter.reset()
    return limiter
