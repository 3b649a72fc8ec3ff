from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

from career_insights.core.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def rate_limit(limit: str | None = None):
    if settings.rate_limit_enabled:
        return limiter.limit(limit or settings.rate_limit)

    def decorator(func):
        return func

    return decorator
