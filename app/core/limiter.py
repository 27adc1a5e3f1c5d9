"""
Shared slowapi rate limiter.

Imported by app.main (mounted on app.state) and by the feature routers that
apply per-route limits with @limiter.limit(). One instance keeps a single
counter store for every route.
"""
from slowapi import Limiter

from app.core import config
from app.features.users.dependencies import get_authorization_header

limiter = Limiter(
    key_func=get_authorization_header,
    storage_uri="memory://",
    enabled=config.RATE_LIMIT_ENABLED,
)
