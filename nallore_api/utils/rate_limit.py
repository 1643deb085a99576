"""
Rate limiting utilities for API endpoints.
Uses slowapi to slow down brute force attempts on the admin login.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from nallore_api.config import settings


# Keyed on the socket peer only. X-Forwarded-For is client-controlled; behind a
# proxy, run uvicorn with --proxy-headers and --forwarded-allow-ips so trusted
# hops rewrite the client address before it reaches the limiter.
limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.RATE_LIMIT_ENABLED,
    storage_uri="memory://"  # Use in-memory storage (for production, consider Redis)
)


# Rate limit configurations for specific use cases
RATE_LIMITS = {
    "login": settings.LOGIN_RATE_LIMIT,
}
