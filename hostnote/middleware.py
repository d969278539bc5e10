"""Security headers and per-client rate limiting."""

from typing import Mapping, Optional

from fastapi import Request
from slowapi import Limiter

from hostnote.config import Settings

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "geolocation=(), microphone=(), camera=()",
    "Content-Security-Policy": (
        "default-src 'self'; "
        "script-src 'self' 'unsafe-inline' 'unsafe-eval' blob: https://cdn.jsdelivr.net; "
        "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
        "img-src 'self' data: blob: https://github.com https://*.githubusercontent.com; "
        "font-src 'self' data: https://cdn.jsdelivr.net; "
        "connect-src 'self' https://cdn.jsdelivr.net; "
        "worker-src 'self' blob:; "
        "manifest-src 'self'; "
        "frame-ancestors 'none';"
    ),
}


def client_key(headers: Mapping[str, str], peer: Optional[str]) -> str:
    """
    Identify the client for rate limiting.

    Uses the first X-Forwarded-For entry set by the proxy, then
    X-Real-IP, then the socket peer address.
    """
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return headers.get("x-real-ip") or peer or "unknown"


def rate_limit_key(request: Request) -> str:
    peer = request.client.host if request.client else None
    return client_key(request.headers, peer)


def default_rate_limit(settings: Settings) -> str:
    """Render the configured request budget in limit-string form."""
    return f"{settings.rate_limit_requests} per {settings.rate_limit_window} seconds"


def build_limiter(settings: Settings) -> Limiter:
    """
    Create the limiter consulted by SlowAPIMiddleware.

    The budget is application-wide, so all routed endpoints that are not
    exempted share one counter per client.
    """
    return Limiter(key_func=rate_limit_key, application_limits=[default_rate_limit(settings)])
