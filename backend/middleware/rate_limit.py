"""Rate limit middleware: admits each API request through the per-client limiter."""

import logging
from datetime import datetime, timedelta, timezone

from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from errors import error_body
from services.rate_limit import RateLimiter

logger = logging.getLogger(__name__)


class RateLimitMiddleware:
    def __init__(
        self,
        app: ASGIApp,
        limiter: RateLimiter,
        trust_proxy_headers: bool = False,
        path_prefix: str = "/api",
    ):
        self.app = app
        self.limiter = limiter
        self.trust_proxy_headers = trust_proxy_headers
        self.path_prefix = path_prefix

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        # Only API paths are throttled; /health and /ready stay reachable.
        if scope["type"] != "http" or not scope["path"].startswith(self.path_prefix):
            await self.app(scope, receive, send)
            return

        client = client_key(scope, self.trust_proxy_headers)
        if self.limiter.is_allowed(client):
            await self.app(scope, receive, send)
            return

        logger.warning("Rate limit exceeded for %s on %s", client, scope["path"])
        response = JSONResponse(
            error_body("rate_limit_exceeded", "Too many requests. Please try again later.", 429),
            status_code=429,
            headers=rejection_headers(self.limiter),
        )
        await response(scope, receive, send)


def client_key(scope: Scope, trust_proxy_headers: bool = False) -> str:
    if trust_proxy_headers:
        forwarded = Headers(scope=scope).get("x-forwarded-for", "")
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    client = scope.get("client")
    return client[0] if client else "unknown"


def rejection_headers(limiter: RateLimiter) -> dict[str, str]:
    # Approximate: the real reset is when the oldest timestamp leaves the window.
    reset = datetime.now(timezone.utc) + timedelta(seconds=limiter.window)
    return {
        "X-RateLimit-Limit": str(limiter.limit),
        "X-RateLimit-Remaining": "0",
        "X-RateLimit-Reset": reset.strftime("%Y-%m-%dT%H:%M:%SZ"),
    }
