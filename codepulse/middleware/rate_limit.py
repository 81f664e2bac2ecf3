"""Middleware that rejects clients exceeding the fixed-window quota."""
from __future__ import annotations

import logging

from starlette.responses import PlainTextResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from codepulse.rate_limit import Decision, FixedWindowRateLimiter
from codepulse.utils import client_address

LOGGER = logging.getLogger(__name__)

REJECTION_BODY = "Rate limit exceeded"


class RateLimitMiddleware:
    """Admit or reject each HTTP request before the inner app runs."""

    def __init__(self, app: ASGIApp, limiter: FixedWindowRateLimiter) -> None:
        self.app = app
        self.limiter = limiter

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        client_ip = client_address(scope)
        if self.limiter.admit(client_ip) is Decision.REJECT:
            LOGGER.info(
                "rate limit exceeded",
                extra={"client_ip": client_ip, "path": scope.get("path")},
            )
            response = PlainTextResponse(REJECTION_BODY, status_code=429)
            await response(scope, receive, send)
            return

        await self.app(scope, receive, send)
