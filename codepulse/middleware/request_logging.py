"""Middleware that logs each request and the status it was answered with."""
from __future__ import annotations

import logging
import time
from typing import Optional

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from codepulse.utils import client_address, request_path, status_text

LOGGER = logging.getLogger(__name__)


class RequestLoggingMiddleware:
    """Emit one record before and one record after the inner app handles a request.

    The response status is captured from the first ``http.response.start``
    message passing through ``send``; every message is forwarded unchanged.
    """

    def __init__(self, app: ASGIApp, logger: Optional[logging.Logger] = None) -> None:
        self.app = app
        self.logger = logger or LOGGER

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        method = scope.get("method", "")
        path = request_path(scope)
        self.logger.info(
            "incoming request",
            extra={"method": method, "path": path, "client_ip": client_address(scope)},
        )

        status_code: Optional[int] = None

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start" and status_code is None:
                status_code = message["status"]
            await send(message)

        started = time.perf_counter()
        try:
            await self.app(scope, receive, send_wrapper)
        except Exception:
            if status_code is None:
                status_code = 500
            self.logger.exception("unhandled exception", extra={"method": method, "path": path})
            raise
        finally:
            duration_ms = round((time.perf_counter() - started) * 1000, 3)
            final_status = status_code if status_code is not None else 200
            self.logger.info(
                "response",
                extra={
                    "method": method,
                    "path": path,
                    "status_code": final_status,
                    "status_text": status_text(final_status),
                    "duration_ms": duration_ms,
                },
            )
