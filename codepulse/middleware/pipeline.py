"""Static composition of the rate-limit and logging stages."""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from starlette.middleware import Middleware
from starlette.types import ASGIApp

from codepulse.middleware.rate_limit import RateLimitMiddleware
from codepulse.middleware.request_logging import RequestLoggingMiddleware
from codepulse.rate_limit import FixedWindowRateLimiter


def pipeline_stages(
    limiter: FixedWindowRateLimiter, logger: Optional[logging.Logger] = None
) -> List[Middleware]:
    """Return the pipeline stages, outermost first.

    The limiter wraps the logger, so rejected requests never reach it.
    """

    return [
        Middleware(RateLimitMiddleware, limiter=limiter),
        Middleware(RequestLoggingMiddleware, logger=logger),
    ]


def build_pipeline(handler: ASGIApp, stages: Sequence[Middleware]) -> ASGIApp:
    """Wrap ``handler`` in ``stages``; the first stage ends up outermost."""

    app = handler
    for stage in reversed(stages):
        app = stage.cls(app, *stage.args, **stage.kwargs)
    return app
