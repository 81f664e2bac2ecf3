"""ASGI middleware stages composing the request pipeline."""
from .pipeline import build_pipeline, pipeline_stages
from .rate_limit import RateLimitMiddleware
from .request_logging import RequestLoggingMiddleware

__all__ = [
    "RateLimitMiddleware",
    "RequestLoggingMiddleware",
    "build_pipeline",
    "pipeline_stages",
]
