"""FastAPI application serving the CodePulse welcome and LeetCode stats endpoints."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.middleware import Middleware

from codepulse.clients.leetcode import LeetCodeClient
from codepulse.config import get_settings
from codepulse.database import RequestStore, create_db_engine, init_db
from codepulse.errors import LeetCodeError, StorageError
from codepulse.logging_config import configure_logging
from codepulse.middleware import pipeline_stages
from codepulse.rate_limit import FixedWindowRateLimiter
from codepulse.utils import client_address

configure_logging()
LOGGER = logging.getLogger(__name__)

settings = get_settings()
engine = create_db_engine(settings.database_url)
store = RequestStore(engine)
leetcode = LeetCodeClient(settings)
rate_limiter = FixedWindowRateLimiter(
    settings.rate_limit_requests, settings.rate_limit_window_seconds
)


@asynccontextmanager
async def lifespan(_: FastAPI):
    LOGGER.info("starting codepulse", extra={"detail": settings.version})
    init_db(engine)
    yield


app = FastAPI(
    title="CodePulse",
    version=settings.version,
    lifespan=lifespan,
    middleware=[
        Middleware(
            CORSMiddleware,
            allow_origins=list(settings.cors_origins),
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["Content-Type"],
        ),
        *pipeline_stages(rate_limiter),
    ],
)


def get_store() -> RequestStore:
    """Provide the request record store."""

    return store


def get_leetcode_client() -> LeetCodeClient:
    """Provide a configured LeetCode client."""

    return leetcode


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok", "version": settings.version}


@app.get("/welcome")
def welcome(
    request: Request,
    name: str = Query("anonymous", max_length=50, description="Caller's display name."),
    request_store: RequestStore = Depends(get_store),
) -> Dict[str, Any]:
    """Record the caller and echo back where the request came from."""

    name = name.strip() or "anonymous"
    remote_address = client_address(request.scope)
    try:
        request_store.record(name, remote_address)
    except StorageError as exc:
        LOGGER.warning("Storage error", extra={"detail": str(exc), "client_ip": remote_address})
        raise HTTPException(status_code=500, detail="Internal error") from exc

    return {
        "app": "CodePulse",
        "name": name,
        "remoteAddress": remote_address,
        "uri": str(request.url),
    }


@app.post("/leetcodestat")
async def leetcode_stat(
    request: Request,
    client: LeetCodeClient = Depends(get_leetcode_client),
) -> Dict[str, Any]:
    """Proxy a public profile lookup to the LeetCode GraphQL API."""

    try:
        payload = await request.json()
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="Invalid JSON payload") from exc

    username = payload.get("username") if isinstance(payload, dict) else None
    if not isinstance(username, str) or not username.strip():
        raise HTTPException(status_code=400, detail="username is required")

    try:
        return await run_in_threadpool(client.fetch_profile, username)
    except LeetCodeError as exc:
        LOGGER.warning("LeetCode error", extra={"detail": str(exc)})
        raise HTTPException(status_code=502, detail="Error fetching data from LeetCode") from exc


@app.get("/api/compare")
def compare() -> JSONResponse:
    return JSONResponse(status_code=501, content={"detail": "Not Implemented"})


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8080)
