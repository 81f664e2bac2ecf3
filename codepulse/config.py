"""Application settings and environment loading utilities."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Tuple


def _load_dotenv() -> None:
    env_path = Path(".env")
    if not env_path.exists():
        return
    for line in env_path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


_load_dotenv()


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"Invalid integer for environment variable: {name}") from exc


def _split_origins(raw: str) -> Tuple[str, ...]:
    return tuple(origin.strip() for origin in raw.split(",") if origin.strip())


@dataclass(frozen=True)
class Settings:
    """Runtime configuration derived from environment variables."""

    database_url: str = "sqlite:///data/codepulse.db"
    rate_limit_requests: int = 2
    rate_limit_window_seconds: int = 60
    leetcode_graphql_url: str = "https://leetcode.com/graphql"
    request_timeout_seconds: int = 30
    cors_origins: Tuple[str, ...] = field(default=("*",))
    version: str = "dev"

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()
        return cls(
            database_url=os.getenv("CODEPULSE_DATABASE_URL", defaults.database_url),
            rate_limit_requests=_int_from_env(
                "CODEPULSE_RATE_LIMIT_REQUESTS", defaults.rate_limit_requests
            ),
            rate_limit_window_seconds=_int_from_env(
                "CODEPULSE_RATE_LIMIT_WINDOW_SECONDS", defaults.rate_limit_window_seconds
            ),
            leetcode_graphql_url=os.getenv(
                "CODEPULSE_LEETCODE_GRAPHQL_URL", defaults.leetcode_graphql_url
            ),
            request_timeout_seconds=_int_from_env(
                "CODEPULSE_REQUEST_TIMEOUT_SECONDS", defaults.request_timeout_seconds
            ),
            cors_origins=_split_origins(os.getenv("CODEPULSE_CORS_ORIGINS", "*")) or ("*",),
            version=os.getenv("CODEPULSE_VERSION", defaults.version),
        )


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings.from_env()
