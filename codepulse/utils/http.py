"""Helpers for reading ASGI connection scopes."""
from __future__ import annotations

from http import HTTPStatus
from typing import Any, Mapping

UNKNOWN_CLIENT = "unknown"


def client_address(scope: Mapping[str, Any]) -> str:
    """Return the remote ``host:port`` of the connection, or ``"unknown"``.

    The address is used verbatim; connections from one host on different
    ports yield different values.
    """

    client = scope.get("client")
    if not client or not client[0]:
        return UNKNOWN_CLIENT
    host = client[0]
    port = client[1] if len(client) > 1 else None
    if port is None:
        return host
    return f"{host}:{port}"


def request_path(scope: Mapping[str, Any]) -> str:
    """Return the request path including the query string, if any."""

    path = scope.get("path", "")
    query = scope.get("query_string", b"")
    if query:
        return f"{path}?{query.decode('latin-1')}"
    return path


def status_text(status_code: int) -> str:
    """Map a status code to its reason phrase (empty for unknown codes)."""

    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return ""
