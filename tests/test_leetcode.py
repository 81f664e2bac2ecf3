from __future__ import annotations

from unittest import mock

import pytest
import requests

from codepulse.clients.leetcode import USER_PUBLIC_PROFILE_QUERY, LeetCodeClient
from codepulse.config import Settings
from codepulse.errors import LeetCodeError


def make_client() -> LeetCodeClient:
    settings = Settings(leetcode_graphql_url="https://leetcode.test/graphql", request_timeout_seconds=5)
    client = LeetCodeClient(settings)
    client._session = mock.Mock()
    return client


def make_response(status_code: int, payload=None, text: str = "") -> mock.Mock:
    response = mock.Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.text = text
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


def test_fetch_profile_posts_graphql_query():
    client = make_client()
    payload = {"data": {"matchedUser": {"username": "alice"}}}
    client._session.post.return_value = make_response(200, payload)

    assert client.fetch_profile(" alice ") == payload

    client._session.post.assert_called_once_with(
        "https://leetcode.test/graphql",
        json={"query": USER_PUBLIC_PROFILE_QUERY, "variables": {"username": "alice"}},
        timeout=5,
    )


def test_fetch_profile_raises_on_error_status():
    client = make_client()
    client._session.post.return_value = make_response(500, text="upstream down")

    with pytest.raises(LeetCodeError, match="LeetCode error \\(500\\)"):
        client.fetch_profile("alice")


def test_fetch_profile_raises_on_transport_error():
    client = make_client()
    client._session.post.side_effect = requests.ConnectionError("refused")

    with pytest.raises(LeetCodeError):
        client.fetch_profile("alice")


def test_fetch_profile_raises_on_undecodable_body():
    client = make_client()
    client._session.post.return_value = make_response(200, ValueError("bad json"), text="<html>")

    with pytest.raises(LeetCodeError, match="decoding"):
        client.fetch_profile("alice")


def test_fetch_profile_requires_username():
    client = make_client()

    with pytest.raises(ValueError):
        client.fetch_profile("  ")
    client._session.post.assert_not_called()
