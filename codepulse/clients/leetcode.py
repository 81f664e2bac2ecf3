"""LeetCode GraphQL API client."""
from __future__ import annotations

import logging
from typing import Any, Dict

import requests
from requests import Response

from codepulse.config import Settings
from codepulse.errors import LeetCodeError

LOGGER = logging.getLogger(__name__)

USER_PUBLIC_PROFILE_QUERY = """
query userPublicProfile($username: String!) {
    matchedUser(username: $username) {
        contestBadge {
            name
            expired
            hoverText
            icon
        }
        username
        githubUrl
        twitterUrl
        linkedinUrl
        profile {
            ranking
            userAvatar
            realName
            aboutMe
            school
            websites
            countryName
            company
            jobTitle
            skillTags
            postViewCount
            postViewCountDiff
            reputation
            reputationDiff
            solutionCount
            solutionCountDiff
            categoryDiscussCount
            categoryDiscussCountDiff
        }
    }
}
"""


class LeetCodeClient:
    """Forwards profile lookups to LeetCode without retries or caching."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._session = requests.Session()
        self._session.headers.update({"Content-Type": "application/json"})

    def fetch_profile(self, username: str) -> Dict[str, Any]:
        """Return the ``userPublicProfile`` document for ``username``."""

        username = (username or "").strip()
        if not username:
            raise ValueError("username must not be empty")

        body = {
            "query": USER_PUBLIC_PROFILE_QUERY,
            "variables": {"username": username},
        }
        try:
            response = self._session.post(
                self._settings.leetcode_graphql_url,
                json=body,
                timeout=self._settings.request_timeout_seconds,
            )
        except requests.RequestException as exc:
            LOGGER.error("leetcode request failed", extra={"detail": str(exc)})
            raise LeetCodeError("Error fetching data from LeetCode.") from exc

        self._raise_for_status(response)
        try:
            return response.json()
        except ValueError as exc:
            LOGGER.error("leetcode response undecodable", extra={"detail": response.text[:200]})
            raise LeetCodeError("Error decoding LeetCode response.") from exc

    def _raise_for_status(self, response: Response) -> None:
        if response.ok:
            return
        status = response.status_code
        detail = response.text
        if status == 429:
            message = "LeetCode is throttling requests."
        else:
            message = f"LeetCode error ({status})."
        LOGGER.error("leetcode request failed", extra={"status_code": status, "detail": detail})
        raise LeetCodeError(f"{message} Response: {detail[:200]}")
