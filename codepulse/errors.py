"""Exceptions raised by CodePulse collaborators."""
from __future__ import annotations


class CodePulseError(RuntimeError):
    """Base class for expected service failures."""


class StorageError(CodePulseError):
    """Raised when a request record cannot be written."""


class LeetCodeError(CodePulseError):
    """Raised when the LeetCode GraphQL API returns an error."""
