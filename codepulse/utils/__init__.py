"""Utility helpers."""
from .http import client_address, request_path, status_text  # noqa: F401
