"""Utility helpers for HTTP access."""

from .http_client import FetchError, HttpClient, ResponseError, TransportError

__all__ = ["HttpClient", "FetchError", "TransportError", "ResponseError"]
