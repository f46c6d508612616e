"""Shared HTTP helpers for the hiring list endpoint."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Optional
from urllib.parse import urljoin

import aiohttp

DEFAULT_BASE_URL = "https://fetch-hiring.s3.amazonaws.com/"
DEFAULT_TIMEOUT = 10.0
UNKNOWN_ERROR = "Unknown error"

DEFAULT_HEADERS = {
    "accept": "application/json",
}


class FetchError(Exception):
    """Base class for failures while fetching the item list."""

    def __init__(self, message: str) -> None:
        self.message = message or UNKNOWN_ERROR
        super().__init__(self.message)


class TransportError(FetchError):
    """Raised when no usable response was obtained (connectivity, timeout, bad payload)."""


class ResponseError(FetchError):
    """Raised when the server answered with a non-2xx status."""

    def __init__(self, status: int, message: str) -> None:
        self.status = status
        super().__init__(message)


class HttpClient:
    """Issues GET requests against a base URL over a lazily created aiohttp session."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: float = DEFAULT_TIMEOUT) -> None:
        if not base_url.endswith("/"):
            base_url = f"{base_url}/"
        self.base_url = base_url
        self.timeout = timeout
        self._headers = DEFAULT_HEADERS.copy()

        self._session: Optional[aiohttp.ClientSession] = None
        self._session_lock: Optional[asyncio.Lock] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    def build_url(self, path: str) -> str:
        return urljoin(self.base_url, path.lstrip("/"))

    async def get_json(self, path: str) -> Any:
        """GET ``path`` and decode the JSON body.

        Raises ``ResponseError`` for non-2xx answers and ``TransportError`` for
        everything that prevents a decoded body from being obtained.
        """

        url = self.build_url(path)
        session = await self._get_session()
        try:
            async with session.get(url) as resp:
                body = await resp.text()
                status = resp.status
        except asyncio.TimeoutError as exc:
            logging.error("GET %s timed out after %ss", url, self.timeout)
            raise TransportError(f"Request to {url} timed out") from exc
        except (aiohttp.ClientError, UnicodeDecodeError) as exc:
            logging.error("GET %s failed: %s", url, exc)
            raise TransportError(str(exc)) from exc

        if not 200 <= status < 300:
            logging.error("GET %s returned status %s", url, status)
            raise ResponseError(status, body.strip())

        try:
            return json.loads(body)
        except ValueError as exc:
            logging.error("Response from %s is not valid JSON: %s", url, exc)
            raise TransportError(f"Malformed JSON in response: {exc}") from exc

    async def _get_session(self) -> aiohttp.ClientSession:
        current_loop = asyncio.get_running_loop()
        if self._session:
            if (
                self._session.closed
                or not self._loop
                or self._loop.is_closed()
                or self._loop is not current_loop
            ):
                await self._shutdown_session()

        if self._session_lock is None or self._loop is not current_loop:
            self._session_lock = asyncio.Lock()

        async with self._session_lock:
            if self._session and not self._session.closed:
                return self._session
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers=self._headers.copy(),
            )
            self._loop = current_loop
        return self._session

    async def _shutdown_session(self) -> None:
        if self._session and not self._session.closed:
            try:
                await self._session.close()
            except RuntimeError as exc:  # pragma: no cover - loop already gone
                logging.debug("Ignoring error while closing stale session: %s", exc)
        self._session = None
        self._loop = None

    async def close(self) -> None:
        await self._shutdown_session()

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:
        await self.close()
