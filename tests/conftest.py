"""Pytest configuration and fixtures."""

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from hiring_viewer.models import Record

SAMPLE_PAYLOAD = [
    {"id": 4, "listId": 1, "name": "Item 4"},
    {"id": 6, "listId": 2, "name": "Item 6"},
    {"id": 2, "listId": 1, "name": "Item 2"},
    {"id": 5, "listId": 1, "name": "Item 5"},
    {"id": 10, "listId": 2, "name": None},
    {"id": 3, "listId": 2, "name": "Item 3"},
]


@pytest.fixture
def sample_payload():
    return [dict(entry) for entry in SAMPLE_PAYLOAD]


@pytest.fixture
def sample_records(sample_payload):
    return [Record.model_validate(entry) for entry in sample_payload]


@pytest.fixture
def serve():
    """Return a helper that runs ``client_fn(base_url)`` against a throwaway aiohttp app.

    ``handler`` answers ``GET /hiring.json``.
    """

    async def _serve(handler, client_fn):
        app = web.Application()
        app.router.add_get("/hiring.json", handler)
        server = TestServer(app)
        await server.start_server()
        try:
            return await client_fn(str(server.make_url("/")))
        finally:
            await server.close()

    return _serve
