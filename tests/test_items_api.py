import asyncio
import logging

import pytest
from aiohttp import web

from hiring_viewer.api.items_api import ITEMS_PATH, ItemsAPI
from hiring_viewer.models import Record
from hiring_viewer.presenter.holder import ItemsStateHolder
from hiring_viewer.utils.http_client import HttpClient, TransportError


class _StubClient:
    def __init__(self, payload):
        self.payload = payload
        self.paths = []

    async def get_json(self, path):
        self.paths.append(path)
        return self.payload

    def build_url(self, path):
        return f"https://example.com/{path}"


def test_fetch_items_requests_hiring_json_once(sample_payload):
    client = _StubClient(sample_payload)

    records = asyncio.run(ItemsAPI(client).fetch_items())

    assert client.paths == [ITEMS_PATH]
    assert records[0] == Record(id=4, group_id=1, name="Item 4")
    assert records[4].name is None
    assert len(records) == 6


def test_missing_name_key_is_accepted():
    records = asyncio.run(ItemsAPI(_StubClient([{"id": 1, "listId": 3}])).fetch_items())

    assert records == [Record(id=1, group_id=3, name=None)]


@pytest.mark.parametrize(
    "payload",
    [
        None,
        {"items": []},
        ["Item 1"],
        [{"id": 1, "name": "Item 1"}],
        [{"id": "abc", "listId": 1, "name": "Item 1"}],
    ],
)
def test_unexpected_payload_raises_transport_error(payload):
    with pytest.raises(TransportError):
        asyncio.run(ItemsAPI(_StubClient(payload)).fetch_items())


def test_holder_end_to_end_against_local_server(serve, sample_payload):
    async def handler(_request):
        return web.json_response(sample_payload)

    async def client_fn(base_url):
        async with HttpClient(base_url=base_url) as client:
            holder = ItemsStateHolder(ItemsAPI(client).fetch_items)
            await holder.initial_refresh
            return holder.snapshot()

    state = asyncio.run(serve(handler, client_fn))

    assert state.error == ""
    assert [(r.group_id, r.name) for r in state.items] == [
        (1, "Item 2"),
        (1, "Item 4"),
        (1, "Item 5"),
        (2, "Item 3"),
        (2, "Item 6"),
    ]


def test_holder_end_to_end_server_error(serve):
    async def handler(_request):
        return web.Response(status=500, text="Error 500: Internal Server Error")

    async def client_fn(base_url):
        async with HttpClient(base_url=base_url) as client:
            holder = ItemsStateHolder(ItemsAPI(client).fetch_items)
            await holder.initial_refresh
            return holder.snapshot()

    state = asyncio.run(serve(handler, client_fn))

    assert state.items is None
    assert state.error == "Error 500: Internal Server Error"
    assert state.loading is False


def test_non_object_entry_is_logged_before_raising(caplog):
    with caplog.at_level(logging.ERROR):
        with pytest.raises(TransportError, match="position 1"):
            asyncio.run(ItemsAPI(_StubClient([{"id": 1, "listId": 1}, 7])).fetch_items())

    assert "Item at position 1 is not an object" in caplog.text
