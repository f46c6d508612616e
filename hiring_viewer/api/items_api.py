"""API client responsible for fetching the hiring item list."""

from __future__ import annotations

import logging
from typing import List

from pydantic import ValidationError

from ..models import Record
from ..utils.http_client import HttpClient, TransportError

ITEMS_PATH = "hiring.json"


class ItemsAPI:
    """Fetches the raw record list with a single GET and no retries."""

    def __init__(self, http_client: HttpClient) -> None:
        self._client = http_client

    async def fetch_items(self) -> List[Record]:
        data = await self._client.get_json(ITEMS_PATH)

        if not isinstance(data, list):
            logging.error("Expected a JSON array from %s, got %s", ITEMS_PATH, type(data).__name__)
            raise TransportError(f"Unexpected payload: expected a list of items, got {type(data).__name__}")

        records = []
        for index, entry in enumerate(data):
            if not isinstance(entry, dict):
                logging.error("Item at position %s is not an object: %r", index, entry)
                raise TransportError(f"Unexpected item at position {index}: {entry!r}")
            try:
                records.append(Record.model_validate(entry))
            except ValidationError as exc:
                logging.error("Item at position %s failed validation: %s", index, exc)
                raise TransportError(f"Invalid item at position {index}: {exc.errors()[0]['msg']}") from exc

        logging.debug("Fetched %s items from %s", len(records), self._client.build_url(ITEMS_PATH))
        return records
