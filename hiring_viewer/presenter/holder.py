"""State holder that fetches the item list and publishes loading/items/error."""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Awaitable, Callable, List, Optional, Set

from ..models import DisplayState, Record
from ..utils.http_client import FetchError
from .observable import MutableObservable, Observable
from .transform import process_records

Fetcher = Callable[[], Awaitable[List[Record]]]

_UNSET = object()


class ItemsStateHolder:
    """Owns the published display state and drives fetch → transform → publish.

    Creating a holder schedules the first ``refresh()`` on the running event
    loop, so it must be constructed from inside a coroutine unless
    ``autostart`` is disabled. The scheduled task is kept in
    ``initial_refresh``.
    """

    def __init__(self, fetcher: Fetcher, autostart: bool = True) -> None:
        self._fetch = fetcher
        self._lock = threading.RLock()
        self._closed = False
        self._tasks: Set[asyncio.Task] = set()

        self._loading: MutableObservable[bool] = MutableObservable(False, lock=self._lock)
        self._items: MutableObservable[Optional[List[Record]]] = MutableObservable(None, lock=self._lock)
        self._error: MutableObservable[str] = MutableObservable("", lock=self._lock)

        self.loading: Observable[bool] = self._loading.as_readonly()
        self.items: Observable[Optional[List[Record]]] = self._items.as_readonly()
        self.error: Observable[str] = self._error.as_readonly()

        self.initial_refresh: Optional[asyncio.Task] = self.start() if autostart else None

    @property
    def closed(self) -> bool:
        return self._closed

    def snapshot(self) -> DisplayState:
        with self._lock:
            return DisplayState(
                loading=self.loading.value,
                items=self.items.value,
                error=self.error.value,
            )

    def start(self) -> asyncio.Task:
        """Schedules a background refresh and returns its task."""

        loop = asyncio.get_running_loop()
        task = loop.create_task(self.refresh())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def refresh(self) -> None:
        if self._closed:
            logging.debug("Ignoring refresh on a closed holder")
            return

        self._publish(loading=True)
        logging.debug("Refreshing item list")
        try:
            records = await self._fetch()
        except FetchError as exc:
            logging.warning("Item refresh failed: %s", exc.message)
            self._publish(loading=False, items=None, error=exc.message)
            return
        except BaseException:
            # Cancellation included: loading must not stay published as True.
            self._publish(loading=False)
            raise

        items = process_records(records)
        logging.debug("Publishing %s of %s fetched items", len(items), len(records))
        self._publish(loading=False, items=items, error="")

    def _publish(self, loading=_UNSET, items=_UNSET, error=_UNSET) -> None:
        changed: List[MutableObservable] = []
        with self._lock:
            if self._closed:
                return
            if items is not _UNSET:
                self._items._store(items)
                changed.append(self._items)
            if error is not _UNSET:
                self._error._store(error)
                changed.append(self._error)
            if loading is not _UNSET:
                self._loading._store(loading)
                changed.append(self._loading)
        for observable in changed:
            observable.notify()

    def close(self) -> None:
        """Stops publishing, cancels scheduled refreshes and drops all observers."""

        with self._lock:
            if self._closed:
                return
            self._closed = True
        for task in list(self._tasks):
            task.cancel()
        for observable in (self._loading, self._items, self._error):
            observable.clear()

    async def __aenter__(self) -> "ItemsStateHolder":
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:
        pending = list(self._tasks)
        self.close()
        if pending:
            await asyncio.wait(pending)
