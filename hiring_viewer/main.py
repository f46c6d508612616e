from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys

from dotenv import load_dotenv

from .api.items_api import ItemsAPI
from .models import DisplayState, EntryRow, HeaderRow, ItemRow
from .presenter import ItemsStateHolder, build_rows, group_records
from .utils.http_client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, HttpClient

load_dotenv()


def _env_str(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    return value


def _env_float(name: str) -> float | None:
    value = _env_str(name)
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _env_bool(name: str) -> bool:
    value = _env_str(name)
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch the hiring item list and print it grouped by list id.")
    parser.add_argument(
        "--base-url",
        default=_env_str("HIRING_BASE_URL") or DEFAULT_BASE_URL,
        help="Base URL that serves hiring.json",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=_env_float("HIRING_TIMEOUT") or DEFAULT_TIMEOUT,
        help="Request timeout in seconds",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=_env_bool("HIRING_JSON"),
        help="Print the grouped items as JSON instead of a text list",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def format_rows(rows: list[ItemRow]) -> list[str]:
    lines = []
    for row in rows:
        if isinstance(row, HeaderRow):
            lines.append(row.label)
        elif isinstance(row, EntryRow):
            lines.append(f"  {row.display_name}")
    return lines


def format_json(state: DisplayState) -> str:
    groups = group_records(state.items or [])
    payload = [
        {
            "listId": group_id,
            "items": [record.model_dump(by_alias=True) for record in members],
        }
        for group_id, members in groups.items()
    ]
    return json.dumps(payload, ensure_ascii=False, indent=2)


def _log_loading(loading: bool) -> None:
    if loading:
        logging.info("Loading items ...")


async def run(args: argparse.Namespace) -> DisplayState:
    async with HttpClient(base_url=args.base_url, timeout=args.timeout) as http_client:
        items_api = ItemsAPI(http_client)
        async with ItemsStateHolder(items_api.fetch_items) as holder:
            # The initial refresh task has not run yet, so this sees loading=True.
            holder.loading.subscribe(_log_loading)
            await holder.initial_refresh
            return holder.snapshot()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)

    state = asyncio.run(run(args))
    if state.error:
        logging.error("Failed to load items: %s", state.error)
        return 1

    if args.json:
        print(format_json(state))
        return 0

    rows = build_rows(state.items or [])
    if not rows:
        logging.info("No items to display.")
        return 0
    logging.info("Loaded %s items in %s groups.", len(state.items or []), sum(isinstance(row, HeaderRow) for row in rows))
    for line in format_rows(rows):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
