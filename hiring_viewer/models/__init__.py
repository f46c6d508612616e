"""Data models for fetched records and the state published to the UI."""

from .item_models import UNNAMED_ITEM, DisplayState, EntryRow, HeaderRow, ItemRow, Record

__all__ = [
    "Record",
    "DisplayState",
    "HeaderRow",
    "EntryRow",
    "ItemRow",
    "UNNAMED_ITEM",
]
