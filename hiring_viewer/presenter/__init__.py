"""Presenter state and the record transforms it applies before publishing."""

from .holder import ItemsStateHolder
from .observable import MutableObservable, Observable
from .transform import build_rows, extract_item_number, filter_records, group_records, process_records, sort_records

__all__ = [
    "ItemsStateHolder",
    "MutableObservable",
    "Observable",
    "build_rows",
    "extract_item_number",
    "filter_records",
    "group_records",
    "process_records",
    "sort_records",
]
