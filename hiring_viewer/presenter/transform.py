"""Filtering, ordering and grouping of fetched records for display."""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Optional, Tuple

from ..models import EntryRow, HeaderRow, ItemRow, Record

ITEM_MARKER = "Item "
INT_PATTERN = re.compile(r"[+-]?[0-9]+")
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

SortKey = Tuple[int, int]


def has_display_name(record: Record) -> bool:
    return record.name is not None and record.name.strip() != ""


def filter_records(records: Iterable[Record]) -> List[Record]:
    """Drops records whose name is missing or whitespace-only."""

    return [record for record in records if has_display_name(record)]


def extract_item_number(name: Optional[str]) -> Optional[int]:
    """Returns N for names ending in ``"Item N"``, using the rightmost marker.

    Without the marker the whole name is parsed. The text must be a plain
    signed integer that fits in 32 bits; anything else yields ``None``.
    """

    if not name:
        return None
    position = name.rfind(ITEM_MARKER)
    tail = name if position < 0 else name[position + len(ITEM_MARKER):]
    if not INT_PATTERN.fullmatch(tail):
        return None
    number = int(tail)
    if number < INT32_MIN or number > INT32_MAX:
        return None
    return number


def name_sort_key(name: Optional[str]) -> SortKey:
    """Secondary ordering key; names without an item number sort last."""

    number = extract_item_number(name)
    if number is None:
        # Strictly after every number, including INT32_MAX.
        return (1, 0)
    return (0, number)


def sort_records(records: Iterable[Record]) -> List[Record]:
    return sorted(records, key=lambda record: (record.group_id, name_sort_key(record.name)))


def process_records(records: Iterable[Record]) -> List[Record]:
    """Filter then sort, producing the list the holder publishes."""

    return sort_records(filter_records(records))


def group_records(records: Iterable[Record]) -> Dict[int, List[Record]]:
    """Groups by ``group_id`` in first-seen order and re-sorts each group by name key."""

    groups: Dict[int, List[Record]] = {}
    for record in records:
        groups.setdefault(record.group_id, []).append(record)
    return {
        group_id: sorted(members, key=lambda record: name_sort_key(record.name))
        for group_id, members in groups.items()
    }


def build_rows(records: Iterable[Record]) -> List[ItemRow]:
    rows: List[ItemRow] = []
    for group_id, members in group_records(records).items():
        rows.append(HeaderRow(group_id=group_id))
        rows.extend(EntryRow(record=record) for record in members)
    return rows
