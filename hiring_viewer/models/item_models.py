"""Pydantic models for fetched records, published state, and display rows."""

from __future__ import annotations

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

UNNAMED_ITEM = "Unnamed Item"


class Record(BaseModel):
    """A single entry of the hiring list as returned by the endpoint."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    group_id: int = Field(alias="listId")
    name: Optional[str] = None


class DisplayState(BaseModel):
    """Snapshot of the three values published by the state holder."""

    model_config = ConfigDict(frozen=True)

    loading: bool = False
    items: Optional[List[Record]] = None
    error: str = ""


class HeaderRow(BaseModel):
    """Section header announcing a new group."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["header"] = "header"
    group_id: int

    @property
    def label(self) -> str:
        return f"List ID: {self.group_id}"


class EntryRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["entry"] = "entry"
    record: Record

    @property
    def display_name(self) -> str:
        return self.record.name if self.record.name is not None else UNNAMED_ITEM


ItemRow = Union[HeaderRow, EntryRow]
