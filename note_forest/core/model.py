"""
Persisted representation of notes.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

__all__ = [
    "NoteModel",
    "FOREST_ADAPTER",
]


class NoteModel(BaseModel):
    """
    A note as stored in the forest blob, including its subtree. Keys use the
    persisted names (`subNotes`, `isCollapsed`); both are optional on read.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str = ""
    content: str = ""
    sub_notes: list[NoteModel] = Field(default_factory=list, alias="subNotes")
    is_collapsed: bool = Field(default=False, alias="isCollapsed")


FOREST_ADAPTER = TypeAdapter(list[NoteModel])
"""
Validates and dumps a whole forest, i.e. a JSON array of root notes.
"""
