"""
Implementation of open-note tabs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from logging import Logger
from typing import TYPE_CHECKING, Iterable

from .exceptions import Status
from .path import NotePath, normalize_path

if TYPE_CHECKING:
    from .tree import Note, NoteTree

__all__ = [
    "Tab",
    "TabManager",
    "UNTITLED_LABEL",
    "MISSING_LABEL",
]

UNTITLED_LABEL = "Untitled"
"""
Label of a tab whose note has an empty title.
"""

MISSING_LABEL = "[Missing]"
"""
Label of a tab whose path no longer resolves.
"""


@dataclass(frozen=True)
class Tab:
    """
    An open note, referenced by path only. The note is looked up again each
    time the tab is read.
    """

    path: NotePath


class TabManager:
    """
    Tracks which notes are open as tabs and which tab is active.
    """

    _tree: NoteTree
    _tabs: list[Tab]
    _active_index: int | None
    _logger: Logger

    def __init__(self, tree: NoteTree, *, logger: Logger | None = None):
        self._tree = tree
        self._tabs = []
        self._active_index = None
        self._logger = logger or logging.getLogger()

    def __len__(self) -> int:
        return len(self._tabs)

    def __repr__(self):
        return f"TabManager(tabs={[t.path for t in self._tabs]}, active_index={self._active_index})"

    @property
    def tabs(self) -> list[Tab]:
        return list(self._tabs)

    @property
    def active_index(self) -> int | None:
        """
        Position of the active tab, or `None` if no tab is active.
        """
        return self._active_index

    @property
    def active_tab(self) -> Tab | None:
        if self._active_index is None:
            return None
        return self._tabs[self._active_index]

    @property
    def selected_path(self) -> NotePath | None:
        """
        Path shown in the editor, i.e. that of the active tab, or `None` when
        no tab is active.
        """
        tab = self.active_tab
        return tab.path if tab is not None else None

    def open_or_focus(self, path: Iterable[int]) -> int:
        """
        Focus the tab showing path, opening a new tab at the end if there is
        none. Returns the active index.
        """
        path = normalize_path(path)

        for index, tab in enumerate(self._tabs):
            if tab.path == path:
                self._active_index = index
                return index

        self._tabs.append(Tab(path))
        self._active_index = len(self._tabs) - 1

        self._logger.debug(f"Opened tab {self._active_index} for {path}")
        return self._active_index

    def focus(self, index: int) -> Status:
        if not self._in_range(index):
            return Status.OUT_OF_RANGE

        self._active_index = index
        return Status.OK

    def clear_selection(self):
        """
        Leave no tab active, keeping all tabs open. Focusing or opening a tab
        selects it again.
        """
        self._active_index = None

    def close(self, index: int) -> Status:
        """
        Close tab at index.

        If the closed tab was active, its previous neighbor becomes active;
        failing that the first remaining tab, and if no tabs remain there is
        no active tab. Otherwise the active index is adjusted so the same tab
        stays active.
        """
        if not self._in_range(index):
            return Status.OUT_OF_RANGE

        closed = self._tabs.pop(index)
        self._logger.debug(f"Closed tab {index} for {closed.path}")

        active = self._active_index

        if active == index:
            if not self._tabs:
                self._active_index = None
            elif index - 1 >= 0:
                self._active_index = index - 1
            else:
                self._active_index = 0
        elif active is not None and index < active:
            self._active_index = active - 1

        return Status.OK

    def resolve(self, index: int) -> Note | None:
        """
        Get note shown by tab at index, or `None` if index is invalid or the
        tab's path does not resolve.
        """
        if not self._in_range(index):
            return None
        return self._tree.resolve(self._tabs[index].path)

    def active_note(self) -> Note | None:
        if self._active_index is None:
            return None
        return self.resolve(self._active_index)

    def label(self, index: int) -> str:
        """
        Title to display for tab at index.
        """
        note = self.resolve(index)

        if note is None:
            return MISSING_LABEL

        return note.title or UNTITLED_LABEL

    def labels(self) -> list[str]:
        return [self.label(index) for index in range(len(self._tabs))]

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self._tabs)
