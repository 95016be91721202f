"""
Substring search across every note in a tree.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .path import NotePath

if TYPE_CHECKING:
    from .tabs import TabManager
    from .tree import Note, NoteTree

__all__ = [
    "SearchResult",
    "SearchIndex",
    "SearchSession",
    "gather_all",
    "search",
]


@dataclass(frozen=True)
class SearchResult:
    """
    A note along with the path which addresses it.
    """

    path: NotePath
    note: Note


def gather_all(tree: NoteTree) -> list[SearchResult]:
    """
    Flatten tree in pre-order: each note before its children, children in
    child order.
    """
    results: list[SearchResult] = []
    stack: list[tuple[NotePath, Note]] = [
        ((index,), note) for index, note in reversed(list(enumerate(tree.roots)))
    ]

    while stack:
        path, note = stack.pop()
        results.append(SearchResult(path, note))

        children = note.children
        for index in range(len(children) - 1, -1, -1):
            stack.append((path + (index,), children[index]))

    return results


def search(tree: NoteTree, query: str) -> list[SearchResult]:
    """
    Get notes whose title or content contains query, ignoring case, in
    pre-order. A blank query matches nothing.
    """
    return _filter(gather_all(tree), query)


class SearchIndex:
    """
    Searches a tree, reusing the flattened note list until the tree changes.
    """

    _tree: NoteTree
    _entries: list[SearchResult] | None
    _revision: int | None

    def __init__(self, tree: NoteTree):
        self._tree = tree
        self._entries = None
        self._revision = None

    @property
    def tree(self) -> NoteTree:
        return self._tree

    def gather_all(self) -> list[SearchResult]:
        if self._entries is None or self._revision != self._tree.revision:
            self._entries = gather_all(self._tree)
            self._revision = self._tree.revision
        return list(self._entries)

    def search(self, query: str) -> list[SearchResult]:
        return _filter(self.gather_all(), query)


class SearchSession:
    """
    State of the search panel: current query, its results and the selection
    cursor.

    Results follow the tree: when it changes, they are recomputed for the
    current query on next access and the cursor returns to the first result.
    The cursor wraps around when moved past either end of the results.
    Committing a result opens it in a tab and clears the session.
    """

    _index: SearchIndex
    _query: str
    _results: list[SearchResult]
    _cursor: int
    _revision: int

    def __init__(self, index: SearchIndex):
        self._index = index
        self._query = ""
        self._results = []
        self._cursor = 0
        self._revision = index.tree.revision

    @property
    def query(self) -> str:
        return self._query

    @property
    def results(self) -> list[SearchResult]:
        return list(self.refresh())

    @property
    def cursor(self) -> int:
        self.refresh()
        return self._cursor

    @property
    def selected(self) -> SearchResult | None:
        """
        Result under the cursor, or `None` if there are no results.
        """
        results = self.refresh()
        if not results:
            return None
        return results[self._cursor]

    def set_query(self, query: str) -> list[SearchResult]:
        """
        Recompute results for new query and move cursor to first result.
        """
        self._query = query
        self._recompute()
        return self.results

    def refresh(self) -> list[SearchResult]:
        """
        Recompute results if the tree changed since they were computed.
        """
        if self._revision != self._index.tree.revision:
            self._recompute()
        return self._results

    def move_down(self) -> int:
        if results := self.refresh():
            self._cursor = (self._cursor + 1) % len(results)
        return self._cursor

    def move_up(self) -> int:
        if results := self.refresh():
            self._cursor = (self._cursor - 1) % len(results)
        return self._cursor

    def commit(self, tabs: TabManager) -> NotePath | None:
        """
        Open the selected result in a tab and clear the session.

        Returns the opened path, or `None` if nothing was selected, in which
        case the session is left as is.
        """
        selected = self.selected
        if selected is None:
            return None

        tabs.open_or_focus(selected.path)
        self.clear()

        return selected.path

    def clear(self):
        self._query = ""
        self._results = []
        self._cursor = 0
        self._revision = self._index.tree.revision

    def _recompute(self):
        self._results = self._index.search(self._query)
        self._revision = self._index.tree.revision
        self._cursor = 0


def _filter(entries: list[SearchResult], query: str) -> list[SearchResult]:
    if not query.strip():
        return []

    needle = query.casefold()
    return [
        entry
        for entry in entries
        if needle in entry.note.title.casefold()
        or needle in entry.note.content.casefold()
    ]
