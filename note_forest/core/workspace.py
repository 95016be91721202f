"""
Implementation of the workspace, the root context of an application.
"""

from __future__ import annotations

import logging
from logging import Logger
from typing import Iterable

from pydantic import ValidationError

from .exceptions import Status
from .index import SearchIndex, SearchSession
from .path import NotePath
from .store import FOREST_KEY, TASKS_KEY, BlobStore, MemoryStore
from .tabs import TabManager
from .tasks import TaskList
from .tree import DEFAULT_ROOT_TITLE, Note, NoteTree

__all__ = ["Workspace"]
__canonical_syms__ = __all__


class Workspace:
    """
    Owns the note tree, the open tabs, the search panel state and the task
    list, and connects them to a {obj}`BlobStore`.

    Every successful change to the tree or the task list is written back to
    the store immediately.

    Example:

    ```
    workspace = Workspace(FileStore("notes.json"))

    path = workspace.tree.create_root("Shopping", "milk eggs")
    workspace.search.set_query("milk")
    workspace.commit_search()

    assert workspace.active_note().title == "Shopping"
    ```
    """

    _store: BlobStore
    """
    Store from which state is loaded and to which it's written.
    """

    _forest_key: str
    _tasks_key: str

    _tree: NoteTree
    _tabs: TabManager
    _index: SearchIndex
    _search: SearchSession
    _tasks: TaskList

    _logger: Logger

    def __init__(
        self,
        store: BlobStore | None = None,
        *,
        forest_key: str = FOREST_KEY,
        tasks_key: str = TASKS_KEY,
        logger: Logger | None = None,
    ):
        """
        :param store: Store to load from and write to, or `None` for a new in-memory store
        :param forest_key: Key of serialized forest in store
        :param tasks_key: Key of serialized task list in store
        :param logger: Logger to use, or `None` to use default logger
        """
        self._store = store if store is not None else MemoryStore()
        self._forest_key = forest_key
        self._tasks_key = tasks_key
        self._logger = logger or logging.getLogger()

        self._tree = self._load_tree()
        self._tasks = self._load_tasks()
        self._tabs = TabManager(self._tree, logger=self._logger)
        self._index = SearchIndex(self._tree)
        self._search = SearchSession(self._index)

        self._logger.debug(
            f"Loaded workspace: {len(self._tree)} notes, {len(self._tasks)} tasks"
        )

    @property
    def store(self) -> BlobStore:
        return self._store

    @property
    def tree(self) -> NoteTree:
        return self._tree

    @property
    def tabs(self) -> TabManager:
        return self._tabs

    @property
    def search(self) -> SearchSession:
        return self._search

    @property
    def index(self) -> SearchIndex:
        return self._index

    @property
    def tasks(self) -> TaskList:
        return self._tasks

    def open_note(self, path: Iterable[int]) -> int | Status:
        """
        Open note in a tab, e.g. when clicked in the notes panel. Returns the
        active tab index, or {obj}`Status.NOT_FOUND` if path does not resolve.
        """
        path = tuple(path)

        if self._tree.resolve(path) is None:
            return Status.NOT_FOUND

        return self._tabs.open_or_focus(path)

    def new_note(self, title: str = DEFAULT_ROOT_TITLE, content: str = "") -> NotePath:
        """
        Create a root note and open it in a tab.
        """
        path = self._tree.create_root(title, content)
        self._tabs.open_or_focus(path)
        return path

    def commit_search(self) -> NotePath | None:
        """
        Open the selected search result in a tab and clear the search.
        """
        return self._search.commit(self._tabs)

    def go_home(self):
        """
        Clear the current selection so no note is shown in the editor. Open
        tabs stay open.
        """
        self._tabs.clear_selection()

    def active_note(self) -> Note | None:
        """
        Note shown in the editor, if any.
        """
        return self._tabs.active_note()

    def _load_tree(self) -> NoteTree:
        persist = self._store.sink(self._forest_key)
        blob = self._store.get(self._forest_key)

        if blob is None:
            return NoteTree(persist=persist, logger=self._logger)

        try:
            return NoteTree.from_json(blob, persist=persist, logger=self._logger)
        except (ValidationError, ValueError) as e:
            self._logger.warning(
                f"Discarding unreadable forest under key '{self._forest_key}': {e}"
            )
            return NoteTree(persist=persist, logger=self._logger)

    def _load_tasks(self) -> TaskList:
        persist = self._store.sink(self._tasks_key)
        blob = self._store.get(self._tasks_key)

        if blob is None:
            return TaskList(persist=persist, logger=self._logger)

        try:
            return TaskList.from_json(blob, persist=persist, logger=self._logger)
        except ValidationError as e:
            self._logger.warning(
                f"Discarding unreadable tasks under key '{self._tasks_key}': {e}"
            )
            return TaskList(persist=persist, logger=self._logger)
