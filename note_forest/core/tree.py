"""
Implementation of the path-addressed note tree.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from logging import Logger
from typing import Callable, Iterable

from . import path as path_codec
from .exceptions import Status
from .model import FOREST_ADAPTER, NoteModel
from .path import MAX_DEPTH, NotePath, normalize_path

__all__ = [
    "Note",
    "NoteTree",
    "DEFAULT_ROOT_TITLE",
    "DEFAULT_CHILD_TITLE",
]

DEFAULT_ROOT_TITLE = "Untitled Note"
DEFAULT_CHILD_TITLE = "Untitled SubNote"


@dataclass(frozen=True)
class _Node:
    """
    Arena slot holding a note's fields and the ids of its children.
    """

    title: str
    content: str
    collapsed: bool = False
    children: list[int] = field(default_factory=list)


class Note:
    """
    Read-only view of a note in a {obj}`NoteTree`. Fields are read from the
    tree on every access, so a view reflects later edits to its note.
    """

    __slots__ = ("_tree", "_node_id")

    _tree: NoteTree
    _node_id: int

    def __init__(self, tree: NoteTree, node_id: int):
        self._tree = tree
        self._node_id = node_id

    def __repr__(self):
        return f"Note(title={self.title!r}, children={len(self._node.children)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Note):
            return NotImplemented
        return self._tree is other._tree and self._node_id == other._node_id

    def __hash__(self) -> int:
        return hash((id(self._tree), self._node_id))

    @property
    def title(self) -> str:
        return self._node.title

    @property
    def content(self) -> str:
        return self._node.content

    @property
    def collapsed(self) -> bool:
        """
        Whether a renderer should hide this note's children.
        """
        return self._node.collapsed

    @property
    def children(self) -> list[Note]:
        return [Note(self._tree, child_id) for child_id in self._node.children]

    @property
    def _node(self) -> _Node:
        return self._tree._nodes[self._node_id]


class NoteTree:
    """
    Owns a forest of notes and exposes operations keyed by {obj}`NotePath`.

    Notes are kept in an arena: a flat list of nodes, each holding the ids
    of its children. An update replaces only the addressed node. Nodes are
    never removed, and children are only ever appended, so a path stays
    valid once it has been handed out.

    After each successful mutation the whole forest is serialized and passed
    to `persist`, if provided.
    """

    _nodes: list[_Node]
    """
    Arena of all nodes, indexed by node id.
    """

    _roots: list[int]
    """
    Node ids of root notes in order.
    """

    _persist: Callable[[str], None] | None
    """
    Sink accepting the serialized forest after each mutation.
    """

    _revision: int

    _logger: Logger

    def __init__(
        self,
        *,
        persist: Callable[[str], None] | None = None,
        logger: Logger | None = None,
    ):
        """
        :param persist: Sink accepting the serialized forest after each mutation
        :param logger: Logger to use, or `None` to use default logger
        """
        self._nodes = []
        self._roots = []
        self._persist = persist
        self._revision = 0
        self._logger = logger or logging.getLogger()

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self):
        return f"NoteTree(roots={len(self._roots)}, notes={len(self._nodes)})"

    @classmethod
    def from_models(
        cls,
        models: Iterable[NoteModel],
        *,
        persist: Callable[[str], None] | None = None,
        logger: Logger | None = None,
    ) -> NoteTree:
        """
        Build a tree from persisted models.

        :raises ValueError: If a note is nested deeper than {obj}`MAX_DEPTH`
        """
        tree = cls(persist=persist, logger=logger)

        # (model, depth, child list of parent) in pre-order
        stack: list[tuple[NoteModel, int, list[int]]] = [
            (model, 1, tree._roots) for model in reversed(list(models))
        ]

        while stack:
            model, depth, siblings = stack.pop()

            if depth > MAX_DEPTH:
                raise ValueError(
                    f"note '{model.title}' is nested at depth {depth}, maximum is {MAX_DEPTH}"
                )

            node_id = tree._add_node(
                _Node(
                    title=model.title,
                    content=model.content,
                    collapsed=model.is_collapsed,
                ),
                siblings,
            )
            children = tree._nodes[node_id].children

            for child in reversed(model.sub_notes):
                stack.append((child, depth + 1, children))

        return tree

    @classmethod
    def from_json(
        cls,
        blob: str | bytes,
        *,
        persist: Callable[[str], None] | None = None,
        logger: Logger | None = None,
    ) -> NoteTree:
        """
        Build a tree from a serialized forest.

        :raises pydantic.ValidationError: If blob is not a valid forest
        :raises ValueError: If a note is nested deeper than {obj}`MAX_DEPTH`
        """
        models = FOREST_ADAPTER.validate_json(blob)
        return cls.from_models(models, persist=persist, logger=logger)

    def to_models(self) -> list[NoteModel]:
        return [self._to_model(node_id) for node_id in self._roots]

    def to_json(self) -> str:
        """
        Serialize the forest as a JSON array of root notes.
        """
        return FOREST_ADAPTER.dump_json(self.to_models(), by_alias=True).decode()

    @property
    def roots(self) -> list[Note]:
        return [Note(self, node_id) for node_id in self._roots]

    @property
    def revision(self) -> int:
        """
        Incremented on every successful mutation; callers may use it to
        memoize results derived from the forest.
        """
        return self._revision

    def resolve(self, path: Iterable[int]) -> Note | None:
        """
        Get note addressed by path, or `None` if it does not resolve.
        """
        node_id = self._resolve_id(path)
        return Note(self, node_id) if node_id is not None else None

    def create_root(
        self, title: str = DEFAULT_ROOT_TITLE, content: str = ""
    ) -> NotePath:
        """
        Append a new root note and return its path.
        """
        self._add_node(_Node(title=title, content=content), self._roots)
        new_path = (len(self._roots) - 1,)

        self._logger.debug(f"Created root note {new_path}: '{title}'")
        self._commit()

        return new_path

    def create_child(
        self,
        parent_path: Iterable[int],
        title: str = DEFAULT_CHILD_TITLE,
        content: str = "",
    ) -> NotePath | Status:
        """
        Append a new child to the note addressed by `parent_path` and return
        the child's path.

        Returns {obj}`Status.DEPTH_EXCEEDED` if the parent is already at
        maximum depth, or {obj}`Status.NOT_FOUND` if the parent does not
        resolve. The forest is unchanged in both cases.
        """
        parent_path = normalize_path(parent_path)

        if len(parent_path) >= MAX_DEPTH:
            self._logger.warning(
                f"Maximum nesting depth of {MAX_DEPTH} reached, cannot add child to {parent_path}"
            )
            return Status.DEPTH_EXCEEDED

        parent_id = self._resolve_id(parent_path)
        if parent_id is None:
            return Status.NOT_FOUND

        siblings = self._nodes[parent_id].children
        self._add_node(_Node(title=title, content=content), siblings)
        new_path = parent_path + (len(siblings) - 1,)

        self._logger.debug(f"Created child note {new_path}: '{title}'")
        self._commit()

        return new_path

    def set_title(self, path: Iterable[int], title: str) -> Status:
        return self._update(path, title=title)

    def set_content(self, path: Iterable[int], content: str) -> Status:
        return self._update(path, content=content)

    def toggle_collapsed(self, path: Iterable[int]) -> Status:
        """
        Flip whether the note's children are hidden by a renderer.
        """
        path = normalize_path(path)

        note = self.resolve(path)
        if note is None:
            return Status.NOT_FOUND

        return self._update(path, collapsed=not note.collapsed)

    def _update(self, path: Iterable[int], **changes) -> Status:
        """
        Clone the addressed node with the given fields changed and store it
        in place of the original.
        """
        path = normalize_path(path)

        node_id = self._resolve_id(path)
        if node_id is None:
            return Status.NOT_FOUND

        updated = dataclasses.replace(self._nodes[node_id], **changes)

        replaced = path_codec.replace(
            self._nodes, self._roots, self._children_of, path, updated
        )
        assert replaced

        self._commit()
        return Status.OK

    def _resolve_id(self, path: Iterable[int]) -> int | None:
        return path_codec.resolve(self._roots, self._children_of, path)

    def _children_of(self, node_id: int) -> list[int]:
        return self._nodes[node_id].children

    def _add_node(self, node: _Node, siblings: list[int]) -> int:
        node_id = len(self._nodes)
        self._nodes.append(node)
        siblings.append(node_id)
        return node_id

    def _to_model(self, node_id: int) -> NoteModel:
        # depth is bounded by MAX_DEPTH
        node = self._nodes[node_id]
        return NoteModel(
            title=node.title,
            content=node.content,
            sub_notes=[self._to_model(child) for child in node.children],
            is_collapsed=node.collapsed,
        )

    def _commit(self):
        self._revision += 1

        if self._persist is not None:
            self._persist(self.to_json())
