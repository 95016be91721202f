"""
Structural paths addressing notes in a forest.

A path is a non-empty tuple of indices: the first selects a root note and
each following index selects a child of the note reached so far. These
functions carry no state; they navigate an arena of nodes described by a
list of root ids and a mapping of node id to child ids.
"""

from __future__ import annotations

from typing import Callable, Iterable, MutableSequence, Sequence, TypeVar

__all__ = [
    "MAX_DEPTH",
    "NotePath",
    "normalize_path",
    "format_path",
    "parse_path",
    "resolve",
    "replace",
]

MAX_DEPTH = 4
"""
Maximum nesting depth of a note, i.e. maximum length of a path.
"""

NotePath = tuple[int, ...]

NodeT = TypeVar("NodeT")

SEPARATOR = "."


def normalize_path(path: Iterable[int]) -> NotePath:
    """
    Coerce a sequence of indices to a path tuple.
    """
    return path if isinstance(path, tuple) else tuple(path)


def format_path(path: Iterable[int]) -> str:
    """
    Get text form of path, e.g. `0.1.2`.
    """
    return SEPARATOR.join(str(index) for index in path)


def parse_path(text: str) -> NotePath:
    """
    Parse text form of path as produced by {obj}`format_path`.

    :raises ValueError: If text is not a dot-separated list of non-negative integers
    """
    parts = text.strip().split(SEPARATOR)

    if not all(part.isdigit() for part in parts):
        raise ValueError(
            f"path must be dot-separated non-negative integers, got '{text}'"
        )

    return tuple(int(part) for part in parts)


def resolve(
    roots: Sequence[int],
    children_of: Callable[[int], Sequence[int]],
    path: Iterable[int],
) -> int | None:
    """
    Descend level by level and return id of node addressed by path, or `None`
    if it does not resolve.
    """
    path = normalize_path(path)

    if not path:
        return None

    level: Sequence[int] = roots
    node_id: int | None = None

    for index in path:
        if node_id is not None:
            level = children_of(node_id)

        if not _in_range(index, level):
            return None

        node_id = level[index]

    return node_id


def replace(
    nodes: MutableSequence[NodeT],
    roots: Sequence[int],
    children_of: Callable[[int], Sequence[int]],
    path: Iterable[int],
    updated: NodeT,
) -> bool:
    """
    Store updated node at position addressed by path. Only the addressed
    slot is written; ancestors and siblings are left untouched.

    Returns `False` if path does not resolve.
    """
    node_id = resolve(roots, children_of, path)

    if node_id is None:
        return False

    nodes[node_id] = updated
    return True


def _in_range(index: object, level: Sequence[int]) -> bool:
    # bool is an int subclass but never a valid index
    if not isinstance(index, int) or isinstance(index, bool):
        return False
    return 0 <= index < len(level)
