"""
This module implements the path-addressed note tree, search across it, open
tabs and the workspace tying them to persistent storage.
"""

from pyrollup import rollup

from . import exceptions, index, model, path, store, tabs, tasks, tree, workspace
from .exceptions import *  # noqa
from .index import *  # noqa
from .model import *  # noqa
from .path import *  # noqa
from .store import *  # noqa
from .tabs import *  # noqa
from .tasks import *  # noqa
from .tree import *  # noqa
from .workspace import *  # noqa

__all__ = rollup(
    workspace,
    tree,
    path,
    index,
    tabs,
    tasks,
    store,
    model,
    exceptions,
)

__canonical_children__ = [
    "workspace",
    "tree",
    "path",
    "index",
    "tabs",
    "tasks",
    "store",
    "model",
    "exceptions",
]
