"""
note-forest: hierarchical notes addressed by path, with search and tabs.
"""

from pyrollup import rollup

from . import core
from .core import *  # noqa

__all__ = rollup(core)

__canonical_children__ = [
    "core",
]
