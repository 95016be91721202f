import logging
from typing import Generator

from pytest import Config, FixtureRequest, fixture

from note_forest import MemoryStore, NoteTree, TabManager, Workspace

logging.basicConfig(level=logging.WARNING)

MARKERS = [
    "forest",
]


def pytest_configure(config: Config) -> None:
    for marker in MARKERS:
        config.addinivalue_line("markers", marker)


@fixture(autouse=True)
def newline(request):
    """
    Print a newline and underline test name.
    """
    print("\n" + "-" * len(request.node.nodeid))


@fixture
def writes() -> list[str]:
    """
    Blobs passed to the persist sink of the `tree` fixture, in order.
    """
    return []


@fixture
def tree(request: FixtureRequest, writes: list[str]) -> NoteTree:
    """
    Create a new tree recording its writes.

    Populate it with a forest using a decorator like:

    @mark.forest([("Root", "content", [("Child", "", [])])])

    Recorded writes are cleared after populating.
    """
    tree = NoteTree(persist=writes.append)

    marker = request.node.get_closest_marker("forest")
    if marker is not None:
        populate(tree, marker.args[0])
        writes.clear()

    return tree


@fixture
def deep_tree(tree: NoteTree, writes: list[str]) -> NoteTree:
    """
    Tree with one note at each depth:

    0       "Level 1"
    0.0     "Level 2"
    0.0.0   "Level 3"
    0.0.0.0 "Level 4"
    """
    path = tree.create_root("Level 1", "first level")
    for depth in range(2, 5):
        path = tree.create_child(path, f"Level {depth}", f"level {depth} body")
    writes.clear()
    return tree


@fixture
def tabs(tree: NoteTree) -> TabManager:
    return TabManager(tree)


@fixture
def store() -> MemoryStore:
    return MemoryStore()


@fixture
def workspace(store: MemoryStore) -> Generator[Workspace, None, None]:
    yield Workspace(store)


def populate(tree: NoteTree, layout: list, parent: tuple[int, ...] = ()):
    """
    Create notes from nested (title, content, children) tuples.
    """
    for title, content, children in layout:
        if parent:
            path = tree.create_child(parent, title, content)
        else:
            path = tree.create_root(title, content)

        assert isinstance(path, tuple)
        populate(tree, children, path)
