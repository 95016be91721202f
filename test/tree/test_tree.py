from pytest import mark

from note_forest import (
    DEFAULT_CHILD_TITLE,
    DEFAULT_ROOT_TITLE,
    MAX_DEPTH,
    Note,
    NoteTree,
    Status,
)


def test_create_root(tree: NoteTree, writes: list[str]):
    assert tree.create_root("Shopping", "milk eggs") == (0,)
    assert tree.create_root("Work") == (1,)

    note = tree.resolve((0,))
    assert note is not None
    assert note.title == "Shopping"
    assert note.content == "milk eggs"
    assert note.children == []
    assert note.collapsed is False

    assert [n.title for n in tree.roots] == ["Shopping", "Work"]
    assert len(tree) == 2

    # one write per creation
    assert len(writes) == 2


def test_default_titles(tree: NoteTree):
    root = tree.create_root()
    child = tree.create_child(root)

    assert tree.resolve(root).title == DEFAULT_ROOT_TITLE
    assert tree.resolve(child).title == DEFAULT_CHILD_TITLE


def test_create_child(tree: NoteTree):
    root = tree.create_root("Shopping", "milk eggs")

    assert tree.create_child(root, "Sub", "bread") == (0, 0)
    assert tree.create_child(root, "Sub 2") == (0, 1)
    assert tree.create_child([0, 1], "Sub Sub") == (0, 1, 0)

    parent = tree.resolve(root)
    assert [c.title for c in parent.children] == ["Sub", "Sub 2"]
    assert parent.children[1].children[0].title == "Sub Sub"


def test_round_trip(tree: NoteTree):
    """
    Every returned path resolves to the note created with it.
    """
    created: dict[tuple[int, ...], tuple[str, str]] = {}

    for i in range(3):
        root = tree.create_root(f"root {i}", f"root content {i}")
        created[root] = (f"root {i}", f"root content {i}")

        parent = root
        for depth in range(2, i + 3):
            if depth > MAX_DEPTH:
                break
            child = tree.create_child(parent, f"child {i}.{depth}", f"c{depth}")
            assert isinstance(child, tuple)
            created[child] = (f"child {i}.{depth}", f"c{depth}")
            parent = child

    for path, (title, content) in created.items():
        note = tree.resolve(path)
        assert note is not None
        assert (note.title, note.content) == (title, content)
        assert 1 <= len(path) <= MAX_DEPTH


def test_depth_exceeded(deep_tree: NoteTree, writes: list[str]):
    blob = deep_tree.to_json()
    revision = deep_tree.revision

    assert deep_tree.create_child((0, 0, 0, 0), "Level 5") is Status.DEPTH_EXCEEDED

    # checked before resolving the parent
    assert deep_tree.create_child((9, 9, 9, 9), "Level 5") is Status.DEPTH_EXCEEDED

    assert deep_tree.to_json() == blob
    assert deep_tree.revision == revision
    assert len(deep_tree) == 4
    assert writes == []


def test_create_child_not_found(tree: NoteTree, writes: list[str]):
    assert tree.create_child((0,)) is Status.NOT_FOUND

    tree.create_root("Only")
    writes.clear()

    assert tree.create_child((1,)) is Status.NOT_FOUND
    assert tree.create_child((0, 0)) is Status.NOT_FOUND
    assert writes == []


@mark.forest([("Shopping", "milk eggs", [("Sub", "bread", [])])])
def test_set_fields(tree: NoteTree, writes: list[str]):
    note = tree.resolve((0, 0))

    assert tree.set_title((0, 0), "Bakery") is Status.OK
    assert tree.set_content((0, 0), "rye") is Status.OK

    # views re-read the tree
    assert note.title == "Bakery"
    assert note.content == "rye"

    # parent untouched
    parent = tree.resolve((0,))
    assert parent.title == "Shopping"
    assert parent.children == [note]

    assert len(writes) == 2
    assert "Bakery" in writes[-1]


@mark.forest([("Shopping", "milk eggs", [])])
def test_set_fields_not_found(tree: NoteTree, writes: list[str]):
    assert tree.set_title((1,), "x") is Status.NOT_FOUND
    assert tree.set_content((0, 0), "x") is Status.NOT_FOUND
    assert tree.toggle_collapsed(()) is Status.NOT_FOUND
    assert writes == []


@mark.forest([("Shopping", "milk eggs", [("Sub", "bread", [])])])
def test_toggle_collapsed(tree: NoteTree, writes: list[str]):
    assert tree.toggle_collapsed((0,)) is Status.OK

    note = tree.resolve((0,))
    assert note.collapsed is True
    assert note.content == "milk eggs"

    # collapsed notes still resolve through
    assert tree.resolve((0, 0)).title == "Sub"

    assert tree.toggle_collapsed([0]) is Status.OK
    assert note.collapsed is False
    assert len(writes) == 2


def test_revision(tree: NoteTree):
    assert tree.revision == 0

    tree.create_root("a")
    tree.set_title((0,), "b")
    assert tree.revision == 2

    tree.set_title((5,), "c")
    assert tree.revision == 2


@mark.forest([("A", "", [("B", "", [])])])
def test_note_equality(tree: NoteTree):
    assert tree.resolve((0, 0)) == tree.resolve([0, 0])
    assert tree.resolve((0,)) != tree.resolve((0, 0))
    assert len({tree.resolve((0,)), tree.resolve((0,))}) == 1

    other = NoteTree()
    other.create_root("A")
    assert tree.resolve((0,)) != other.resolve((0,))

    assert isinstance(tree.resolve((0,)), Note)
    assert repr(tree.resolve((0,))) == "Note(title='A', children=1)"


def test_no_persist():
    tree = NoteTree()
    assert tree.create_root("a") == (0,)
    assert tree.set_content((0,), "b") is Status.OK


def test_status_truthiness():
    assert Status.OK
    assert not Status.NOT_FOUND
    assert not Status.DEPTH_EXCEEDED
    assert not Status.OUT_OF_RANGE
