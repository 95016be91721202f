import json

from pydantic import ValidationError
from pytest import mark, raises

from note_forest import MAX_DEPTH, NoteModel, NoteTree


@mark.forest(
    [
        ("Shopping", "milk eggs", [("Sub", "bread", [])]),
        ("Work", "", []),
    ]
)
def test_wire_shape(tree: NoteTree, writes: list[str]):
    tree.toggle_collapsed((0,))

    data = json.loads(writes[-1])
    assert data == [
        {
            "title": "Shopping",
            "content": "milk eggs",
            "subNotes": [
                {
                    "title": "Sub",
                    "content": "bread",
                    "subNotes": [],
                    "isCollapsed": False,
                }
            ],
            "isCollapsed": True,
        },
        {
            "title": "Work",
            "content": "",
            "subNotes": [],
            "isCollapsed": False,
        },
    ]
    assert tree.to_json() == writes[-1]


def test_load():
    blob = json.dumps(
        [
            {
                "title": "Shopping",
                "content": "milk eggs",
                "subNotes": [{"title": "Sub", "content": "bread"}],
                "isCollapsed": True,
            },
            {"title": "Work", "content": "todo"},
        ]
    )

    tree = NoteTree.from_json(blob)

    assert len(tree) == 3
    assert [n.title for n in tree.roots] == ["Shopping", "Work"]
    assert tree.resolve((0,)).collapsed is True
    assert tree.resolve((0, 0)).content == "bread"
    assert tree.resolve((1,)).children == []

    # loading does not count as a change
    assert tree.revision == 0


def test_load_preserves_order():
    models = [
        NoteModel(
            title="a",
            sub_notes=[
                NoteModel(title="a0", sub_notes=[NoteModel(title="a00")]),
                NoteModel(title="a1"),
            ],
        ),
        NoteModel(title="b"),
    ]
    tree = NoteTree.from_models(models)

    assert tree.resolve((0, 0, 0)).title == "a00"
    assert tree.resolve((0, 1)).title == "a1"
    assert tree.resolve((1,)).title == "b"
    assert [m.model_dump() for m in tree.to_models()] == [
        m.model_dump() for m in models
    ]


def test_load_then_append(writes: list[str]):
    tree = NoteTree.from_json(
        '[{"title": "a", "content": "", "subNotes": [{"title": "b"}]}]',
        persist=writes.append,
    )
    assert writes == []

    assert tree.create_child((0,), "c") == (0, 1)
    assert tree.create_root("d") == (1,)
    assert len(writes) == 2


def test_load_invalid():
    with raises(ValidationError):
        NoteTree.from_json("not json")

    with raises(ValidationError):
        NoteTree.from_json('{"title": "not a list"}')

    with raises(ValidationError):
        NoteTree.from_json('[{"title": 5}]')


def test_load_too_deep():
    model = NoteModel(title=f"level {MAX_DEPTH + 1}")
    for depth in range(MAX_DEPTH, 0, -1):
        model = NoteModel(title=f"level {depth}", sub_notes=[model])

    with raises(ValueError, match="maximum is 4"):
        NoteTree.from_models([model])
