"""
Operations on the whole forest.
"""
from __future__ import annotations

from rich.tree import Tree
from typer import Context, Option

from ...core import Note, NotePath, NoteTree, gather_all
from ._utils import MainTyper, console, format_note, get_workspace, logger

app = MainTyper(
    "tree",
    help="Operations on the whole forest",
)

EXPANDED_MARKER = "▼"
COLLAPSED_MARKER = "▶"


@app.command()
def show(
    ctx: Context,
    expand_all: bool = Option(
        False,
        "--expand-all",
        help="Show children of collapsed notes",
    ),
):
    """
    Print the forest as a tree, hiding children of collapsed notes
    """
    workspace = get_workspace(ctx)

    if not workspace.tree.roots:
        logger.info("No notes")
        return

    console.print(render_forest(workspace.tree, expand_all=expand_all))


@app.command("list")
def list_(ctx: Context):
    """
    Print every note with its path, parents before children
    """
    workspace = get_workspace(ctx)

    for result in gather_all(workspace.tree):
        console.print(format_note(result.path, result.note))


def render_forest(tree: NoteTree, *, expand_all: bool = False) -> Tree:
    """
    Build a renderable tree of all notes. Children of collapsed notes are
    omitted unless `expand_all` is set.
    """
    forest = Tree("[bold]Notes[/bold]", guide_style="dim")

    for index, note in enumerate(tree.roots):
        _add_branch(forest, (index,), note, expand_all)

    return forest


def _add_branch(parent: Tree, path: NotePath, note: Note, expand_all: bool):
    children = note.children
    label = format_note(path, note)

    if children:
        marker = COLLAPSED_MARKER if note.collapsed else EXPANDED_MARKER
        label = f"{marker} {label}"

    branch = parent.add(label)

    if note.collapsed and not expand_all:
        return

    for index, child in enumerate(children):
        _add_branch(branch, path + (index,), child, expand_all)
