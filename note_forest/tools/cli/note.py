"""
Operations on a single note, addressed by path.
"""
from __future__ import annotations

from click import BadParameter, UsageError
from typer import Argument, Context, Option

from ...core import (
    DEFAULT_CHILD_TITLE,
    DEFAULT_ROOT_TITLE,
    MAX_DEPTH,
    Status,
    format_path,
)
from ._utils import (
    MainTyper,
    console,
    format_note,
    get_workspace,
    logger,
    lookup_param,
    parse_path_param,
    resolve_note,
)

app = MainTyper(
    "note",
    help="Create, show and edit notes by path, e.g. `0.1.2`",
)


@app.command()
def new(
    ctx: Context,
    title: str = Argument(DEFAULT_ROOT_TITLE, help="Title of new note"),
    content: str = Option("", help="Content of new note"),
):
    """
    Create a root note
    """
    workspace = get_workspace(ctx)
    path = workspace.tree.create_root(title, content)

    logger.info(f"Created note {format_path(path)}: '{title}'")


@app.command()
def add(
    ctx: Context,
    parent: str = Argument(help="Path of parent note"),
    title: str = Argument(DEFAULT_CHILD_TITLE, help="Title of new note"),
    content: str = Option("", help="Content of new note"),
):
    """
    Create a child note under a parent
    """
    workspace = get_workspace(ctx)
    parent_path = parse_path_param(ctx, parent, "parent")

    result = workspace.tree.create_child(parent_path, title, content)

    if result is Status.DEPTH_EXCEEDED:
        raise BadParameter(
            f"maximum nesting depth of {MAX_DEPTH} reached",
            ctx=ctx,
            param=lookup_param(ctx, "parent"),
        )
    elif result is Status.NOT_FOUND:
        raise BadParameter(
            f"no note at path '{format_path(parent_path)}'",
            ctx=ctx,
            param=lookup_param(ctx, "parent"),
        )

    logger.info(f"Created note {format_path(result)}: '{title}'")


@app.command()
def show(
    ctx: Context,
    path: str = Argument(help="Path of note"),
):
    """
    Print a note's title, content and children
    """
    workspace = get_workspace(ctx)
    note_path, note = resolve_note(ctx, workspace, path, "path")

    console.print(format_note(note_path, note))

    if note.content:
        console.print(note.content, markup=False, highlight=False)

    for index, child in enumerate(note.children):
        console.print("  " + format_note(note_path + (index,), child))


@app.command()
def edit(
    ctx: Context,
    path: str = Argument(help="Path of note"),
    title: str | None = Option(None, help="New title"),
    content: str | None = Option(None, help="New content"),
):
    """
    Change a note's title and/or content
    """
    if title is None and content is None:
        raise UsageError("at least one of --title or --content is required", ctx=ctx)

    workspace = get_workspace(ctx)
    note_path, _ = resolve_note(ctx, workspace, path, "path")

    if title is not None:
        workspace.tree.set_title(note_path, title)
    if content is not None:
        workspace.tree.set_content(note_path, content)

    logger.info(f"Updated note {format_path(note_path)}")


@app.command()
def toggle(
    ctx: Context,
    path: str = Argument(help="Path of note"),
):
    """
    Collapse or expand a note's children in tree output
    """
    workspace = get_workspace(ctx)
    note_path, note = resolve_note(ctx, workspace, path, "path")

    workspace.tree.toggle_collapsed(note_path)

    state = "Collapsed" if note.collapsed else "Expanded"
    logger.info(f"{state} note {format_path(note_path)}")
