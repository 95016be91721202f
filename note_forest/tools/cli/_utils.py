"""
Utilities specific to CLI functionality.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from click import BadParameter, Parameter
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from typer import Context, Typer

from ...core import UNTITLED_LABEL, Note, NotePath, Workspace, format_path, parse_path

if TYPE_CHECKING:
    from .main import RootContext


console = Console()

rich_handler = RichHandler(
    console=console,
    rich_tracebacks=True,
    show_level=True,
    show_time=False,
    show_path=False,
)
rich_handler.setFormatter(logging.Formatter("%(message)s"))

logger = logging.getLogger("note-forest")
logger.setLevel(logging.INFO)
logger.addHandler(rich_handler)
logger.propagate = False


class MainTyper(Typer):
    """
    Typer app with preconfigured settings.
    """

    def __init__(self, name: str, *, help: str):
        return super().__init__(
            name=name,
            help=help,
            rich_markup_mode="markdown",
            no_args_is_help=True,
            add_completion=False,
        )


def get_root_context(ctx: Context) -> RootContext:
    from .main import RootContext

    root_context = ctx.find_object(RootContext)
    assert isinstance(root_context, RootContext)
    return root_context


def get_workspace(ctx: Context) -> Workspace:
    return get_root_context(ctx).create_workspace()


def lookup_param(ctx: Context, name: str) -> Parameter:
    """
    Lookup param by name.
    """
    param = next((p for p in ctx.command.params if p.name == name), None)
    assert param, f"Could not find param with name: {name}"
    return param


def parse_path_param(ctx: Context, text: str, name: str) -> NotePath:
    """
    Parse path given on command line, e.g. `0.1`.
    """
    try:
        return parse_path(text)
    except ValueError as e:
        raise BadParameter(str(e), ctx=ctx, param=lookup_param(ctx, name))


def resolve_note(
    ctx: Context, workspace: Workspace, text: str, name: str
) -> tuple[NotePath, Note]:
    """
    Parse path given on command line and get the note it addresses.
    """
    path = parse_path_param(ctx, text, name)
    note = workspace.tree.resolve(path)

    if note is None:
        raise BadParameter(
            f"no note at path '{format_path(path)}'",
            ctx=ctx,
            param=lookup_param(ctx, name),
        )

    return path, note


def format_note(path: NotePath, note: Note) -> str:
    """
    Get one-line markup for a note, prefixed by its path.
    """
    title = escape(note.title or UNTITLED_LABEL)
    return f"[dim]{format_path(path)}[/dim] [bold]{title}[/bold]"
