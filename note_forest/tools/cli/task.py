"""
Operations on the task list.
"""
from __future__ import annotations

from click import BadParameter, UsageError
from rich.markup import escape
from typer import Argument, Context, Option

from ...core import Status
from ._utils import MainTyper, console, get_workspace, logger, lookup_param

app = MainTyper(
    "task",
    help="Manage the task list",
)


@app.command()
def add(
    ctx: Context,
    title: str = Argument(help="Title of task"),
    description: str = Option("", help="Description of task"),
    due: str = Option("", help="Due date, e.g. 2025-02-11"),
):
    """
    Add a task
    """
    workspace = get_workspace(ctx)

    try:
        task = workspace.tasks.add(title, description, due)
    except ValueError as e:
        raise BadParameter(str(e), ctx=ctx, param=lookup_param(ctx, "title"))

    logger.info(f"Added task {task.id}: '{task.title}'")


@app.command("list")
def list_(ctx: Context):
    """
    Print tasks in order with their index
    """
    workspace = get_workspace(ctx)

    if not len(workspace.tasks):
        logger.info("No tasks")
        return

    for index, task in enumerate(workspace.tasks):
        due = f" [dim](due {escape(task.due_date)})[/dim]" if task.due_date else ""
        console.print(f"{index}: [bold]{escape(task.title)}[/bold]{due}")

        if task.description:
            console.print(f"   {escape(task.description)}")


@app.command()
def edit(
    ctx: Context,
    index: int = Argument(help="Index of task as shown by `task list`"),
    title: str | None = Option(None, help="New title"),
    description: str | None = Option(None, help="New description"),
    due: str | None = Option(None, help="New due date"),
):
    """
    Change a task's fields
    """
    if title is None and description is None and due is None:
        raise UsageError(
            "at least one of --title, --description or --due is required",
            ctx=ctx,
        )

    workspace = get_workspace(ctx)

    if not 0 <= index < len(workspace.tasks):
        raise BadParameter(
            f"no task at index {index}", ctx=ctx, param=lookup_param(ctx, "index")
        )

    task = workspace.tasks[index]

    try:
        status = workspace.tasks.update(
            task.id, title=title, description=description, due_date=due
        )
    except ValueError as e:
        raise BadParameter(str(e), ctx=ctx, param=lookup_param(ctx, "title"))

    assert status is Status.OK
    logger.info(f"Updated task {task.id}")


@app.command()
def done(
    ctx: Context,
    index: int = Argument(help="Index of task as shown by `task list`"),
):
    """
    Check off a task, removing it from the list
    """
    workspace = get_workspace(ctx)

    if workspace.tasks.complete(index) is Status.OUT_OF_RANGE:
        raise BadParameter(
            f"no task at index {index}", ctx=ctx, param=lookup_param(ctx, "index")
        )

    logger.info(f"Completed task {index}")
