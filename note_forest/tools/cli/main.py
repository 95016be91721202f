"""
Entry point of `note-forest` CLI.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import dotenv
from click.exceptions import BadParameter
from pydantic import ValidationError
from typer import Argument, Context, Exit, Option

from ...core import StoreError, Workspace
from ..config import Config
from . import note, task, tree
from ._utils import (
    MainTyper,
    console,
    format_note,
    get_workspace,
    logger,
    lookup_param,
)

dotenv.load_dotenv()

app = MainTyper(
    "note-forest",
    help="Hierarchical notes addressed by path",
)


@app.callback()
def main(
    ctx: Context,
    store: Path
    | None = Option(
        None,
        help=".json file holding notes and tasks, overrides config file",
        envvar="NOTE_FOREST_STORE",
        dir_okay=False,
    ),
    config_file: Path = Option(
        "note-forest.yaml",
        help=".yaml file containing configuration; ignored if the default does not exist",
        envvar="NOTE_FOREST_CONFIG_FILE",
        dir_okay=False,
    ),
    verbose: bool = Option(
        False,
        "-v",
        "--verbose",
        help="Enable debug logging",
    ),
):
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    config = _load_config(ctx, config_file)

    if store is not None:
        try:
            config = Config.model_validate(
                {**config.model_dump(), "store_path": store}
            )
        except ValidationError as e:
            raise BadParameter(
                _format_errors(e), ctx=ctx, param=lookup_param(ctx, "store")
            )

    ctx.obj = RootContext(ctx=ctx, config=config)


app.add_typer(note.app)
app.add_typer(tree.app)
app.add_typer(task.app)


@app.command()
def search(
    ctx: Context,
    query: str = Argument(help="Text to find in note titles and content"),
):
    """
    List notes containing text, ignoring case
    """
    workspace = get_workspace(ctx)
    results = workspace.search.set_query(query)

    if not results:
        logger.info(f"No notes match '{query}'")
        return

    for result in results:
        console.print(format_note(result.path, result.note))


def run():
    app()


@dataclass(kw_only=True)
class RootContext:
    ctx: Context
    config: Config
    _workspace: Workspace | None = field(default=None, repr=False)

    def create_workspace(self) -> Workspace:
        """
        Get workspace for this invocation, loading it on first use.
        """
        if self._workspace is None:
            try:
                self._workspace = self.config.create_workspace(logger=logger)
            except StoreError as e:
                logger.error(str(e))
                raise Exit(code=1)

        return self._workspace


def _load_config(ctx: Context, config_file: Path) -> Config:
    if not config_file.is_file():
        # only an explicitly passed config file needs to exist
        source = ctx.get_parameter_source("config_file")
        if source is not None and source.name == "DEFAULT":
            return Config()

        raise BadParameter(
            f"file does not exist: {config_file}",
            ctx=ctx,
            param=lookup_param(ctx, "config_file"),
        )

    try:
        return Config.load_yaml(config_file)
    except (ValueError, ValidationError) as e:
        raise BadParameter(
            f"failed to load config file '{config_file}': {e}",
            ctx=ctx,
            param=lookup_param(ctx, "config_file"),
        )


def _format_errors(e: ValidationError) -> str:
    return "; ".join(err["msg"] for err in e.errors())


if __name__ == "__main__":
    app()
