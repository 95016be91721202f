"""
Interface to configuration as persisted in .yaml file.
"""
from __future__ import annotations

from logging import Logger
from pathlib import Path
from typing import Any

from pydantic import field_serializer, field_validator

from ..core import FOREST_KEY, TASKS_KEY, FileStore, Workspace
from .yaml_model import BaseYamlModel

__all__ = [
    "Config",
    "DEFAULT_STORE_PATH",
]

DEFAULT_STORE_PATH = Path("note-forest.json")


class Config(BaseYamlModel):
    """
    Encapsulates configuration for use in tools.
    """

    store_path: Path = DEFAULT_STORE_PATH
    """
    .json file holding the forest and tasks.
    """

    forest_key: str = FOREST_KEY
    """
    Key of the forest within the store.
    """

    tasks_key: str = TASKS_KEY
    """
    Key of the task list within the store.
    """

    @field_validator("store_path", mode="before")
    def validate_store_path(cls, value: Any) -> Any:
        return _validate_file(value)

    @field_validator("forest_key", "tasks_key")
    def validate_key(cls, value: str) -> str:
        if not value:
            raise ValueError("store key must not be empty")
        return value

    @field_serializer("store_path")
    def serialize_store_path(self, value: Path) -> str:
        return str(value)

    def create_workspace(self, *, logger: Logger) -> Workspace:
        """
        Get workspace backed by the configured store.
        """
        return Workspace(
            FileStore(self.store_path),
            forest_key=self.forest_key,
            tasks_key=self.tasks_key,
            logger=logger,
        )


def _validate_file(value: Any) -> Any:
    """
    Coerce to path and ensure its folder exists.
    """
    if not isinstance(value, (str, Path)):
        # let pydantic handle type error
        return value

    path = Path(value).expanduser()

    if path.is_dir():
        raise ValueError(f"store path is a folder: '{path}'")

    if not path.parent.is_dir():
        raise ValueError(f"folder does not exist: '{path.parent}'")

    return path
