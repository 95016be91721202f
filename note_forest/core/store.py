"""
Keyed blob stores used to persist the forest and task list.
"""

from __future__ import annotations

import json
import os
from abc import ABC, abstractmethod
from pathlib import Path

from .exceptions import StoreError

__all__ = [
    "BlobStore",
    "MemoryStore",
    "FileStore",
    "FOREST_KEY",
    "TASKS_KEY",
]

FOREST_KEY = "notes"
"""
Default key of the serialized forest.
"""

TASKS_KEY = "tasks"
"""
Default key of the serialized task list.
"""


class BlobStore(ABC):
    """
    Maps string keys to string blobs.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """
        Get blob stored under key, or `None` if absent.
        """
        ...

    @abstractmethod
    def set(self, key: str, value: str):
        """
        Store blob under key, replacing any existing one.
        """
        ...

    def sink(self, key: str):
        """
        Get a callable which stores its argument under key; used as the
        persist sink of a tree or task list.
        """

        def write(value: str):
            self.set(key, value)

        return write


class MemoryStore(BlobStore):
    """
    Store kept in memory for the lifetime of the object.
    """

    _blobs: dict[str, str]

    def __init__(self, blobs: dict[str, str] | None = None):
        self._blobs = dict(blobs or {})

    def get(self, key: str) -> str | None:
        return self._blobs.get(key)

    def set(self, key: str, value: str):
        self._blobs[key] = value


class FileStore(BlobStore):
    """
    Store backed by a single .json file holding an object of key to blob.

    The file is read once, on first access. Every write rewrites it
    atomically from the blobs held in memory.
    """

    _path: Path
    _blobs: dict[str, str] | None

    def __init__(self, path: Path | str):
        self._path = Path(path).expanduser()
        self._blobs = None

    def __repr__(self):
        return f"FileStore({str(self._path)!r})"

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str):
        blobs = self._load()
        blobs[key] = value
        self._write(blobs)

    def _load(self) -> dict[str, str]:
        if self._blobs is None:
            self._blobs = self._read()
        return self._blobs

    def _read(self) -> dict[str, str]:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(self._path, str(e)) from e

        if not isinstance(data, dict) or not all(
            isinstance(v, str) for v in data.values()
        ):
            raise StoreError(self._path, "expected an object of string blobs")

        return data

    def _write(self, blobs: dict[str, str]):
        self._path.parent.mkdir(parents=True, exist_ok=True)

        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        with tmp.open("w", encoding="utf-8") as fh:
            json.dump(blobs, fh, indent=2)
            fh.flush()
            os.fsync(fh.fileno())

        tmp.replace(self._path)
