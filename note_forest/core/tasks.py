"""
Task list persisted alongside the forest under its own key.
"""

from __future__ import annotations

import logging
import uuid
from logging import Logger
from typing import Callable, Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from .exceptions import Status

__all__ = [
    "Task",
    "TaskList",
]


class Task(BaseModel):
    """
    A to-do item. The due date is free-form text as entered by the user.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    title: str
    description: str = ""
    due_date: str = Field(default="", alias="dueDate")


TASKS_ADAPTER = TypeAdapter(list[Task])


class TaskList:
    """
    Ordered list of tasks. Completing a task removes it.
    """

    _tasks: list[Task]
    _persist: Callable[[str], None] | None
    _logger: Logger

    def __init__(
        self,
        tasks: Iterable[Task] = (),
        *,
        persist: Callable[[str], None] | None = None,
        logger: Logger | None = None,
    ):
        self._tasks = list(tasks)
        self._persist = persist
        self._logger = logger or logging.getLogger()

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

    def __getitem__(self, index: int) -> Task:
        return self._tasks[index]

    @classmethod
    def from_json(
        cls,
        blob: str | bytes,
        *,
        persist: Callable[[str], None] | None = None,
        logger: Logger | None = None,
    ) -> TaskList:
        """
        :raises pydantic.ValidationError: If blob is not a valid task list
        """
        return cls(
            TASKS_ADAPTER.validate_json(blob), persist=persist, logger=logger
        )

    def to_json(self) -> str:
        return TASKS_ADAPTER.dump_json(self._tasks, by_alias=True).decode()

    def get(self, task_id: str) -> Task | None:
        return next((t for t in self._tasks if t.id == task_id), None)

    def add(self, title: str, description: str = "", due_date: str = "") -> Task:
        """
        Append a new task.

        :raises ValueError: If title is blank
        """
        _check_title(title)

        task = Task(title=title, description=description, due_date=due_date)
        self._tasks.append(task)

        self._logger.debug(f"Added task {task.id}: '{title}'")
        self._commit()

        return task

    def update(
        self,
        task_id: str,
        *,
        title: str | None = None,
        description: str | None = None,
        due_date: str | None = None,
    ) -> Status:
        """
        Change fields of an existing task; fields passed as `None` are kept.

        :raises ValueError: If new title is blank
        """
        if title is not None:
            _check_title(title)

        index = next(
            (i for i, t in enumerate(self._tasks) if t.id == task_id), None
        )
        if index is None:
            return Status.NOT_FOUND

        changes = {
            name: value
            for name, value in (
                ("title", title),
                ("description", description),
                ("due_date", due_date),
            )
            if value is not None
        }

        self._tasks[index] = self._tasks[index].model_copy(update=changes)
        self._commit()

        return Status.OK

    def complete(self, index: int) -> Status:
        """
        Check off task at index, removing it from the list.
        """
        if not 0 <= index < len(self._tasks):
            return Status.OUT_OF_RANGE

        task = self._tasks.pop(index)

        self._logger.debug(f"Completed task {task.id}: '{task.title}'")
        self._commit()

        return Status.OK

    def _commit(self):
        if self._persist is not None:
            self._persist(self.to_json())


def _check_title(title: str):
    if not title.strip():
        raise ValueError("Task title is required.")
