from enum import Enum, auto

__all__ = [
    "Status",
    "StoreError",
]


class Status(Enum):
    """
    Outcome of an operation on the note tree, tab set or task list.

    Failures are returned to the caller rather than raised; a caller which
    cannot act on a failure may simply ignore it.
    """

    OK = auto()
    """Operation succeeded"""

    NOT_FOUND = auto()
    """Path does not resolve against the current forest"""

    DEPTH_EXCEEDED = auto()
    """Attempt to create a child below the maximum nesting depth"""

    OUT_OF_RANGE = auto()
    """Tab or task index is invalid"""

    def __bool__(self) -> bool:
        return self is Status.OK


class StoreError(Exception):
    """
    Raised when a blob store's backing file exists but cannot be read.
    """

    def __init__(self, path, reason: str):
        self.path = path
        super().__init__(f"Failed to read store '{path}': {reason}")
