"""Exceptions raised by the persistence layer."""
from __future__ import annotations


class StorageError(Exception):
    """Base exception for the persistence layer."""


class BackingStoreError(StorageError):
    """Raised by a backing store when a get/set call fails."""


class DecodeError(StorageError):
    """Raised when stored text is malformed (backing-store corruption)."""


class PersistenceError(StorageError):
    """Raised when a write did not reach the backing store; state is unchanged."""


WriteError = PersistenceError


class NotFoundError(StorageError):
    """Raised when a delete targets an id that is not in the collection."""


class CascadeError(PersistenceError):
    """Raised when an exercise was deleted but reference cleanup failed.

    The exercise is gone; journal entries or journeys listed in
    ``failed_steps`` may still reference it.
    """

    def __init__(self, exercise_id: str, failed_steps: list[str]) -> None:
        self.exercise_id = exercise_id
        self.failed_steps = list(failed_steps)
        super().__init__(
            f"Exercise {exercise_id} deleted but cleanup failed for: {', '.join(self.failed_steps)}"
        )
