"""Storage protocol for the task list."""

from typing import Protocol


class StorageProtocol(Protocol):
    """Interface for key-value stores holding serialized task lists.

    Values are opaque strings; the controller owns (de)serialization.
    """

    def load(self, key: str) -> str | None:
        """Load the value saved under a key.

        Args:
            key: Storage key (e.g., "tasks")

        Returns:
            The saved string, or None if nothing was saved or it can't be read.
        """
        ...

    def save(self, key: str, value: str) -> None:
        """Save a value under a key, replacing any previous value.

        Args:
            key: Storage key
            value: Serialized data

        Raises:
            StorageError: If the value could not be written.
        """
        ...
