"""Filesystem-based storage for the task list."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from ..exceptions import StorageError

logger = logging.getLogger(__name__)


def _validate_key(key: str) -> str:
    """Keys become filenames, so only plain ASCII names are allowed."""
    if not key or key.startswith("."):
        raise ValueError(f"Invalid storage key: {key!r}")
    if not all(c.isascii() and (c.isalnum() or c in "_-.") for c in key):
        raise ValueError(f"Invalid storage key: {key!r}")
    return key


class FilesystemStorage:
    """
    Key-value storage backed by files in a directory.

    Each key is stored as ``<root>/<key>.json``. Writes go to a temp file
    in the same directory and are then renamed over the target, so a
    crash mid-write never leaves a truncated file behind.
    """

    SUFFIX = ".json"

    def __init__(self, root: Path) -> None:
        """
        Initialize storage.

        Args:
            root: Directory holding the stored files (e.g., .sltodo/)
        """
        self.root = root

    def ensure_directory(self) -> None:
        """Create the storage directory if it doesn't exist."""
        self.root.mkdir(parents=True, exist_ok=True)

    def path_for(self, key: str) -> Path:
        """Get the file path for a key."""
        return self.root / f"{_validate_key(key)}{self.SUFFIX}"

    def load(self, key: str) -> str | None:
        """Read the value for a key, or None if missing or unreadable."""
        filepath = self.path_for(key)
        try:
            return filepath.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("No stored value for %s at %s", key, filepath)
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to read %s: %s", filepath, e)
            return None

    def save(self, key: str, value: str) -> None:
        """Atomically write the value for a key."""
        filepath = self.path_for(key)
        tmp_name: str | None = None
        try:
            self.ensure_directory()
            fd, tmp_name = tempfile.mkstemp(
                dir=self.root, prefix=f".{key}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, filepath)
            tmp_name = None
        except OSError as e:
            raise StorageError(f"Failed to write {filepath}: {e}") from e
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
        logger.debug("Saved %s (%d chars)", filepath, len(value))
