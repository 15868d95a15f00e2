"""Exceptions raised by sltodo."""


class SltodoError(Exception):
    """Base class for sltodo errors."""


class StorageError(SltodoError):
    """Raised when the task store cannot be written."""


class TaskDataError(SltodoError, ValueError):
    """Raised when stored task data cannot be parsed."""
