"""Configuration model for sltodo.yml."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from .enums import TaskFilter

DEFAULT_DATA_ROOT = ".sltodo"
DEFAULT_STORAGE_KEY = "tasks"


class SltodoConfig(BaseModel):
    """Root configuration model for sltodo.yml."""

    version: int = Field(default=1, ge=1)
    data_root: str = Field(
        default=DEFAULT_DATA_ROOT,
        description="Directory holding the task store, relative to the project root",
    )
    storage_key: str = Field(
        default=DEFAULT_STORAGE_KEY,
        description="Key the task list is saved under",
    )
    default_filter: TaskFilter = Field(
        default=TaskFilter.ALL,
        description="Filter selected at startup",
    )
    confirm_clear: bool = Field(
        default=False,
        description="Ask for confirmation before clearing all tasks",
    )

    @field_validator("data_root")
    @classmethod
    def validate_data_root(cls, v: str) -> str:
        """Data root must be a relative path that stays inside the project."""
        if not v.strip():
            raise ValueError("data_root cannot be empty")
        path = Path(v)
        if path.is_absolute():
            raise ValueError("data_root must be a relative path")
        if ".." in path.parts:
            raise ValueError("data_root cannot leave the project root")
        return v

    @field_validator("storage_key")
    @classmethod
    def validate_storage_key(cls, v: str) -> str:
        """Storage key must be a plain file-safe name."""
        if not v:
            raise ValueError("storage_key cannot be empty")
        if v.startswith("."):
            raise ValueError("storage_key cannot start with a dot")
        if not all(c.isascii() and (c.isalnum() or c in "_-.") for c in v):
            raise ValueError("storage_key must be alphanumeric with '_', '-' or '.' only")
        return v

    @classmethod
    def default(cls) -> "SltodoConfig":
        """Return default configuration."""
        return cls()
