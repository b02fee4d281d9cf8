"""Per-run session data."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Session(BaseModel):
    """The project being created by one invocation.

    ``project_path`` is derived once from the base directory and never
    changes afterwards; the model is frozen.
    """

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(..., min_length=1)
    project_path: Path

    @field_validator("project_name")
    @classmethod
    def _reject_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("project name cannot be empty")
        return value

    @classmethod
    def create(cls, project_name: str, base_dir: Path) -> "Session":
        """Build a session rooted at ``base_dir / project_name``."""
        name = project_name.strip()
        return cls(project_name=name, project_path=Path(base_dir).resolve() / name)
