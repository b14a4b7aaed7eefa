"""Configuration models for todolist-cli.

The whole configuration is one AppConfig document stored as JSON in the
platform config directory (see todolist_cli.services.config_service).
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class CategorySeed(BaseModel):
    """A category created automatically on first run."""

    name: str
    color: str = "BLACK"


def _default_seeds() -> list[CategorySeed]:
    return [
        CategorySeed(name="Work", color="BLUE"),
        CategorySeed(name="Personal", color="GREEN"),
        CategorySeed(name="Urgent", color="RED"),
        CategorySeed(name="Studies", color="YELLOW"),
    ]


class StorageConfig(BaseModel):
    """Where and how the task store is persisted."""

    data_file: str = Field(default="", description="Default task store path")
    autosave: bool = Field(default=True)


class DisplayConfig(BaseModel):
    """Output configuration."""

    date_format: str = Field(default="%d/%m/%Y")
    upcoming_days: int = Field(default=7, ge=0)
    color: bool = Field(default=True)
    format: Literal["table", "text", "json", "yaml"] = Field(default="table")

    @field_validator("date_format")
    @classmethod
    def validate_date_format(cls, v: str) -> str:
        if not v or "%" not in v:
            raise ValueError("date_format must be a strftime pattern")
        return v


class DefaultsConfig(BaseModel):
    """Defaults applied when the store is created or a field is omitted."""

    seed_categories: bool = Field(default=True)
    categories: list[CategorySeed] = Field(default_factory=_default_seeds)
    category_color: str = Field(default="BLACK")


class AppConfig(BaseModel):
    """Main todolist-cli configuration"""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
