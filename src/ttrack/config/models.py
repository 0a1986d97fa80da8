"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, the config file only contains
overrides. A fresh install needs no config file at all.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class StorageFormat(StrEnum):
    """On-disk encodings for the data file."""

    JSON = "json"
    BINARY = "binary"


DEFAULT_DATA_FILES: dict[StorageFormat, str] = {
    StorageFormat.JSON: "~/timetracking.json",
    StorageFormat.BINARY: "~/timetracking.bin",
}


class TimeGoal(BaseModel):
    """A target amount of work time."""

    model_config = {"frozen": True}

    hours: int = Field(default=0, ge=0)
    minutes: int = Field(default=0, ge=0)

    @property
    def total_minutes(self) -> int:
        return self.hours * 60 + self.minutes


class TimeGoalConfig(BaseModel):
    """[time_goal] section."""

    model_config = {"frozen": True}

    daily: TimeGoal = Field(default_factory=lambda: TimeGoal(hours=8))
    weekly: TimeGoal = Field(default_factory=lambda: TimeGoal(hours=40))
