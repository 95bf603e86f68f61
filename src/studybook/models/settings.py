"""User settings models."""

from __future__ import annotations

from pydantic import Field, ValidationInfo, field_validator

from studybook.models.base import SnapshotModel, clamp_positive_int
from studybook.models.timer import TimerMode

DEFAULT_DURATIONS = {"pomodoro": 25, "short_break": 5, "long_break": 15}
DEFAULT_DAILY_TARGET = 6


class Durations(SnapshotModel):
    """Interval lengths in minutes."""

    pomodoro: int = DEFAULT_DURATIONS["pomodoro"]
    short_break: int = DEFAULT_DURATIONS["short_break"]
    long_break: int = DEFAULT_DURATIONS["long_break"]

    @field_validator("pomodoro", "short_break", "long_break", mode="before")
    @classmethod
    def _clamp(cls, value: object, info: ValidationInfo) -> int:
        return clamp_positive_int(value, DEFAULT_DURATIONS[info.field_name])

    def minutes_for(self, mode: TimerMode) -> int:
        match mode:
            case TimerMode.SHORT_BREAK:
                return self.short_break
            case TimerMode.LONG_BREAK:
                return self.long_break
            case _:
                return self.pomodoro

    def seconds_for(self, mode: TimerMode) -> int:
        return self.minutes_for(mode) * 60


class Colors(SnapshotModel):
    """Theme colors per timer mode. Only views read these."""

    pomodoro: str = "#f43f5e"
    short_break: str = "#14b8a6"
    long_break: str = "#3b82f6"


class Settings(SnapshotModel):
    """Persisted application settings."""

    durations: Durations = Field(default_factory=Durations)
    colors: Colors = Field(default_factory=Colors)
    auto_start_breaks: bool = False
    auto_start_pomodoros: bool = False
    daily_pomodoro_target: int = DEFAULT_DAILY_TARGET

    @field_validator("daily_pomodoro_target", mode="before")
    @classmethod
    def _clamp_target(cls, value: object) -> int:
        return clamp_positive_int(value, DEFAULT_DAILY_TARGET)
