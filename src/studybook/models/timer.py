"""Timer state models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class TimerMode(StrEnum):
    POMODORO = "pomodoro"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"

    @property
    def is_break(self) -> bool:
        return self is not TimerMode.POMODORO


@dataclass(frozen=True, slots=True)
class TimerState:
    """Point-in-time view of the countdown. Never persisted."""

    mode: TimerMode
    time_left: int
    is_active: bool
    completed_pomodoro_count: int
    active_project_id: str | None = None
    active_subtask_id: str | None = None


@dataclass(frozen=True, slots=True)
class CompletionEvent:
    """Emitted once per completed interval."""

    finished_mode: TimerMode
    next_mode: TimerMode
    completed_pomodoro_count: int
    logged: bool
    title: str
    body: str
