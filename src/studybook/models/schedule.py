"""Projection models for the calendar and Gantt views."""

from __future__ import annotations

import math
from datetime import date, timedelta
from enum import StrEnum

from pydantic import BaseModel, Field


class DayStatus(StrEnum):
    SUCCESS = "success"
    FAILED = "failed"
    PENDING = "pending"


class DailyStatus(BaseModel):
    """Outcome of one day of a daily-recurring project."""

    project_id: str
    day: date
    date_label: str
    status: DayStatus
    done: int = 0
    target: int = 0


class SubtaskProgress(BaseModel):
    """Completion of one subtask, either overall or for a single day."""

    subtask_id: str
    name: str
    completed: int = 0
    target: int = 0

    @property
    def fraction(self) -> float:
        return self.completed / self.target if self.target > 0 else 0.0

    @property
    def is_complete(self) -> bool:
        return self.fraction >= 1.0


class CalendarDay(BaseModel):
    """Everything the monthly calendar shows for one date."""

    day: date
    date_label: str
    is_today: bool = False
    focus_minutes: float = 0.0
    focus_fraction: float = 0.0
    project_ids: list[str] = Field(default_factory=list)
    daily_statuses: list[DailyStatus] = Field(default_factory=list)


class CalendarMonth(BaseModel):
    year: int
    month: int
    label: str
    leading_blanks: int = 0
    days: list[CalendarDay] = Field(default_factory=list)


class SubtaskBar(BaseModel):
    """A subtask's position inside its project bar, in fractional days."""

    subtask_id: str
    name: str
    offset_days: float
    span_days: float
    fill: float
    project_start: date

    @property
    def start_date(self) -> date:
        return self.project_start + timedelta(days=math.floor(self.offset_days))

    @property
    def end_date(self) -> date:
        return self.start_date + timedelta(days=math.ceil(self.span_days))


class ProjectBar(BaseModel):
    project_id: str
    name: str
    start: date
    start_index: int
    span_days: int
    fill: float
    target_sessions: int = 0
    completed_sessions: int = 0
    subtasks: list[SubtaskBar] = Field(default_factory=list)

    @property
    def end(self) -> date:
        return self.start + timedelta(days=self.span_days)


class Timeline(BaseModel):
    """Date axis plus one bar per non-recurring project."""

    axis: list[date] = Field(default_factory=list)
    today_index: int | None = None
    daily_target: int = 1
    bars: list[ProjectBar] = Field(default_factory=list)
