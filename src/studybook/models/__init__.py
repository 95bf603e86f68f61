"""Pydantic models for Studybook."""

from studybook.models.analytics import ChartData, ChartPoint, MonthGroup
from studybook.models.history import SessionLogEntry
from studybook.models.projects import Importance, Project, Subtask, Urgency
from studybook.models.schedule import (
    CalendarDay,
    CalendarMonth,
    DailyStatus,
    DayStatus,
    ProjectBar,
    SubtaskBar,
    SubtaskProgress,
    Timeline,
)
from studybook.models.settings import Colors, Durations, Settings
from studybook.models.snapshot import AppSnapshot
from studybook.models.timer import CompletionEvent, TimerMode, TimerState

__all__ = [
    "AppSnapshot",
    "CalendarDay",
    "CalendarMonth",
    "ChartData",
    "ChartPoint",
    "Colors",
    "CompletionEvent",
    "DailyStatus",
    "DayStatus",
    "Durations",
    "Importance",
    "MonthGroup",
    "Project",
    "ProjectBar",
    "SessionLogEntry",
    "Settings",
    "Subtask",
    "SubtaskBar",
    "SubtaskProgress",
    "Timeline",
    "TimerMode",
    "TimerState",
    "Urgency",
]
