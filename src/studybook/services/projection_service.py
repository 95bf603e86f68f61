"""Projection service: per-day status of projects on the calendar."""

from __future__ import annotations

import calendar
import math
from collections.abc import Iterator
from datetime import date, timedelta
from typing import TYPE_CHECKING

from studybook.data.dates import format_date_label, format_month_label, parse_date_label
from studybook.models.schedule import (
    CalendarDay,
    CalendarMonth,
    DailyStatus,
    DayStatus,
    SubtaskProgress,
)

if TYPE_CHECKING:
    from studybook.models.projects import Project
    from studybook.services.protocols import Clock, LedgerProtocol, ProjectStoreProtocol
    from studybook.services.settings_service import SettingsService

DEFAULT_FOCUS_MINUTES_PER_DAY = 480


def project_span_days(project: Project, daily_target: int) -> int:
    """Whole days a one-off project is projected to take; at least one."""
    total = project.total_target
    if total <= 0:
        total = 1
    return math.ceil(total / max(1, daily_target))


def project_days(project: Project, daily_target: int) -> Iterator[date]:
    """Dates covered by a project: its recurrence range, or its projected span."""
    start = project.start_date
    if project.is_daily:
        end = project.recurrence_end_date or start
        count = (end - start).days + 1
    else:
        count = project_span_days(project, daily_target)
    for offset in range(max(0, count)):
        yield start + timedelta(days=offset)


def classify_day(day: date, today: date, done: int, target: int) -> DayStatus:
    if day > today:
        return DayStatus.PENDING
    if done >= target:
        return DayStatus.SUCCESS
    if day < today:
        return DayStatus.FAILED
    return DayStatus.PENDING


class ProjectionService:
    """Turns projects plus the session ledger into calendar feeds."""

    def __init__(
        self,
        projects: ProjectStoreProtocol,
        ledger: LedgerProtocol,
        settings: SettingsService,
        *,
        clock: Clock = date.today,
        focus_minutes_per_day: int = DEFAULT_FOCUS_MINUTES_PER_DAY,
    ) -> None:
        self._projects = projects
        self._ledger = ledger
        self._settings = settings
        self._clock = clock
        self._focus_minutes_per_day = max(1, focus_minutes_per_day)

    @property
    def daily_target(self) -> int:
        return self._settings.current.daily_pomodoro_target

    def span_days(self, project: Project) -> int:
        return project_span_days(project, self.daily_target)

    def daily_statuses(self, project: Project, today: date | None = None) -> list[DailyStatus]:
        """Status of every day of a daily-recurring project.

        Today with too few sessions stays pending until the day is over.
        Non-daily projects have no per-day status.
        """
        if not project.is_daily:
            return []
        today = today or self._clock()
        target = project.total_target
        statuses: list[DailyStatus] = []
        for day in project_days(project, self.daily_target):
            label = format_date_label(day)
            done = 0 if day > today else self._ledger.count_completions(project.id, label)
            statuses.append(
                DailyStatus(
                    project_id=project.id,
                    day=day,
                    date_label=label,
                    status=classify_day(day, today, done, target),
                    done=done,
                    target=target,
                )
            )
        return statuses

    def status_on(self, project: Project, day: date, today: date | None = None) -> DailyStatus | None:
        for status in self.daily_statuses(project, today):
            if status.day == day:
                return status
        return None

    def daily_subtask_progress(self, project: Project, day: date | None = None) -> list[SubtaskProgress]:
        """Per-subtask progress; daily projects count only that day's sessions."""
        day = day or self._clock()
        label = format_date_label(day)
        progress: list[SubtaskProgress] = []
        for task in project.subtasks:
            if project.is_daily:
                completed = self._ledger.count_completions(project.id, label, task.id)
            else:
                completed = task.completed_sessions
            progress.append(
                SubtaskProgress(
                    subtask_id=task.id,
                    name=task.name,
                    completed=completed,
                    target=task.target_sessions,
                )
            )
        return progress

    def projects_started_on(self, day: date) -> list[Project]:
        """Projects created on a day that still have sessions outstanding."""
        return [
            p
            for p in self._projects.list_projects()
            if p.start_date == day and p.total_completed < p.total_target
        ]

    def calendar_month(self, year: int, month: int, today: date | None = None) -> CalendarMonth:
        """Everything the monthly calendar needs, one entry per day."""
        today = today or self._clock()
        minutes: dict[date, float] = {}
        for label, total in self._ledger.minutes_by_date().items():
            parsed = parse_date_label(label)
            if parsed is not None:
                minutes[parsed] = minutes.get(parsed, 0.0) + total
        projects = self._projects.list_projects()

        markers: dict[date, list[str]] = {}
        statuses: dict[date, list[DailyStatus]] = {}
        for project in projects:
            if project.is_daily:
                for status in self.daily_statuses(project, today):
                    statuses.setdefault(status.day, []).append(status)
            else:
                for day in project_days(project, self.daily_target):
                    markers.setdefault(day, []).append(project.id)

        # Sunday-first grid
        first_weekday, days_in_month = calendar.monthrange(year, month)
        leading = (first_weekday + 1) % 7

        days: list[CalendarDay] = []
        for day_num in range(1, days_in_month + 1):
            day = date(year, month, day_num)
            label = format_date_label(day)
            focus = minutes.get(day, 0.0)
            days.append(
                CalendarDay(
                    day=day,
                    date_label=label,
                    is_today=day == today,
                    focus_minutes=focus,
                    focus_fraction=min(1.0, focus / self._focus_minutes_per_day),
                    project_ids=markers.get(day, []),
                    daily_statuses=statuses.get(day, []),
                )
            )
        return CalendarMonth(
            year=year,
            month=month,
            label=format_month_label(year, month),
            leading_blanks=leading,
            days=days,
        )
