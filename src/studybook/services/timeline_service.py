"""Timeline service: Gantt bars and date axis for one-off projects."""

from __future__ import annotations

from datetime import date, timedelta
from typing import TYPE_CHECKING

from studybook.models.schedule import ProjectBar, SubtaskBar, Timeline
from studybook.services.projection_service import project_span_days

if TYPE_CHECKING:
    from collections.abc import Iterable

    from studybook.models.projects import Project
    from studybook.services.protocols import Clock, ProjectStoreProtocol
    from studybook.services.settings_service import SettingsService

DEFAULT_LEAD_DAYS = 7
DEFAULT_MAX_DAYS = 365


def layout_subtasks(project: Project, daily_target: int) -> list[SubtaskBar]:
    """Fractional day offsets and spans of subtasks, in insertion order."""
    per_day = max(1, daily_target)
    start = project.start_date
    bars: list[SubtaskBar] = []
    cumulative = 0
    for task in project.subtasks:
        target = task.target_sessions
        bars.append(
            SubtaskBar(
                subtask_id=task.id,
                name=task.name,
                offset_days=cumulative / per_day,
                span_days=target / per_day,
                fill=task.completed_sessions / target if target > 0 else 0.0,
                project_start=start,
            )
        )
        cumulative += target
    return bars


def build_axis(
    starts: Iterable[date],
    ends: Iterable[date],
    today: date,
    *,
    lead_days: int = DEFAULT_LEAD_DAYS,
    max_days: int = DEFAULT_MAX_DAYS,
) -> list[date]:
    """Consecutive days from the earliest start to the latest end.

    The end is pushed out to at least ``today + lead_days``; the axis never
    holds more than ``max_days`` entries.
    """
    starts = list(starts)
    if not starts:
        return []
    first = min(starts)
    last = max([*ends, today + timedelta(days=lead_days)])
    axis: list[date] = []
    current = first
    while current <= last and len(axis) < max_days:
        axis.append(current)
        current += timedelta(days=1)
    return axis


class TimelineService:
    """Lays out non-recurring projects against a shared date axis."""

    def __init__(
        self,
        projects: ProjectStoreProtocol,
        settings: SettingsService,
        *,
        clock: Clock = date.today,
        lead_days: int = DEFAULT_LEAD_DAYS,
        max_days: int = DEFAULT_MAX_DAYS,
    ) -> None:
        self._projects = projects
        self._settings = settings
        self._clock = clock
        self._lead_days = lead_days
        self._max_days = max_days

    def build(self, today: date | None = None) -> Timeline:
        today = today or self._clock()
        daily_target = self._settings.current.daily_pomodoro_target
        projects = [p for p in self._projects.list_projects() if not p.is_daily]

        spans = {p.id: project_span_days(p, daily_target) for p in projects}
        axis = build_axis(
            (p.start_date for p in projects),
            (p.start_date + timedelta(days=spans[p.id]) for p in projects),
            today,
            lead_days=self._lead_days,
            max_days=self._max_days,
        )
        if not axis:
            return Timeline(daily_target=daily_target)

        bars: list[ProjectBar] = []
        for project in projects:
            target = project.total_target
            completed = project.total_completed
            bars.append(
                ProjectBar(
                    project_id=project.id,
                    name=project.name,
                    start=project.start_date,
                    start_index=(project.start_date - axis[0]).days,
                    span_days=spans[project.id],
                    fill=completed / target if target > 0 else 0.0,
                    target_sessions=target,
                    completed_sessions=completed,
                    subtasks=layout_subtasks(project, daily_target),
                )
            )

        today_index = (today - axis[0]).days
        return Timeline(
            axis=axis,
            today_index=today_index if 0 <= today_index < len(axis) else None,
            daily_target=daily_target,
            bars=bars,
        )
