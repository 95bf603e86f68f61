"""Project service: project/subtask editing and derived statistics."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime

from result import Err, Ok, Result

from studybook.data.durations import format_duration
from studybook.models.projects import Importance, Project, Subtask, Urgency, local_date

logger = logging.getLogger(__name__)


def new_id() -> str:
    return uuid.uuid4().hex[:9]


@dataclass(frozen=True)
class SubtaskDraft:
    """Input for a subtask created together with its project."""

    name: str
    target: int = 1
    description: str | None = None
    importance: Importance = "not-important"
    urgency: Urgency = "not-emergent"


@dataclass(frozen=True)
class ProjectStats:
    total_sessions: int
    completed_sessions: int
    time_spent: str
    time_remaining: str

    @property
    def fraction(self) -> float:
        if self.total_sessions <= 0:
            return 0.0
        return self.completed_sessions / self.total_sessions


@dataclass
class EisenhowerQuadrants:
    """Subtasks by importance x urgency."""

    do_first: list[Subtask] = field(default_factory=list)
    schedule: list[Subtask] = field(default_factory=list)
    delegate: list[Subtask] = field(default_factory=list)
    eliminate: list[Subtask] = field(default_factory=list)


class ProjectService:
    """Owns the ordered project list."""

    def __init__(self, projects: Iterable[Project] = ()) -> None:
        self._projects: list[Project] = list(projects)

    def list_projects(self) -> list[Project]:
        return list(self._projects)

    def replace_all(self, projects: Iterable[Project]) -> None:
        self._projects = list(projects)

    def get_project(self, project_id: str) -> Result[Project, str]:
        for project in self._projects:
            if project.id == project_id:
                return Ok(project)
        return Err(f"Project {project_id} not found")

    def get_subtask(self, project_id: str, subtask_id: str) -> Result[Subtask, str]:
        found = self.get_project(project_id)
        if isinstance(found, Err):
            return found
        task = found.ok_value.find_subtask(subtask_id)
        if task is None:
            return Err(f"Subtask {subtask_id} not found in project {project_id}")
        return Ok(task)

    def create_project(
        self,
        name: str,
        subtasks: Sequence[SubtaskDraft] = (),
        *,
        description: str | None = None,
        is_daily: bool = False,
        recurrence_end_date: date | None = None,
        created_at: datetime | None = None,
    ) -> Result[Project, str]:
        """Create and append a project.

        Blank subtask names are dropped. Daily projects need an end date that
        is not before the creation date.
        """
        name = (name or "").strip()
        if not name:
            return Err("Project name cannot be empty")
        created = created_at or datetime.now().astimezone()

        if is_daily:
            if recurrence_end_date is None:
                return Err("Daily projects need a recurrence end date")
            if recurrence_end_date < local_date(created):
                return Err("Recurrence end date cannot be before the creation date")

        project = Project(
            id=new_id(),
            name=name,
            description=description or None,
            created_at=created,
            is_daily=is_daily,
            recurrence_end_date=recurrence_end_date if is_daily else None,
            subtasks=[_build_subtask(d) for d in subtasks if d.name.strip()],
        )
        self._projects.append(project)
        logger.info("Created project %s (%s)", project.name, project.id)
        return Ok(project)

    def add_subtask(self, project_id: str, draft: SubtaskDraft) -> Result[Subtask, str]:
        found = self.get_project(project_id)
        if isinstance(found, Err):
            return found
        if not draft.name.strip():
            return Err("Subtask name cannot be empty")
        task = _build_subtask(draft)
        found.ok_value.subtasks.append(task)
        return Ok(task)

    def delete_project(self, project_id: str) -> Result[Project, str]:
        found = self.get_project(project_id)
        if isinstance(found, Err):
            return found
        self._projects.remove(found.ok_value)
        return found

    def delete_subtask(self, project_id: str, subtask_id: str) -> Result[Subtask, str]:
        found = self.get_subtask(project_id, subtask_id)
        if isinstance(found, Err):
            return found
        project = self.get_project(project_id).unwrap()
        project.subtasks.remove(found.ok_value)
        return found

    def adjust_target(self, project_id: str, subtask_id: str, delta: int) -> Result[int, str]:
        """Change a subtask's target, never below its completed count or 1."""
        found = self.get_subtask(project_id, subtask_id)
        if isinstance(found, Err):
            return found
        task = found.ok_value
        target = max(task.target_sessions + delta, task.completed_sessions, 1)
        task.target_sessions = target
        return Ok(target)

    def record_session(self, project_id: str, subtask_id: str) -> Result[int, str]:
        """Credit one completed session to a subtask."""
        found = self.get_subtask(project_id, subtask_id)
        if isinstance(found, Err):
            return found
        task = found.ok_value
        task.completed_sessions += 1
        return Ok(task.completed_sessions)

    def visible_projects(self, today: date) -> list[Project]:
        """Projects still relevant today; finished daily runs are hidden."""
        return [
            p
            for p in self._projects
            if not (p.is_daily and p.recurrence_end_date and p.recurrence_end_date < today)
        ]


def project_stats(project: Project, pomodoro_minutes: int = 25) -> ProjectStats:
    total = project.total_target
    completed = project.total_completed
    session_seconds = max(1, pomodoro_minutes) * 60
    return ProjectStats(
        total_sessions=total,
        completed_sessions=completed,
        time_spent=format_duration(completed * session_seconds),
        time_remaining=format_duration(max(0, total - completed) * session_seconds),
    )


def eisenhower_quadrants(project: Project) -> EisenhowerQuadrants:
    quadrants = EisenhowerQuadrants()
    for task in project.subtasks:
        important = task.importance == "important"
        urgent = task.urgency == "emergent"
        if important and urgent:
            quadrants.do_first.append(task)
        elif important:
            quadrants.schedule.append(task)
        elif urgent:
            quadrants.delegate.append(task)
        else:
            quadrants.eliminate.append(task)
    return quadrants


def _build_subtask(draft: SubtaskDraft) -> Subtask:
    return Subtask(
        id=new_id(),
        name=draft.name.strip(),
        description=draft.description or None,
        target_sessions=max(1, int(draft.target)),
        completed_sessions=0,
        importance=draft.importance,
        urgency=draft.urgency,
    )
