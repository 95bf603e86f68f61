"""Tests for project editing, statistics and the Eisenhower split."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING

from result import Err, Ok

from studybook.services.project_service import (
    ProjectService,
    SubtaskDraft,
    eisenhower_quadrants,
    project_stats,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from studybook.models.projects import Project

CREATED = datetime(2025, 12, 4, 9, 30)


def test_create_project_drops_blank_subtasks() -> None:
    service = ProjectService()
    result = service.create_project(
        "  Thesis  ",
        [SubtaskDraft("Read", 3), SubtaskDraft("   ", 2), SubtaskDraft("Write", 0)],
        created_at=CREATED,
    )
    assert isinstance(result, Ok)
    project = result.ok_value
    assert project.name == "Thesis"
    assert [t.name for t in project.subtasks] == ["Read", "Write"]
    assert [t.target_sessions for t in project.subtasks] == [3, 1]
    assert all(t.completed_sessions == 0 for t in project.subtasks)
    assert len({project.id, *(t.id for t in project.subtasks)}) == 3
    assert service.list_projects() == [project]


def test_create_project_validation() -> None:
    service = ProjectService()
    blank = service.create_project("   ")
    assert isinstance(blank, Err)

    no_end = service.create_project("Gym", is_daily=True, created_at=CREATED)
    assert isinstance(no_end, Err)
    assert "end date" in no_end.err_value

    before = service.create_project(
        "Gym", is_daily=True, recurrence_end_date=date(2025, 12, 3), created_at=CREATED
    )
    assert isinstance(before, Err)

    same_day = service.create_project(
        "Gym", is_daily=True, recurrence_end_date=date(2025, 12, 4), created_at=CREATED
    )
    assert isinstance(same_day, Ok)
    assert service.list_projects() == [same_day.ok_value]


def test_one_off_project_ignores_end_date() -> None:
    service = ProjectService()
    project = service.create_project(
        "Essay", recurrence_end_date=date(2026, 1, 1), created_at=CREATED
    ).unwrap()
    assert project.recurrence_end_date is None


def test_adjust_target_never_drops_below_completed(project_factory: Callable[..., Project]) -> None:
    service = ProjectService([project_factory("p1", [3], completed=[2])])
    assert service.adjust_target("p1", "p1-s1", -1).unwrap() == 2
    assert service.adjust_target("p1", "p1-s1", -5).unwrap() == 2
    assert service.adjust_target("p1", "p1-s1", 4).unwrap() == 6
    assert isinstance(service.adjust_target("p1", "missing", 1), Err)


def test_adjust_target_floor_is_one(project_factory: Callable[..., Project]) -> None:
    service = ProjectService([project_factory("p1", [2])])
    assert service.adjust_target("p1", "p1-s1", -10).unwrap() == 1


def test_add_and_delete(project_factory: Callable[..., Project]) -> None:
    service = ProjectService([project_factory("p1", [1]), project_factory("p2", [1])])
    added = service.add_subtask("p1", SubtaskDraft("Extra", 2, importance="important"))
    assert isinstance(added, Ok)
    assert service.get_project("p1").unwrap().total_target == 3
    assert isinstance(service.add_subtask("p1", SubtaskDraft(" ")), Err)

    assert isinstance(service.delete_subtask("p1", added.ok_value.id), Ok)
    assert service.get_project("p1").unwrap().total_target == 1

    assert isinstance(service.delete_project("p2"), Ok)
    assert [p.id for p in service.list_projects()] == ["p1"]
    missing = service.delete_project("p2")
    assert isinstance(missing, Err)
    assert missing.err_value == "Project p2 not found"


def test_record_session(project_factory: Callable[..., Project]) -> None:
    service = ProjectService([project_factory("p1", [2])])
    assert service.record_session("p1", "p1-s1").unwrap() == 1
    assert service.record_session("p1", "p1-s1").unwrap() == 2
    assert isinstance(service.record_session("p1", "zzz"), Err)


def test_visible_projects_hide_finished_daily_runs(
    project_factory: Callable[..., Project], today: date
) -> None:
    past = project_factory("old", [1], created=today - timedelta(days=5), is_daily=True, until=today - timedelta(days=1))
    current = project_factory("gym", [1], is_daily=True, until=today)
    one_off = project_factory("essay", [1], created=today - timedelta(days=30))
    service = ProjectService([past, current, one_off])
    assert [p.id for p in service.visible_projects(today)] == ["gym", "essay"]


def test_project_stats(project_factory: Callable[..., Project]) -> None:
    project = project_factory("p1", [4, 2], completed=[3, 0])
    stats = project_stats(project)
    assert stats.total_sessions == 6
    assert stats.completed_sessions == 3
    assert stats.time_spent == "01:15:00"
    assert stats.time_remaining == "01:15:00"
    assert stats.fraction == 0.5
    assert project_stats(project, 50).time_spent == "02:30:00"


def test_eisenhower_quadrants() -> None:
    service = ProjectService()
    project = service.create_project(
        "Plan",
        [
            SubtaskDraft("a", importance="important", urgency="emergent"),
            SubtaskDraft("b", importance="important"),
            SubtaskDraft("c", urgency="emergent"),
            SubtaskDraft("d"),
        ],
        created_at=CREATED,
    ).unwrap()
    quadrants = eisenhower_quadrants(project)
    assert [t.name for t in quadrants.do_first] == ["a"]
    assert [t.name for t in quadrants.schedule] == ["b"]
    assert [t.name for t in quadrants.delegate] == ["c"]
    assert [t.name for t in quadrants.eliminate] == ["d"]
