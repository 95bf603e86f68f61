"""Tests for the Gantt timeline layout."""

from __future__ import annotations

from datetime import date, timedelta
from typing import TYPE_CHECKING

import pytest

from studybook.services.timeline_service import build_axis, layout_subtasks

if TYPE_CHECKING:
    from collections.abc import Callable

    from studybook.models.projects import Project
    from studybook.services.container import AppContext


def test_layout_subtasks_uses_cumulative_offsets(project_factory: Callable[..., Project]) -> None:
    project = project_factory("essay", [4, 8], completed=[2, 0])
    bars = layout_subtasks(project, 6)
    assert [b.offset_days for b in bars] == [0, pytest.approx(4 / 6)]
    assert [b.span_days for b in bars] == [pytest.approx(4 / 6), pytest.approx(8 / 6)]
    assert [b.fill for b in bars] == [0.5, 0.0]
    assert bars[1].start_date == project.start_date
    assert bars[1].end_date == project.start_date + timedelta(days=2)


def test_build_axis_extends_past_today(today: date) -> None:
    axis = build_axis([today], [today + timedelta(days=2)], today)
    assert axis[0] == today
    assert axis[-1] == today + timedelta(days=7)
    assert len(axis) == 8


def test_build_axis_is_capped(today: date) -> None:
    start = today - timedelta(days=1000)
    axis = build_axis([start], [start + timedelta(days=1)], today)
    assert len(axis) == 365
    assert axis[0] == start
    assert build_axis([], [], today) == []


def test_timeline_build(
    context: AppContext, project_factory: Callable[..., Project], today: date
) -> None:
    context.projects.replace_all(
        [
            project_factory("essay", [4, 8], completed=[4, 2]),
            project_factory("report", [30], created=today - timedelta(days=3)),
            project_factory("gym", [1], is_daily=True, until=today + timedelta(days=30)),
        ]
    )
    timeline = context.timeline.build()

    assert timeline.daily_target == 6
    assert timeline.axis[0] == today - timedelta(days=3)
    assert timeline.axis[-1] == today + timedelta(days=7)
    assert timeline.today_index == 3
    assert [b.project_id for b in timeline.bars] == ["essay", "report"]

    essay, report = timeline.bars
    assert (essay.start_index, essay.span_days) == (3, 2)
    assert essay.fill == pytest.approx(0.5)
    assert essay.end == today + timedelta(days=2)
    assert (report.start_index, report.span_days) == (0, 5)
    assert len(essay.subtasks) == 2
    for bar in timeline.bars:
        for sub in bar.subtasks:
            assert sub.end_date <= bar.end + timedelta(days=1)


def test_timeline_follows_daily_target(
    context: AppContext, project_factory: Callable[..., Project]
) -> None:
    context.projects.replace_all([project_factory("essay", [4, 8])])
    context.settings.update(daily_pomodoro_target=3)
    timeline = context.timeline.build()
    assert timeline.bars[0].span_days == 4
    assert timeline.bars[0].subtasks[1].offset_days == pytest.approx(4 / 3)


def test_timeline_today_outside_axis(
    context: AppContext, project_factory: Callable[..., Project], today: date
) -> None:
    context.projects.replace_all([project_factory("old", [6], created=date(2023, 1, 1))])
    timeline = context.timeline.build()
    assert len(timeline.axis) == 365
    assert timeline.today_index is None


def test_timeline_without_one_off_projects(
    context: AppContext, project_factory: Callable[..., Project], today: date
) -> None:
    context.projects.replace_all([project_factory("gym", [1], is_daily=True, until=today)])
    timeline = context.timeline.build()
    assert timeline.axis == []
    assert timeline.bars == []
    assert timeline.today_index is None
