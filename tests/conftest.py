"""Shared fixtures for Studybook tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime
from pathlib import Path

import pytest

from studybook.config import Config
from studybook.models.projects import Project, Subtask
from studybook.services.container import AppContext
from studybook.services.protocols import Scheduler

TODAY = date(2025, 12, 4)


class FakeScheduler:
    """Records start/stop calls instead of ticking."""

    def __init__(self) -> None:
        self.callback: Callable[[], None] | None = None
        self.starts = 0
        self.stops = 0

    @property
    def running(self) -> bool:
        return self.callback is not None

    def start(self, callback: Callable[[], None]) -> None:
        self.starts += 1
        self.callback = callback

    def stop(self) -> None:
        self.stops += 1
        self.callback = None


def make_project(
    project_id: str,
    targets: list[int],
    *,
    created: date = TODAY,
    completed: list[int] | None = None,
    is_daily: bool = False,
    until: date | None = None,
) -> Project:
    """Project with one subtask per target, ids ``<project_id>-s<n>``."""
    completed = completed or [0] * len(targets)
    return Project(
        id=project_id,
        name=project_id.title(),
        created_at=datetime(created.year, created.month, created.day, 9, 0),
        is_daily=is_daily,
        recurrence_end_date=until,
        subtasks=[
            Subtask(
                id=f"{project_id}-s{i}",
                name=f"Task {i}",
                target_sessions=target,
                completed_sessions=done,
            )
            for i, (target, done) in enumerate(zip(targets, completed, strict=True), 1)
        ],
    )


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Config pointing at a temporary data directory."""
    return Config(data_dir=tmp_path / "data")


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def context(test_config: Config, scheduler: FakeScheduler) -> AppContext:
    """Fully wired context with a fixed clock and a fake scheduler."""
    return AppContext.create(test_config, scheduler=scheduler, clock=lambda: TODAY)


@pytest.fixture
def project_factory() -> Callable[..., Project]:
    return make_project


@pytest.fixture
def context_factory(test_config: Config) -> Callable[[Scheduler], AppContext]:
    """Builds a context around a caller-supplied scheduler."""

    def factory(scheduler: Scheduler) -> AppContext:
        return AppContext.create(test_config, scheduler=scheduler, clock=lambda: TODAY)

    return factory
