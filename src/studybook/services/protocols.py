"""Protocol definitions for services and their host collaborators."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from typing import Protocol

from result import Result

from studybook.models.history import SessionLogEntry
from studybook.models.projects import Project


class Scheduler(Protocol):
    """Periodic trigger supplied by the host for the countdown."""

    @property
    def running(self) -> bool: ...

    def start(self, callback: Callable[[], None]) -> None: ...

    def stop(self) -> None: ...


class Clock(Protocol):
    """Source of "today" so projections are testable."""

    def __call__(self) -> date: ...


class LedgerProtocol(Protocol):
    """Interface the timer and projections need from the ledger."""

    def append(self, entry: SessionLogEntry) -> None: ...

    def count_completions(
        self, project_id: str, date_label: str, subtask_id: str | None = None
    ) -> int: ...

    def minutes_by_date(self) -> dict[str, float]: ...


class ProjectStoreProtocol(Protocol):
    """Interface for project lookups and session credit."""

    def get_project(self, project_id: str) -> Result[Project, str]: ...

    def list_projects(self) -> list[Project]: ...

    def record_session(self, project_id: str, subtask_id: str) -> Result[int, str]: ...
