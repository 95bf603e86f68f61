"""Project and subtask models."""

from __future__ import annotations

from datetime import date, datetime
from typing import Literal

from pydantic import Field, field_validator

from studybook.models.base import SnapshotModel

Importance = Literal["important", "not-important"]
Urgency = Literal["emergent", "not-emergent"]


class Subtask(SnapshotModel):
    """A unit of work measured in focus sessions."""

    id: str
    name: str
    description: str | None = None
    target_sessions: int = 1
    completed_sessions: int = 0
    importance: Importance = "not-important"
    urgency: Urgency = "not-emergent"


class Project(SnapshotModel):
    """A project made of ordered subtasks.

    Daily projects repeat every calendar day from ``created_at`` to
    ``recurrence_end_date`` inclusive.
    """

    id: str
    name: str
    description: str | None = None
    created_at: datetime
    is_daily: bool = False
    recurrence_end_date: date | None = None
    subtasks: list[Subtask] = Field(default_factory=list)

    @field_validator("recurrence_end_date", mode="before")
    @classmethod
    def _accept_timestamp(cls, value: object) -> object:
        # Date pickers emit "YYYY-MM-DD", older exports stored full timestamps.
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            if len(text) > 10:
                try:
                    return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
                except ValueError:
                    return text
        return value

    @property
    def start_date(self) -> date:
        """Local calendar date the project was created on."""
        return local_date(self.created_at)

    @property
    def total_target(self) -> int:
        return sum(t.target_sessions for t in self.subtasks)

    @property
    def total_completed(self) -> int:
        return sum(t.completed_sessions for t in self.subtasks)

    def find_subtask(self, subtask_id: str) -> Subtask | None:
        for task in self.subtasks:
            if task.id == subtask_id:
                return task
        return None


def local_date(moment: datetime) -> date:
    """Calendar date of a timestamp in local time (naive values are already local)."""
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return moment.date()
