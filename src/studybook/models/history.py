"""Session ledger record model."""

from __future__ import annotations

from pydantic import ConfigDict

from studybook.models.base import SnapshotModel


class SessionLogEntry(SnapshotModel):
    """One completed focus session.

    ``date`` is a textual label ("04 December 2025" or legacy "04Dec25"),
    ``duration`` uses the duration codec format ("25:00", "1:05:00").
    """

    model_config = ConfigDict(frozen=True)

    date: str
    duration: str
    project_id: str | None = None
    subtask_id: str | None = None
