"""Top-level persisted snapshot model."""

from __future__ import annotations

from pydantic import Field

from studybook.models.base import SnapshotModel
from studybook.models.history import SessionLogEntry
from studybook.models.projects import Project
from studybook.models.settings import Settings


class AppSnapshot(SnapshotModel):
    """Everything the loader persists, as one JSON object.

    Optional sections that were absent in the source JSON are not in
    ``model_fields_set``; importers use that to keep current values.
    """

    projects: list[Project] = Field(default_factory=list)
    app_history: list[SessionLogEntry] = Field(default_factory=list)
    day_notes: dict[str, str] = Field(default_factory=dict)
    day_agendas: dict[str, dict[str, str]] = Field(default_factory=dict)
    settings: Settings | None = None

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)
