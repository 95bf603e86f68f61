"""Planner service: free-form notes and hourly agendas per day."""

from __future__ import annotations

from collections.abc import Mapping


class PlannerService:
    """Day notes (markdown, opaque here) and hour-slot agendas keyed by date label."""

    def __init__(
        self,
        notes: Mapping[str, str] | None = None,
        agendas: Mapping[str, Mapping[str, str]] | None = None,
    ) -> None:
        self._notes: dict[str, str] = dict(notes or {})
        self._agendas: dict[str, dict[str, str]] = {k: dict(v) for k, v in (agendas or {}).items()}

    @property
    def notes(self) -> dict[str, str]:
        return dict(self._notes)

    @property
    def agendas(self) -> dict[str, dict[str, str]]:
        return {k: dict(v) for k, v in self._agendas.items()}

    def replace(
        self,
        notes: Mapping[str, str] | None = None,
        agendas: Mapping[str, Mapping[str, str]] | None = None,
    ) -> None:
        if notes is not None:
            self._notes = dict(notes)
        if agendas is not None:
            self._agendas = {k: dict(v) for k, v in agendas.items()}

    def get_note(self, date_label: str) -> str:
        return self._notes.get(date_label, "")

    def set_note(self, date_label: str, text: str) -> None:
        """Store a note; blank text removes it."""
        if text.strip():
            self._notes[date_label] = text
        else:
            self._notes.pop(date_label, None)

    def get_agenda(self, date_label: str) -> dict[str, str]:
        return dict(self._agendas.get(date_label, {}))

    def set_agenda_entry(self, date_label: str, hour: str, text: str) -> None:
        """Store one hour slot; blank text clears it and empty days are dropped."""
        day = self._agendas.setdefault(date_label, {})
        if text.strip():
            day[hour] = text
        else:
            day.pop(hour, None)
        if not day:
            del self._agendas[date_label]
