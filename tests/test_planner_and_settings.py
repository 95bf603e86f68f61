"""Tests for the planner and settings services."""

from __future__ import annotations

import pytest

from studybook.models.settings import Settings
from studybook.models.timer import TimerMode
from studybook.services.planner_service import PlannerService
from studybook.services.settings_service import SettingsService

DAY = "04 December 2025"


def test_notes_blank_text_removes() -> None:
    planner = PlannerService()
    planner.set_note(DAY, "## Goals")
    assert planner.get_note(DAY) == "## Goals"
    planner.set_note(DAY, "   ")
    assert planner.get_note(DAY) == ""
    assert planner.notes == {}


def test_agenda_slots() -> None:
    planner = PlannerService()
    planner.set_agenda_entry(DAY, "09:00", "Lecture")
    planner.set_agenda_entry(DAY, "10:00", "Lab")
    assert planner.get_agenda(DAY) == {"09:00": "Lecture", "10:00": "Lab"}

    planner.set_agenda_entry(DAY, "09:00", "")
    assert planner.get_agenda(DAY) == {"10:00": "Lab"}
    planner.set_agenda_entry(DAY, "10:00", " ")
    assert planner.agendas == {}


def test_planner_returns_copies() -> None:
    planner = PlannerService(notes={DAY: "a"}, agendas={DAY: {"09:00": "x"}})
    planner.notes[DAY] = "changed"
    planner.get_agenda(DAY)["09:00"] = "changed"
    assert planner.get_note(DAY) == "a"
    assert planner.get_agenda(DAY) == {"09:00": "x"}


def test_planner_replace_keeps_missing_parts() -> None:
    planner = PlannerService(notes={DAY: "a"}, agendas={DAY: {"09:00": "x"}})
    planner.replace(notes={})
    assert planner.notes == {}
    assert planner.get_agenda(DAY) == {"09:00": "x"}


def test_settings_update_merges_nested_and_notifies() -> None:
    seen: list[Settings] = []
    service = SettingsService()
    service.subscribe(seen.append)

    updated = service.update(durations={"short_break": 7}, daily_pomodoro_target="8")
    assert updated.durations.short_break == 7
    assert updated.durations.pomodoro == 25
    assert updated.daily_pomodoro_target == 8
    assert seen == [updated]
    assert service.current.durations.seconds_for(TimerMode.SHORT_BREAK) == 420

    service.replace(Settings())
    assert len(seen) == 2
    assert service.current.durations.minutes_for(TimerMode.LONG_BREAK) == 15


def test_settings_update_clamps_invalid_values() -> None:
    service = SettingsService()
    updated = service.update(durations={"pomodoro": 0, "long_break": "abc"})
    assert updated.durations.pomodoro == 1
    assert updated.durations.long_break == 15


@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan"), "1e999", "inf", "NaN"])
def test_settings_update_falls_back_on_non_finite_numbers(value: object) -> None:
    service = SettingsService()
    updated = service.update(durations={"pomodoro": value}, daily_pomodoro_target=value)
    assert updated.durations.pomodoro == 25
    assert updated.daily_pomodoro_target == 6
