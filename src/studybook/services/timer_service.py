"""Timer service: countdown state machine with session attribution."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date
from typing import TYPE_CHECKING

from result import Err

from studybook.data.dates import format_date_label
from studybook.data.durations import format_duration
from studybook.models.history import SessionLogEntry
from studybook.models.timer import CompletionEvent, TimerMode, TimerState

if TYPE_CHECKING:
    from studybook.models.settings import Settings
    from studybook.services.protocols import (
        Clock,
        LedgerProtocol,
        ProjectStoreProtocol,
        Scheduler,
    )
    from studybook.services.settings_service import SettingsService

logger = logging.getLogger(__name__)

LONG_BREAK_EVERY = 4


class TimerService:
    """Owns the single countdown.

    Orchestrates:
    - mode transitions (pomodoro -> short/long break -> pomodoro)
    - ledger logging and subtask credit for completed pomodoros
    - the host scheduler, kept running exactly while the timer is active
    - callbacks for the UI
    """

    def __init__(
        self,
        settings: SettingsService,
        ledger: LedgerProtocol,
        projects: ProjectStoreProtocol,
        scheduler: Scheduler,
        *,
        clock: Clock = date.today,
        long_break_every: int = LONG_BREAK_EVERY,
    ) -> None:
        self._settings = settings
        self._ledger = ledger
        self._projects = projects
        self._scheduler = scheduler
        self._clock = clock
        self._long_break_every = max(1, long_break_every)

        self._mode = TimerMode.POMODORO
        self._durations = settings.current.durations
        self._time_left = self._durations.seconds_for(self._mode)
        self._is_active = False
        self._completed_pomodoros = 0
        self._active_project_id: str | None = None
        self._active_subtask_id: str | None = None

        self._on_tick: Callable[[TimerState], None] | None = None
        self._on_complete: Callable[[CompletionEvent], None] | None = None
        self._on_state_change: Callable[[TimerState], None] | None = None

        settings.subscribe(self._settings_changed)

    # ----- Callbacks -----
    def set_on_tick(self, fn: Callable[[TimerState], None]) -> None:
        self._on_tick = fn

    def set_on_complete(self, fn: Callable[[CompletionEvent], None]) -> None:
        self._on_complete = fn

    def set_on_state_change(self, fn: Callable[[TimerState], None]) -> None:
        self._on_state_change = fn

    def _emit_state_change(self) -> None:
        if self._on_state_change:
            self._on_state_change(self.snapshot())

    # ----- Queries -----
    @property
    def mode(self) -> TimerMode:
        return self._mode

    @property
    def time_left(self) -> int:
        return self._time_left

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def completed_pomodoro_count(self) -> int:
        return self._completed_pomodoros

    @property
    def active_project_id(self) -> str | None:
        return self._active_project_id

    @property
    def active_subtask_id(self) -> str | None:
        return self._active_subtask_id

    def snapshot(self) -> TimerState:
        return TimerState(
            mode=self._mode,
            time_left=self._time_left,
            is_active=self._is_active,
            completed_pomodoro_count=self._completed_pomodoros,
            active_project_id=self._active_project_id,
            active_subtask_id=self._active_subtask_id,
        )

    # ----- Public API -----
    def set_active(self, project_id: str | None, subtask_id: str | None = None) -> None:
        """Choose which project/subtask the next completed pomodoro is credited to."""
        self._active_project_id = project_id or None
        self._active_subtask_id = (subtask_id or None) if project_id else None
        self._emit_state_change()

    def start(self) -> None:
        self._set_active(True)

    def pause(self) -> None:
        self._set_active(False)

    def toggle(self) -> None:
        self._set_active(not self._is_active)

    def on_tick(self) -> None:
        """One elapsed second. Called by the scheduler."""
        if not self._is_active:
            return
        if self._time_left > 0:
            self._time_left -= 1
        if self._on_tick:
            self._on_tick(self.snapshot())
        if self._time_left <= 0:
            self.complete()

    def skip(self) -> CompletionEvent:
        """Finish the current interval now; a skipped pomodoro counts in full."""
        return self.complete()

    def complete(self) -> CompletionEvent:
        self._set_active(False, notify=False)
        durations = self._settings.current.durations

        if self._mode is TimerMode.POMODORO:
            self._completed_pomodoros += 1
            self._credit_active_subtask()
            self._log_session(durations.seconds_for(TimerMode.POMODORO))

            if self._completed_pomodoros % self._long_break_every == 0:
                next_mode = TimerMode.LONG_BREAK
                body = f"Great job! Take a long {durations.long_break} minute rest."
            else:
                next_mode = TimerMode.SHORT_BREAK
                body = f"Take {durations.short_break} minutes to stretch."
            event = CompletionEvent(
                finished_mode=TimerMode.POMODORO,
                next_mode=next_mode,
                completed_pomodoro_count=self._completed_pomodoros,
                logged=True,
                title="Time for a break!",
                body=body,
            )
            auto_start = self._settings.current.auto_start_breaks
        else:
            next_mode = TimerMode.POMODORO
            event = CompletionEvent(
                finished_mode=self._mode,
                next_mode=next_mode,
                completed_pomodoro_count=self._completed_pomodoros,
                logged=False,
                title="Time to focus!",
                body="Break is over. Let's get back to work.",
            )
            auto_start = self._settings.current.auto_start_pomodoros

        self._mode = next_mode
        self._time_left = durations.seconds_for(next_mode)
        logger.info("Completed %s, next %s", event.finished_mode, next_mode)

        if auto_start:
            self._set_active(True, notify=False)
        self._emit_state_change()
        if self._on_complete:
            self._on_complete(event)
        return event

    def switch_mode(self, mode: TimerMode) -> None:
        """Explicit mode selection: stop and load that mode's duration."""
        self._set_active(False, notify=False)
        self._mode = TimerMode(mode)
        self._time_left = self._settings.current.durations.seconds_for(self._mode)
        self._emit_state_change()

    def reset(self) -> None:
        self._set_active(False, notify=False)
        self._time_left = self._settings.current.durations.seconds_for(self._mode)
        self._emit_state_change()

    def release_project(self, project_id: str) -> None:
        """Drop attribution to a project that no longer exists."""
        if self._active_project_id == project_id:
            self.set_active(None)

    def release_subtask(self, subtask_id: str) -> None:
        if self._active_subtask_id == subtask_id:
            self._active_subtask_id = None
            self._emit_state_change()

    # ----- Internals -----
    def _set_active(self, active: bool, *, notify: bool = True) -> None:
        self._is_active = active
        if active and not self._scheduler.running:
            self._scheduler.start(self.on_tick)
        elif not active and self._scheduler.running:
            self._scheduler.stop()
        if notify:
            self._emit_state_change()

    def _settings_changed(self, settings: Settings) -> None:
        # Only a duration change re-derives the countdown, and only while idle.
        if settings.durations == self._durations:
            return
        self._durations = settings.durations
        if self._is_active:
            return
        self._time_left = settings.durations.seconds_for(self._mode)
        self._emit_state_change()

    def _credit_active_subtask(self) -> None:
        if not (self._active_project_id and self._active_subtask_id):
            return
        result = self._projects.record_session(self._active_project_id, self._active_subtask_id)
        if isinstance(result, Err):
            logger.warning("Could not credit session: %s", result.err_value)

    def _log_session(self, seconds: int) -> None:
        entry = SessionLogEntry(
            date=format_date_label(self._clock()),
            duration=format_duration(seconds),
            project_id=self._active_project_id,
            subtask_id=self._active_subtask_id,
        )
        self._ledger.append(entry)
