"""Application context: every service, explicitly owned and wired."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING, Any

from result import Err, Ok, Result

from studybook.data.dates import format_date_label
from studybook.data.durations import format_duration
from studybook.data.ledger import SessionLedger
from studybook.data.snapshot import load_snapshot_file, parse_snapshot, save_snapshot_file
from studybook.models.history import SessionLogEntry
from studybook.models.snapshot import AppSnapshot
from studybook.services.analytics_service import AnalyticsService
from studybook.services.planner_service import PlannerService
from studybook.services.project_service import ProjectService
from studybook.services.projection_service import ProjectionService
from studybook.services.settings_service import SettingsService
from studybook.services.ticker import AsyncioTicker
from studybook.services.timeline_service import TimelineService
from studybook.services.timer_service import TimerService

if TYPE_CHECKING:
    from studybook.config import Config
    from studybook.services.protocols import Clock, Scheduler

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Holds all application state and services. Built once per instance."""

    config: Config
    clock: Clock
    settings: SettingsService
    ledger: SessionLedger
    projects: ProjectService
    planner: PlannerService
    timer: TimerService
    projection: ProjectionService
    timeline: TimelineService
    analytics: AnalyticsService
    started_at: float = field(default_factory=time.monotonic)

    @classmethod
    def create(
        cls,
        config: Config,
        *,
        scheduler: Scheduler | None = None,
        clock: Clock = date.today,
        snapshot: AppSnapshot | None = None,
    ) -> AppContext:
        """Factory that wires all dependencies, optionally seeded from a snapshot."""
        snapshot = snapshot or AppSnapshot()
        settings = SettingsService(snapshot.settings)
        ledger = SessionLedger(snapshot.app_history)
        projects = ProjectService(snapshot.projects)
        planner = PlannerService(snapshot.day_notes, snapshot.day_agendas)

        timer = TimerService(
            settings,
            ledger,
            projects,
            scheduler or AsyncioTicker(config.tick_interval),
            clock=clock,
            long_break_every=config.long_break_every,
        )
        projection = ProjectionService(
            projects,
            ledger,
            settings,
            clock=clock,
            focus_minutes_per_day=config.focus_minutes_per_day,
        )
        timeline = TimelineService(
            projects,
            settings,
            clock=clock,
            lead_days=config.timeline_lead_days,
            max_days=config.timeline_max_days,
        )
        return cls(
            config=config,
            clock=clock,
            settings=settings,
            ledger=ledger,
            projects=projects,
            planner=planner,
            timer=timer,
            projection=projection,
            timeline=timeline,
            analytics=AnalyticsService(ledger),
        )

    def import_snapshot(self, raw: str | bytes | dict[str, Any] | AppSnapshot) -> Result[AppSnapshot, str]:
        """Replace state with the sections present in a snapshot.

        The snapshot is fully decoded before anything is swapped in; absent
        sections keep their current values.
        """
        if isinstance(raw, AppSnapshot):
            snapshot = raw
        else:
            parsed = parse_snapshot(raw)
            if isinstance(parsed, Err):
                logger.warning("%s", parsed.err_value)
                return parsed
            snapshot = parsed.ok_value

        present = snapshot.model_fields_set
        if "projects" in present:
            self.projects.replace_all(snapshot.projects)
            active = self.timer.active_project_id
            if active and isinstance(self.projects.get_project(active), Err):
                self.timer.release_project(active)
        if "app_history" in present:
            self.ledger.replace(snapshot.app_history)
        self.planner.replace(
            snapshot.day_notes if "day_notes" in present else None,
            snapshot.day_agendas if "day_agendas" in present else None,
        )
        if snapshot.settings is not None:
            self.settings.replace(snapshot.settings)

        logger.info(
            "Imported snapshot: %d projects, %d history entries",
            len(self.projects.list_projects()),
            len(self.ledger),
        )
        return Ok(snapshot)

    def export_snapshot(self, *, include_app_session: bool = False) -> AppSnapshot:
        """Current state as a snapshot.

        With ``include_app_session`` the exported history gets one extra
        entry for today holding how long this instance has been running.
        """
        history = list(self.ledger.entries)
        if include_app_session:
            history.append(
                SessionLogEntry(
                    date=format_date_label(self.clock()),
                    duration=format_duration(int(self.uptime_seconds())),
                )
            )
        logger.info("Exporting snapshot: %d history entries", len(history))
        return AppSnapshot(
            projects=[p.model_copy(deep=True) for p in self.projects.list_projects()],
            app_history=history,
            day_notes=self.planner.notes,
            day_agendas=self.planner.agendas,
            settings=self.settings.current.model_copy(deep=True),
        )

    def uptime_seconds(self) -> float:
        return time.monotonic() - self.started_at

    def load_file(self, path: Path | None = None) -> Result[AppSnapshot, str]:
        loaded = load_snapshot_file(path or self.config.snapshot_path)
        if isinstance(loaded, Err):
            return loaded
        return self.import_snapshot(loaded.ok_value)

    def save_file(self, path: Path | None = None) -> Result[Path, str]:
        return save_snapshot_file(path or self.config.snapshot_path, self.export_snapshot())
