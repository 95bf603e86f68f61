"""Append-only session ledger and its aggregation queries."""

from __future__ import annotations

import math
from collections import defaultdict
from collections.abc import Iterable, Iterator

from studybook.data.dates import format_month_label, label_sort_key
from studybook.data.durations import duration_minutes
from studybook.models.analytics import ChartPoint, MonthGroup
from studybook.models.history import SessionLogEntry

_MIN_TICK_CEILING = 10


class SessionLedger:
    """In-memory collection of completed-session records.

    Entries are never mutated or removed individually; a whole-ledger
    ``replace`` is only used when a snapshot is imported.
    """

    def __init__(self, entries: Iterable[SessionLogEntry] = ()) -> None:
        self._entries: list[SessionLogEntry] = list(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[SessionLogEntry]:
        return iter(tuple(self._entries))

    @property
    def entries(self) -> tuple[SessionLogEntry, ...]:
        return tuple(self._entries)

    def append(self, entry: SessionLogEntry) -> None:
        self._entries.append(entry)

    def replace(self, entries: Iterable[SessionLogEntry]) -> None:
        self._entries = list(entries)

    def count_completions(
        self,
        project_id: str,
        date_label: str,
        subtask_id: str | None = None,
    ) -> int:
        """Number of sessions logged for a project (optionally one subtask) on a label.

        Every entry is one session whatever its recorded duration.
        """
        return sum(
            1
            for e in self._entries
            if e.project_id == project_id
            and e.date == date_label
            and (subtask_id is None or e.subtask_id == subtask_id)
        )

    def minutes_by_date(self) -> dict[str, float]:
        """Total minutes per distinct date label, in first-seen order."""
        totals: dict[str, float] = {}
        for entry in self._entries:
            totals[entry.date] = totals.get(entry.date, 0.0) + duration_minutes(entry.duration)
        return totals

    def minutes_on(self, date_label: str) -> float:
        return sum(duration_minutes(e.duration) for e in self._entries if e.date == date_label)

    def daily_series(self) -> list[ChartPoint]:
        """Per-label totals sorted by real date; bad labels sort first at the epoch."""
        points = [
            ChartPoint(date_label=label, day=label_sort_key(label), minutes=minutes)
            for label, minutes in self.minutes_by_date().items()
        ]
        points.sort(key=lambda p: p.day)
        return points

    def group_by_month(self) -> list[MonthGroup]:
        """Daily totals grouped by calendar month, ascending everywhere."""
        by_month: dict[tuple[int, int], list[ChartPoint]] = defaultdict(list)
        for point in self.daily_series():
            by_month[(point.day.year, point.day.month)].append(point)
        return [
            MonthGroup(
                year=year,
                month=month,
                label=format_month_label(year, month),
                points=by_month[(year, month)],
            )
            for year, month in sorted(by_month)
        ]


def y_axis_ticks(max_minutes: float) -> list[int]:
    """Evenly spaced chart ticks from zero up to a step-aligned ceiling."""
    ceiling = max(float(max_minutes), _MIN_TICK_CEILING)
    if ceiling <= 60:
        step = 10
    elif ceiling <= 180:
        step = 30
    else:
        step = 60
    top = math.ceil(ceiling / step) * step
    return list(range(0, top + 1, step))
