"""Analytics service: performance chart data from the session ledger."""

from __future__ import annotations

from typing import TYPE_CHECKING

from result import Err, Ok, Result

from studybook.data.ledger import y_axis_ticks
from studybook.models.analytics import ChartData, ChartPoint, MonthGroup

if TYPE_CHECKING:
    from studybook.data.ledger import SessionLedger


class AnalyticsService:
    """Service for chart queries."""

    def __init__(self, ledger: SessionLedger) -> None:
        self._ledger = ledger

    def get_daily_minutes(self) -> Result[list[ChartPoint], str]:
        """Total minutes per date, oldest first."""
        return Ok(self._ledger.daily_series())

    def get_monthly_groups(self) -> Result[list[MonthGroup], str]:
        return Ok(self._ledger.group_by_month())

    def get_month_chart(self, year: int, month: int) -> Result[ChartData, str]:
        """One month of bars plus a y-axis scaled to its busiest day."""
        for group in self._ledger.group_by_month():
            if (group.year, group.month) == (year, month):
                return Ok(ChartData(group=group, ticks=y_axis_ticks(group.max_minutes)))
        return Err(f"No sessions logged in {year}-{month:02d}")

    def get_charts(self) -> Result[list[ChartData], str]:
        return Ok(
            [
                ChartData(group=group, ticks=y_axis_ticks(group.max_minutes))
                for group in self._ledger.group_by_month()
            ]
        )
