"""Chart models derived from the session ledger."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field


class ChartPoint(BaseModel):
    """Total focus minutes for one date label."""

    date_label: str
    day: date
    minutes: float = 0.0


class MonthGroup(BaseModel):
    """Chart points of one calendar month, ascending by day."""

    year: int
    month: int
    label: str
    points: list[ChartPoint] = Field(default_factory=list)

    @property
    def total_minutes(self) -> float:
        return sum(p.minutes for p in self.points)

    @property
    def max_minutes(self) -> float:
        return max((p.minutes for p in self.points), default=0.0)


class ChartData(BaseModel):
    """One month of the performance chart with its y-axis."""

    group: MonthGroup
    ticks: list[int] = Field(default_factory=list)
