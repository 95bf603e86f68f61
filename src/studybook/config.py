"""Configuration for Studybook."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class Config:
    """Application configuration."""

    data_dir: Path = field(
        default_factory=lambda: Path.home() / ".local" / "share" / "studybook"
    )
    tick_interval: float = 1.0
    focus_minutes_per_day: int = 480
    timeline_lead_days: int = 7
    timeline_max_days: int = 365
    long_break_every: int = 4

    @property
    def snapshot_path(self) -> Path:
        return self.data_dir / "studybook.json"
