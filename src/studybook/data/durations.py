"""Duration codec: seconds <-> "mm:ss" / "hh:mm:ss" strings."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def format_duration(seconds: int) -> str:
    """Format a second count as ``mm:ss``, or ``hh:mm:ss`` from one hour up."""
    seconds = max(0, int(seconds))
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours > 0:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


def parse_duration(text: str) -> int:
    """Parse ``mm:ss`` or ``h:mm:ss`` into seconds.

    Raises:
        ValueError: if the text has the wrong shape or non-numeric parts.
    """
    parts = text.strip().split(":")
    if len(parts) not in (2, 3) or not all(p.strip().isdigit() for p in parts):
        msg = f"Invalid duration: {text!r}"
        raise ValueError(msg)
    numbers = [int(p) for p in parts]
    if len(numbers) == 3:
        hours, minutes, secs = numbers
    else:
        hours = 0
        minutes, secs = numbers
    return hours * 3600 + minutes * 60 + secs


def duration_minutes(text: str) -> float:
    """Minutes in a duration string; malformed values count as zero."""
    try:
        return parse_duration(text) / 60
    except ValueError:
        logger.warning("Ignoring malformed duration %r", text)
        return 0.0
