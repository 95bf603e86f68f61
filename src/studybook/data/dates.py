"""Date label codec for ledger keys.

New entries use the long form ``"04 December 2025"``. Older snapshots may
contain the compact ``"04Dec25"``; a few also carry ISO dates or the en-US
weekday form ``"Thursday, December 4, 2025"``.
"""

from __future__ import annotations

import re
from datetime import date

EPOCH = date(1970, 1, 1)

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
_MONTH_BY_NAME = {name.lower(): i for i, name in enumerate(MONTH_NAMES, 1)}
_MONTH_BY_ABBR = {name[:3].lower(): i for i, name in enumerate(MONTH_NAMES, 1)}

_LONG_RE = re.compile(r"^(\d{1,2})\s+([A-Za-z]+)\s+(\d{4})$")
_COMPACT_RE = re.compile(r"^(\d{2})([A-Za-z]{3})(\d{2})$")
_ISO_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_US_RE = re.compile(r"^(?:[A-Za-z]+,\s*)?([A-Za-z]+)\s+(\d{1,2}),\s*(\d{4})$")


def format_date_label(day: date) -> str:
    """Long-form label used for every newly logged session."""
    return f"{day.day:02d} {MONTH_NAMES[day.month - 1]} {day.year}"


def format_compact_label(day: date) -> str:
    """Legacy compact label, e.g. ``04Dec25``."""
    return f"{day.day:02d}{MONTH_NAMES[day.month - 1][:3]}{day.year % 100:02d}"


def format_month_label(year: int, month: int) -> str:
    return f"{MONTH_NAMES[month - 1]} {year}"


def parse_date_label(label: str) -> date | None:
    """Parse any accepted label form; ``None`` when nothing matches."""
    text = (label or "").strip()
    if not text:
        return None

    if m := _LONG_RE.match(text):
        return _build(int(m.group(3)), _month_from_name(m.group(2)), int(m.group(1)))
    if m := _COMPACT_RE.match(text):
        return _build(2000 + int(m.group(3)), _MONTH_BY_ABBR.get(m.group(2).lower()), int(m.group(1)))
    if m := _ISO_RE.match(text):
        return _build(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    if m := _US_RE.match(text):
        return _build(int(m.group(3)), _month_from_name(m.group(1)), int(m.group(2)))
    return None


def label_sort_key(label: str) -> date:
    """Real date of a label, or the epoch when it cannot be parsed."""
    return parse_date_label(label) or EPOCH


def normalize_label(label: str) -> str:
    """Rewrite a parseable label in long form; unparseable labels pass through."""
    parsed = parse_date_label(label)
    return format_date_label(parsed) if parsed else label


def _month_from_name(name: str) -> int | None:
    key = name.lower()
    return _MONTH_BY_NAME.get(key) or _MONTH_BY_ABBR.get(key[:3])


def _build(year: int, month: int | None, day: int) -> date | None:
    if month is None:
        return None
    try:
        return date(year, month, day)
    except ValueError:
        return None
