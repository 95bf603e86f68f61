"""Snapshot codec and file loader.

The snapshot is a single JSON object. Decoding is lenient: a broken field
is dropped and broken list items are skipped, so one bad record never
sinks an import. Only undecodable JSON or a non-object top level fails.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError
from result import Err, Ok, Result

from studybook.models.history import SessionLogEntry
from studybook.models.projects import Project
from studybook.models.settings import Settings
from studybook.models.snapshot import AppSnapshot

logger = logging.getLogger(__name__)

_LIST_FIELDS: dict[str, TypeAdapter[Any]] = {
    "projects": TypeAdapter(Project),
    "appHistory": TypeAdapter(SessionLogEntry),
}
_NOTES_ADAPTER: TypeAdapter[dict[str, str]] = TypeAdapter(dict[str, str])
_AGENDAS_ADAPTER: TypeAdapter[dict[str, dict[str, str]]] = TypeAdapter(
    dict[str, dict[str, str]]
)


def parse_snapshot(raw: str | bytes | dict[str, Any]) -> Result[AppSnapshot, str]:
    """Decode a snapshot, keeping track of which sections were present."""
    if isinstance(raw, dict):
        data: object = raw
    else:
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            return Err(f"Failed to import snapshot: invalid JSON ({exc})")
    if not isinstance(data, dict):
        return Err("Failed to import snapshot: top level must be a JSON object")

    fields: dict[str, Any] = {}
    for key, adapter in _LIST_FIELDS.items():
        if key not in data:
            continue
        items = _validate_items(key, data[key], adapter)
        if items is not None:
            fields[key] = items

    if "dayNotes" in data:
        notes = _validate_mapping("dayNotes", data["dayNotes"], _NOTES_ADAPTER)
        if notes is not None:
            fields["dayNotes"] = notes
    if "dayAgendas" in data:
        agendas = _validate_mapping("dayAgendas", data["dayAgendas"], _AGENDAS_ADAPTER)
        if agendas is not None:
            fields["dayAgendas"] = agendas

    raw_settings = data.get("settings")
    if raw_settings is not None:
        try:
            fields["settings"] = Settings.model_validate(raw_settings)
        except ValidationError as exc:
            logger.warning("Ignoring invalid settings in snapshot: %s", exc.errors()[:1])

    return Ok(AppSnapshot(**fields))


def dump_snapshot(snapshot: AppSnapshot) -> str:
    return snapshot.to_json()


def load_snapshot_file(path: Path) -> Result[AppSnapshot, str]:
    """Read a snapshot file; a missing file is an empty snapshot."""
    if not path.exists():
        logger.info("No snapshot at %s, starting empty", path)
        return Ok(AppSnapshot())
    try:
        raw = path.read_bytes()
    except OSError as exc:
        return Err(f"Failed to read snapshot {path}: {exc}")
    return parse_snapshot(raw)


def save_snapshot_file(path: Path, snapshot: AppSnapshot) -> Result[Path, str]:
    """Write a snapshot atomically (temp file in the same directory, then replace)."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=".studybook-", suffix=".json", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                tmp.write(dump_snapshot(snapshot))
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as exc:
        return Err(f"Failed to write snapshot {path}: {exc}")
    logger.info("Saved snapshot to %s", path)
    return Ok(path)


def _validate_items(key: str, value: object, adapter: TypeAdapter[Any]) -> list[Any] | None:
    if not isinstance(value, list):
        logger.warning("Ignoring snapshot field %s: expected a list, got %s", key, type(value).__name__)
        return None
    items: list[Any] = []
    for index, item in enumerate(value):
        try:
            items.append(adapter.validate_python(item))
        except ValidationError:
            logger.warning("Skipping invalid %s[%d]", key, index)
    return items


def _validate_mapping(key: str, value: object, adapter: TypeAdapter[Any]) -> Any | None:
    try:
        return adapter.validate_python(value)
    except ValidationError:
        logger.warning("Ignoring invalid snapshot field %s", key)
        return None
