"""Shared pydantic base for models persisted in the JSON snapshot."""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class SnapshotModel(BaseModel):
    """Base model whose JSON keys are camelCase.

    Python code uses snake_case attributes; ``model_dump(by_alias=True)``
    produces the keys the snapshot file uses.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )


def clamp_positive_int(value: object, default: int = 1) -> int:
    """Coerce a loosely-typed numeric setting to an integer >= 1.

    Anything that is not a finite number falls back to ``default``.
    """
    if isinstance(value, bool):
        return max(1, int(value))
    if isinstance(value, int):
        return max(1, value)
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return max(1, default)
    if isinstance(value, float):
        if not math.isfinite(value):
            return max(1, default)
        return max(1, int(value))
    return max(1, default)
