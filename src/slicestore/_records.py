"""Record-like value helpers shared by the merge policy and equality checks.

A *record* is a value whose named fields can be read one level deep and
copied with some of them overwritten: mappings, pydantic models and
dataclass instances. Everything else is opaque.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel


def is_record(value: Any) -> bool:
    """Return ``True`` when *value* is eligible for a shallow merge."""
    if isinstance(value, (Mapping, BaseModel)):
        return True
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def record_items(value: Any) -> dict[Any, Any]:
    """All top-level fields of a record, keyed by name."""
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, BaseModel):
        items = {name: getattr(value, name) for name in type(value).model_fields}
        if value.model_extra:
            items.update(value.model_extra)
        return items
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    raise TypeError(f"{type(value).__name__} is not a record")


def patch_items(value: Any) -> dict[Any, Any]:
    """Fields a record contributes when merged onto another record.

    A pydantic model only contributes the fields that were explicitly set,
    so ``Model(b=3)`` patches ``b`` without resetting the others to their
    defaults.
    """
    if isinstance(value, BaseModel):
        items = {name: getattr(value, name) for name in value.model_fields_set}
        if value.model_extra:
            items.update(value.model_extra)
        return items
    return record_items(value)
