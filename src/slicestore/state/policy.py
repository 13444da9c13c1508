"""Replace/merge policy for committing an update onto the current state.

Merging is one level deep: fields of the patch overwrite fields of a new
copy of the current state, nested values are taken from the patch as-is.
"""

from __future__ import annotations

import copy
import dataclasses
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from slicestore._records import patch_items, record_items
from slicestore.equality import is_identical
from slicestore.exceptions import InvalidUpdateError
from slicestore.state.updates import Merge, Replace


def _merge_model(current: BaseModel, fields: dict[Any, Any]) -> BaseModel:
    """Merge *fields* onto a pydantic model state with validation.

    Unknown keys are rejected unless the model allows extras. The merged
    record is validated as a whole, but only the patched fields are taken
    from the validated copy so untouched fields keep their identity.
    """
    model_cls = type(current)
    if model_cls.model_config.get("extra") != "allow":
        unknown = sorted(str(key) for key in fields if key not in model_cls.model_fields)
        if unknown:
            raise InvalidUpdateError(f"{model_cls.__name__} has no field(s): {', '.join(unknown)}")
    try:
        validated = model_cls.model_validate({**record_items(current), **fields}, by_name=True)
    except ValidationError as exc:
        raise InvalidUpdateError(f"invalid update for {model_cls.__name__}: {exc}") from exc
    return current.model_copy(update={key: getattr(validated, key) for key in fields})


def merge_record(current: Any, patch: Any) -> Any:
    """Return a new record with the fields of *patch* applied onto *current*.

    - mapping state: a new ``dict``;
    - pydantic model state: a validated copy, see :func:`_merge_model`;
    - dataclass state: ``dataclasses.replace``;
    - non-record state: the patch fields as a new ``dict``, or a shallow
      copy of the patch when it is a model or dataclass.
    """
    fields = patch_items(patch)
    if isinstance(current, Mapping):
        return {**current, **fields}
    if isinstance(current, BaseModel):
        return _merge_model(current, fields)
    if dataclasses.is_dataclass(current) and not isinstance(current, type):
        return dataclasses.replace(current, **fields)
    if isinstance(patch, Mapping):
        return fields
    if isinstance(patch, BaseModel):
        return patch.model_copy()
    return copy.copy(patch)


def apply_update(current: Any, update: Replace[Any] | Merge) -> tuple[Any, bool]:
    """Compute the next state.

    Returns ``(next_state, changed)``. When the candidate is identical to
    *current* the current object is returned unchanged and ``changed`` is
    ``False``.
    """
    candidate = update.value if isinstance(update, Replace) else update.values
    if is_identical(candidate, current):
        return current, False
    if isinstance(update, Replace):
        return candidate, True
    return merge_record(current, candidate), True
