"""Update variants accepted by ``StateStore.set_state``.

Callers may pass a variant explicitly, or a raw value that is coerced:
callables become :class:`Transform`, record-like values become
:class:`Merge`, everything else becomes :class:`Replace`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from slicestore._records import is_record
from slicestore.exceptions import InvalidUpdateError

T = TypeVar("T")


@dataclass(frozen=True)
class Replace(Generic[T]):
    """Replace the whole state with *value*, even when it is a record."""

    value: T


@dataclass(frozen=True)
class Merge:
    """Shallow-merge the fields of *values* onto a copy of the state."""

    values: Any

    def __post_init__(self) -> None:
        if not is_record(self.values):
            raise InvalidUpdateError(f"Merge requires a record-like value, got {type(self.values).__name__}")


@dataclass(frozen=True)
class Transform(Generic[T]):
    """Compute the update from the current state."""

    fn: Callable[[T], Any]


Update = Union[Replace[Any], Merge, Transform[Any]]


def _from_value(value: Any) -> Replace[Any] | Merge:
    if isinstance(value, (Replace, Merge)):
        return value
    if isinstance(value, Transform):
        raise InvalidUpdateError("a transform must return a value, not another Transform")
    if is_record(value):
        return Merge(value)
    return Replace(value)


def as_update(value: Any) -> Update:
    """Coerce a raw ``set_state`` argument into an update variant."""
    if isinstance(value, Transform):
        return value
    if callable(value) and not is_record(value):
        return Transform(value)
    return _from_value(value)


def resolve_update(value: Any, current: Any) -> Replace[Any] | Merge:
    """Resolve *value* against the *current* state.

    A transform is invoked once with the current state and its result is
    coerced like a raw value. Callables returned by a transform are stored
    as-is (they are never invoked again).
    """
    update = as_update(value)
    if isinstance(update, Transform):
        return _from_value(update.fn(current))
    return update
