"""Selector binding over a store.

This layer is framework-neutral: it turns the store's ``subscribe`` /
``get_state`` primitives into "call me when my slice changes" and into a
bound reader that returns selected slices. Rendering and scheduling belong
to whatever host consumes it.
"""

from __future__ import annotations

import logging
import weakref
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from slicestore.config import StoreConfig
from slicestore.equality import is_identical
from slicestore.state.listeners import Disposer, Listener
from slicestore.state.store import StateCreator, StateStore, StoreApi

_logger = logging.getLogger(__name__)

T = TypeVar("T")
S = TypeVar("S")

Selector = Callable[[T], S]
EqualityFn = Callable[[Any, Any], bool]
SliceListener = Callable[[S, S], None]

_MISSING = object()


def _identity(state: Any) -> Any:
    return state


def subscribe_with_selector(
    api: StoreApi[T],
    selector: Selector[T, S],
    listener: SliceListener[S],
    *,
    equality_fn: EqualityFn = is_identical,
    fire_immediately: bool = False,
) -> Disposer:
    """Call ``listener(slice, previous_slice)`` when the selected slice changes.

    The slice is recomputed on every store notification and compared with
    the last delivered slice using *equality_fn*; equal slices are dropped.
    With *fire_immediately* the current slice is delivered once right away
    (``previous_slice`` is the same object).
    """
    current_slice = selector(api.get_state())

    def on_store_change() -> None:
        nonlocal current_slice
        next_slice = selector(api.get_state())
        if equality_fn(current_slice, next_slice):
            return
        previous_slice, current_slice = current_slice, next_slice
        listener(next_slice, previous_slice)

    if fire_immediately:
        listener(current_slice, current_slice)
    return api.subscribe(on_store_change)


class BoundStore(Generic[T]):
    """A store bound to a slice reader.

    ``bound(selector, equality_fn)`` returns ``selector(get_state())``. When
    *equality_fn* is given and the new slice is equal to the one returned
    last time for the same selector object, the earlier object is returned
    again so consumers can rely on reference stability.
    """

    def __init__(self, api: StateStore[T]) -> None:
        self.api = api
        self._last_slices: weakref.WeakKeyDictionary[Callable[..., Any], Any] = weakref.WeakKeyDictionary()

    def __call__(self, selector: Selector[T, Any] | None = None, equality_fn: EqualityFn | None = None) -> Any:
        select = selector or _identity
        next_slice = select(self.api.get_state())
        if equality_fn is None or selector is None:
            return next_slice

        try:
            previous = self._last_slices.get(selector, _MISSING)
        except TypeError:
            # Selector cannot be weakly referenced; no memo available.
            return next_slice
        if previous is not _MISSING and equality_fn(previous, next_slice):
            return previous
        self._last_slices[selector] = next_slice
        return next_slice

    def get_state(self) -> T:
        return self.api.get_state()

    def set_state(self, update: Any) -> None:
        self.api.set_state(update)

    def subscribe(self, listener: Listener) -> Disposer:
        return self.api.subscribe(listener)

    def watch(
        self,
        selector: Selector[T, S],
        listener: SliceListener[S],
        *,
        equality_fn: EqualityFn = is_identical,
        fire_immediately: bool = False,
    ) -> Disposer:
        """Shortcut for :func:`subscribe_with_selector` on this store."""
        return subscribe_with_selector(
            self.api,
            selector,
            listener,
            equality_fn=equality_fn,
            fire_immediately=fire_immediately,
        )


def create(initializer: StateCreator[T], *, config: StoreConfig | None = None) -> BoundStore[T]:
    """Create a store and bind it to a slice reader."""
    bound = BoundStore(StateStore(initializer, config=config))
    _logger.debug("Bound store created")
    return bound
