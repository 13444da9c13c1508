"""Synchronous observable state store.

The store owns one state value and a registry of zero-argument listeners.
Every ``set_state`` call commits its update and then notifies listeners
before returning.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Generic, Protocol, TypeVar

from slicestore._redact import summarize_for_log
from slicestore.config import ListenerErrorPolicy, StoreConfig
from slicestore.exceptions import StoreInitializationError
from slicestore.state.listeners import Disposer, Listener, ListenerRegistry
from slicestore.state.policy import apply_update
from slicestore.state.updates import resolve_update

_logger = logging.getLogger(__name__)

T = TypeVar("T")

SetState = Callable[[Any], None]
StateCreator = Callable[[SetState], T]


class StoreApi(Protocol[T]):
    """The three primitives a consumer needs to observe a store."""

    def get_state(self) -> T: ...

    def set_state(self, update: Any) -> None: ...

    def subscribe(self, listener: Listener) -> Disposer: ...


class StateStore(Generic[T]):
    """In-memory store for a single state value.

    The initializer is called once with the store's bound ``set_state`` and
    returns the initial state, so it can define actions that update the
    store later. Calling ``set_state`` while the initializer is still
    running raises :class:`StoreInitializationError`.

    The store is not thread-safe: all calls are expected on one thread.
    """

    def __init__(self, initializer: StateCreator[T], *, config: StoreConfig | None = None) -> None:
        self._config = config or StoreConfig()
        self._listeners = ListenerRegistry(dedupe=self._config.dedupe_listeners)
        self._initialized = False
        self._state: T = initializer(self.set_state)
        self._initialized = True
        _logger.debug("Store created with initial state type=%s", type(self._state).__name__)
        self._log_state("Initial state")

    @property
    def config(self) -> StoreConfig:
        return self._config

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def get_state(self) -> T:
        """Return the current state snapshot."""
        return self._state

    def set_state(self, update: Any) -> None:
        """Apply *update* and notify listeners.

        *update* may be a full value (replace), a record (shallow merge), a
        callable of the current state returning either, or an explicit
        :class:`~slicestore.state.updates.Replace`, ``Merge`` or
        ``Transform``. An exception raised while computing the update
        propagates with the state unchanged and no listener notified.
        """
        if not self._initialized:
            raise StoreInitializationError("set_state called before the initial state was committed")

        resolved = resolve_update(update, self._state)
        next_state, changed = apply_update(self._state, resolved)

        if changed:
            self._state = next_state
            self._log_state("State committed")
        elif not self._config.notify_on_noop:
            _logger.debug("No-op update; notification suppressed")
            return

        self._notify()

    def subscribe(self, listener: Listener) -> Disposer:
        """Register *listener*; the returned disposer removes that entry."""
        entry_id = self._listeners.add(listener)
        _logger.debug("Listener subscribed id=%d total=%d", entry_id, len(self._listeners))

        def dispose() -> None:
            if self._listeners.remove(entry_id):
                _logger.debug("Listener unsubscribed id=%d total=%d", entry_id, len(self._listeners))

        return dispose

    def _notify(self) -> None:
        # Iterate a snapshot: listeners may subscribe, unsubscribe or call
        # set_state re-entrantly. Entries removed mid-pass are skipped,
        # entries added mid-pass wait for the next pass.
        entries = self._listeners.snapshot()
        _logger.debug("Notifying %d listener(s)", len(entries))
        for entry_id, listener in entries:
            if entry_id not in self._listeners:
                continue
            try:
                listener()
            except Exception:
                if self._config.listener_errors is ListenerErrorPolicy.PROPAGATE:
                    raise
                _logger.warning("Listener id=%d failed; continuing notification", entry_id, exc_info=True)

    def _log_state(self, message: str) -> None:
        if self._config.log_state_changes and _logger.isEnabledFor(logging.DEBUG):
            _logger.debug(
                "%s: %s",
                message,
                summarize_for_log(self._state, max_string=self._config.log_max_string),
            )


def create_store(initializer: StateCreator[T], *, config: StoreConfig | None = None) -> StateStore[T]:
    """Build a store whose initial state is ``initializer(set_state)``."""
    return StateStore(initializer, config=config)
