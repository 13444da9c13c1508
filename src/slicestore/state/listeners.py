"""Listener registry with stable subscription ids."""

from __future__ import annotations

import itertools
from collections.abc import Callable

Listener = Callable[[], None]
Disposer = Callable[[], None]


class ListenerRegistry:
    """Ordered listener entries keyed by a monotonically increasing id.

    Ids are never reused, so a disposer for a removed entry can never
    remove a later subscription of the same callable.
    """

    def __init__(self, *, dedupe: bool = True) -> None:
        self._dedupe = dedupe
        self._entries: dict[int, Listener] = {}
        self._ids = itertools.count(1)

    def add(self, listener: Listener) -> int:
        """Register *listener* and return its entry id.

        With dedupe enabled, a callable that is already registered (compared
        with ``==`` so that bound methods of the same object match) keeps
        its existing entry.
        """
        if self._dedupe:
            for entry_id, existing in self._entries.items():
                if existing == listener:
                    return entry_id
        entry_id = next(self._ids)
        self._entries[entry_id] = listener
        return entry_id

    def remove(self, entry_id: int) -> bool:
        return self._entries.pop(entry_id, None) is not None

    def snapshot(self) -> list[tuple[int, Listener]]:
        """Entries at this moment; later changes do not affect the copy."""
        return list(self._entries.items())

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)
