"""Custom exception hierarchy for slicestore."""

from __future__ import annotations


class SliceStoreError(Exception):
    """Base exception for all slicestore errors."""


class StoreConfigError(SliceStoreError):
    """Invalid store configuration (bad keyword or environment value)."""

    def __init__(self, message: str, *, field: str = "") -> None:
        self.field = field
        super().__init__(message)


class StoreInitializationError(SliceStoreError):
    """``set_state`` was called before the initial state was committed.

    The initializer passed to :func:`~slicestore.state.store.create_store`
    may close over ``set_state`` to define actions, but it must not call it
    while it is still computing the initial value.
    """


class InvalidUpdateError(SliceStoreError, TypeError):
    """An update value cannot be applied with the requested policy.

    Raised, for example, when a :class:`~slicestore.state.updates.Merge`
    is built from a value that is not record-like.
    """
