"""slicestore - Minimal observable state store with selector bindings."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("slicestore")
except PackageNotFoundError:
    __version__ = "0+local"
from slicestore.binding import BoundStore, create, subscribe_with_selector
from slicestore.config import ListenerErrorPolicy, StoreConfig
from slicestore.equality import is_identical, shallow_equal
from slicestore.exceptions import (
    InvalidUpdateError,
    SliceStoreError,
    StoreConfigError,
    StoreInitializationError,
)
from slicestore.state.store import StateStore, StoreApi, create_store
from slicestore.state.updates import Merge, Replace, Transform

__all__ = [
    "__version__",
    "BoundStore",
    "InvalidUpdateError",
    "ListenerErrorPolicy",
    "Merge",
    "Replace",
    "SliceStoreError",
    "StateStore",
    "StoreApi",
    "StoreConfig",
    "StoreConfigError",
    "StoreInitializationError",
    "Transform",
    "create",
    "create_store",
    "is_identical",
    "shallow_equal",
    "subscribe_with_selector",
]
