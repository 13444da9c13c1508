"""Helpers for safe debug logging of state values.

Store state is application data and may carry secrets (credentials, tokens)
or be arbitrarily large. This module turns a state value into a bounded,
redacted structure before it is emitted in DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping, Set
from typing import Any

from slicestore._records import is_record, record_items

_SENSITIVE_VALUE_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "passwd",
        "secret",
        "token",
        "access_token",
        "refresh_token",
        "api_key",
        "apikey",
        "authorization",
        "cookie",
        "session",
    }
)

_MAX_DEPTH = 8
_MAX_ITEMS = 50


def summarize_for_log(value: Any, *, max_string: int = 256, _depth: int = 0) -> Any:
    """Return a redacted, size-bounded copy of *value* suitable for debug logs."""
    if _depth > _MAX_DEPTH:
        return "<max-depth>"

    if value is None or isinstance(value, (bool, int, float)):
        return value

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"

    if is_record(value):
        items = record_items(value) if not isinstance(value, Mapping) else value
        summary: dict[str, Any] = {}
        for index, (k, v) in enumerate(items.items()):
            if index >= _MAX_ITEMS:
                summary["<more>"] = len(items) - _MAX_ITEMS
                break
            key = str(k)
            if key.lower() in _SENSITIVE_VALUE_KEYS:
                summary[key] = "<redacted>"
            else:
                summary[key] = summarize_for_log(v, max_string=max_string, _depth=_depth + 1)
        return summary

    if isinstance(value, (list, tuple, Set)):
        items_list = list(value)
        summarized = [summarize_for_log(v, max_string=max_string, _depth=_depth + 1) for v in items_list[:_MAX_ITEMS]]
        if len(items_list) > _MAX_ITEMS:
            summarized.append(f"<+{len(items_list) - _MAX_ITEMS} more>")
        return summarized

    # Fallback: represent unknown objects without dumping internals.
    return f"<{type(value).__name__}>"
