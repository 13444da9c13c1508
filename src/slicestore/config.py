"""Store configuration for slicestore."""

from __future__ import annotations

import dataclasses
import os
from enum import StrEnum
from typing import Any

from slicestore.exceptions import StoreConfigError


class ListenerErrorPolicy(StrEnum):
    """What a notification pass does when a listener raises."""

    ISOLATE = "isolate"
    PROPAGATE = "propagate"


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _parse_policy(value: str) -> ListenerErrorPolicy:
    try:
        return ListenerErrorPolicy(value.strip().lower())
    except ValueError:
        choices = ", ".join(policy.value for policy in ListenerErrorPolicy)
        raise StoreConfigError(
            f"listener_errors must be one of {choices}, got {value!r}",
            field="listener_errors",
        ) from None


@dataclasses.dataclass(frozen=True)
class StoreConfig:
    """Store behaviour switches.

    Parameters
    ----------
    notify_on_noop : bool
        Notify listeners even when ``set_state`` resolves to a value
        identical to the current state. Defaults to ``True``.
    dedupe_listeners : bool
        Subscribing the same callable twice keeps a single registry entry.
        With ``False`` every subscription gets its own entry and disposer.
    listener_errors : ListenerErrorPolicy
        ``ISOLATE`` logs a failing listener and continues the pass;
        ``PROPAGATE`` re-raises and aborts the remaining notifications.
    log_state_changes : bool
        Emit a DEBUG record with a summary of every committed state.
    log_max_string : int
        Truncation length for strings in state summaries.
    """

    notify_on_noop: bool = True
    dedupe_listeners: bool = True
    listener_errors: ListenerErrorPolicy = ListenerErrorPolicy.ISOLATE
    log_state_changes: bool = False
    log_max_string: int = 256

    def __post_init__(self) -> None:
        if not isinstance(self.listener_errors, ListenerErrorPolicy):
            object.__setattr__(self, "listener_errors", _parse_policy(str(self.listener_errors)))
        if self.log_max_string <= 0:
            raise StoreConfigError(
                f"log_max_string must be positive, got {self.log_max_string}",
                field="log_max_string",
            )

    @classmethod
    def from_env(cls, **overrides: Any) -> StoreConfig:
        """Create configuration from environment variables.

        Reads the optional ``SLICESTORE_*`` variables. Explicit keyword
        arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        StoreConfig
            Populated configuration.
        """
        env = os.environ
        defaults = cls()

        _ENV_BOOL_MAP = {
            "SLICESTORE_NOTIFY_ON_NOOP": "notify_on_noop",
            "SLICESTORE_DEDUPE_LISTENERS": "dedupe_listeners",
            "SLICESTORE_LOG_STATE_CHANGES": "log_state_changes",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_BOOL_MAP.items():
            if field_name not in overrides:
                config_kwargs[field_name] = _env_bool(env.get(env_key), getattr(defaults, field_name))

        policy_env = env.get("SLICESTORE_LISTENER_ERRORS")
        if policy_env is not None and "listener_errors" not in overrides:
            config_kwargs["listener_errors"] = _parse_policy(policy_env)

        max_string_env = env.get("SLICESTORE_LOG_MAX_STRING")
        if max_string_env is not None and "log_max_string" not in overrides:
            try:
                config_kwargs["log_max_string"] = int(max_string_env)
            except ValueError:
                raise StoreConfigError(
                    f"SLICESTORE_LOG_MAX_STRING must be an integer, got {max_string_env!r}",
                    field="log_max_string",
                ) from None

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
