"""
Middleware configuration.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

ENV_PREFIX = "PAYLOADGUARD_"

# Option names accepted by from_mapping, including camelCase aliases
_OPTION_ALIASES = {
    "sanitize_inbound": "sanitize_inbound",
    "sanitizeInbound": "sanitize_inbound",
    "sanitizeBody": "sanitize_inbound",
    "auto_filter_outbound": "auto_filter_outbound",
    "autoFilterOutbound": "auto_filter_outbound",
    "filterResponse": "auto_filter_outbound",
    "verbose": "verbose",
    "devMode": "verbose",
    "exclude_paths": "exclude_paths",
    "excludePaths": "exclude_paths",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class GuardConfig:
    """
    Configuration for PayloadGuardMiddleware.

    Attributes:
        sanitize_inbound: Strip sensitive/undeclared keys from JSON request bodies
        auto_filter_outbound: Filter JSON responses of routes with a registered shape
        verbose: Log which fields were stripped on each request
        exclude_paths: Request paths that are not recorded in the monitoring log
    """

    sanitize_inbound: bool = True
    auto_filter_outbound: bool = True
    verbose: bool = False
    exclude_paths: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for name in ("sanitize_inbound", "auto_filter_outbound", "verbose"):
            if not isinstance(getattr(self, name), bool):
                raise TypeError(f"{name} must be a bool")
        if isinstance(self.exclude_paths, str):
            raise TypeError("exclude_paths must be a sequence of paths, not a string")
        object.__setattr__(self, "exclude_paths", tuple(self.exclude_paths))

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> GuardConfig:
        """
        Build a config from a mapping of option names.

        Unknown option names raise ValueError.
        """
        kwargs: dict[str, Any] = {}
        for key, value in options.items():
            if key not in _OPTION_ALIASES:
                raise ValueError(f"Unknown middleware option: {key!r}")
            kwargs[_OPTION_ALIASES[key]] = value
        return cls(**kwargs)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> GuardConfig:
        """
        Build a config from PAYLOADGUARD_* environment variables.

        Unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            sanitize_inbound=_env_flag(env, "SANITIZE_INBOUND", defaults.sanitize_inbound),
            auto_filter_outbound=_env_flag(
                env, "AUTO_FILTER_OUTBOUND", defaults.auto_filter_outbound
            ),
            verbose=_env_flag(env, "VERBOSE", defaults.verbose),
            exclude_paths=tuple(
                path.strip()
                for path in env.get(f"{ENV_PREFIX}EXCLUDE_PATHS", "").split(",")
                if path.strip()
            ),
        )


def _env_flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(f"{ENV_PREFIX}{name}")
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{ENV_PREFIX}{name} must be a boolean flag, got {raw!r}")
