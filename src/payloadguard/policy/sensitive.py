"""
Sensitive-field policy.

The policy is a set of field names that a filtering pass never emits, even
when a shape declares them. A process-wide instance backs ``configure_policy``;
explicit instances can be created and handed to the filter engine or the
middleware instead.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from payloadguard.core.errors import PolicyConfigurationError
from payloadguard.logging import get_logger
from payloadguard.policy.models import DEFAULT_SENSITIVE_FIELDS, PolicyConfig

logger = get_logger(__name__)


class SensitiveFieldPolicy:
    """
    Mutable, lock-guarded set of sensitive field names.

    Reads return an immutable snapshot so one filtering pass sees a single
    consistent set even if the policy is reconfigured concurrently.
    """

    def __init__(self, fields: Iterable[str] | None = None) -> None:
        """
        Initialize the policy.

        Args:
            fields: Initial field names (defaults to DEFAULT_SENSITIVE_FIELDS)
        """
        initial = DEFAULT_SENSITIVE_FIELDS if fields is None else _validated(fields)
        self._fields: frozenset[str] = frozenset(initial)
        self._lock = threading.Lock()

    def snapshot(self) -> frozenset[str]:
        """Get the current set of sensitive names."""
        with self._lock:
            return self._fields

    def is_sensitive(self, name: str) -> bool:
        """Check whether a single field name is sensitive."""
        return name in self.snapshot()

    def __contains__(self, name: object) -> bool:
        return name in self.snapshot()

    def __len__(self) -> int:
        return len(self.snapshot())

    def configure(self, config: PolicyConfig) -> frozenset[str]:
        """
        Apply a configuration. Last write wins.

        Returns the resulting set of sensitive names.
        """
        names = frozenset(config.sensitive_fields)
        with self._lock:
            self._fields = self._fields | names if config.merge else names
            result = self._fields

        logger.debug(
            "Sensitive-field policy updated",
            merge=config.merge,
            field_count=len(result),
        )
        return result

    def reset(self) -> None:
        """Restore the default sensitive names."""
        with self._lock:
            self._fields = DEFAULT_SENSITIVE_FIELDS


def _validated(fields: Iterable[str]) -> list[str]:
    """Validate a field-name collection through PolicyConfig."""
    return _parse_config({"sensitive_fields": fields}).sensitive_fields


def _parse_config(raw: Any) -> PolicyConfig:
    if isinstance(raw, PolicyConfig):
        return raw
    if not isinstance(raw, Mapping):
        raise PolicyConfigurationError(
            f"Policy configuration must be a mapping, got {type(raw).__name__}"
        )
    try:
        return PolicyConfig.model_validate(dict(raw))
    except ValidationError as e:
        raise PolicyConfigurationError(
            "Invalid sensitive-field policy configuration",
            errors=[
                {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
                for err in e.errors()
            ],
        ) from e


_policy = SensitiveFieldPolicy()


def get_policy() -> SensitiveFieldPolicy:
    """Get the process-wide sensitive-field policy."""
    return _policy


def configure_policy(
    config: PolicyConfig | Mapping[str, Any] | None = None,
    *,
    sensitive_fields: Iterable[str] | None = None,
    merge: bool = False,
) -> frozenset[str]:
    """
    Reconfigure the process-wide sensitive-field policy.

    The change is visible to every later filtering pass, including passes
    using shapes built before the change.

    Example:
        configure_policy(sensitive_fields=["salary"])
        configure_policy({"sensitiveFields": ["ssn"]}, merge=True)

    Args:
        config: PolicyConfig or mapping with a sensitive_fields/sensitiveFields key
        sensitive_fields: Field names, used when config is omitted
        merge: Add to the current set instead of replacing it

    Returns:
        The resulting set of sensitive names

    Raises:
        PolicyConfigurationError: If the configuration is malformed
    """
    if config is None:
        if sensitive_fields is None:
            raise PolicyConfigurationError("No sensitive fields were provided")
        config = {"sensitive_fields": sensitive_fields, "merge": merge}
    elif merge and isinstance(config, Mapping):
        config = {**config, "merge": True}
    elif merge and isinstance(config, PolicyConfig):
        config = config.model_copy(update={"merge": True})

    return _policy.configure(_parse_config(config))


def reset_policy() -> None:
    """Restore the process-wide policy to its defaults."""
    _policy.reset()
