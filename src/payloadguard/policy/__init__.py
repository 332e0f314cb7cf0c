"""
payloadguard policy module.

Contains the process-wide sensitive-field policy and its configuration model.
"""

from payloadguard.policy.models import DEFAULT_SENSITIVE_FIELDS, PolicyConfig
from payloadguard.policy.sensitive import (
    SensitiveFieldPolicy,
    configure_policy,
    get_policy,
    reset_policy,
)

__all__ = [
    # Models
    "PolicyConfig",
    "DEFAULT_SENSITIVE_FIELDS",
    # Policy
    "SensitiveFieldPolicy",
    "configure_policy",
    "get_policy",
    "reset_policy",
]
