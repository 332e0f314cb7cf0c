"""
Policy configuration models.
"""

from pydantic import BaseModel, ConfigDict, Field

# Credential-like names never emitted by a filtering pass unless reconfigured
DEFAULT_SENSITIVE_FIELDS: frozenset[str] = frozenset(
    {
        "password",
        "passwd",
        "token",
        "access_token",
        "accessToken",
        "refresh_token",
        "refreshToken",
        "api_key",
        "apiKey",
        "secret",
        "client_secret",
        "clientSecret",
        "private_key",
        "privateKey",
        "authorization",
    }
)


class PolicyConfig(BaseModel):
    """
    Configuration for the sensitive-field policy.

    ``sensitive_fields`` replaces the current set unless ``merge`` is set, in
    which case the names are added to it. Names are matched case-sensitively.
    """

    sensitive_fields: list[str] = Field(alias="sensitiveFields")
    merge: bool = Field(default=False)

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")
