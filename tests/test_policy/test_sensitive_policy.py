"""
Tests for the sensitive-field policy.
"""

import threading

import pytest

from payloadguard.core.errors import PolicyConfigurationError
from payloadguard.policy import (
    DEFAULT_SENSITIVE_FIELDS,
    PolicyConfig,
    SensitiveFieldPolicy,
    configure_policy,
    get_policy,
    reset_policy,
)


class TestDefaults:
    def test_default_names(self):
        policy = SensitiveFieldPolicy()

        for name in ("password", "token", "api_key", "apiKey", "secret"):
            assert name in policy

    def test_ordinary_names_not_sensitive(self):
        policy = SensitiveFieldPolicy()

        for name in ("name", "email", "id", "salary"):
            assert not policy.is_sensitive(name)

    def test_case_sensitive(self):
        policy = SensitiveFieldPolicy()

        assert "password" in policy
        assert "Password" not in policy
        assert "PASSWORD" not in policy

    def test_process_wide_policy_starts_with_defaults(self):
        assert get_policy().snapshot() == DEFAULT_SENSITIVE_FIELDS


class TestConfigure:
    def test_replace_is_the_default(self):
        result = configure_policy(sensitive_fields=["salary"])

        assert result == frozenset({"salary"})
        assert "salary" in get_policy()
        assert "password" not in get_policy()

    def test_merge(self):
        result = configure_policy(sensitive_fields=["salary"], merge=True)

        assert "salary" in result
        assert DEFAULT_SENSITIVE_FIELDS <= result

    def test_mapping_with_camel_case_key(self):
        configure_policy({"sensitiveFields": ["ssn"]})
        assert get_policy().snapshot() == frozenset({"ssn"})

    def test_mapping_with_snake_case_key(self):
        configure_policy({"sensitive_fields": ["ssn"], "merge": True})

        assert "ssn" in get_policy()
        assert "password" in get_policy()

    def test_merge_flag_applies_to_mapping(self):
        configure_policy({"sensitiveFields": ["ssn"]}, merge=True)
        assert "password" in get_policy()

    def test_policy_config_model(self):
        configure_policy(PolicyConfig(sensitive_fields=["pin"], merge=True))

        assert "pin" in get_policy()
        assert "token" in get_policy()

    def test_policy_config_with_merge_flag(self):
        configure_policy(PolicyConfig(sensitive_fields=["pin"]), merge=True)
        assert "token" in get_policy()

    def test_tuple_and_set_accepted(self):
        configure_policy(sensitive_fields=("a", "b"))
        assert get_policy().snapshot() == frozenset({"a", "b"})

        configure_policy(sensitive_fields={"c"})
        assert get_policy().snapshot() == frozenset({"c"})

    def test_last_write_wins(self):
        configure_policy(sensitive_fields=["a"])
        configure_policy(sensitive_fields=["b"])

        assert get_policy().snapshot() == frozenset({"b"})

    def test_empty_list_disables_policy(self):
        configure_policy(sensitive_fields=[])
        assert len(get_policy()) == 0

    def test_reset(self):
        configure_policy(sensitive_fields=["salary"])

        reset_policy()

        assert get_policy().snapshot() == DEFAULT_SENSITIVE_FIELDS

    def test_snapshot_is_stable(self):
        policy = SensitiveFieldPolicy()
        before = policy.snapshot()

        policy.configure(PolicyConfig(sensitive_fields=["x"]))

        assert before == DEFAULT_SENSITIVE_FIELDS
        assert policy.snapshot() == frozenset({"x"})


class TestConfigurationErrors:
    def test_string_instead_of_list(self):
        with pytest.raises(PolicyConfigurationError) as exc_info:
            configure_policy(sensitive_fields="password")

        assert exc_info.value.code == "POLICY_CONFIGURATION_INVALID"
        assert exc_info.value.errors

    def test_non_string_members(self):
        with pytest.raises(PolicyConfigurationError):
            configure_policy(sensitive_fields=["ok", 42])

    def test_non_mapping_config(self):
        with pytest.raises(PolicyConfigurationError):
            configure_policy(["salary"])  # type: ignore[arg-type]

    def test_missing_fields(self):
        with pytest.raises(PolicyConfigurationError):
            configure_policy()

    def test_unknown_option(self):
        with pytest.raises(PolicyConfigurationError):
            configure_policy({"sensitiveFields": ["a"], "mode": "append"})

    def test_failed_configuration_keeps_previous_policy(self):
        configure_policy(sensitive_fields=["salary"])

        with pytest.raises(PolicyConfigurationError):
            configure_policy(sensitive_fields=None, config={"sensitiveFields": 3})

        assert get_policy().snapshot() == frozenset({"salary"})

    def test_invalid_initial_fields(self):
        with pytest.raises(PolicyConfigurationError):
            SensitiveFieldPolicy("password")


class TestConcurrency:
    def test_concurrent_merges_are_not_lost(self):
        policy = SensitiveFieldPolicy([])

        def add(name: str) -> None:
            policy.configure(PolicyConfig(sensitive_fields=[name], merge=True))

        threads = [threading.Thread(target=add, args=(f"field_{i}",)) for i in range(50)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(policy) == 50
