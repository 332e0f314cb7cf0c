"""
Property-based tests for the filter engine using Hypothesis.

These check the whitelist, policy-precedence and idempotence invariants over
randomly generated shapes and payloads.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from payloadguard.policy import DEFAULT_SENSITIVE_FIELDS, SensitiveFieldPolicy
from payloadguard.shape import ArrayOf, Shape, apply_shape, array, shape

# === Strategy Definitions ===

# Small alphabet so generated payloads often collide with declared keys
field_names = st.sampled_from(
    ["id", "name", "email", "password", "token", "secret", "items", "child", "note", "tags"]
)

kind_tags = st.sampled_from(["string", "number", "boolean", "any"])

json_leaves = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(),
    st.floats(allow_nan=False, allow_infinity=False),
    st.text(max_size=10),
)

json_values = st.recursive(
    json_leaves,
    lambda children: st.one_of(
        st.lists(children, max_size=4),
        st.dictionaries(field_names, children, max_size=6),
    ),
    max_leaves=20,
)


def field_specs():
    return st.recursive(
        kind_tags,
        lambda children: st.one_of(
            st.dictionaries(field_names, children, min_size=1, max_size=5).map(shape),
            children.map(array),
        ),
        max_leaves=10,
    )


shapes = st.dictionaries(field_names, field_specs(), min_size=1, max_size=6).map(shape)


def _keys_within_shape(spec, value) -> bool:
    """Every emitted key is declared, at every nesting level."""
    if isinstance(spec, Shape):
        if not isinstance(value, dict):
            return False
        fields = spec.fields
        return all(
            key in fields and _keys_within_shape(fields[key], child)
            for key, child in value.items()
        )
    if isinstance(spec, ArrayOf):
        return isinstance(value, list) and all(
            _keys_within_shape(spec.item, child) for child in value
        )
    return True


def _all_keys(value) -> set[str]:
    if isinstance(value, dict):
        keys = set(value)
        for child in value.values():
            keys |= _all_keys(child)
        return keys
    if isinstance(value, list):
        keys: set[str] = set()
        for child in value:
            keys |= _all_keys(child)
        return keys
    return set()


def _keys_outside_any(spec, value) -> set[str]:
    """Keys produced by shapes, skipping subtrees copied verbatim by 'any'."""
    if isinstance(spec, Shape) and isinstance(value, dict):
        keys = set(value)
        for key, child in value.items():
            keys |= _keys_outside_any(spec.fields[key], child)
        return keys
    if isinstance(spec, ArrayOf) and isinstance(value, list):
        keys: set[str] = set()
        for child in value:
            keys |= _keys_outside_any(spec.item, child)
        return keys
    return set()


# === Properties ===


class TestWhitelistInvariant:
    @given(spec=shapes, value=json_values)
    @settings(max_examples=200)
    def test_output_keys_are_declared(self, spec, value):
        result = apply_shape(spec, value)
        assert _keys_within_shape(spec, result)

    @given(spec=shapes, value=json_values)
    def test_never_raises_and_returns_dict(self, spec, value):
        assert isinstance(apply_shape(spec, value), dict)


class TestPolicyPrecedence:
    @given(spec=shapes, value=json_values)
    @settings(max_examples=200)
    def test_sensitive_names_never_emitted_by_shapes(self, spec, value):
        result = apply_shape(spec, value)
        assert not (_keys_outside_any(spec, result) & DEFAULT_SENSITIVE_FIELDS)

    @given(spec=shapes, value=json_values, sensitive=st.sets(field_names, max_size=4))
    def test_custom_policy(self, spec, value, sensitive):
        policy = SensitiveFieldPolicy(sorted(sensitive))
        result = apply_shape(spec, value, policy=policy)
        assert not (_keys_outside_any(spec, result) & sensitive)


class TestIdempotence:
    @given(spec=shapes, value=json_values)
    @settings(max_examples=200)
    def test_filtering_is_a_projection(self, spec, value):
        once = apply_shape(spec, value)
        assert apply_shape(spec, once) == once

    @given(spec=field_specs(), value=json_values)
    def test_array_projection(self, spec, value):
        wrapped = array(spec)
        once = apply_shape(wrapped, value)
        assert apply_shape(wrapped, once) == once


class TestInputPurity:
    @given(spec=shapes, value=st.dictionaries(field_names, json_values, max_size=6))
    def test_input_not_mutated(self, spec, value):
        snapshot = repr(value)
        apply_shape(spec, value)
        assert repr(value) == snapshot

    @given(value=json_values)
    def test_keys_subset_of_input(self, value):
        spec = shape({"id": "any", "name": "string", "child": shape({"id": "any"})})
        result = apply_shape(spec, value)
        # nested shapes materialize as {}, so only compare leaf keys
        assert {k for k in result if k != "child"} <= _all_keys(value)
