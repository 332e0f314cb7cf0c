"""
Shared test fixtures.
"""

import pytest

from payloadguard.policy.sensitive import reset_policy
from payloadguard.shape import array, shape


@pytest.fixture(autouse=True)
def _default_policy():
    """Every test starts and ends with the default sensitive-field policy."""
    reset_policy()
    yield
    reset_policy()


# === Shapes ===


@pytest.fixture
def user_shape():
    return shape({"id": "number", "name": "string", "email": "string"})


@pytest.fixture
def post_shape():
    return shape(
        {
            "id": "number",
            "title": "string",
            "author": shape({"id": "number", "name": "string"}),
            "comments": array(shape({"id": "number", "text": "string"})),
        }
    )


@pytest.fixture
def employee_shape():
    return shape(
        {
            "id": "any",
            "emp_id": "string",
            "name": "string",
            "email": "string",
            "role": "string",
            "department": "string",
            "salary": "string",
            "dob": "any",
            "created_at": "any",
        }
    )


# === Payloads ===


@pytest.fixture
def raw_user():
    return {
        "id": 1,
        "name": "John Doe",
        "email": "john@example.com",
        "password": "secret123",
        "internalNotes": "VIP user",
    }


@pytest.fixture
def raw_post():
    return {
        "id": 101,
        "title": "Hello World",
        "author": {"id": 1, "name": "John", "password": "123"},
        "comments": [
            {"id": 1, "text": "Great post!", "spam": True},
            {"id": 2, "text": "Nice!", "token": "xxx"},
        ],
        "extra": "remove me",
    }
