"""
Tests for the guard_response decorator.
"""

import pytest
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from fastapi.testclient import TestClient

from payloadguard.core.errors import ShapeDefinitionError
from payloadguard.middleware import guard_response
from payloadguard.policy import SensitiveFieldPolicy
from payloadguard.shape import array, shape

USER = shape({"id": "number", "name": "string"})


class TestDirectCalls:
    def test_sync_handler(self):
        @guard_response(USER)
        def handler():
            return {"id": 1, "name": "Ann", "password": "pw"}

        assert handler() == {"id": 1, "name": "Ann"}

    @pytest.mark.asyncio
    async def test_async_handler(self):
        @guard_response(array(USER))
        async def handler():
            return [{"id": 1, "name": "Ann", "token": "t"}]

        assert await handler() == [{"id": 1, "name": "Ann"}]

    def test_arguments_forwarded(self):
        @guard_response(USER)
        def handler(user_id: int, *, name: str):
            return {"id": user_id, "name": name, "extra": True}

        assert handler(3, name="Bo") == {"id": 3, "name": "Bo"}

    def test_metadata_preserved(self):
        @guard_response(USER)
        async def get_user():
            """Fetch a user."""
            return {}

        assert get_user.__name__ == "get_user"
        assert get_user.__doc__ == "Fetch a user."

    def test_response_objects_pass_through(self):
        error = JSONResponse({"error": "boom", "password": "leak"}, status_code=500)

        @guard_response(USER)
        def handler():
            return error

        assert handler() is error

    def test_plain_mapping_spec(self):
        @guard_response({"id": "number"})
        def handler():
            return {"id": 1, "name": "Ann"}

        assert handler() == {"id": 1}

    def test_explicit_policy(self):
        @guard_response(USER, policy=SensitiveFieldPolicy(["name"]))
        def handler():
            return {"id": 1, "name": "Ann"}

        assert handler() == {"id": 1}

    def test_bad_spec_fails_at_decoration(self):
        with pytest.raises(ShapeDefinitionError):
            guard_response("date")


class TestFastAPIRoutes:
    def test_decorated_routes(self):
        app = FastAPI()

        @app.get("/users/{user_id}")
        @guard_response(USER)
        async def get_user(user_id: int):
            return {"id": user_id, "name": "Ann", "password": "pw", "notes": "vip"}

        @app.get("/users")
        @guard_response(array(USER))
        def list_users():
            return [{"id": 1, "name": "Ann", "apiKey": "k"}]

        client = TestClient(app)

        assert client.get("/users/5").json() == {"id": 5, "name": "Ann"}
        assert client.get("/users").json() == [{"id": 1, "name": "Ann"}]
        assert client.get("/users/abc").status_code == 422
