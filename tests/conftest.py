import os
import time

# Configure before parley (and its Config) is imported
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["REDIS_CACHE_ENABLED"] = "false"
os.environ["PUSH_NOTIFICATIONS_ENABLED"] = "true"
os.environ.setdefault("SERVICE_AUTH_SECRET", "test-secret")
os.environ.setdefault("SERVICE_AUTH_AUDIENCE", "parley-api")
os.environ.setdefault("SERVICE_AUTH_ISSUER", "parley-identity")

import jwt
import pytest
from fastapi.testclient import TestClient

from parley.application.services import (
    ConversationReader,
    ConversationResolver,
    UserDirectory,
)
from parley.config.settings import Config
from parley.fastapi_app import create_fastapi_app
from parley.infrastructure.memory import (
    InMemoryMembershipRepository,
    InMemoryMessageRepository,
    InMemoryUserRepository,
)
from parley.setup.ioc.container import create_container


def service_token(user_id, email=None, phone_number=None, name=None, expires_in=300):
    now = int(time.time())
    claims = {
        "sub": user_id,
        "iat": now,
        "exp": now + expires_in,
        "iss": Config.SERVICE_AUTH_ISSUER,
        "aud": Config.SERVICE_AUTH_AUDIENCE,
    }
    if email:
        claims["email"] = email
    if phone_number:
        claims["phone_number"] = phone_number
    if name:
        claims["name"] = name
    return jwt.encode(claims, Config.SERVICE_AUTH_SECRET, algorithm="HS256")


def auth_headers_for(user_id, **claims):
    return {"Authorization": f"Bearer {service_token(user_id, **claims)}"}


# ==================== STORAGE / SERVICES ====================


@pytest.fixture()
def user_repository():
    return InMemoryUserRepository()


@pytest.fixture()
def membership_repository():
    return InMemoryMembershipRepository()


@pytest.fixture()
def message_repository():
    return InMemoryMessageRepository()


@pytest.fixture()
def user_directory(user_repository):
    return UserDirectory(user_repository, "US")


@pytest.fixture()
def resolver(membership_repository, user_directory):
    return ConversationResolver(membership_repository, user_directory)


@pytest.fixture()
def reader(membership_repository, message_repository, user_directory):
    return ConversationReader(membership_repository, message_repository, user_directory)


@pytest.fixture()
def register(user_directory):
    """Register a user by email: `await register("mike")`."""

    async def _register(user_id, display_name=None, push_token=None):
        return await user_directory.register_with_email(
            user_id,
            f"{user_id}@example.com",
            display_name or user_id.capitalize(),
            push_token=push_token,
        )

    return _register


# ==================== HTTP ====================


@pytest.fixture()
def app():
    """A new FastAPI app with its own in-memory storage for each test."""
    return create_fastapi_app(create_container())


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def signup(client):
    """Register a user through the API and return their auth headers."""

    def _signup(user_id, name=None):
        headers = auth_headers_for(
            user_id, email=f"{user_id}@example.com", name=name or user_id.capitalize()
        )
        response = client.post("/users/register/email", json={}, headers=headers)
        assert response.status_code == 201, response.text
        return headers

    return _signup
