"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from fastapi.testclient import TestClient

# Import the app package first: module routers import api.middleware, which
# in turn needs the api package to be initialised.
from api.app import create_app
from api.dependencies import ServiceContainer, reset_container, set_container
from modules.sessions.store import InMemorySessionStore
from modules.users.directory import InMemoryUserDirectory
from shared.config import Settings


TEST_SESSION_SECRET = "test-session-secret"
TEST_COOKIE_SECRET = "test-cookie-secret"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def reset_container_singleton():
    """Reset the service container before and after each test."""
    reset_container()
    yield
    reset_container()


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        session_secret=TEST_SESSION_SECRET,
        cookie_secret=TEST_COOKIE_SECRET,
        session_max_age=3600,
        capability_cookie_max_age=60,
        user_directory="memory",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def directory() -> InMemoryUserDirectory:
    """A directory seeded with the demo users."""
    return InMemoryUserDirectory()


@pytest.fixture
def session_store(clock) -> InMemorySessionStore:
    return InMemorySessionStore(clock=clock)


@pytest.fixture
def container(settings, directory, session_store) -> ServiceContainer:
    """Install a container wired with in-memory backends."""
    container = ServiceContainer(
        settings=settings,
        users=directory,
        session_store=session_store,
    )
    set_container(container)
    return container


@pytest.fixture
def app(container, settings):
    """Create a fresh app for each test."""
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def login(client):
    """Log in through one of the auth routers and return the response."""

    def _login(username: str = "anson", password: str = "hello123", path: str = "/api/auth"):
        return client.post(path, json={"username": username, "password": password})

    return _login
