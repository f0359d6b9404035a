"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient

from expense_bot.app import app
from expense_bot.config import Settings
from expense_bot.store import reset_engine

TEST_SIGNING_SECRET = "test_signing_secret_1234"


@pytest.fixture(scope="session")
def client() -> TestClient:
    """Create a TestClient for the FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def fresh_engine():
    """Drop the cached engine so each test gets its own database."""
    reset_engine()
    yield
    reset_engine()


@pytest.fixture
def sqlite_url(tmp_path) -> str:
    """URL of a throwaway SQLite database file."""
    return f"sqlite:///{tmp_path / 'expenses.db'}"


@pytest.fixture
def settings(sqlite_url: str) -> Settings:
    """Settings pointing at the throwaway database, ignoring any .env file."""
    return Settings(
        _env_file=None,
        slack_signing_secret=TEST_SIGNING_SECRET,
        database_url=sqlite_url,
        timezone="Europe/Oslo",
    )
