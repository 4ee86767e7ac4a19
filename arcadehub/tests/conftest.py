"""
Pytest fixtures for arcade hub tests.
"""

import pytest

from ..api.service import APIService
from ..games import ENGINES
from ..scores import HighScoreStore
from ..session import SessionManager, TickDriver


@pytest.fixture
def score_file(tmp_path):
    """Path for a score file that does not exist yet."""
    return tmp_path / "scores.json"


@pytest.fixture
def score_store(score_file) -> HighScoreStore:
    """A file-backed store in a temporary directory."""
    return HighScoreStore(score_file)


@pytest.fixture
def memory_store() -> HighScoreStore:
    """An in-memory store."""
    return HighScoreStore()


@pytest.fixture
def wordle_driver(memory_store) -> TickDriver:
    """Wordle with a known secret, reporting to the memory store."""
    driver = TickDriver(ENGINES["wordle"], reporter=memory_store, seed=1, player_name="tester")
    driver.state = driver.state._copy_with(secret="CRANE")
    return driver


@pytest.fixture
def session_manager(memory_store) -> SessionManager:
    return SessionManager(reporter=memory_store)


@pytest.fixture
def api_service(memory_store) -> APIService:
    return APIService(score_store=memory_store)


@pytest.fixture
def client(api_service):
    """FastAPI test client bound to a fresh service."""
    from fastapi.testclient import TestClient
    from ..api.app import create_app

    return TestClient(create_app(service=api_service))
