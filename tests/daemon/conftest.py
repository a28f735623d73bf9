"""
Fixtures shared by the galaxyd API tests.
"""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from galaxyd.main import app
from galaxyd.services.broadcast import BroadcastService


@pytest.fixture(autouse=True)
def reset_broadcaster() -> Generator[None, None, None]:
    """Give every test a fresh broadcast channel."""
    BroadcastService._instance = None
    yield
    BroadcastService._instance = None


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client."""
    return TestClient(app)
