"""
Shared test fixtures — FastAPI test client.
"""

import os

import pytest
from fastapi.testclient import TestClient

# Settings are read at import time
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from landscape_takeoff.main import app


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)
