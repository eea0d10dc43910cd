# tests/api/conftest.py
"""
Shared fixtures for API tests.
Uses FastAPI's TestClient against an app wired to an in-memory inventory.
"""

import pytest
from fastapi.testclient import TestClient

from noderesources.api.app import create_app
from noderesources.core.cache import LastResultCache


@pytest.fixture
def cache():
    return LastResultCache()


@pytest.fixture
def client(e2e_inventory, cache):
    """Creates a TestClient whose app reads from e2e_inventory."""
    app = create_app(inventory=e2e_inventory, cache=cache)
    with TestClient(app) as c:
        yield c
