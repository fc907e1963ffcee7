"""API test fixtures — FastAPI app over an in-memory document client.

Invariants:
    - get_document_client overridden per test; no GitHub traffic
    - Lifespan not run by ASGITransport: the process-wide client stays None
      unless a test sets it
"""

import pytest
from httpx import ASGITransport, AsyncClient

from exambank.infrastructure.document_store import get_document_client
from exambank.infrastructure.memory_document_client import InMemoryDocumentClient
from exambank.main import app


@pytest.fixture
def memory_client():
    return InMemoryDocumentClient()


@pytest.fixture
async def client(memory_client):
    """Test client with the document client dependency overridden."""
    app.dependency_overrides[get_document_client] = lambda: memory_client
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def unconfigured_client(monkeypatch):
    """Test client with no document client at all (missing credentials)."""
    import exambank.infrastructure.document_store as document_store

    monkeypatch.setattr(document_store, "document_client", None)
    app.dependency_overrides.clear()
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
